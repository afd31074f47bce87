"""
Deployment Record
JSON summary of one deployment run
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision"""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


@dataclass
class DeploymentRecord:
    network: str
    chain_id: int
    rpc_url: str
    deployer: str
    timestamp: str
    contracts: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'network': self.network,
            'chainId': self.chain_id,
            'rpcUrl': self.rpc_url,
            'deployer': self.deployer,
            'timestamp': self.timestamp,
            'contracts': dict(self.contracts)
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DeploymentRecord":
        return cls(
            network=data['network'],
            chain_id=data['chainId'],
            rpc_url=data['rpcUrl'],
            deployer=data['deployer'],
            timestamp=data['timestamp'],
            contracts=dict(data.get('contracts', {}))
        )


def write_record(record: DeploymentRecord, path: Path) -> Path:
    """Write the record, creating parent directories and replacing any existing file"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(record.to_dict(), f, indent=2)

    return path


def load_record(path: Path) -> DeploymentRecord:
    with open(path, 'r', encoding='utf-8') as f:
        return DeploymentRecord.from_dict(json.load(f))
