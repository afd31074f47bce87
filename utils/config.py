"""
Configuration Loader
Merges config/network_config.json with environment overrides
"""

import os
import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional, Tuple
from web3 import Web3


PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "network_config.json"


@dataclass(frozen=True)
class Settings:
    """Resolved settings for one command invocation"""

    rpc_url: str
    private_key: Optional[str]
    treasury_key: Optional[str]
    deployer_address: str
    network_name: str
    display_name: str
    expected_chain_id: int
    currency_symbol: str
    dev_chain_ids: Tuple[int, ...]
    gas_price_wei: int
    fund_amount_wei: int
    treasury_address: str
    artifacts_dir: Path
    output_path: Path
    tx_timeout: int
    request_timeout: int

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with non-None overrides applied (CLI flags)"""
        values = {key: value for key, value in overrides.items() if value is not None}
        for key in ("artifacts_dir", "output_path"):
            if key in values:
                values[key] = _resolve_path(values[key])
        return replace(self, **values)


def _resolve_path(value) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def load_settings(
    config_path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None
) -> Settings:
    """
    Load settings from the JSON config file and environment

    Args:
        config_path: Path to network_config.json (None = bundled config)
        env: Environment mapping (None = os.environ)

    Returns:
        Settings instance
    """
    if env is None:
        env = os.environ

    with open(config_path or DEFAULT_CONFIG_PATH, 'r') as f:
        config = json.load(f)

    network = config['network']
    transactions = config['transactions']
    funding = config['funding']
    paths = config['paths']

    return Settings(
        rpc_url=env.get('RPC_URL') or network['default_rpc_url'],
        private_key=env.get('PRIVATE_KEY') or None,
        treasury_key=env.get('TREASURY_KEY') or None,
        deployer_address=env.get('DEPLOYER_ADDRESS') or funding['default_deployer_address'],
        network_name=network['name'],
        display_name=network.get('display_name', network['name']),
        expected_chain_id=int(network['expected_chain_id']),
        currency_symbol=network.get('currency_symbol', 'ETH'),
        dev_chain_ids=tuple(int(c) for c in network.get('dev_chain_ids', [])),
        gas_price_wei=Web3.to_wei(transactions['gas_price_gwei'], 'gwei'),
        fund_amount_wei=Web3.to_wei(funding['amount_ether'], 'ether'),
        treasury_address=funding['treasury_address'],
        artifacts_dir=_resolve_path(paths['artifacts_dir']),
        output_path=_resolve_path(paths['output_path']),
        tx_timeout=_read_int(env, 'TX_TIMEOUT', transactions['tx_timeout_seconds']),
        request_timeout=_read_int(env, 'REQUEST_TIMEOUT', transactions['request_timeout_seconds'])
    )
