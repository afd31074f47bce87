"""
Test helpers shared across test modules
"""

import json
from web3 import Web3


# Hardhat accounts #0 and #1 (public, test mnemonic)
HARDHAT_KEY_0 = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
HARDHAT_ADDRESS_0 = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
HARDHAT_KEY_1 = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
HARDHAT_ADDRESS_1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

LUX_TESTNET_CHAIN_ID = 96368


def fake_address(index: int) -> str:
    return Web3.to_checksum_address("0x" + f"{index + 0x1000:040x}")


def write_artifact(artifacts_dir, contract_name, mock_dir=None):
    """Write a minimal Hardhat-style artifact and return its path"""
    if mock_dir is None:
        mock_dir = "Mock" in contract_name

    base = artifacts_dir / "mocks" if mock_dir else artifacts_dir
    path = base / f"{contract_name}.sol" / f"{contract_name}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({
        "contractName": contract_name,
        "abi": [{"type": "constructor", "inputs": [], "stateMutability": "nonpayable"}],
        "bytecode": "0x6080604052"
    }))
    return path


class EventRecorder:
    """Event sink that keeps every emitted event"""

    def __init__(self):
        self.events = []

    def __call__(self, event, **fields):
        self.events.append((event, fields))

    def names(self):
        return [name for name, _ in self.events]

    def of(self, name):
        return [fields for event, fields in self.events if event == name]
