"""
Shared fixtures for deployer tests
"""

import pytest
from unittest.mock import Mock
from web3 import Web3

from blockchain.network_client import DeployedContract, NetworkClient, NetworkIdentity
from deployment.plan import DEPLOYMENT_PLAN
from utils.config import Settings
from helpers import (
    HARDHAT_ADDRESS_0,
    HARDHAT_KEY_0,
    LUX_TESTNET_CHAIN_ID,
    EventRecorder,
    fake_address,
    write_artifact
)


@pytest.fixture
def artifacts_dir(tmp_path):
    """Artifacts for every contract in the deployment plan"""
    root = tmp_path / "artifacts" / "contracts"
    for entry in DEPLOYMENT_PLAN:
        write_artifact(root, entry.contract_name)
    return root


@pytest.fixture
def settings(tmp_path, artifacts_dir):
    """Settings pointing at temporary artifacts and output"""
    return Settings(
        rpc_url="http://127.0.0.1:9640/ext/bc/C/rpc",
        private_key=HARDHAT_KEY_0,
        treasury_key=None,
        deployer_address=HARDHAT_ADDRESS_0,
        network_name="lux-testnet",
        display_name="Lux Testnet",
        expected_chain_id=LUX_TESTNET_CHAIN_ID,
        currency_symbol="LUX",
        dev_chain_ids=(LUX_TESTNET_CHAIN_ID, 31337, 1337),
        gas_price_wei=Web3.to_wei(25, 'gwei'),
        fund_amount_wei=Web3.to_wei(100, 'ether'),
        treasury_address="0x9011E888251AB053B7bD1cdB598Db4f9DEd94714",
        artifacts_dir=artifacts_dir,
        output_path=tmp_path / "deployments" / "lux-testnet.json",
        tx_timeout=5,
        request_timeout=5
    )


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def fake_client():
    """NetworkClient double on the Lux testnet with a funded deployer"""
    client = Mock(spec=NetworkClient)
    client.get_network_identity.return_value = NetworkIdentity(name="lux-testnet", chain_id=LUX_TESTNET_CHAIN_ID)
    client.get_balance.return_value = Web3.to_wei(10, 'ether')

    deployed = []

    def deploy(signer, artifact, constructor_args, gas_price, on_submitted=None):
        index = len(deployed)
        tx_hash = "0x" + f"{index + 1:064x}"
        if on_submitted:
            on_submitted(tx_hash)
        deployed.append(artifact.contract_name)
        return DeployedContract(tx_hash=tx_hash, address=fake_address(index))

    client.deploy_contract.side_effect = deploy
    client.deployed = deployed
    return client


@pytest.fixture
def client_factory(fake_client):
    return Mock(return_value=fake_client)
