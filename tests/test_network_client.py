"""
Unit Tests for the Network Client
Web3 is mocked; no node is required
"""

import pytest
from unittest.mock import Mock, PropertyMock
from web3 import Web3
from web3.exceptions import TimeExhausted

from blockchain.artifact_loader import Artifact
from blockchain.network_client import NetworkClient, TRANSFER_GAS
from utils.exceptions import NetworkError
from helpers import HARDHAT_ADDRESS_0, HARDHAT_ADDRESS_1, LUX_TESTNET_CHAIN_ID


TX_HASH = bytes.fromhex("ab" * 32)
CONTRACT_ADDRESS = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
GAS_PRICE = Web3.to_wei(25, 'gwei')


@pytest.fixture
def w3():
    """Mock Web3 instance on the Lux testnet"""
    w3 = Mock()
    w3.eth.chain_id = LUX_TESTNET_CHAIN_ID
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.get_balance.return_value = 42
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {
        'status': 1,
        'contractAddress': CONTRACT_ADDRESS
    }
    return w3


@pytest.fixture
def signer():
    signer = Mock()
    signer.address = HARDHAT_ADDRESS_0
    signer.sign_transaction.return_value = Mock(raw_transaction=b"\x02\x01")
    return signer


@pytest.fixture
def artifact(tmp_path):
    return Artifact(contract_name="MockERC20", abi=[], bytecode="0x6080", path=tmp_path / "MockERC20.json")


@pytest.fixture
def client(w3):
    return NetworkClient(w3, tx_timeout=10)


class TestNetworkIdentity:

    def test_known_chain(self, client):
        identity = client.get_network_identity()

        assert identity.chain_id == LUX_TESTNET_CHAIN_ID
        assert identity.name == "lux-testnet"

    def test_unknown_chain(self, client, w3):
        w3.eth.chain_id = 424242
        assert client.get_network_identity().name == "unknown"

    def test_connection_failure(self, client, w3):
        type(w3.eth).chain_id = PropertyMock(side_effect=OSError("connection refused"))

        with pytest.raises(NetworkError, match="chain id"):
            client.get_network_identity()


class TestBalance:

    def test_checksums_address(self, client, w3):
        assert client.get_balance(HARDHAT_ADDRESS_0.lower()) == 42
        w3.eth.get_balance.assert_called_once_with(HARDHAT_ADDRESS_0)


class TestDeployContract:

    def test_builds_signs_and_waits(self, client, w3, signer, artifact):
        submitted = []
        build = w3.eth.contract.return_value.constructor.return_value.build_transaction
        build.return_value = {'data': '0x6080'}

        result = client.deploy_contract(signer, artifact, (10**24,), GAS_PRICE, on_submitted=submitted.append)

        w3.eth.contract.assert_called_once_with(abi=[], bytecode="0x6080")
        w3.eth.contract.return_value.constructor.assert_called_once_with(10**24)
        build.assert_called_once_with({
            'from': HARDHAT_ADDRESS_0,
            'nonce': 7,
            'gasPrice': GAS_PRICE,
            'chainId': LUX_TESTNET_CHAIN_ID
        })
        w3.eth.get_transaction_count.assert_called_once_with(HARDHAT_ADDRESS_0, 'pending')
        signer.sign_transaction.assert_called_once_with({'data': '0x6080'})
        w3.eth.send_raw_transaction.assert_called_once_with(b"\x02\x01")
        w3.eth.wait_for_transaction_receipt.assert_called_once_with(TX_HASH, timeout=10)

        assert result.tx_hash == "0x" + "ab" * 32
        assert result.address == Web3.to_checksum_address(CONTRACT_ADDRESS)
        assert submitted == [result.tx_hash]

    def test_reverted_receipt(self, client, w3, signer, artifact):
        w3.eth.wait_for_transaction_receipt.return_value = {'status': 0, 'contractAddress': None}

        with pytest.raises(NetworkError, match="reverted"):
            client.deploy_contract(signer, artifact, (), GAS_PRICE)

    def test_missing_contract_address(self, client, w3, signer, artifact):
        w3.eth.wait_for_transaction_receipt.return_value = {'status': 1, 'contractAddress': None}

        with pytest.raises(NetworkError, match="no contract address"):
            client.deploy_contract(signer, artifact, (), GAS_PRICE)

    def test_confirmation_timeout(self, client, w3, signer, artifact):
        w3.eth.wait_for_transaction_receipt.side_effect = TimeExhausted("timed out")

        with pytest.raises(NetworkError, match="not confirmed within 10s"):
            client.deploy_contract(signer, artifact, (), GAS_PRICE)

    def test_send_failure(self, client, w3, signer, artifact):
        w3.eth.send_raw_transaction.side_effect = ConnectionError("reset by peer")

        with pytest.raises(NetworkError, match="Failed to send"):
            client.deploy_contract(signer, artifact, (), GAS_PRICE)

        w3.eth.wait_for_transaction_receipt.assert_not_called()

    def test_malformed_bytecode(self, client, w3, signer, artifact):
        w3.eth.contract.side_effect = ValueError("Non-hexadecimal digit found")

        with pytest.raises(NetworkError, match="Failed to build deployment of MockERC20"):
            client.deploy_contract(signer, artifact, (), GAS_PRICE)

        signer.sign_transaction.assert_not_called()

    def test_constructor_argument_mismatch(self, client, w3, signer, artifact):
        w3.eth.contract.return_value.constructor.side_effect = TypeError("Incorrect argument count")

        with pytest.raises(NetworkError, match="Incorrect argument count"):
            client.deploy_contract(signer, artifact, (1, 2), GAS_PRICE)

    def test_signing_failure(self, client, w3, signer, artifact):
        w3.eth.contract.return_value.constructor.return_value.build_transaction.return_value = {'data': '0x6080'}
        signer.sign_transaction.side_effect = TypeError("Transaction must not include unrecognized fields")

        with pytest.raises(NetworkError, match="Failed to sign"):
            client.deploy_contract(signer, artifact, (), GAS_PRICE)

        w3.eth.send_raw_transaction.assert_not_called()


class TestTransfer:

    def test_value_transfer(self, client, w3, signer):
        tx_hash = client.transfer(signer, HARDHAT_ADDRESS_1.lower(), 100, GAS_PRICE)

        signer.sign_transaction.assert_called_once_with({
            'to': HARDHAT_ADDRESS_1,
            'value': 100,
            'gas': TRANSFER_GAS,
            'gasPrice': GAS_PRICE,
            'nonce': 7,
            'chainId': LUX_TESTNET_CHAIN_ID
        })
        assert tx_hash == "0x" + "ab" * 32

    def test_transfer_reverted(self, client, w3, signer):
        w3.eth.wait_for_transaction_receipt.return_value = {'status': 0}

        with pytest.raises(NetworkError):
            client.transfer(signer, HARDHAT_ADDRESS_1, 100, GAS_PRICE)

    def test_invalid_recipient(self, client, signer):
        with pytest.raises(NetworkError, match="Failed to build transfer"):
            client.transfer(signer, "0xnot-an-address", 100, GAS_PRICE)

        signer.sign_transaction.assert_not_called()


class TestConnect:

    def test_http_provider_timeout(self):
        client = NetworkClient.connect("http://127.0.0.1:9640/ext/bc/C/rpc", request_timeout=3, tx_timeout=60)

        assert client.tx_timeout == 60
        assert client.w3.provider.endpoint_uri == "http://127.0.0.1:9640/ext/bc/C/rpc"
