"""
Network Client
Thin wrapper over a single JSON-RPC endpoint for deployments and transfers
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence
from web3 import Web3
from web3.exceptions import TimeExhausted, Web3Exception
from loguru import logger

from utils.exceptions import NetworkError
from .artifact_loader import Artifact


KNOWN_CHAINS = {
    1: 'mainnet',
    1337: 'localhost',
    31337: 'hardhat',
    11155111: 'sepolia',
    96368: 'lux-testnet',
    96369: 'lux-mainnet'
}

TRANSFER_GAS = 21000


@dataclass(frozen=True)
class NetworkIdentity:
    name: str
    chain_id: int


@dataclass(frozen=True)
class DeployedContract:
    tx_hash: str
    address: str


class NetworkClient:
    """
    Wraps one Web3 connection for the lifetime of a command

    All web3 and transport failures surface as NetworkError.
    """

    def __init__(self, w3: Web3, tx_timeout: int = 120):
        """
        Initialize Network Client

        Args:
            w3: Web3 instance
            tx_timeout: Seconds to wait for a transaction receipt
        """
        self.w3 = w3
        self.tx_timeout = tx_timeout
        self._chain_id = None

    @classmethod
    def connect(cls, rpc_url: str, request_timeout: int = 30, tx_timeout: int = 120) -> "NetworkClient":
        """Create a client for rpc_url; liveness is not checked here"""
        provider = Web3.HTTPProvider(rpc_url, request_kwargs={'timeout': request_timeout})
        logger.debug(f"HTTP provider created for {rpc_url}")
        return cls(Web3(provider), tx_timeout=tx_timeout)

    def get_network_identity(self) -> NetworkIdentity:
        """Query the node for its chain id"""
        try:
            chain_id = int(self.w3.eth.chain_id)
        except (Web3Exception, OSError) as e:
            raise NetworkError(f"Failed to query chain id: {e}") from e

        self._chain_id = chain_id
        return NetworkIdentity(name=KNOWN_CHAINS.get(chain_id, 'unknown'), chain_id=chain_id)

    def get_balance(self, address: str) -> int:
        """Native currency balance in wei"""
        try:
            return int(self.w3.eth.get_balance(Web3.to_checksum_address(address)))
        except (Web3Exception, OSError) as e:
            raise NetworkError(f"Failed to read balance of {address}: {e}") from e

    def deploy_contract(
        self,
        signer,
        artifact: Artifact,
        constructor_args: Sequence,
        gas_price: int,
        on_submitted: Optional[Callable[[str], None]] = None
    ) -> DeployedContract:
        """
        Submit a contract-creation transaction and wait for its receipt

        Args:
            signer: eth_account LocalAccount
            artifact: Loaded artifact (abi + bytecode)
            constructor_args: Positional constructor arguments
            gas_price: Legacy gas price in wei
            on_submitted: Called with the tx hash before waiting

        Returns:
            DeployedContract with tx hash and checksummed address
        """
        try:
            factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
            tx = factory.constructor(*constructor_args).build_transaction({
                'from': signer.address,
                'nonce': self.w3.eth.get_transaction_count(signer.address, 'pending'),
                'gasPrice': gas_price,
                'chainId': self._get_chain_id()
            })
        except (Web3Exception, OSError, ValueError, TypeError) as e:
            raise NetworkError(f"Failed to build deployment of {artifact.contract_name}: {e}") from e

        receipt, tx_hash = self._send_and_wait(signer, tx, on_submitted)

        contract_address = receipt.get('contractAddress')
        if not contract_address:
            raise NetworkError(f"Receipt for {tx_hash} has no contract address")

        return DeployedContract(tx_hash=tx_hash, address=Web3.to_checksum_address(contract_address))

    def transfer(
        self,
        signer,
        to_address: str,
        amount: int,
        gas_price: int,
        on_submitted: Optional[Callable[[str], None]] = None
    ) -> str:
        """
        Send a native value transfer and wait for confirmation

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        try:
            tx = {
                'to': Web3.to_checksum_address(to_address),
                'value': amount,
                'gas': TRANSFER_GAS,
                'gasPrice': gas_price,
                'nonce': self.w3.eth.get_transaction_count(signer.address, 'pending'),
                'chainId': self._get_chain_id()
            }
        except (Web3Exception, OSError, ValueError, TypeError) as e:
            raise NetworkError(f"Failed to build transfer to {to_address}: {e}") from e

        _, tx_hash = self._send_and_wait(signer, tx, on_submitted)
        return tx_hash

    def _get_chain_id(self) -> int:
        if self._chain_id is None:
            self.get_network_identity()
        return self._chain_id

    def _send_and_wait(self, signer, tx: dict, on_submitted):
        """Sign, broadcast and wait for a successful receipt"""
        try:
            signed_tx = signer.sign_transaction(tx)
        except (ValueError, TypeError) as e:
            raise NetworkError(f"Failed to sign transaction: {e}") from e

        try:
            raw_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except (Web3Exception, OSError) as e:
            raise NetworkError(f"Failed to send transaction: {e}") from e

        tx_hash = Web3.to_hex(raw_hash)
        logger.debug(f"Transaction sent: {tx_hash}")
        if on_submitted:
            on_submitted(tx_hash)

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(raw_hash, timeout=self.tx_timeout)
        except TimeExhausted as e:
            raise NetworkError(
                f"Transaction {tx_hash} not confirmed within {self.tx_timeout}s"
            ) from e
        except (Web3Exception, OSError) as e:
            raise NetworkError(f"Failed waiting for {tx_hash}: {e}") from e

        if receipt.get('status') != 1:
            raise NetworkError(f"Transaction {tx_hash} reverted")

        return receipt, tx_hash
