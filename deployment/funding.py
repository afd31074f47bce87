"""
Funding Driver
Transfers native currency from the treasury to the deployer
"""

from dataclasses import dataclass
from typing import Callable, Optional
from web3 import Web3
from loguru import logger

from blockchain.network_client import NetworkClient
from blockchain.signer import ExplicitKey
from utils.config import Settings
from utils.exceptions import PreconditionFailure
from .reporting import EventSink, discard_events


MISSING_TREASURY_KEY_GUIDANCE = [
    "The treasury account {treasury}",
    "is derived from the production mnemonic which is not in the codebase.",
    "",
    "For local development, you have these options:",
    "1. Use the Lux CLI to fund from P-chain:",
    "   lux chain send --from-chain P --to-chain C --key <keyname> --amount 100",
    "",
    "2. Restart the network with --dev mode which uses K=1 consensus",
    "   and may have different allocations.",
    "",
    "3. Contact your team for the production mnemonic."
]


@dataclass(frozen=True)
class FundingRequest:
    treasury_address: str
    deployer_address: str
    amount: int
    gas_price: int


@dataclass(frozen=True)
class FundingOutcome:
    tx_hash: str
    deployer_balance: int


def funding_request_from_settings(settings: Settings) -> FundingRequest:
    """
    Build the transfer parameters, checksumming the deployer address

    Raises:
        PreconditionFailure: DEPLOYER_ADDRESS is not a valid address
    """
    try:
        deployer_address = Web3.to_checksum_address(settings.deployer_address)
    except (ValueError, TypeError) as e:
        raise PreconditionFailure(
            f"Invalid DEPLOYER_ADDRESS {settings.deployer_address!r}",
            guidance=[
                "Set DEPLOYER_ADDRESS to a 0x-prefixed 20-byte hex address,",
                "or unset it to fund the default deployer account."
            ]
        ) from e

    return FundingRequest(
        treasury_address=settings.treasury_address,
        deployer_address=deployer_address,
        amount=settings.fund_amount_wei,
        gas_price=settings.gas_price_wei
    )


class FundingDriver:
    """
    Single treasury -> deployer transfer

    Every gate is fatal, and network errors propagate to the caller.
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: Optional[Callable[..., NetworkClient]] = None,
        emit: EventSink = discard_events
    ):
        self.settings = settings
        self.client_factory = client_factory or NetworkClient.connect
        self.emit = emit

    def run(self) -> FundingOutcome:
        """
        Execute the funding transfer

        Raises:
            PreconditionFailure: bad deployer address, missing key, treasury mismatch or low balance
            NetworkError: any RPC failure
        """
        settings = self.settings
        request = funding_request_from_settings(settings)

        self.emit(
            'funding_started',
            rpc_url=settings.rpc_url,
            treasury=request.treasury_address,
            deployer=request.deployer_address,
            amount=request.amount
        )

        if not settings.treasury_key:
            raise PreconditionFailure(
                "TREASURY_KEY environment variable is required",
                guidance=[line.format(treasury=request.treasury_address) for line in MISSING_TREASURY_KEY_GUIDANCE]
            )

        treasury = ExplicitKey(settings.treasury_key).resolve()

        if treasury.address.lower() != request.treasury_address.lower():
            raise PreconditionFailure(
                f"Provided key derives address {treasury.address}",
                guidance=[f"Expected treasury address {request.treasury_address}"]
            )

        client = self.client_factory(settings.rpc_url, settings.request_timeout, settings.tx_timeout)

        treasury_balance = client.get_balance(treasury.address)
        self.emit('treasury_balance', balance=treasury_balance)

        if treasury_balance < request.amount:
            raise PreconditionFailure("Treasury has insufficient balance")

        logger.debug(f"Transferring {request.amount} wei to {request.deployer_address}")
        tx_hash = client.transfer(
            treasury,
            request.deployer_address,
            request.amount,
            request.gas_price,
            on_submitted=lambda h: self.emit('transfer_submitted', tx_hash=h)
        )

        deployer_balance = client.get_balance(request.deployer_address)
        self.emit('funding_complete', deployer=request.deployer_address, balance=deployer_balance)

        return FundingOutcome(tx_hash=tx_hash, deployer_balance=deployer_balance)
