"""
Deployment Driver
Deploys the plan in order and writes the deployment record
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence
from loguru import logger

from blockchain.artifact_loader import load_artifact
from blockchain.network_client import NetworkClient
from blockchain.signer import credential_from_key
from utils.config import Settings
from utils.exceptions import DeploymentError, PreconditionFailure
from .plan import DEPLOYMENT_PLAN, DeploymentEntry
from .record import DeploymentRecord, utc_timestamp, write_record
from .reporting import EventSink, discard_events


class DriverState(Enum):
    NOT_STARTED = "not_started"
    CONNECTING_NETWORK = "connecting_network"
    RESOLVING_SIGNER = "resolving_signer"
    CHECKING_BALANCE = "checking_balance"
    DEPLOYING_CONTRACT = "deploying_contract"
    FINISHED = "finished"
    ABORTED = "aborted"


@dataclass
class DeploymentOutcome:
    record: DeploymentRecord
    output_path: Path
    failures: Dict[str, str] = field(default_factory=dict)
    state: DriverState = DriverState.FINISHED


class DeploymentDriver:
    """
    Runs one deployment of the plan against one network

    Contracts are deployed strictly in plan order. A failure for one
    contract is reported and skipped; only a zero deployer balance aborts
    the run.
    """

    def __init__(
        self,
        settings: Settings,
        plan: Sequence[DeploymentEntry] = DEPLOYMENT_PLAN,
        client_factory: Optional[Callable[..., NetworkClient]] = None,
        credential=None,
        emit: EventSink = discard_events,
        artifact_loader=load_artifact,
        clock: Callable[[], str] = utc_timestamp
    ):
        """
        Initialize Deployment Driver

        Args:
            settings: Resolved settings
            plan: Ordered deployment entries
            client_factory: Builds a NetworkClient from (rpc_url, request_timeout, tx_timeout)
            credential: Signer credential (None = from settings.private_key)
            emit: Event sink for progress reporting
            artifact_loader: Callable (contract_name, artifacts_dir) -> Artifact
            clock: Returns the record timestamp
        """
        self.settings = settings
        self.plan = tuple(plan)
        self.client_factory = client_factory or NetworkClient.connect
        self.credential = credential or credential_from_key(settings.private_key, settings.dev_chain_ids)
        self.emit = emit
        self.artifact_loader = artifact_loader
        self.clock = clock
        self.state = DriverState.NOT_STARTED
        self.current_index: Optional[int] = None

    def _transition(self, state: DriverState):
        logger.debug(f"Driver state: {self.state.value} -> {state.value}")
        self.state = state

    def run(self) -> DeploymentOutcome:
        """
        Execute the deployment

        Returns:
            DeploymentOutcome with the written record and per-contract failures

        Raises:
            PreconditionFailure: deployer balance is zero or signer refused
            NetworkError: connection, identity or balance query failed
        """
        settings = self.settings

        self.emit(
            'run_started',
            display_name=settings.display_name,
            rpc_url=settings.rpc_url,
            expected_chain_id=settings.expected_chain_id
        )

        self._transition(DriverState.CONNECTING_NETWORK)
        client = self.client_factory(settings.rpc_url, settings.request_timeout, settings.tx_timeout)
        identity = client.get_network_identity()
        self.emit('network_connected', name=identity.name, chain_id=identity.chain_id)

        if identity.chain_id != settings.expected_chain_id:
            self.emit('chain_mismatch', expected=settings.expected_chain_id, actual=identity.chain_id)

        self._transition(DriverState.RESOLVING_SIGNER)
        try:
            signer = self.credential.resolve(identity.chain_id)
        except PreconditionFailure:
            self._transition(DriverState.ABORTED)
            raise

        self._transition(DriverState.CHECKING_BALANCE)
        balance = client.get_balance(signer.address)
        self.emit('signer_resolved', address=signer.address, source=self.credential.source, balance=balance)

        if balance == 0:
            self._transition(DriverState.ABORTED)
            raise PreconditionFailure(
                "Deployer account has no funds!",
                guidance=[
                    "Please fund the account or provide a funded PRIVATE_KEY",
                    f"Treasury address with funds: {settings.treasury_address}",
                    "Run: python main.py fund"
                ]
            )

        deployed: Dict[str, str] = {}
        failures: Dict[str, str] = {}

        for index, entry in enumerate(self.plan):
            self.current_index = index
            self._transition(DriverState.DEPLOYING_CONTRACT)
            self.emit('contract_started', name=entry.contract_name)

            try:
                artifact = self.artifact_loader(entry.contract_name, settings.artifacts_dir)
                result = client.deploy_contract(
                    signer,
                    artifact,
                    entry.constructor_args,
                    settings.gas_price_wei,
                    on_submitted=lambda tx_hash, name=entry.contract_name: self.emit(
                        'tx_submitted', name=name, tx_hash=tx_hash
                    )
                )
            except DeploymentError as e:
                failures[entry.contract_name] = str(e)
                self.emit('contract_failed', name=entry.contract_name, error=str(e))
                continue

            deployed[entry.contract_name] = result.address
            self.emit('contract_deployed', name=entry.contract_name, address=result.address)

        record = DeploymentRecord(
            network=settings.network_name,
            chain_id=identity.chain_id,
            rpc_url=settings.rpc_url,
            deployer=signer.address,
            timestamp=self.clock(),
            contracts=deployed
        )

        self.emit(
            'summary',
            display_name=settings.display_name,
            rpc_url=settings.rpc_url,
            chain_id=identity.chain_id,
            deployer=signer.address,
            contracts=dict(deployed),
            failures=list(failures)
        )

        output_path = write_record(record, settings.output_path)
        self.emit('record_written', path=str(output_path))

        self._transition(DriverState.FINISHED)
        return DeploymentOutcome(record=record, output_path=output_path, failures=failures, state=self.state)
