"""
Console Reporting
Renders driver events as human-readable log lines
"""

from typing import Protocol
from web3 import Web3
from loguru import logger


BANNER = "=" * 44


class EventSink(Protocol):
    def __call__(self, event: str, **fields) -> None:
        ...


def discard_events(event: str, **fields) -> None:
    """Sink that drops every event"""


class ConsoleReporter:
    """
    Event sink that writes progress and summaries through loguru

    Every line is bound with the event name so file sinks keep it as
    structured context. Unknown events are logged at DEBUG.
    """

    def __init__(self, currency_symbol: str = "ETH"):
        self.currency_symbol = currency_symbol

    def __call__(self, event: str, **fields) -> None:
        log = logger.bind(event=event)
        handler = getattr(self, f"_on_{event}", None)

        if handler is None:
            log.debug(f"{event}: {fields}")
            return

        handler(log, **fields)

    def _format_amount(self, wei: int) -> str:
        return f"{Web3.from_wei(wei, 'ether')} {self.currency_symbol}"

    # Deployment

    def _on_run_started(self, log, display_name, rpc_url, expected_chain_id):
        log.info(BANNER)
        log.info(f"Zoo Contracts Deployment to {display_name}")
        log.info(BANNER)
        log.info(f"RPC URL: {rpc_url}")
        log.info(f"Chain ID: {expected_chain_id}")

    def _on_network_connected(self, log, name, chain_id):
        log.info(f"Connected to network: {name} (chainId: {chain_id})")

    def _on_chain_mismatch(self, log, expected, actual):
        log.warning(f"Expected chain ID {expected}, got {actual}")

    def _on_signer_resolved(self, log, address, source, balance):
        log.info(f"Deployer: {address} ({source})")
        log.info(f"Balance: {self._format_amount(balance)}")

    def _on_contract_started(self, log, name):
        log.info(f"Deploying {name}...")

    def _on_tx_submitted(self, log, name, tx_hash):
        log.info(f"  Transaction hash: {tx_hash}")

    def _on_contract_deployed(self, log, name, address):
        log.success(f"  Deployed at: {address}")

    def _on_contract_failed(self, log, name, error):
        log.error(f"  Error deploying {name}: {error}")

    def _on_summary(self, log, display_name, rpc_url, chain_id, deployer, contracts, failures):
        log.info(BANNER)
        log.info("Deployment Summary")
        log.info(BANNER)
        log.info(f"Network: {display_name} ({rpc_url})")
        log.info(f"Chain ID: {chain_id}")
        log.info(f"Deployer: {deployer}")
        log.info("Deployed Contracts:")
        for name, address in contracts.items():
            log.info(f"  {name}: {address}")
        if failures:
            log.warning(f"Failed: {', '.join(failures)}")

    def _on_record_written(self, log, path):
        log.success(f"Deployment info saved to: {path}")

    # Funding

    def _on_funding_started(self, log, rpc_url, treasury, deployer, amount):
        log.info(BANNER)
        log.info("Fund Deployer Account")
        log.info(BANNER)
        log.info(f"RPC URL: {rpc_url}")
        log.info(f"Treasury: {treasury}")
        log.info(f"Deployer: {deployer}")
        log.info(f"Amount: {self._format_amount(amount)}")

    def _on_treasury_balance(self, log, balance):
        log.info(f"Treasury balance: {self._format_amount(balance)}")

    def _on_transfer_submitted(self, log, tx_hash):
        log.info("Sending funds...")
        log.info(f"Transaction hash: {tx_hash}")

    def _on_funding_complete(self, log, deployer, balance):
        log.info(f"Deployer balance: {self._format_amount(balance)}")
        log.success("Funding complete! You can now run the deployment script.")
