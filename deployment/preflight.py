"""
Preflight Check
Verifies configuration, connectivity and artifacts before deploying
"""

import os
from typing import Callable, Optional, Sequence
from web3 import Web3
from loguru import logger

from blockchain.artifact_loader import candidate_paths
from blockchain.network_client import NetworkClient
from blockchain.signer import credential_from_key
from utils.config import Settings
from utils.exceptions import DeploymentError
from .plan import DEPLOYMENT_PLAN, DeploymentEntry


def check_environment_variables(settings: Settings) -> bool:
    """Report which credentials are configured; never blocking"""
    logger.info("Checking environment variables...")

    if settings.private_key:
        logger.success("  ✓ PRIVATE_KEY set")
    else:
        logger.warning("  PRIVATE_KEY not set - deployer derived from the test mnemonic")

    if settings.treasury_key:
        logger.success("  ✓ TREASURY_KEY set")
    else:
        logger.info("  TREASURY_KEY not set - funding command unavailable")

    return True


def check_rpc_connection(client: NetworkClient, settings: Settings) -> Optional[int]:
    """
    Query the chain id

    Returns:
        Chain id, or None when the endpoint is unreachable
    """
    logger.info(f"Checking RPC connection ({settings.rpc_url})...")

    try:
        identity = client.get_network_identity()
    except DeploymentError as e:
        logger.error(f"  ✗ {e}")
        return None

    if identity.chain_id != settings.expected_chain_id:
        logger.warning(f"  ⚠ Connected to chain {identity.chain_id}, expected {settings.expected_chain_id}")
    else:
        logger.success(f"  ✓ Connected to {identity.name} (chainId: {identity.chain_id})")

    return identity.chain_id


def check_artifacts(settings: Settings, plan: Sequence[DeploymentEntry] = DEPLOYMENT_PLAN) -> bool:
    """Check that every plan entry has a compiled artifact"""
    logger.info("Checking contract artifacts...")

    missing = []
    for entry in plan:
        paths = candidate_paths(entry.contract_name, settings.artifacts_dir)
        found = next((p for p in paths if p.is_file()), None)

        if found:
            logger.success(f"  ✓ {entry.contract_name}: {found}")
        else:
            logger.error(f"  ✗ {entry.contract_name}: tried {', '.join(str(p) for p in paths)}")
            missing.append(entry.contract_name)

    if missing:
        logger.info("  Run 'npx hardhat compile' first")
        return False

    return True


def check_deployer_balance(client: NetworkClient, settings: Settings, chain_id: int) -> bool:
    """Check the deployer has a non-zero balance"""
    logger.info("Checking deployer balance...")

    try:
        signer = credential_from_key(settings.private_key, settings.dev_chain_ids).resolve(chain_id)
        balance = client.get_balance(signer.address)
    except DeploymentError as e:
        logger.error(f"  ✗ {e}")
        return False

    amount = Web3.from_wei(balance, 'ether')
    logger.info(f"  Deployer {signer.address}: {amount} {settings.currency_symbol}")

    if balance == 0:
        logger.error("  ✗ Deployer has no funds (run: python main.py fund)")
        return False

    logger.success("  ✓ Deployer balance sufficient")
    return True


def check_output_directory(settings: Settings) -> bool:
    """Check the record can be written"""
    logger.info("Checking output directory...")

    directory = settings.output_path.parent
    existing = directory
    while not existing.exists():
        existing = existing.parent

    if not os.access(existing, os.W_OK):
        logger.error(f"  ✗ {directory} is not writable")
        return False

    logger.success(f"  ✓ {settings.output_path}")
    return True


def run_preflight(
    settings: Settings,
    client_factory: Optional[Callable[..., NetworkClient]] = None,
    plan: Sequence[DeploymentEntry] = DEPLOYMENT_PLAN
) -> bool:
    """
    Run all checks

    Returns:
        True if every blocking check passed
    """
    results = {
        'environment': check_environment_variables(settings),
        'artifacts': check_artifacts(settings, plan),
        'output': check_output_directory(settings)
    }

    client_factory = client_factory or NetworkClient.connect
    client = client_factory(settings.rpc_url, settings.request_timeout, settings.tx_timeout)
    chain_id = check_rpc_connection(client, settings)
    results['rpc'] = chain_id is not None
    results['balance'] = check_deployer_balance(client, settings, chain_id) if chain_id is not None else False

    passed = sum(1 for ok in results.values() if ok)
    if passed == len(results):
        logger.success(f"✓ All {len(results)} checks passed")
        return True

    failed = [name for name, ok in results.items() if not ok]
    logger.error(f"{len(failed)} check(s) failed: {', '.join(failed)}")
    return False
