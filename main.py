"""
Zoo Deployer - Main Entry Point
Deploys the Zoo contracts to a Lux development network and funds the deployer

Usage:
    python main.py deploy [--rpc-url URL] [--output PATH] [--artifacts-dir DIR]
    python main.py fund [--rpc-url URL]
    python main.py check
"""

import argparse
import sys
from loguru import logger
from dotenv import load_dotenv

from deployment.driver import DeploymentDriver
from deployment.funding import FundingDriver
from deployment.preflight import run_preflight
from deployment.reporting import ConsoleReporter
from utils.config import load_settings
from utils.exceptions import PreconditionFailure
from utils.logging_setup import DEFAULT_LOG_FILE, configure_logging

load_dotenv()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Zoo contracts deployment tooling")
    parser.add_argument('--config', help="Path to network_config.json")
    parser.add_argument('--rpc-url', help="JSON-RPC endpoint (overrides RPC_URL)")
    parser.add_argument('--log-level', help="Console log level (overrides LOG_LEVEL)")
    parser.add_argument('--no-log-file', action='store_true', help="Disable the rotating log file")

    commands = parser.add_subparsers(dest='command', required=True)

    deploy = commands.add_parser('deploy', help="Deploy every contract in the plan")
    deploy.add_argument('--output', help="Deployment record path")
    deploy.add_argument('--artifacts-dir', help="Hardhat artifacts/contracts directory")

    commands.add_parser('fund', help="Fund the deployer from the treasury")

    check = commands.add_parser('check', help="Run preflight checks")
    check.add_argument('--artifacts-dir', help="Hardhat artifacts/contracts directory")

    return parser


def run_command(args) -> int:
    settings = load_settings(args.config).with_overrides(
        rpc_url=args.rpc_url,
        output_path=getattr(args, 'output', None),
        artifacts_dir=getattr(args, 'artifacts_dir', None)
    )
    reporter = ConsoleReporter(settings.currency_symbol)

    if args.command == 'deploy':
        DeploymentDriver(settings, emit=reporter).run()
        return 0

    if args.command == 'fund':
        FundingDriver(settings, emit=reporter).run()
        return 0

    return 0 if run_preflight(settings) else 1


def main(argv=None) -> int:
    """Parse arguments, run the command and map errors to an exit code"""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, log_file=None if args.no_log_file else DEFAULT_LOG_FILE)

    try:
        return run_command(args)
    except PreconditionFailure as e:
        logger.error(f"Error: {e}")
        for line in e.guidance:
            logger.error(line)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1
    except Exception as e:
        logger.opt(exception=e).error(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
