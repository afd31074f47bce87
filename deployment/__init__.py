"""
Deployment Package
Deployment plan, drivers and reporting for the Zoo contracts
"""

from .plan import DEPLOYMENT_PLAN, DeploymentEntry
from .record import DeploymentRecord, load_record, write_record
from .driver import DeploymentDriver, DeploymentOutcome, DriverState
from .funding import FundingDriver, FundingOutcome, FundingRequest
from .reporting import ConsoleReporter

__all__ = [
    'DEPLOYMENT_PLAN',
    'DeploymentEntry',
    'DeploymentRecord',
    'load_record',
    'write_record',
    'DeploymentDriver',
    'DeploymentOutcome',
    'DriverState',
    'FundingDriver',
    'FundingOutcome',
    'FundingRequest',
    'ConsoleReporter'
]
