"""
Deployment Plan
Contracts deployed on every run, in order
"""

from dataclasses import dataclass
from typing import Tuple


# 1 million tokens with 18 decimals
INITIAL_ERC20_SUPPLY = 10**24


@dataclass(frozen=True)
class DeploymentEntry:
    contract_name: str
    constructor_args: Tuple = ()


DEPLOYMENT_PLAN: Tuple[DeploymentEntry, ...] = (
    DeploymentEntry("MockERC20", (INITIAL_ERC20_SUPPLY,)),
    DeploymentEntry("BoringFactory"),
    DeploymentEntry("MockBoringSingleNFT"),
    DeploymentEntry("MockBoringMultipleNFT"),
)
