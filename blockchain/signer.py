"""
Signer Resolution
Explicit private key or the well-known development mnemonic
"""

from typing import Iterable, Optional
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from utils.exceptions import PreconditionFailure


# Hardhat/Anvil default mnemonic; its accounts are pre-funded only on dev networks
TEST_MNEMONIC = "test test test test test test test test test test test junk"
DEFAULT_ACCOUNT_PATH = "m/44'/60'/0'/0/0"


class ExplicitKey:
    """Credential backed by a private key supplied by the operator"""

    source = "private-key"

    def __init__(self, private_key: str):
        if not private_key:
            raise ValueError("private_key must be non-empty")
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key
        self._private_key = private_key

    def resolve(self, chain_id: Optional[int] = None) -> LocalAccount:
        """Derive the signing account (chain_id is ignored)"""
        return Account.from_key(self._private_key)


class DerivedFromFixedSeed:
    """
    Credential derived from a fixed, publicly known mnemonic

    Only resolves on chain ids listed in allowed_chain_ids.
    """

    source = "test-mnemonic"

    def __init__(
        self,
        allowed_chain_ids: Iterable[int],
        mnemonic: str = TEST_MNEMONIC,
        account_path: str = DEFAULT_ACCOUNT_PATH
    ):
        self.allowed_chain_ids = frozenset(allowed_chain_ids)
        self.mnemonic = mnemonic
        self.account_path = account_path

    def resolve(self, chain_id: Optional[int] = None) -> LocalAccount:
        """
        Derive the account at account_path

        Raises:
            PreconditionFailure: chain_id is not a development chain
        """
        if chain_id not in self.allowed_chain_ids:
            raise PreconditionFailure(
                f"Refusing to use the public test mnemonic on chain {chain_id}",
                guidance=[
                    "Provide PRIVATE_KEY for a funded account on this network.",
                    f"The test mnemonic is only allowed on chains: "
                    f"{', '.join(str(c) for c in sorted(self.allowed_chain_ids))}"
                ]
            )

        Account.enable_unaudited_hdwallet_features()
        logger.debug(f"Deriving signer from test mnemonic at {self.account_path}")
        return Account.from_mnemonic(self.mnemonic, account_path=self.account_path)


def credential_from_key(private_key: Optional[str], allowed_chain_ids: Iterable[int]):
    """Pick ExplicitKey when a key is supplied, else the fixed-seed fallback"""
    if private_key:
        return ExplicitKey(private_key)
    return DerivedFromFixedSeed(allowed_chain_ids)
