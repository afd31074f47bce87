"""
Blockchain Interaction Package
Artifact loading, signer resolution and the JSON-RPC client
"""

from .artifact_loader import Artifact, load_artifact
from .network_client import NetworkClient, NetworkIdentity, DeployedContract
from .signer import ExplicitKey, DerivedFromFixedSeed, credential_from_key

__all__ = [
    'Artifact',
    'load_artifact',
    'NetworkClient',
    'NetworkIdentity',
    'DeployedContract',
    'ExplicitKey',
    'DerivedFromFixedSeed',
    'credential_from_key'
]
