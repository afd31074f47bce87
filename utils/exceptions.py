"""
Deployment Exceptions
Error taxonomy shared by the deployment and funding commands
"""

from pathlib import Path
from typing import List, Optional, Sequence


class DeploymentError(Exception):
    """Base class for all deployer errors"""


class ArtifactNotFound(DeploymentError):
    """No compiled artifact exists at any candidate path"""

    def __init__(self, contract_name: str, paths_tried: Sequence[Path]):
        self.contract_name = contract_name
        self.paths_tried = list(paths_tried)
        tried = ", ".join(str(p) for p in self.paths_tried)
        super().__init__(f"Artifact not found for {contract_name}. Paths tried: {tried}")


class InvalidArtifact(DeploymentError):
    """Artifact file exists but cannot be used"""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Invalid artifact {path}: {reason}")


class PreconditionFailure(DeploymentError):
    """
    Fatal operator-facing failure

    Carries guidance lines that tell the operator what to do next.
    """

    def __init__(self, message: str, guidance: Optional[List[str]] = None):
        self.guidance = list(guidance or [])
        super().__init__(message)


class NetworkError(DeploymentError):
    """RPC connection, submission or confirmation failure"""
