"""
Utilities Package
Configuration, logging setup and the error taxonomy
"""

from .config import Settings, load_settings
from .logging_setup import configure_logging
from .exceptions import (
    DeploymentError,
    ArtifactNotFound,
    InvalidArtifact,
    PreconditionFailure,
    NetworkError
)

__all__ = [
    'Settings',
    'load_settings',
    'configure_logging',
    'DeploymentError',
    'ArtifactNotFound',
    'InvalidArtifact',
    'PreconditionFailure',
    'NetworkError'
]
