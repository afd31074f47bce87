"""
Artifact Loader
Locates and parses compiled Hardhat artifacts by contract name
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List
from loguru import logger

from utils.exceptions import ArtifactNotFound, InvalidArtifact


MOCKS_DIR = "mocks"


@dataclass(frozen=True)
class Artifact:
    """Compiled contract interface and creation bytecode"""

    contract_name: str
    abi: list
    bytecode: str
    path: Path


def candidate_paths(contract_name: str, artifacts_dir: Path) -> List[Path]:
    """
    Build the ordered list of locations an artifact may live at

    Mock contracts are looked up under mocks/ first by naming convention.

    Args:
        contract_name: Contract name, e.g. "MockERC20"
        artifacts_dir: Root of the Hardhat artifacts/contracts tree

    Returns:
        Candidate paths without duplicates, in lookup order
    """
    artifacts_dir = Path(artifacts_dir)
    leaf = Path(f"{contract_name}.sol") / f"{contract_name}.json"

    conventional = artifacts_dir / MOCKS_DIR / leaf if "Mock" in contract_name else artifacts_dir / leaf
    paths = [conventional, artifacts_dir / leaf, artifacts_dir / MOCKS_DIR / leaf]

    unique = []
    for path in paths:
        if path not in unique:
            unique.append(path)
    return unique


def load_artifact(contract_name: str, artifacts_dir: Path) -> Artifact:
    """
    Load the artifact for a contract from the first existing candidate path

    Reads the file system on every call; nothing is cached.

    Raises:
        ValueError: contract_name is empty
        ArtifactNotFound: no candidate path exists
        InvalidArtifact: the file is unreadable, not a JSON object or lacks abi/bytecode
    """
    if not contract_name:
        raise ValueError("contract_name must be a non-empty string")

    paths = candidate_paths(contract_name, artifacts_dir)

    for path in paths:
        if not path.is_file():
            continue

        logger.debug(f"Loading artifact {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidArtifact(path, f"not valid JSON ({e})") from e
        except (UnicodeDecodeError, OSError) as e:
            raise InvalidArtifact(path, f"unreadable ({e})") from e

        if not isinstance(data, dict):
            raise InvalidArtifact(path, f"expected a JSON object, got {type(data).__name__}")

        missing = [key for key in ('abi', 'bytecode') if key not in data]
        if missing:
            raise InvalidArtifact(path, f"missing {', '.join(missing)}")

        return Artifact(
            contract_name=contract_name,
            abi=data['abi'],
            bytecode=data['bytecode'],
            path=path
        )

    raise ArtifactNotFound(contract_name, paths)
