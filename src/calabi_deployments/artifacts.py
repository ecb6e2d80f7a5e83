"""Compiled contract artifact parsers for calabi-deployments."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import ArtifactNotFoundError, DefectiveArtifactError


class ArtifactFormat(Enum):
    """
    Compiled artifact layouts.

    - HARDHAT: Hardhat artifact, bytecode as a top-level hex string
    - SOLC: solc standard-json contract output, bytecode under evm.bytecode.object
    """

    HARDHAT = "hh-sol-artifact-1"
    SOLC = "solc"


def find_artifact(artifacts_dir: Path, contract_name: str) -> Path:
    """
    Locate the artifact file of a contract.

    Hardhat writes artifacts to {artifacts}/{source path}/{Name}.sol/{Name}.json,
    next to a {Name}.dbg.json file that is skipped here.

    Args:
        artifacts_dir: Root artifacts directory
        contract_name: Contract name, e.g. "CalabiFactory"

    Returns:
        Path to the artifact JSON file

    Raises:
        ArtifactNotFoundError: If no artifact exists for the contract
        DefectiveArtifactError: If more than one artifact matches
    """
    if not artifacts_dir.is_dir():
        raise ArtifactNotFoundError(f"Artifacts directory not found: {artifacts_dir}")

    # build-info holds whole compiler runs, not per-contract artifacts
    matches = sorted(
        p
        for p in artifacts_dir.rglob(f"{contract_name}.json")
        if "build-info" not in p.relative_to(artifacts_dir).parts
    )

    if not matches:
        raise ArtifactNotFoundError(
            f"No artifact for '{contract_name}' under {artifacts_dir}. "
            "Compile the contracts first."
        )
    if len(matches) > 1:
        listing = ", ".join(str(p.relative_to(artifacts_dir)) for p in matches)
        raise DefectiveArtifactError(
            f"Ambiguous artifacts for '{contract_name}': {listing}"
        )
    return matches[0]


def detect_artifact_format(data: Dict[str, Any]) -> Optional[ArtifactFormat]:
    """
    Detect the layout of a parsed artifact.

    Returns:
        ArtifactFormat.HARDHAT if bytecode is a top-level string
        ArtifactFormat.SOLC if bytecode is under evm.bytecode.object
        None if neither layout matches
    """
    if isinstance(data.get("bytecode"), str):
        return ArtifactFormat.HARDHAT
    if isinstance(data.get("evm", {}).get("bytecode", {}).get("object"), str):
        return ArtifactFormat.SOLC
    return None


def parse_artifact(file_path: Path) -> Dict[str, Any]:
    """
    Parse a compiled contract artifact.

    Args:
        file_path: Path to artifact JSON file

    Returns:
        Dictionary with:
        - abi: Contract ABI
        - bytecode: 0x-prefixed creation bytecode
        - source_format: ArtifactFormat value string
        - Optional: contract_name, source_name

    Raises:
        DefectiveArtifactError: If the artifact has no ABI or no creation bytecode
            (interfaces and abstract contracts compile to empty bytecode)
    """
    with open(file_path) as f:
        data = json.load(f)

    artifact_format = detect_artifact_format(data)
    match artifact_format:
        case ArtifactFormat.HARDHAT:
            bytecode = data["bytecode"]
        case ArtifactFormat.SOLC:
            bytecode = data["evm"]["bytecode"]["object"]
        case None:
            raise DefectiveArtifactError(f"Unrecognised artifact layout: {file_path}")

    abi: Optional[List[Dict[str, Any]]] = data.get("abi")
    if not isinstance(abi, list):
        raise DefectiveArtifactError(f"Missing ABI in artifact: {file_path}")

    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    if bytecode == "0x":
        raise DefectiveArtifactError(
            f"Empty bytecode in artifact (interface or abstract contract?): {file_path}"
        )
    if "__$" in bytecode:
        raise DefectiveArtifactError(f"Unlinked library placeholder in artifact: {file_path}")

    result: Dict[str, Any] = {
        "abi": abi,
        "bytecode": bytecode,
        "source_format": artifact_format.value,
    }

    if "contractName" in data:
        result["contract_name"] = data["contractName"]
    if "sourceName" in data:
        result["source_name"] = data["sourceName"]

    return result


def load_artifact(artifacts_dir: Path, contract_name: str) -> Dict[str, Any]:
    """Find and parse the artifact of a contract."""
    return parse_artifact(find_artifact(artifacts_dir, contract_name))
