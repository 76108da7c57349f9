"""Deployment record parsers for synth-release-tools."""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


def read_deployment_address(file_path: Path) -> Optional[str]:
    """
    Read the deployed address from a hardhat-deploy record.

    Args:
        file_path: Path to {ContractName}.json

    Returns:
        The recorded address, or None if the file is not a usable record
        (undecodable JSON, not an object, missing or non-string address)
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.debug("Skipping undecodable deployment record %s", file_path)
        return None

    if not isinstance(data, dict):
        logger.debug("Skipping deployment record %s: not a JSON object", file_path)
        return None

    address = data.get("address")
    if not isinstance(address, str) or not address:
        logger.debug("Skipping deployment record %s: no address field", file_path)
        return None

    return address


def list_deployments(network_dir: Path) -> Dict[str, str]:
    """
    Collect contract name -> address for every record in a network directory.

    Assumption: every regular file with a json extension directly inside
    deployments/{network} is a deployment record named after its contract.
    Anything else (.chainId, solcInputs/, malformed records) is skipped.

    Args:
        network_dir: Path to deployments/{network}

    Returns:
        Dictionary mapping contract name to address

    Raises:
        FileNotFoundError: If network_dir does not exist
    """
    deployments: Dict[str, str] = {}

    for record in sorted(Path(network_dir).iterdir()):
        if record.suffix != ".json" or not record.is_file():
            continue

        address = read_deployment_address(record)
        if address is None:
            continue

        deployments[record.stem] = address

    return deployments
