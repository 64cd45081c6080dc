"""Persistence of the deployment record shared by the deploy, verify and mint scripts.

The record lives in a small JSON file in the working directory. Deploy writes it,
Verify and Mint only read it.
"""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from brownie import config
from brownie.convert import to_address

from scripts.client import ContractVariant, configured_variant

DEFAULT_DEPLOYMENT_FILE = ".deployment-info-nft.json"

SCHEMA_VERSION = 1


class DeploymentError(Exception):
    """Base exception for deployment record errors."""

    pass


class DeploymentNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when the deployment file is missing or cannot be read."""

    pass


class InvalidDeploymentError(DeploymentError, ValueError):
    """Raised when the deployment file content is malformed or incomplete."""

    pass


@dataclass(frozen=True)
class DeploymentRecord:
    """Result of a successful deployment."""

    contract_address: Optional[str]
    deployer_address: Optional[str] = None
    base_uri: Optional[str] = None  # absent for the without-uri variant
    contract_name: Optional[str] = None
    chain_id: Optional[int] = None
    schema_version: int = SCHEMA_VERSION

    @property
    def variant(self) -> ContractVariant:
        """Variant the contract was deployed as, falling back to the configured one."""
        if self.contract_name is None:
            return configured_variant()
        try:
            return ContractVariant.from_contract_name(self.contract_name)
        except ValueError as exc:
            raise InvalidDeploymentError(str(exc)) from exc

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "schemaVersion": self.schema_version,
            "contractAddress": self.contract_address,
            "deployerAddress": self.deployer_address,
            "baseURI": self.base_uri,
            "contractName": self.contract_name,
            "chainId": self.chain_id,
        }
        return {key: value for key, value in data.items() if value is not None}

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "DeploymentRecord":
        data = migrate(data)
        return cls(
            contract_address=data.get("contractAddress"),
            deployer_address=data.get("deployerAddress"),
            base_uri=data.get("baseURI"),
            contract_name=data.get("contractName"),
            chain_id=data.get("chainId"),
            schema_version=data["schemaVersion"],
        )


def migrate(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Bring raw deployment data up to the current schema version.

    Files written before versioning carry no ``schemaVersion`` key and are
    treated as version 0, which has the same fields minus the optional ones.
    """
    version = data.get("schemaVersion", 0)
    if not isinstance(version, int) or isinstance(version, bool) or version < 0:
        raise InvalidDeploymentError(f"invalid schemaVersion: {version!r}")
    if version > SCHEMA_VERSION:
        raise InvalidDeploymentError(
            f"schemaVersion {version} is newer than supported version {SCHEMA_VERSION}"
        )
    if version == 0:
        data = {**data, "schemaVersion": 1}
    return data


def deployment_path() -> Path:
    file_name = config.get("nft", {}).get("deployment_file") or DEFAULT_DEPLOYMENT_FILE
    return Path.cwd() / file_name


def save(record: DeploymentRecord, path: Optional[Union[Path, str]] = None) -> Path:
    """
    Write the record, replacing any previous deployment.

    The content goes to a temporary file in the target directory first and is then
    renamed over the target, so readers see either the old or the new record.

    Returns:
        Path of the written file
    """
    target = Path(path) if path is not None else deployment_path()
    fd, tmp_name = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(record.to_json(), f, indent=2)
            f.write("\n")
        # mkstemp creates 0600, match the mode of a plain write
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return target


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def load(path: Optional[Union[Path, str]] = None) -> DeploymentRecord:
    """
    Read the record written by the deploy script.

    Raises:
        DeploymentNotFoundError: If the file is missing or unreadable
        InvalidDeploymentError: If the file is not a JSON object of a supported version
    """
    source = Path(path) if path is not None else deployment_path()
    try:
        with open(source, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise DeploymentNotFoundError(f"cannot read {source}: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidDeploymentError(f"{source} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidDeploymentError(f"{source} does not contain a JSON object")
    return DeploymentRecord.from_json(data)


def validate(
    record: DeploymentRecord, variant: Optional[ContractVariant] = None
) -> DeploymentRecord:
    """
    Check that the record holds what the caller needs.

    Without a variant only the contract address is required, which is all minting
    needs. With a variant the constructor arguments must be present too.
    """
    problems: List[str] = []

    required = {"contractAddress": record.contract_address}
    if variant is not None:
        required["deployerAddress"] = record.deployer_address
        if variant.takes_base_uri:
            required["baseURI"] = record.base_uri

    for key, value in required.items():
        if not value:
            problems.append(f"missing {key}")
        elif key.endswith("Address") and not _is_address(value):
            problems.append(f"invalid {key}: {value!r}")

    if problems:
        raise InvalidDeploymentError(", ".join(problems))
    return record


def _is_address(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        to_address(value)
    except ValueError:
        return False
    return True
