from enum import Enum
from typing import Any, List, Optional

from brownie import config, project
from brownie.network.contract import (
    ContractContainer,
    ProjectContract,
    _fetch_from_explorer,
)
from brownie.network.transaction import TransactionReceipt


class ContractVariant(Enum):
    WITH_URI = "with-uri"
    WITHOUT_URI = "without-uri"

    @property
    def contract_name(self) -> str:
        if self is ContractVariant.WITH_URI:
            return "NFT42"
        return "NFT42Simple"

    @property
    def takes_base_uri(self) -> bool:
        return self is ContractVariant.WITH_URI

    def constructor_arguments(
        self, owner: str, base_uri: Optional[str] = None
    ) -> List[Any]:
        if not self.takes_base_uri:
            return [owner]
        if not base_uri:
            raise ValueError(f"{self.contract_name} requires a base URI")
        return [owner, base_uri]

    @classmethod
    def from_contract_name(cls, name: str) -> "ContractVariant":
        for variant in cls:
            if variant.contract_name == name:
                return variant
        raise ValueError(f"unknown NFT contract: {name}")


def configured_variant() -> ContractVariant:
    variant = config.get("nft", {}).get("variant", ContractVariant.WITH_URI.value)
    return ContractVariant(variant)


def configured_base_uri() -> Optional[str]:
    if not configured_variant().takes_base_uri:
        return None
    return config.get("nft", {}).get("base_uri")


def get_container(name: str) -> ContractContainer:
    loaded = project.get_loaded_projects()
    if not loaded:
        raise ValueError("no brownie project loaded")
    return loaded[0][name]


class ContractClient:
    """Deploys, attaches to and mints on one NFT contract through its container."""

    def __init__(self, container: ContractContainer, variant: ContractVariant):
        self.container = container
        self.variant = variant

    @classmethod
    def from_variant(
        cls, variant: Optional[ContractVariant] = None
    ) -> "ContractClient":
        if variant is None:
            variant = configured_variant()
        return cls(get_container(variant.contract_name), variant)

    @property
    def name(self) -> str:
        return self.variant.contract_name

    def deploy(self, owner, base_uri: Optional[str] = None) -> ProjectContract:
        args = self.variant.constructor_arguments(owner.address, base_uri)
        return self.container.deploy(*args, {"from": owner})

    def attach_at(self, address: str) -> ProjectContract:
        return self.container.at(address)

    def mint(self, instance: ProjectContract, recipient, sender) -> TransactionReceipt:
        # returns once broadcast, the caller waits for confirmation
        return instance.safeMint(recipient, {"from": sender, "required_confs": 0})

    def is_verified(self, instance: ProjectContract) -> bool:
        """Whether the block explorer already holds source code for the contract."""
        data = _fetch_from_explorer(instance.address, "getsourcecode", True)
        result = data.get("result")
        if not isinstance(result, list) or not result:
            return False
        return bool(result[0].get("SourceCode"))

    def publish_source(self, instance: ProjectContract) -> bool:
        return self.container.publish_source(instance)
