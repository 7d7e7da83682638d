# linkedpm/registry.py
"""
LinkedPM: Registry Contract Handles

One bound handle per contract variant, both exposing the same operations:

    claim_zone(zone, signer)
    zone_owner(zone)
    read_revision(zone, key, revision)
    write_revision(zone, key, revision, cid, signer)

L1Registry talks to the base-layer contract, which keys everything by the
derived zone key. L2Registry talks to the scaling-layer contract, which
addresses zones by an internal zone id that is looked up (zoneID) on every
read and write.

Handles are built by linkedpm.resolver.resolve_contract and carry their
RegistryType from construction; nothing here probes the contract's shape.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Type

from web3 import AsyncWeb3, Web3

from .addresses import RegistryType
from .contracts import L1_ABI_NAME, L2_ABI_NAME, load_abi
from .errors import contract_rejections
from .keys import derive_key, derive_keys


logger = logging.getLogger("linkedpm.registry")


# =============================================================================
# Base handle
# =============================================================================

class RegistryContract(ABC):
    """Bound, variant-tagged registry contract."""

    registry_type: RegistryType
    abi_name: str

    def __init__(self, contract: Any):
        self._contract = contract

    @classmethod
    def bind(cls, w3: AsyncWeb3, address: str) -> RegistryContract:
        """Bind this variant's ABI to address on w3."""
        contract = w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=load_abi(cls.abi_name),
        )
        return cls(contract)

    @property
    def address(self) -> str:
        return self._contract.address

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address})"

    async def _call(self, name: str, *args) -> Any:
        with contract_rejections():
            return await getattr(self._contract.functions, name)(*args).call()

    async def _transact(self, signer: Any, name: str, *args) -> Dict[str, Any]:
        function = getattr(self._contract.functions, name)(*args)
        with contract_rejections():
            return await signer.transact(function)

    # =========================================================================
    # Shared operations
    # =========================================================================

    async def claim_zone(self, zone: str, signer: Any) -> Dict[str, Any]:
        """Claim zone for the signer. Reverts if already claimed."""
        logger.debug("claimZone(%s) on %r", zone, self)
        return await self._transact(signer, "claimZone", zone)

    async def zone_owner(self, zone: str) -> str:
        """Owner address, or ZERO_ADDRESS if unclaimed."""
        return await self._call("zoneOwner", derive_key(zone))

    @abstractmethod
    async def read_revision(self, zone: str, key: str, revision: str) -> str:
        """Stored content id for the triple ("" if never written)."""

    @abstractmethod
    async def write_revision(
        self, zone: str, key: str, revision: str, cid: str, signer: Any,
    ) -> Dict[str, Any]:
        """Store cid under the triple. Pinned revisions are write-once."""


# =============================================================================
# Base layer
# =============================================================================

class L1Registry(RegistryContract):
    """Base-layer registry: everything keyed by derived keys."""

    registry_type = RegistryType.L1
    abi_name = L1_ABI_NAME

    async def read_revision(self, zone: str, key: str, revision: str) -> str:
        return await self._call("zoneAgreement", *derive_keys(zone, key, revision))

    async def write_revision(
        self, zone: str, key: str, revision: str, cid: str, signer: Any,
    ) -> Dict[str, Any]:
        keys = derive_keys(zone, key, revision)
        logger.debug("updateAgreement(%s/%s@%s) on %r", zone, key, revision, self)
        return await self._transact(
            signer, "updateAgreement", keys.zone, keys.key, keys.revision, cid,
        )


# =============================================================================
# Scaling layer
# =============================================================================

class L2Registry(RegistryContract):
    """
    Scaling-layer registry.

    Writes address the zone by its internal id and pass the revision name
    raw; the contract hashes it. The zone id is looked up per call.
    """

    registry_type = RegistryType.L2
    abi_name = L2_ABI_NAME

    async def zone_id(self, zone: str) -> bytes:
        """Internal zone id (32 zero bytes if the zone does not exist)."""
        zone_id = bytes(await self._call("zoneID", derive_key(zone)))
        logger.debug("zoneID(%s) = %s", zone, zone_id.hex())
        return zone_id

    async def read_revision(self, zone: str, key: str, revision: str) -> str:
        keys = derive_keys(zone, key, revision)
        zone_id = await self.zone_id(zone)
        return await self._call("zoneAgreement", keys.zone, keys.key, keys.revision, zone_id)

    async def write_revision(
        self, zone: str, key: str, revision: str, cid: str, signer: Any,
    ) -> Dict[str, Any]:
        zone_id = await self.zone_id(zone)
        logger.debug("updateAgreement(%s/%s@%s) on %r", zone, key, revision, self)
        return await self._transact(
            signer, "updateAgreement", zone_id, derive_key(key), revision, cid,
        )


REGISTRY_CLASSES: Dict[RegistryType, Type[RegistryContract]] = {
    RegistryType.L1: L1Registry,
    RegistryType.L2: L2Registry,
}


def bind_registry(w3: AsyncWeb3, address: str, registry_type: RegistryType) -> RegistryContract:
    """Bind address as the given variant."""
    return REGISTRY_CLASSES[registry_type].bind(w3, address)
