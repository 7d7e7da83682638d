# linkedpm/addresses.py
"""
LinkedPM: Chain Registry Table

Known registry deployments, keyed by decimal chain id string.

    "10" → 0x002b...501c (L2, Optimism)

Local networks are added from foundry deployment artifacts rather than
edited into the table:

    contracts/out/deploy-31337-latest.json      {"a": "0x..."}   → L1
    contracts/out/deploy-l2-31337-latest.json   {"a": "0x..."}   → L2

Usage:
    table = ChainTable.from_deployments("contracts/out")
    entry = table.get("31337")
    entry.address, entry.registry_type

Tables are immutable; with_entry() and merge() return new tables.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Union

from web3 import Web3

from .config import deployments_dir
from .errors import ConfigurationError


# =============================================================================
# Types
# =============================================================================

class RegistryType(IntEnum):
    """Value returned by registryType() on each contract variant."""
    L1 = 1
    L2 = 2

    @classmethod
    def from_tag(cls, tag: str) -> RegistryType:
        """Parse the "l1"/"l2" tag used in deployment tables."""
        try:
            return cls[str(tag).upper()]
        except KeyError:
            raise ConfigurationError(f"Unknown registry type: {tag!r}")

    @property
    def tag(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class ChainEntry:
    """Default registry deployment for one chain."""
    address: str
    registry_type: RegistryType

    def __post_init__(self):
        if not isinstance(self.address, str) or not Web3.is_address(self.address):
            raise ConfigurationError(f"Invalid registry address: {self.address!r}")
        if not isinstance(self.registry_type, RegistryType):
            raise ConfigurationError(f"Invalid registry type: {self.registry_type!r}")


# =============================================================================
# Deployment artifacts
# =============================================================================

DEPLOYMENT_FILE_PATTERN = re.compile(r"^deploy-(?P<l2>l2-)?(?P<chain_id>\d+)-latest\.json$")


def load_deployment(path: Union[str, Path]) -> str:
    """Read the deployed address from a foundry deployment artifact."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)
    address = data.get("a") if isinstance(data, dict) else None
    if not address:
        raise ConfigurationError(f"No address in deployment artifact: {path}")
    return address


# =============================================================================
# ChainTable
# =============================================================================

class ChainTable(Mapping[str, ChainEntry]):
    """
    Read-only chain id → ChainEntry mapping.

    Keys are decimal chain id strings; int chain ids are accepted on lookup.
    """

    def __init__(self, entries: Optional[Mapping[str, ChainEntry]] = None):
        data: Dict[str, ChainEntry] = {}
        for chain_id, entry in (entries or {}).items():
            data[self._key(chain_id)] = entry
        self._entries = MappingProxyType(data)

    @staticmethod
    def _key(chain_id: Union[str, int]) -> str:
        key = str(chain_id)
        if not key.isdigit():
            raise ConfigurationError(f"Chain id must be decimal: {chain_id!r}")
        return key

    def __getitem__(self, chain_id: Union[str, int]) -> ChainEntry:
        return self._entries[str(chain_id)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        items = ", ".join(
            f"{k}: {v.address} ({v.registry_type.tag})" for k, v in self._entries.items()
        )
        return f"ChainTable({{{items}}})"

    def with_entry(
        self,
        chain_id: Union[str, int],
        address: str,
        registry_type: Union[RegistryType, str],
    ) -> ChainTable:
        """New table with one entry added or replaced."""
        if isinstance(registry_type, str):
            registry_type = RegistryType.from_tag(registry_type)
        data = dict(self._entries)
        data[self._key(chain_id)] = ChainEntry(address, registry_type)
        return ChainTable(data)

    def merge(self, other: Mapping[str, ChainEntry]) -> ChainTable:
        """New table where entries of other take precedence."""
        data = dict(self._entries)
        data.update({self._key(k): v for k, v in other.items()})
        return ChainTable(data)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Mapping[str, str]]) -> ChainTable:
        """
        Build from the JSON shape {"10": {"address": "0x..", "type": "l2"}}.
        """
        entries = {}
        for chain_id, value in raw.items():
            try:
                entries[chain_id] = ChainEntry(
                    value["address"], RegistryType.from_tag(value["type"])
                )
            except (KeyError, TypeError):
                raise ConfigurationError(f"Malformed chain entry for {chain_id}: {value!r}")
        return cls(entries)

    @classmethod
    def from_deployments(
        cls,
        directory: Union[str, Path],
        base: Optional[ChainTable] = None,
    ) -> ChainTable:
        """Table of base (default: empty) plus every deployment artifact found."""
        directory = Path(directory)
        if not directory.is_dir():
            raise ConfigurationError(f"Deployments directory not found: {directory}")
        table = base if base is not None else cls()
        for path in sorted(directory.iterdir()):
            m = DEPLOYMENT_FILE_PATTERN.match(path.name)
            if m is None:
                continue
            registry_type = RegistryType.L2 if m.group("l2") else RegistryType.L1
            table = table.with_entry(m.group("chain_id"), load_deployment(path), registry_type)
        return table


DEFAULT_CHAIN_TABLE = ChainTable.from_dict({
    "10": {"address": "0x002b83f6166f467c430d2154bc30d46f6d5f501c", "type": "l2"},
})


def default_chain_table() -> ChainTable:
    """Shipped table, plus LINKEDPM_DEPLOYMENTS_DIR artifacts when set."""
    directory = deployments_dir()
    if directory is None:
        return DEFAULT_CHAIN_TABLE
    return ChainTable.from_deployments(directory, base=DEFAULT_CHAIN_TABLE)


def default_entry_for(
    chain_id: Union[str, int],
    table: Optional[ChainTable] = None,
) -> Optional[ChainEntry]:
    """Default deployment for a chain (default_chain_table()), or None."""
    table = table if table is not None else default_chain_table()
    return table.get(str(chain_id))
