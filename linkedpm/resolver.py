# linkedpm/resolver.py
"""
LinkedPM: Contract Resolver

Turns whatever the caller passed as contract= into a bound, tagged
RegistryContract:

    RegistryContract      → returned as is, no network call
    None                  → chain id → ChainTable entry (type from the table)
    "0x..." / web3 object → registryType() → L1Registry / L2Registry

Every operation goes through resolve_contract; nothing else binds
contracts. Handles are not cached between calls.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from web3 import AsyncWeb3, Web3

from .addresses import ChainTable, RegistryType, default_chain_table
from .contracts import REGISTRY_TYPE_ABI
from .errors import ConfigurationError, NoDefaultAddressError
from .registry import RegistryContract, bind_registry


logger = logging.getLogger("linkedpm.resolver")

ContractLike = Union[RegistryContract, str, Any, None]


async def detect_variant(address: str, w3: AsyncWeb3) -> RegistryType:
    """
    Ask the contract at address which variant it is.

    registryType() == 1 is L1; any other value is L2. Failures of the call
    itself (no contract, node unreachable) propagate unchanged.
    """
    probe = w3.eth.contract(
        address=Web3.to_checksum_address(address),
        abi=REGISTRY_TYPE_ABI,
    )
    value = await probe.functions.registryType().call()
    registry_type = RegistryType.L1 if value == RegistryType.L1 else RegistryType.L2
    logger.debug("registryType() at %s = %s → %s", address, value, registry_type.tag)
    return registry_type


async def resolve_contract(
    explicit: ContractLike,
    w3: AsyncWeb3,
    chain_table: Optional[ChainTable] = None,
) -> RegistryContract:
    """
    Resolve an explicit contract, or the network default, to a bound handle.

    Args:
        explicit: RegistryContract, address string, web3 contract, or None
        w3: Connection used for lookups and binding
        chain_table: Deployment table (default: default_chain_table())

    Raises:
        NoDefaultAddressError: explicit is None and the chain has no entry
    """
    if isinstance(explicit, RegistryContract):
        return explicit

    if explicit is None:
        chain_id = str(await w3.eth.chain_id)
        table = chain_table if chain_table is not None else default_chain_table()
        entry = table.get(chain_id)
        if entry is None:
            raise NoDefaultAddressError(chain_id)
        logger.debug(
            "Chain %s default registry %s (%s)",
            chain_id, entry.address, entry.registry_type.tag,
        )
        return bind_registry(w3, entry.address, entry.registry_type)

    if isinstance(explicit, str):
        address = explicit
    elif isinstance(getattr(explicit, "address", None), str):
        address = explicit.address
    else:
        raise ConfigurationError(f"Unsupported contract= value: {explicit!r}")

    if not Web3.is_address(address):
        raise ConfigurationError(f"Invalid registry address: {address!r}")

    return bind_registry(w3, address, await detect_variant(address, w3))
