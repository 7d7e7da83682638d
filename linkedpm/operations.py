# linkedpm/operations.py
"""
LinkedPM: Registry Operations

Public API. Every operation resolves its registry afresh and accepts the
same keyword options:

    contract=     address, RegistryContract or web3 contract (default:
                  chain table entry for the connected network)
    provider=     AsyncWeb3 for reads (default: signer's connection, then
                  LINKEDPM_RPC_URL / public endpoint)
    signer=       Signer for writes (required, no default)
    chain_table=  ChainTable override

Usage:
    await claim_zone("coolzone", signer=signer)
    await create_revision(*resolve_path("coolzone/mykey@v1"), "IPFS CID here",
                          signer=signer)
    cid = await revision_data("coolzone", "mykey", "v1", provider=w3)

Contract reverts ("Zone already claimed", "Revision already exists", ...)
surface as ContractRejectionError with the contract's message.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from web3 import AsyncHTTPProvider, AsyncWeb3

from .addresses import ChainTable
from .config import DEFAULT_REVISION, default_rpc_url
from .errors import SignerRequiredError
from .registry import RegistryContract
from .resolver import ContractLike, resolve_contract


def _read_connection(provider: Optional[AsyncWeb3], signer: Any) -> AsyncWeb3:
    if provider is not None:
        return provider
    if signer is not None:
        return signer.w3
    return AsyncWeb3(AsyncHTTPProvider(default_rpc_url()))


def _require_signer(signer: Any, operation: str) -> Any:
    if signer is None:
        raise SignerRequiredError(operation)
    return signer


async def _registry_for_read(
    contract: ContractLike,
    provider: Optional[AsyncWeb3],
    signer: Any,
    chain_table: Optional[ChainTable],
) -> RegistryContract:
    return await resolve_contract(contract, _read_connection(provider, signer), chain_table)


# =============================================================================
# Write Operations
# =============================================================================

async def claim_zone(
    zone: str,
    *,
    signer: Any = None,
    contract: ContractLike = None,
    chain_table: Optional[ChainTable] = None,
) -> Dict[str, Any]:
    """
    Claim zone for the signer's account.

    Returns:
        Transaction receipt
    """
    signer = _require_signer(signer, "claim_zone")
    registry = await resolve_contract(contract, signer.w3, chain_table)
    return await registry.claim_zone(zone, signer)


async def create_revision(
    zone: str,
    key: str,
    revision: str,
    cid: str,
    *,
    signer: Any = None,
    contract: ContractLike = None,
    chain_table: Optional[ChainTable] = None,
) -> Dict[str, Any]:
    """
    Store cid as zone/key@revision.

    "latest" may be overwritten; any other revision is write-once and a
    second write is rejected by the contract.

    Returns:
        Transaction receipt
    """
    signer = _require_signer(signer, "create_revision")
    registry = await resolve_contract(contract, signer.w3, chain_table)
    return await registry.write_revision(zone, key, revision or DEFAULT_REVISION, cid, signer)


# =============================================================================
# Read Operations
# =============================================================================

async def zone_owner(
    zone: str,
    *,
    provider: Optional[AsyncWeb3] = None,
    signer: Any = None,
    contract: ContractLike = None,
    chain_table: Optional[ChainTable] = None,
) -> str:
    """Owner address of zone (ZERO_ADDRESS if unclaimed)."""
    registry = await _registry_for_read(contract, provider, signer, chain_table)
    return await registry.zone_owner(zone)


async def revision_data(
    zone: str,
    key: str,
    revision: str = DEFAULT_REVISION,
    *,
    provider: Optional[AsyncWeb3] = None,
    signer: Any = None,
    contract: ContractLike = None,
    chain_table: Optional[ChainTable] = None,
) -> str:
    """Content id stored at zone/key@revision ("" if never written)."""
    registry = await _registry_for_read(contract, provider, signer, chain_table)
    return await registry.read_revision(zone, key, revision or DEFAULT_REVISION)
