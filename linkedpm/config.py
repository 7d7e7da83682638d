# linkedpm/config.py
"""
LinkedPM: Configuration

Constants shared by the resolver and operations. Values that differ per
environment can be overridden through environment variables; everything
else is passed per call (contract=, provider=, signer=, chain_table=).

Environment:
    LINKEDPM_RPC_URL          read-only endpoint used when no provider is given
    LINKEDPM_DEPLOYMENTS_DIR  directory of foundry deploy-*-latest.json files
"""

from __future__ import annotations

import os
from typing import Optional


# =============================================================================
# Constants
# =============================================================================

RPC_URL_ENV = "LINKEDPM_RPC_URL"
DEPLOYMENTS_DIR_ENV = "LINKEDPM_DEPLOYMENTS_DIR"

# Public endpoint of the network the shipped L2 registry lives on
DEFAULT_RPC_URL = "https://mainnet.optimism.io"

DEFAULT_REVISION = "latest"

ZERO_ADDRESS = "0x" + "0" * 40
ZERO_BYTES32 = bytes(32)

# Write defaults (None = ask the node)
DEFAULT_GAS_LIMIT = None
DEFAULT_GAS_PRICE = None


def default_rpc_url() -> str:
    """RPC endpoint for reads made without provider= or signer=."""
    return os.environ.get(RPC_URL_ENV) or DEFAULT_RPC_URL


def deployments_dir() -> Optional[str]:
    return os.environ.get(DEPLOYMENTS_DIR_ENV) or None
