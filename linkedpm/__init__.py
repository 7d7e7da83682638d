# linkedpm/__init__.py
"""
LinkedPM: Registry SDK

Address documents stored in the LinkedPM registry contracts by path:

    zone/key[@revision]       revision defaults to "latest"

The registry comes in two variants with different call shapes, a
base-layer contract (L1) and a scaling-layer contract (L2). Callers never
pick one: the resolver reads the deployment table for the connected chain,
or asks an explicitly given contract for its registryType().

Modules:
    path        - parse_path / resolve_path
    keys        - keccak256 derivation of zone/key/revision names
    addresses   - ChainTable of default deployments
    resolver    - detect_variant / resolve_contract
    registry    - L1Registry / L2Registry handles
    operations  - claim_zone, zone_owner, create_revision, revision_data
    signer      - Signer (local key + AsyncWeb3)
    mock        - in-memory chain for tests

Quick Start:
    from linkedpm import Signer, claim_zone, create_revision, revision_data, resolve_path

    signer = Signer.from_key(private_key, "http://127.0.0.1:8545")

    await claim_zone("coolzone", signer=signer)
    await create_revision(*resolve_path("coolzone/mykey@v1"), "IPFS CID here",
                          signer=signer)
    cid = await revision_data("coolzone", "mykey", "v1", signer=signer)

Version: 0.1.0
"""

from .path import (
    Path,
    PATH_PATTERN,
    parse_path,
    resolve_path,
)

from .keys import (
    DERIVED_KEY_SIZE,
    DerivedKeys,
    derive_key,
    derive_keys,
)

from .addresses import (
    ChainEntry,
    ChainTable,
    RegistryType,
    DEFAULT_CHAIN_TABLE,
    default_chain_table,
    default_entry_for,
    load_deployment,
)

from .errors import (
    LinkedPMError,
    PathError,
    ConfigurationError,
    NoDefaultAddressError,
    SignerRequiredError,
    ContractRejectionError,
    TransactionFailedError,
)

from .registry import (
    RegistryContract,
    L1Registry,
    L2Registry,
    bind_registry,
)

from .resolver import (
    detect_variant,
    resolve_contract,
)

from .operations import (
    claim_zone,
    zone_owner,
    create_revision,
    revision_data,
)

from .signer import Signer

from .config import (
    DEFAULT_REVISION,
    ZERO_ADDRESS,
)

__all__ = [
    # Path
    "Path",
    "PATH_PATTERN",
    "parse_path",
    "resolve_path",
    # Keys
    "DERIVED_KEY_SIZE",
    "DerivedKeys",
    "derive_key",
    "derive_keys",
    # Chain table
    "ChainEntry",
    "ChainTable",
    "RegistryType",
    "DEFAULT_CHAIN_TABLE",
    "default_chain_table",
    "default_entry_for",
    "load_deployment",
    # Errors
    "LinkedPMError",
    "PathError",
    "ConfigurationError",
    "NoDefaultAddressError",
    "SignerRequiredError",
    "ContractRejectionError",
    "TransactionFailedError",
    # Registry
    "RegistryContract",
    "L1Registry",
    "L2Registry",
    "bind_registry",
    "detect_variant",
    "resolve_contract",
    # Operations
    "claim_zone",
    "zone_owner",
    "create_revision",
    "revision_data",
    "Signer",
    "DEFAULT_REVISION",
    "ZERO_ADDRESS",
]

__version__ = "0.1.0"
