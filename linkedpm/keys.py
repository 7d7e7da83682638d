# linkedpm/keys.py
"""
LinkedPM: Key Derivation

Zones, keys and revisions are stored on-chain under keccak256 of their
UTF-8 bytes, matching Solidity:

    keccak256(bytes(name))

Each component is hashed on its own; they are never concatenated.
"""

from __future__ import annotations

from typing import NamedTuple

from web3 import Web3


DERIVED_KEY_SIZE = 32


def derive_key(value: str) -> bytes:
    """32-byte on-chain key for a zone, key or revision name."""
    return bytes(Web3.keccak(text=value))


class DerivedKeys(NamedTuple):
    zone: bytes
    key: bytes
    revision: bytes


def derive_keys(zone: str, key: str, revision: str) -> DerivedKeys:
    return DerivedKeys(derive_key(zone), derive_key(key), derive_key(revision))
