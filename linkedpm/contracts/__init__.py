# linkedpm/contracts/__init__.py
"""
LinkedPM Registry ABIs

    abi/LinkedPM.json    base-layer registry   (registryType() == 1)
    abi/LinkedPML2.json  scaling-layer registry (registryType() == 2)

Both files use the foundry output shape {"abi": [...]}.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple


ABI_DIR = Path(__file__).parent / "abi"

L1_ABI_NAME = "LinkedPM"
L2_ABI_NAME = "LinkedPML2"

# Only the call both variants share; used to detect which one is deployed
REGISTRY_TYPE_ABI: List[Dict[str, Any]] = [
    {
        "type": "function",
        "name": "registryType",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8", "internalType": "uint8"}],
    },
]


@lru_cache(maxsize=None)
def _load_abi(name: str) -> Tuple[Dict[str, Any], ...]:
    with open(ABI_DIR / f"{name}.json") as f:
        data = json.load(f)
    return tuple(data.get("abi", data))


def load_abi(name: str) -> List[Dict[str, Any]]:
    """Load a contract ABI by name (without .json)."""
    return list(_load_abi(name))


__all__ = [
    "ABI_DIR",
    "L1_ABI_NAME",
    "L2_ABI_NAME",
    "REGISTRY_TYPE_ABI",
    "load_abi",
]
