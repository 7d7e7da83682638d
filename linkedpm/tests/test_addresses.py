# linkedpm/tests/test_addresses.py
"""
LinkedPM: Chain Table Tests
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import pytest

from ..addresses import (
    DEFAULT_CHAIN_TABLE,
    ChainEntry,
    ChainTable,
    RegistryType,
    default_chain_table,
    default_entry_for,
    load_deployment,
)
from ..config import DEPLOYMENTS_DIR_ENV
from ..errors import ConfigurationError


L1_ADDRESS = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
L2_ADDRESS = "0xe7f1725e7734ce288f8367e1bb143e90bb3f0512"


def _write_deployment(directory: Path, name: str, address: str) -> None:
    with open(directory / name, "w") as f:
        json.dump({"a": address}, f)


# =============================================================================
# Shipped table
# =============================================================================

def test_default_table_has_optimism_l2():
    entry = default_entry_for("10")
    assert entry is not None
    assert entry.registry_type == RegistryType.L2
    assert entry.address.lower() == "0x002b83f6166f467c430d2154bc30d46f6d5f501c"


def test_default_entry_accepts_int_chain_id():
    assert default_entry_for(10) == default_entry_for("10")


def test_unknown_chain_is_absent():
    assert default_entry_for("1") is None
    assert default_entry_for("999999") is None
    assert "999999" not in DEFAULT_CHAIN_TABLE


def test_registry_type_tags():
    assert RegistryType.from_tag("l1") is RegistryType.L1
    assert RegistryType.from_tag("L2") is RegistryType.L2
    assert RegistryType.L2.tag == "l2"
    assert int(RegistryType.L1) == 1
    with pytest.raises(ConfigurationError):
        RegistryType.from_tag("l3")


# =============================================================================
# Immutability
# =============================================================================

def test_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CHAIN_TABLE["1"] = ChainEntry(L1_ADDRESS, RegistryType.L1)
    with pytest.raises(TypeError):
        DEFAULT_CHAIN_TABLE._entries["1"] = ChainEntry(L1_ADDRESS, RegistryType.L1)


def test_with_entry_returns_new_table():
    table = DEFAULT_CHAIN_TABLE.with_entry(31337, L1_ADDRESS, "l1")
    assert table["31337"] == ChainEntry(L1_ADDRESS, RegistryType.L1)
    assert "10" in table
    assert "31337" not in DEFAULT_CHAIN_TABLE
    assert len(table) == len(DEFAULT_CHAIN_TABLE) + 1


def test_merge_prefers_other():
    other = ChainTable({"10": ChainEntry(L1_ADDRESS, RegistryType.L1)})
    merged = DEFAULT_CHAIN_TABLE.merge(other)
    assert merged["10"].registry_type == RegistryType.L1
    assert DEFAULT_CHAIN_TABLE["10"].registry_type == RegistryType.L2


def test_entry_validation():
    with pytest.raises(ConfigurationError):
        ChainEntry("", RegistryType.L1)
    with pytest.raises(ConfigurationError):
        ChainEntry("0x1234", RegistryType.L1)
    with pytest.raises(ConfigurationError):
        ChainEntry(L1_ADDRESS, 1)
    with pytest.raises(ConfigurationError):
        ChainTable({"mainnet": ChainEntry(L1_ADDRESS, RegistryType.L1)})


def test_from_dict_rejects_malformed():
    with pytest.raises(ConfigurationError):
        ChainTable.from_dict({"1": {"address": L1_ADDRESS}})
    with pytest.raises(ConfigurationError):
        ChainTable.from_dict({"1": {"address": L1_ADDRESS, "type": "l9"}})


# =============================================================================
# Foundry deployment artifacts
# =============================================================================

def test_load_deployment():
    with tempfile.TemporaryDirectory() as tmp:
        directory = Path(tmp)
        _write_deployment(directory, "deploy-31337-latest.json", L1_ADDRESS)
        assert load_deployment(directory / "deploy-31337-latest.json") == L1_ADDRESS

        with open(directory / "empty.json", "w") as f:
            json.dump({}, f)
        with pytest.raises(ConfigurationError):
            load_deployment(directory / "empty.json")


def test_from_deployments():
    with tempfile.TemporaryDirectory() as tmp:
        directory = Path(tmp)
        _write_deployment(directory, "deploy-31337-latest.json", L1_ADDRESS)
        _write_deployment(directory, "deploy-l2-31338-latest.json", L2_ADDRESS)
        _write_deployment(directory, "run-31337-latest.json", L2_ADDRESS)

        table = ChainTable.from_deployments(directory, base=DEFAULT_CHAIN_TABLE)

    assert table["31337"] == ChainEntry(L1_ADDRESS, RegistryType.L1)
    assert table["31338"] == ChainEntry(L2_ADDRESS, RegistryType.L2)
    assert "10" in table
    assert len(table) == 3


def test_from_deployments_missing_dir():
    with pytest.raises(ConfigurationError):
        ChainTable.from_deployments("/nonexistent/linkedpm/deployments")


def test_default_chain_table_and_entry_read_env():
    previous = os.environ.get(DEPLOYMENTS_DIR_ENV)
    try:
        with tempfile.TemporaryDirectory() as tmp:
            _write_deployment(Path(tmp), "deploy-31337-latest.json", L1_ADDRESS)
            os.environ[DEPLOYMENTS_DIR_ENV] = tmp
            table = default_chain_table()
            entry = default_entry_for("31337")
        assert table["31337"].address == L1_ADDRESS
        assert entry == ChainEntry(L1_ADDRESS, RegistryType.L1)
        assert table["10"] == DEFAULT_CHAIN_TABLE["10"]

        del os.environ[DEPLOYMENTS_DIR_ENV]
        assert default_chain_table() is DEFAULT_CHAIN_TABLE
        assert default_entry_for("31337") is None
    finally:
        if previous is None:
            os.environ.pop(DEPLOYMENTS_DIR_ENV, None)
        else:
            os.environ[DEPLOYMENTS_DIR_ENV] = previous
