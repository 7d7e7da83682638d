# linkedpm/mock.py
"""
LinkedPM: In-Memory Registry Chain

Stand-ins for a node running the registry contracts, for tests and local
experiments without anvil/foundry.

    chain = MockChain(chain_id=31337)
    l1 = chain.deploy(RegistryType.L1)
    l2 = chain.deploy(RegistryType.L2)

    provider = MockWeb3(chain)          # AsyncWeb3 look-alike for reads
    signer = MockSigner(chain)          # Signer look-alike for writes

    await claim_zone("coolzone", signer=signer, contract=l2)

The contracts enforce what the real ones do: one owner per zone, owner-only
writes, write-once revisions except "latest". Reverts are raised as
web3's ContractLogicError. Calls are dispatched by ABI signature, so a
handle bound with the wrong variant's ABI reverts like it would on-chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from web3 import Web3
from web3.exceptions import (
    ABIFunctionNotFound,
    BadFunctionCallOutput,
    ContractLogicError,
    Web3ValidationError,
)

from .addresses import RegistryType
from .config import DEFAULT_REVISION, ZERO_ADDRESS, ZERO_BYTES32
from .keys import derive_key


LATEST_KEY = derive_key(DEFAULT_REVISION)

# Foundry's first dev account
DEFAULT_MOCK_ACCOUNT = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


def _revert(reason: str) -> None:
    raise ContractLogicError(f"execution reverted: {reason}")


# =============================================================================
# Contract state
# =============================================================================

@dataclass
class MockRegistryState:
    """Storage of one deployed registry."""
    registry_type: RegistryType
    owners: Dict[bytes, str] = field(default_factory=dict)
    zone_ids: Dict[bytes, bytes] = field(default_factory=dict)
    agreements: Dict[Tuple[bytes, bytes, bytes], str] = field(default_factory=dict)

    def zone_for_id(self, zone_id: bytes) -> Optional[bytes]:
        for zone, zid in self.zone_ids.items():
            if zid == zone_id:
                return zone
        return None

    def store(self, zone: bytes, key: bytes, revision: bytes, cid: str, sender: str) -> None:
        if self.owners.get(zone) != sender:
            _revert("Not zone owner")
        slot = (zone, key, revision)
        if revision != LATEST_KEY and slot in self.agreements:
            _revert("Revision already exists")
        self.agreements[slot] = cid


# =============================================================================
# Contract entry points, keyed by ABI signature
# =============================================================================

def _registry_type(state, sender):
    return int(state.registry_type)


def _zone_owner(state, sender, zone):
    return state.owners.get(zone, ZERO_ADDRESS)


def _zone_id(state, sender, zone):
    return state.zone_ids.get(zone, ZERO_BYTES32)


def _claim_zone(state, sender, zone_name):
    zone = derive_key(zone_name)
    if zone in state.owners:
        _revert("Zone already claimed")
    state.owners[zone] = sender
    if state.registry_type == RegistryType.L2:
        counter = (len(state.zone_ids) + 1).to_bytes(32, "big")
        state.zone_ids[zone] = bytes(Web3.keccak(zone + counter))


def _l1_agreement(state, sender, zone, key, revision):
    return state.agreements.get((zone, key, revision), "")


def _l1_update(state, sender, zone, key, revision, cid):
    state.store(zone, key, revision, cid, sender)


def _l2_agreement(state, sender, zone, key, revision, zone_id):
    if state.zone_ids.get(zone, ZERO_BYTES32) != zone_id:
        _revert("Zone ID mismatch")
    return state.agreements.get((zone, key, revision), "")


def _l2_update(state, sender, zone_id, key, revision_name, cid):
    zone = state.zone_for_id(zone_id)
    if zone is None:
        _revert("Zone does not exist")
    state.store(zone, key, derive_key(revision_name), cid, sender)


ENTRY_POINTS: Dict[RegistryType, Dict[str, Callable]] = {
    RegistryType.L1: {
        "registryType()": _registry_type,
        "zoneOwner(bytes32)": _zone_owner,
        "zoneAgreement(bytes32,bytes32,bytes32)": _l1_agreement,
        "claimZone(string)": _claim_zone,
        "updateAgreement(bytes32,bytes32,bytes32,string)": _l1_update,
    },
    RegistryType.L2: {
        "registryType()": _registry_type,
        "zoneOwner(bytes32)": _zone_owner,
        "zoneID(bytes32)": _zone_id,
        "zoneAgreement(bytes32,bytes32,bytes32,bytes32)": _l2_agreement,
        "claimZone(string)": _claim_zone,
        "updateAgreement(bytes32,bytes32,string,string)": _l2_update,
    },
}


# =============================================================================
# MockChain
# =============================================================================

class MockChain:
    """In-memory chain holding registry deployments."""

    def __init__(self, chain_id: int = 31337):
        self.chain_id = chain_id
        self.block_number = 0
        self._contracts: Dict[str, MockRegistryState] = {}

    def deploy(self, registry_type: RegistryType, address: Optional[str] = None) -> str:
        """Deploy a registry, returning its checksum address."""
        if address is None:
            seed = f"{self.chain_id}:{len(self._contracts)}".encode()
            address = "0x" + Web3.keccak(seed)[-20:].hex().removeprefix("0x")
        address = Web3.to_checksum_address(address)
        self._contracts[address] = MockRegistryState(registry_type)
        return address

    def _dispatch(self, address: str, signature: str, args: Tuple, sender: str) -> Any:
        state = self._contracts.get(Web3.to_checksum_address(address))
        if state is None:
            raise BadFunctionCallOutput(
                f"Could not call {signature} at {address}: no contract deployed"
            )
        handler = ENTRY_POINTS[state.registry_type].get(signature)
        if handler is None:
            # Unknown selector: fallback-less contract reverts without reason
            raise ContractLogicError("execution reverted")
        return handler(state, sender, *args)

    def call(self, address: str, signature: str, args: Tuple) -> Any:
        return self._dispatch(address, signature, args, ZERO_ADDRESS)

    def transact(self, address: str, signature: str, args: Tuple, sender: str) -> Dict[str, Any]:
        self._dispatch(address, signature, args, Web3.to_checksum_address(sender))
        self.block_number += 1
        return {
            "status": 1,
            "blockNumber": self.block_number,
            "transactionHash": Web3.keccak(f"{self.block_number}:{signature}".encode()),
            "to": Web3.to_checksum_address(address),
            "from": Web3.to_checksum_address(sender),
        }


# =============================================================================
# web3 look-alikes
# =============================================================================

def _check_arg(abi_type: str, value: Any) -> bool:
    if abi_type == "bytes32":
        return isinstance(value, (bytes, bytearray)) and len(value) == 32
    if abi_type == "string":
        return isinstance(value, str)
    return True


class MockContractFunction:
    """Prepared call, as returned by contract.functions.name(*args)."""

    def __init__(self, contract: MockContract, abi: Dict[str, Any], args: Tuple):
        inputs = [i["type"] for i in abi.get("inputs", [])]
        if len(args) != len(inputs) or not all(map(_check_arg, inputs, args)):
            raise Web3ValidationError(
                f"Could not identify the intended function with name "
                f"`{abi['name']}` and arguments {args!r}"
            )
        self.contract = contract
        self.fn_name = abi["name"]
        self.args = args
        self.signature = f"{abi['name']}({','.join(inputs)})"

    @property
    def address(self) -> str:
        return self.contract.address

    async def call(self) -> Any:
        w3 = self.contract.w3
        return await w3.request(lambda: w3.chain.call(self.address, self.signature, self.args))


class MockContractFunctions:
    def __init__(self, contract: MockContract):
        self._contract = contract

    def __getattr__(self, name: str) -> Callable[..., MockContractFunction]:
        for entry in self._contract.abi:
            if entry.get("type") == "function" and entry.get("name") == name:
                return lambda *args: MockContractFunction(self._contract, entry, args)
        raise ABIFunctionNotFound(f"The function '{name}' was not found in this contract's abi.")


class MockContract:
    def __init__(self, w3: MockWeb3, address: str, abi: List[Dict[str, Any]]):
        self.w3 = w3
        self.address = address
        self.abi = abi
        self.functions = MockContractFunctions(self)


class MockEth:
    def __init__(self, w3: MockWeb3):
        self._w3 = w3

    @property
    def chain_id(self):
        return self._w3.request(lambda: self._w3.chain.chain_id)

    def contract(self, address: str, abi: List[Dict[str, Any]]) -> MockContract:
        return MockContract(self._w3, address, abi)


class MockWeb3:
    """
    AsyncWeb3 look-alike backed by a MockChain.

    request_count counts round trips; fail_with makes every round trip
    raise that exception (simulated transport failure).
    """

    def __init__(self, chain: MockChain, fail_with: Optional[BaseException] = None):
        self.chain = chain
        self.eth = MockEth(self)
        self.fail_with = fail_with
        self.request_count = 0

    async def request(self, fn: Callable[[], Any]) -> Any:
        self.request_count += 1
        if self.fail_with is not None:
            raise self.fail_with
        return fn()


class MockSigner:
    """Signer look-alike: applies transactions directly to a MockChain."""

    def __init__(self, chain: MockChain, address: str = DEFAULT_MOCK_ACCOUNT):
        self.w3 = MockWeb3(chain)
        self.address = Web3.to_checksum_address(address)

    def __repr__(self) -> str:
        return f"MockSigner({self.address})"

    async def transact(self, function: MockContractFunction) -> Dict[str, Any]:
        chain = self.w3.chain
        return await self.w3.request(
            lambda: chain.transact(function.address, function.signature, function.args, self.address)
        )
