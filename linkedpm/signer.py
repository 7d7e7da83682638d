# linkedpm/signer.py
"""
LinkedPM: Write Credential

A Signer pairs a local eth_account key with the AsyncWeb3 connection its
transactions go through. Registry writes hand it a prepared contract
function; it builds, signs, sends and waits for the receipt.

Usage:
    signer = Signer.from_key("0xac09...", "http://127.0.0.1:8545")
    await claim_zone("coolzone", signer=signer)

Anything else with .address, .w3 and an async transact(function) can be
passed as signer= (see linkedpm.mock.MockSigner).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import ContractLogicError

from .config import DEFAULT_GAS_LIMIT, DEFAULT_GAS_PRICE
from .errors import TransactionFailedError


logger = logging.getLogger("linkedpm.signer")


class Signer:
    """Local private key bound to an AsyncWeb3 connection."""

    def __init__(
        self,
        w3: AsyncWeb3,
        account: LocalAccount,
        gas_limit: Optional[int] = DEFAULT_GAS_LIMIT,
        gas_price: Optional[int] = DEFAULT_GAS_PRICE,
    ):
        self.w3 = w3
        self.account = account
        self.gas_limit = gas_limit
        self.gas_price = gas_price

    @classmethod
    def from_key(cls, private_key: str, rpc_url: str, **kwargs) -> Signer:
        """Signer for private_key talking to rpc_url over HTTP."""
        w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
        return cls(w3, Account.from_key(private_key), **kwargs)

    @property
    def address(self) -> str:
        return self.account.address

    def __repr__(self) -> str:
        return f"Signer({self.address})"

    async def transact(self, function: Any) -> Dict[str, Any]:
        """
        Sign and send a prepared contract function call.

        Returns:
            Transaction receipt

        Raises:
            ContractLogicError: Revert during gas estimation (from web3)
            TransactionFailedError: Mined with status != 1, carrying the
                revert reason when a replay of the call recovers it
        """
        params: Dict[str, Any] = {
            "from": self.address,
            "chainId": await self.w3.eth.chain_id,
            "nonce": await self.w3.eth.get_transaction_count(self.address, "pending"),
            "gasPrice": self.gas_price or await self.w3.eth.gas_price,
        }
        if self.gas_limit:
            params["gas"] = self.gas_limit

        tx = await function.build_transaction(params)
        signed = self.account.sign_transaction(tx)
        tx_hash = Web3.to_hex(await self.w3.eth.send_raw_transaction(signed.raw_transaction))
        logger.info("Sent %s from %s: %s", getattr(function, "fn_name", "tx"), self.address, tx_hash)

        receipt = await self.w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt["status"] != 1:
            await self._raise_failure(tx, tx_hash, receipt)

        logger.info("Mined %s in block %s", tx_hash, receipt.get("blockNumber"))
        return receipt

    async def _raise_failure(self, tx: Dict[str, Any], tx_hash: str, receipt: Dict[str, Any]) -> None:
        """Replay a reverted transaction as a call to recover the revert text."""
        replay = {k: v for k, v in tx.items() if k in ("from", "to", "data", "value", "gas", "gasPrice")}
        try:
            await self.w3.eth.call(replay, receipt.get("blockNumber"))
        except ContractLogicError as e:
            logger.info("Reverted %s: %s", tx_hash, e)
            raise TransactionFailedError(tx_hash, reason=str(e)) from e
        raise TransactionFailedError(tx_hash)
