# linkedpm/errors.py
"""
LinkedPM: Error Taxonomy

Every failure raised by this package derives from LinkedPMError, so path,
configuration and contract failures can be caught through one channel.

    LinkedPMError
    ├── PathError               malformed "zone/key@revision"
    ├── ConfigurationError      no registry address for the network
    │   └── SignerRequiredError write attempted without a signer
    └── ContractRejectionError  the contract reverted
        └── TransactionFailedError  mined with status != 1

Transport failures (timeouts, refused connections) are NOT wrapped here;
whatever web3.py raises reaches the caller unchanged.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from web3.exceptions import ContractLogicError


class LinkedPMError(Exception):
    """Base LinkedPM error."""
    pass


class PathError(LinkedPMError, ValueError):
    """Path does not match zone/key[@revision]."""
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Invalid path: {path!r} (expected zone/key[@revision])")


class ConfigurationError(LinkedPMError):
    """Registry cannot be located for the current connection."""
    pass


class NoDefaultAddressError(ConfigurationError):
    """No known deployment for the connected chain."""
    def __init__(self, chain_id: str):
        self.chain_id = chain_id
        super().__init__(
            f"No default registry address for chain {chain_id}; "
            f"pass contract= explicitly"
        )


class SignerRequiredError(ConfigurationError):
    """Write operation called without a signer."""
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} requires signer=")


class ContractRejectionError(LinkedPMError):
    """
    The registry contract refused the call.

    The message is the contract's own revert text; the original web3
    exception is kept as __cause__.
    """
    pass


class TransactionFailedError(ContractRejectionError):
    """Transaction was mined but reverted; reason is the replayed revert text."""
    def __init__(self, tx_hash: str, reason: Optional[str] = None):
        self.tx_hash = tx_hash
        self.reason = reason
        message = f"Transaction failed: {tx_hash}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


@contextmanager
def contract_rejections() -> Iterator[None]:
    """Re-raise contract reverts as ContractRejectionError, keep the message."""
    try:
        yield
    except ContractLogicError as e:
        raise ContractRejectionError(str(e)) from e
