"""Host collaborators consumed by the settlement core.

The core depends only on the Protocols below. The in-memory classes are
simple host implementations used by tests and by embedding code that has
no chain of its own.

- ContextSource: monotonic discriminator for identity derivation
- ValueTransfer: synchronous, all-or-nothing value movement
- OwnershipOracle: current owner of an artifact token

The invoking principal is passed to each public operation as caller_id.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .errors import TransferError


@runtime_checkable
class ContextSource(Protocol):
    """Supplies the context value mixed into artifact IDs."""

    def current_context(self) -> int: ...


@runtime_checkable
class ValueTransfer(Protocol):
    """Moves value between principals.

    Must either complete fully or raise TransferError with no effect.
    """

    def transfer_value(self, amount: int, sender: str, recipient: str) -> None: ...


@runtime_checkable
class OwnershipOracle(Protocol):
    """Answers who currently owns an artifact token."""

    def current_owner(self, artifact_id: str) -> str | None: ...


class BlockHeight:
    """Monotonic block-height counter."""

    def __init__(self, height: int = 0) -> None:
        self._height = height

    def current_context(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        """Move the height forward and return the new value."""
        if blocks < 1:
            raise ValueError("Block height only moves forward")
        self._height += blocks
        return self._height


class ScripLedger:
    """In-memory value balances per principal.

    Transfers auto-create the recipient with 0 balance, so the escrow
    account needs no explicit setup.
    """

    scrip: dict[str, int]

    def __init__(self, balances: dict[str, int] | None = None) -> None:
        self.scrip = dict(balances) if balances else {}

    def get_balance(self, principal_id: str) -> int:
        return self.scrip.get(principal_id, 0)

    def credit(self, principal_id: str, amount: int) -> None:
        """Add value to a principal (funding, tests)."""
        if amount < 0:
            raise ValueError("Credit amount must be non-negative")
        self.scrip[principal_id] = self.get_balance(principal_id) + amount

    def transfer_value(self, amount: int, sender: str, recipient: str) -> None:
        """Transfer value between principals.

        Raises:
            TransferError: On non-positive amount or insufficient funds
        """
        if amount <= 0:
            raise TransferError(
                f"Transfer amount must be positive, got {amount}", amount, sender, recipient
            )
        available = self.get_balance(sender)
        if available < amount:
            raise TransferError(
                f"Insufficient funds: '{sender}' has {available}, needs {amount}",
                amount,
                sender,
                recipient,
            )
        self.scrip[sender] = available - amount
        self.scrip[recipient] = self.get_balance(recipient) + amount

    def get_all_balances(self) -> dict[str, int]:
        """Get snapshot of all balances."""
        return dict(self.scrip)


class OwnershipTable:
    """In-memory artifact token ownership."""

    def __init__(self) -> None:
        self._owners: dict[str, str] = {}

    def current_owner(self, artifact_id: str) -> str | None:
        return self._owners.get(artifact_id)

    def set_owner(self, artifact_id: str, owner_id: str) -> None:
        self._owners[artifact_id] = owner_id
