"""Royalty Ledger - accumulated, not yet withdrawn balances per contributor

Balances are credited by the SettlementEngine after a distribution has
fully succeeded, and paid out only when the contributor pulls them with
withdraw().

Withdrawal policy is confirm-then-clear: the balance is zeroed only after
the value transfer to the contributor has returned successfully. A failed
transfer leaves the balance exactly as it was.

Balances are stored as int (discrete currency units) and never go negative.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import NoBalanceError, TransferError, TransferFailureError

if TYPE_CHECKING:
    from .collaborators import ValueTransfer


logger = logging.getLogger(__name__)


class RoyaltyLedger:
    """Tracks royalty balances per contributor.

    The escrow principal is the account that holds distributed value
    between distribution and withdrawal; withdrawals move value from it
    to the contributor.
    """

    _balances: dict[str, int]
    _withdrawing: set[str]

    def __init__(self, escrow_id: str = "settlement_escrow") -> None:
        self.escrow_id = escrow_id
        self._balances = {}
        # Contributors whose payout transfer is currently running
        self._withdrawing = set()

    def get_balance(self, contributor: str) -> int:
        """Get accumulated balance (0 for unknown contributors)."""
        return self._balances.get(contributor, 0)

    def credit(self, contributor: str, amount: int) -> None:
        """Add to a contributor's balance.

        Called only by the SettlementEngine once a distribution is known to
        have succeeded. Zero credits are ignored.

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Cannot credit negative amount {amount} to '{contributor}'")
        if amount == 0:
            return
        self._balances[contributor] = self.get_balance(contributor) + amount

    def withdraw(self, contributor: str, transfer: ValueTransfer) -> int:
        """Pay out a contributor's whole balance.

        Args:
            contributor: The authenticated caller withdrawing their own balance
            transfer: Value-transfer collaborator (escrow -> contributor)

        Returns:
            The amount withdrawn; the balance is zero afterwards

        Raises:
            NoBalanceError: If the balance is not strictly positive, or a
                withdrawal for this contributor is already in progress
            TransferFailureError: If the transfer fails (balance unchanged)
        """
        # A withdrawal already in flight leaves nothing withdrawable
        if contributor in self._withdrawing:
            raise NoBalanceError(contributor)
        amount = self.get_balance(contributor)
        if amount <= 0:
            raise NoBalanceError(contributor)

        self._withdrawing.add(contributor)
        try:
            transfer.transfer_value(amount, self.escrow_id, contributor)
        except TransferError as e:
            logger.warning(
                "Withdrawal of %d for %s failed, balance kept: %s", amount, contributor, e
            )
            raise TransferFailureError(
                f"Withdrawal transfer failed: {e}",
                contributor=contributor,
                amount=amount,
            ) from e
        finally:
            self._withdrawing.discard(contributor)

        # Clear only after the transfer is confirmed; credits that landed
        # during the transfer stay on the balance
        self._balances[contributor] = self.get_balance(contributor) - amount
        return amount

    def get_all_balances(self) -> dict[str, int]:
        """Get snapshot of all balances."""
        return dict(self._balances)

    def total_outstanding(self) -> int:
        """Sum of all balances not yet withdrawn."""
        return sum(self._balances.values())
