"""Settlement Engine - splits a sale price across an artifact's contributors

Distribution is all-or-nothing:

1. Resolve the record, check the caller owns the artifact token, and
   compute every contributor's amount up front (pure).
2. Move each non-zero amount from the payer to the escrow account, in
   record order. If transfer k fails, the transfers 1..k-1 are refunded
   escrow -> payer, newest first, and the call fails with TransferFailure.
3. Only after every transfer succeeded are ledger balances credited.
   Credits cannot fail, so no balance ever reflects a partial distribution.

Amounts use floor division: amount = sale_price * share // 100. The
remainder (at most len(contributors) - 1 units) is never transferred and
stays with the payer.
"""

from __future__ import annotations

import logging

from .collaborators import OwnershipOracle, ValueTransfer
from .errors import (
    ArtifactNotFoundError,
    InvalidArgumentError,
    NotAuthorizedError,
    TransferError,
    TransferFailureError,
)
from .ledger import RoyaltyLedger
from .models import ContributionRecord, DistributionResult, ShareAmount
from .registry import ArtifactRegistry


logger = logging.getLogger(__name__)


def compute_share_amounts(
    record: ContributionRecord, sale_price: int, total_shares: int = 100
) -> list[ShareAmount]:
    """Compute each contributor's floor-divided amount, in record order."""
    return [
        ShareAmount(
            contributor=c.identity,
            share=c.share,
            amount=sale_price * c.share // total_shares,
        )
        for c in record.contributors
    ]


class SettlementEngine:
    """Drives royalty distribution over the registry and ledger.

    Holds no state of its own beyond references to its collaborators.

    Dependencies:
        registry: Source of contributor tables
        ledger: Credited once a distribution succeeds
        transfer: Value-transfer collaborator
        ownership: Authorization source (current token owner)
    """

    def __init__(
        self,
        registry: ArtifactRegistry,
        ledger: RoyaltyLedger,
        transfer: ValueTransfer,
        ownership: OwnershipOracle,
    ) -> None:
        self._registry = registry
        self._ledger = ledger
        self._transfer = transfer
        self._ownership = ownership

    def _resolve(self, artifact_id: str, sale_price: int) -> ContributionRecord:
        if isinstance(sale_price, bool) or not isinstance(sale_price, int) or sale_price < 0:
            raise InvalidArgumentError(
                f"sale_price must be a non-negative integer, got {sale_price!r}",
                sale_price=sale_price,
            )
        record = self._registry.get(artifact_id)
        if record is None:
            raise ArtifactNotFoundError(artifact_id)
        return record

    def quote(self, artifact_id: str, sale_price: int) -> list[ShareAmount]:
        """Preview a distribution without authorization, transfers or credits.

        Raises:
            InvalidArgumentError: If sale_price is not a non-negative int
            ArtifactNotFoundError: If the artifact is not registered
        """
        record = self._resolve(artifact_id, sale_price)
        return compute_share_amounts(record, sale_price, self._registry.total_shares)

    def distribute(
        self, artifact_id: str, sale_price: int, caller_id: str
    ) -> DistributionResult:
        """Split sale_price across the artifact's contributors.

        Args:
            artifact_id: Registered artifact
            sale_price: Non-negative integer amount paid by the caller
            caller_id: Invoking principal; must own the artifact token

        Returns:
            Summary with total_distributed equal to the sum of credited amounts

        Raises:
            InvalidArgumentError: If sale_price is invalid
            ArtifactNotFoundError: If the artifact is not registered
            NotAuthorizedError: If caller_id is not the current owner
            TransferFailureError: If any transfer fails (no effects remain)
        """
        record = self._resolve(artifact_id, sale_price)

        owner = self._ownership.current_owner(artifact_id)
        if owner is None or owner != caller_id:
            raise NotAuthorizedError(caller_id, artifact_id)

        shares = compute_share_amounts(record, sale_price, self._registry.total_shares)
        logger.debug("Computed split for %s at %d: %s", artifact_id, sale_price, shares)

        escrow_id = self._ledger.escrow_id
        completed: list[ShareAmount] = []
        for share in shares:
            if share.amount == 0:
                continue
            try:
                self._transfer.transfer_value(share.amount, caller_id, escrow_id)
            except TransferError as e:
                logger.warning(
                    "Transfer of %d for %s failed on artifact %s; rolling back %d transfer(s)",
                    share.amount,
                    share.contributor,
                    artifact_id,
                    len(completed),
                )
                unrefunded = self._compensate(completed, caller_id)
                raise TransferFailureError(
                    f"Transfer to escrow failed for contributor '{share.contributor}': {e}",
                    artifact_id=artifact_id,
                    contributor=share.contributor,
                    rolled_back=len(completed) - len(unrefunded),
                    unrefunded=unrefunded,
                ) from e
            completed.append(share)

        for share in shares:
            self._ledger.credit(share.contributor, share.amount)

        total = sum(s.amount for s in shares)
        return {
            "artifact_id": artifact_id,
            "sale_price": sale_price,
            "total_distributed": total,
            "remainder": sale_price - total,
            "shares": shares,
        }

    def _compensate(self, completed: list[ShareAmount], payer_id: str) -> list[str]:
        """Refund completed transfers newest first.

        Returns contributors whose refund itself failed; an empty list means
        external funds are back where they started.
        """
        unrefunded: list[str] = []
        for share in reversed(completed):
            try:
                self._transfer.transfer_value(share.amount, self._ledger.escrow_id, payer_id)
            except TransferError as e:
                logger.error(
                    "Refund of %d to %s (share of %s) failed: %s",
                    share.amount,
                    payer_id,
                    share.contributor,
                    e,
                )
                unrefunded.append(share.contributor)
        return unrefunded
