"""Royalty Settlement - public surface of the settlement core

Wires the registry, engine and ledger to the host collaborators and
exposes the caller-facing operations. Every operation returns an explicit
result dict: {"success": True, ...} on success, or an error response from
src.settlement.errors on failure. A failed call leaves registry and ledger
state exactly as it was.

Usage:
    settlement = RoyaltySettlement.from_config(
        transfer=scrip, ownership=owners, context=height,
    )
    result = settlement.create_artifact("alice", ["alice", "bob"], [60, 40])
    settlement.distribute_royalties("alice", result["artifact_id"], 1000)
    settlement.withdraw_royalties("bob")
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..config import get_validated_config
from ..config_schema import AppConfig
from .collaborators import ContextSource, OwnershipOracle, ValueTransfer
from .engine import SettlementEngine
from .errors import ErrorCode, SettlementError, error_response, validation_error
from .ledger import RoyaltyLedger
from .logger import EventLogger
from .models import ContributionRecord, Contributor
from .registry import ArtifactRegistry


logger = logging.getLogger(__name__)


class RoyaltySettlement:
    """Caller-facing settlement operations over one registry and ledger."""

    registry: ArtifactRegistry
    ledger: RoyaltyLedger
    engine: SettlementEngine

    def __init__(
        self,
        registry: ArtifactRegistry,
        ledger: RoyaltyLedger,
        transfer: ValueTransfer,
        ownership: OwnershipOracle,
        context: ContextSource,
        event_logger: EventLogger | None = None,
    ) -> None:
        self.registry = registry
        self.ledger = ledger
        self.engine = SettlementEngine(registry, ledger, transfer, ownership)
        self._transfer = transfer
        self._ownership = ownership
        self._context = context
        self._events = event_logger

    @classmethod
    def from_config(
        cls,
        config: AppConfig | None = None,
        *,
        transfer: ValueTransfer,
        ownership: OwnershipOracle,
        context: ContextSource,
        event_logger: EventLogger | None = None,
    ) -> RoyaltySettlement:
        """Build a RoyaltySettlement from config (global config if omitted)."""
        cfg = config or get_validated_config()
        return cls(
            registry=ArtifactRegistry.from_config(cfg.settlement),
            ledger=RoyaltyLedger(escrow_id=cfg.settlement.escrow_id),
            transfer=transfer,
            ownership=ownership,
            context=context,
            event_logger=event_logger,
        )

    def _fail(self, event_type: str, caller_id: str, exc: SettlementError) -> dict[str, Any]:
        response = error_response(exc)
        logger.info("%s by %s rejected: %s", event_type, caller_id, exc.message)
        if self._events is not None:
            self._events.log_failure(event_type, caller_id, response)
        return response

    def create_artifact(
        self,
        caller_id: str,
        contributors: Sequence[str],
        shares: Sequence[int],
        notes: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """Register a contributor table for a new artifact.

        Args: parallel sequences of contributor identities, integer
        percentages and optional notes (defaults to empty notes).

        On success the caller becomes the artifact's initial owner if the
        ownership collaborator can record one and none is recorded yet.
        """
        notes = list(notes) if notes is not None else [""] * len(contributors)
        if not len(contributors) == len(shares) == len(notes):
            return validation_error(
                "contributors, shares and notes must have the same length",
                code=ErrorCode.INVALID_ARGUMENT,
                contributors=len(contributors),
                shares=len(shares),
                notes=len(notes),
            )
        entries = [
            Contributor(identity=identity, share=share, note=note)
            for identity, share, note in zip(contributors, shares, notes)
        ]

        context = self._context.current_context()
        try:
            artifact_id = self.registry.create(entries, context, creator_id=caller_id)
        except SettlementError as e:
            return self._fail("artifact_create_failed", caller_id, e)

        set_owner = getattr(self._ownership, "set_owner", None)
        if set_owner is not None and self._ownership.current_owner(artifact_id) is None:
            set_owner(artifact_id, caller_id)

        if self._events is not None:
            self._events.log_artifact_created(
                artifact_id, caller_id, context, [c.to_dict() for c in entries]
            )
        return {"success": True, "artifact_id": artifact_id}

    def distribute_royalties(
        self, caller_id: str, artifact_id: str, sale_price: int
    ) -> dict[str, Any]:
        """Split sale_price across the artifact's contributors (all-or-nothing)."""
        try:
            result = self.engine.distribute(artifact_id, sale_price, caller_id)
        except SettlementError as e:
            return self._fail("distribution_failed", caller_id, e)

        shares = [s.to_dict() for s in result["shares"]]
        if self._events is not None:
            self._events.log_distribution(
                artifact_id, caller_id, sale_price, result["total_distributed"], shares
            )
        return {
            "success": True,
            "artifact_id": artifact_id,
            "total_distributed": result["total_distributed"],
            "remainder": result["remainder"],
            "shares": shares,
        }

    def quote_distribution(self, artifact_id: str, sale_price: int) -> dict[str, Any]:
        """Preview a distribution without moving value or crediting balances."""
        try:
            shares = self.engine.quote(artifact_id, sale_price)
        except SettlementError as e:
            return error_response(e)
        total = sum(s.amount for s in shares)
        return {
            "success": True,
            "artifact_id": artifact_id,
            "total_distributed": total,
            "remainder": sale_price - total,
            "shares": [s.to_dict() for s in shares],
        }

    def withdraw_royalties(self, caller_id: str) -> dict[str, Any]:
        """Pay out the caller's whole accumulated balance."""
        try:
            amount = self.ledger.withdraw(caller_id, self._transfer)
        except SettlementError as e:
            return self._fail("withdrawal_failed", caller_id, e)

        if self._events is not None:
            self._events.log_withdrawal(caller_id, amount)
        return {"success": True, "contributor": caller_id, "amount": amount}

    def get_contributions(self, artifact_id: str) -> ContributionRecord | None:
        """Look up an artifact's contributor table."""
        return self.registry.get(artifact_id)

    def get_balance(self, address: str) -> int:
        """Get a contributor's withdrawable balance."""
        return self.ledger.get_balance(address)
