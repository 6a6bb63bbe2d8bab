"""Data model for registered artifacts and computed splits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypedDict


@dataclass(frozen=True)
class Contributor:
    """One contributor entry: who, what percentage, and a short note."""

    identity: str
    share: int
    note: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"identity": self.identity, "share": self.share, "note": self.note}


@dataclass(frozen=True)
class ContributionRecord:
    """Immutable contributor table for one registered artifact.

    Created once by ArtifactRegistry.create and never modified or deleted.
    Contributor order is preserved; settlement walks it in this order.
    """

    artifact_id: str
    contributors: tuple[Contributor, ...]
    context: int
    creator_id: str | None = None

    @property
    def total_shares(self) -> int:
        return sum(c.share for c in self.contributors)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "artifact_id": self.artifact_id,
            "contributors": [c.to_dict() for c in self.contributors],
            "context": self.context,
            "creator_id": self.creator_id,
        }


@dataclass(frozen=True)
class ShareAmount:
    """Amount owed to one contributor for a single sale."""

    contributor: str
    share: int
    amount: int

    def to_dict(self) -> dict[str, Any]:
        return {"contributor": self.contributor, "share": self.share, "amount": self.amount}


class DistributionResult(TypedDict):
    """Successful distribution summary returned by the engine."""

    artifact_id: str
    sale_price: int
    total_distributed: int
    remainder: int
    shares: list[ShareAmount]
