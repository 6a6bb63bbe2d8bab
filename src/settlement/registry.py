"""Artifact Registry - contributor tables keyed by content-derived ID

This module owns the mapping from artifact ID to ContributionRecord. Each
ID is created at most once; records are immutable and never deleted.

Usage:
    registry = ArtifactRegistry()

    # Validate, derive the ID, store the record (raises on any failure)
    artifact_id = registry.create(contributors, context=7)

    # Pure lookup
    registry.get(artifact_id)  # ContributionRecord | None
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .errors import (
    DuplicateArtifactError,
    InvalidContributorCountError,
    InvalidContributorError,
    InvalidShareSumError,
)
from .identity import derive_artifact_id
from .models import ContributionRecord, Contributor

if TYPE_CHECKING:
    from ..config_schema import SettlementConfig


logger = logging.getLogger(__name__)


class ArtifactRegistry:
    """Registry of contributor tables, one per artifact ID.

    Besides the count and share-sum checks, a table may not list the same
    contributor identity twice, so every credited balance comes from
    exactly one entry.

    Thread-safety: This class is NOT thread-safe. Each public operation is
    expected to run as one serialized unit of work supplied by the host.
    """

    _records: dict[str, ContributionRecord]

    def __init__(
        self,
        max_contributors: int = 5,
        total_shares: int = 100,
        max_note_length: int = 64,
        digest: str = "sha256",
    ) -> None:
        self.max_contributors = max_contributors
        self.total_shares = total_shares
        self.max_note_length = max_note_length
        self.digest = digest
        self._records = {}

    @classmethod
    def from_config(cls, config: SettlementConfig) -> ArtifactRegistry:
        """Create an ArtifactRegistry from the settlement config section."""
        return cls(
            max_contributors=config.max_contributors,
            total_shares=config.total_shares,
            max_note_length=config.max_note_length,
            digest=config.digest,
        )

    def validate(self, contributors: Sequence[Contributor]) -> None:
        """Check a contributor table without storing anything.

        Raises:
            InvalidContributorCountError: If empty or longer than max_contributors
            InvalidContributorError: If an entry is malformed or repeated
            InvalidShareSumError: If shares do not sum to total_shares
        """
        if not 1 <= len(contributors) <= self.max_contributors:
            raise InvalidContributorCountError(len(contributors), self.max_contributors)

        seen: set[str] = set()
        for index, c in enumerate(contributors):
            if not isinstance(c.identity, str) or not c.identity:
                raise InvalidContributorError(
                    f"Contributor {index} has an empty identity", index=index
                )
            if c.identity in seen:
                raise InvalidContributorError(
                    f"Contributor '{c.identity}' listed more than once",
                    index=index,
                    contributor=c.identity,
                )
            seen.add(c.identity)
            # bool is an int subclass; True must not pass as a 1% share
            if isinstance(c.share, bool) or not isinstance(c.share, int):
                raise InvalidContributorError(
                    f"Share for '{c.identity}' must be an integer", index=index
                )
            if not 0 <= c.share <= self.total_shares:
                raise InvalidContributorError(
                    f"Share for '{c.identity}' must be between 0 and {self.total_shares}, "
                    f"got {c.share}",
                    index=index,
                    share=c.share,
                )
            if not isinstance(c.note, str):
                raise InvalidContributorError(
                    f"Note for '{c.identity}' must be a string", index=index
                )
            if len(c.note) > self.max_note_length:
                raise InvalidContributorError(
                    f"Note for '{c.identity}' exceeds {self.max_note_length} characters",
                    index=index,
                )

        total = sum(c.share for c in contributors)
        if total != self.total_shares:
            raise InvalidShareSumError(total, self.total_shares)

    def create(
        self,
        contributors: Sequence[Contributor],
        context: int,
        creator_id: str | None = None,
    ) -> str:
        """Validate and register a contributor table.

        Args:
            contributors: Ordered contributor entries
            context: Discriminator from the host (e.g. block height)
            creator_id: Principal that registered the artifact (informational)

        Returns:
            The derived artifact ID

        Raises:
            InvalidContributorCountError, InvalidContributorError,
            InvalidShareSumError: On invalid input (nothing stored)
            DuplicateArtifactError: If the derived ID is already registered
        """
        self.validate(contributors)
        artifact_id = derive_artifact_id(contributors, context, self.digest)
        if artifact_id in self._records:
            raise DuplicateArtifactError(artifact_id)

        self._records[artifact_id] = ContributionRecord(
            artifact_id=artifact_id,
            contributors=tuple(contributors),
            context=context,
            creator_id=creator_id,
        )
        logger.debug(
            "Registered artifact %s with %d contributors", artifact_id, len(contributors)
        )
        return artifact_id

    def get(self, artifact_id: str) -> ContributionRecord | None:
        """Look up a record. Pure read."""
        return self._records.get(artifact_id)

    def exists(self, artifact_id: str) -> bool:
        """Check if an artifact ID is registered."""
        return artifact_id in self._records

    def get_all_ids(self) -> list[str]:
        """Get all registered artifact IDs in creation order."""
        return list(self._records.keys())

    def count(self) -> int:
        """Get total number of registered artifacts."""
        return len(self._records)
