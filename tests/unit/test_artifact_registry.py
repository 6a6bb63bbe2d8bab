"""Unit tests for the ArtifactRegistry."""

import pytest

from src.config_schema import validate_config_dict
from src.settlement.errors import (
    DuplicateArtifactError,
    ErrorCode,
    InvalidContributorCountError,
    InvalidContributorError,
    InvalidShareSumError,
)
from src.settlement.identity import derive_artifact_id
from src.settlement.models import Contributor
from src.settlement.registry import ArtifactRegistry


@pytest.fixture
def registry() -> ArtifactRegistry:
    """Create a fresh ArtifactRegistry for each test."""
    return ArtifactRegistry()


def _table(*shares: int) -> list[Contributor]:
    return [Contributor(f"c{i}", share) for i, share in enumerate(shares)]


class TestCreate:
    """Tests for successful registration."""

    def test_create_returns_derived_id(self, registry: ArtifactRegistry) -> None:
        """The returned ID is the content-derived ID."""
        contributors = _table(60, 40)
        artifact_id = registry.create(contributors, context=5)
        assert artifact_id == derive_artifact_id(contributors, 5)
        assert registry.exists(artifact_id)
        assert registry.count() == 1

    def test_record_is_stored_in_order(self, registry: ArtifactRegistry) -> None:
        """get() returns the record with contributors in submission order."""
        contributors = [Contributor("bob", 30, "mix"), Contributor("alice", 70, "vocals")]
        artifact_id = registry.create(contributors, context=1, creator_id="bob")

        record = registry.get(artifact_id)
        assert record is not None
        assert record.artifact_id == artifact_id
        assert [c.identity for c in record.contributors] == ["bob", "alice"]
        assert record.total_shares == 100
        assert record.context == 1
        assert record.creator_id == "bob"

    def test_record_is_immutable(self, registry: ArtifactRegistry) -> None:
        """Records cannot be modified after creation."""
        contributors = _table(100)
        artifact_id = registry.create(contributors, context=1)
        record = registry.get(artifact_id)
        assert record is not None

        contributors.append(Contributor("late", 0))
        assert len(record.contributors) == 1
        with pytest.raises(AttributeError):
            record.contributors = ()  # type: ignore[misc]

    def test_zero_share_contributor_allowed(self, registry: ArtifactRegistry) -> None:
        """A 0% entry is valid as long as the total is 100."""
        artifact_id = registry.create(_table(100, 0), context=1)
        assert registry.exists(artifact_id)

    def test_max_contributors_allowed(self, registry: ArtifactRegistry) -> None:
        """Exactly max_contributors entries is accepted."""
        registry.create(_table(20, 20, 20, 20, 20), context=1)
        assert registry.count() == 1

    def test_get_unknown_returns_none(self, registry: ArtifactRegistry) -> None:
        assert registry.get("0" * 64) is None
        assert not registry.exists("0" * 64)

    def test_get_all_ids_in_creation_order(self, registry: ArtifactRegistry) -> None:
        first = registry.create(_table(100), context=1)
        second = registry.create(_table(100), context=2)
        assert registry.get_all_ids() == [first, second]


class TestDuplicates:
    """The derived ID is an idempotency key."""

    def test_resubmission_in_same_context_rejected(self, registry: ArtifactRegistry) -> None:
        """Identical inputs and context collide with the existing record."""
        artifact_id = registry.create(_table(60, 40), context=9)

        with pytest.raises(DuplicateArtifactError) as exc_info:
            registry.create(_table(60, 40), context=9)
        assert exc_info.value.artifact_id == artifact_id
        assert exc_info.value.code is ErrorCode.DUPLICATE_ARTIFACT
        assert registry.count() == 1

    def test_resubmission_in_new_context_accepted(self, registry: ArtifactRegistry) -> None:
        """A new context produces a new artifact."""
        first = registry.create(_table(60, 40), context=9)
        second = registry.create(_table(60, 40), context=10)
        assert first != second
        assert registry.count() == 2


class TestValidation:
    """Invalid tables are rejected and nothing is stored."""

    @pytest.mark.parametrize("shares", [(60, 39), (60, 41), (0,), (50, 50, 1)])
    def test_invalid_share_sum(self, registry: ArtifactRegistry, shares: tuple[int, ...]) -> None:
        with pytest.raises(InvalidShareSumError) as exc_info:
            registry.create(_table(*shares), context=1)
        assert exc_info.value.total == sum(shares)
        assert exc_info.value.expected == 100
        assert registry.count() == 0

    def test_empty_table(self, registry: ArtifactRegistry) -> None:
        with pytest.raises(InvalidContributorCountError) as exc_info:
            registry.create([], context=1)
        assert exc_info.value.count == 0
        assert registry.count() == 0

    def test_too_many_contributors(self, registry: ArtifactRegistry) -> None:
        with pytest.raises(InvalidContributorCountError) as exc_info:
            registry.create(_table(20, 20, 20, 20, 10, 10), context=1)
        assert exc_info.value.count == 6
        assert exc_info.value.maximum == 5
        assert registry.count() == 0

    def test_share_out_of_range(self, registry: ArtifactRegistry) -> None:
        """Shares outside [0, 100] are rejected even if the sum is 100."""
        with pytest.raises(InvalidContributorError):
            registry.create(_table(150, -50), context=1)

    def test_bool_share_rejected(self, registry: ArtifactRegistry) -> None:
        with pytest.raises(InvalidContributorError):
            registry.create([Contributor("a", 99), Contributor("b", True)], context=1)  # type: ignore[arg-type]

    def test_empty_identity_rejected(self, registry: ArtifactRegistry) -> None:
        with pytest.raises(InvalidContributorError):
            registry.create([Contributor("", 100)], context=1)

    def test_duplicate_identity_rejected(self, registry: ArtifactRegistry) -> None:
        with pytest.raises(InvalidContributorError, match="more than once"):
            registry.create([Contributor("a", 50), Contributor("a", 50)], context=1)

    def test_note_too_long(self) -> None:
        registry = ArtifactRegistry(max_note_length=4)
        with pytest.raises(InvalidContributorError, match="exceeds 4"):
            registry.create([Contributor("a", 100, "too long")], context=1)

    def test_non_string_note_rejected(self, registry: ArtifactRegistry) -> None:
        """A missing note is a validation error, not a TypeError."""
        with pytest.raises(InvalidContributorError, match="must be a string"):
            registry.create(
                [Contributor("a", 60, None), Contributor("b", 40)],  # type: ignore[arg-type]
                context=1,
            )
        assert registry.count() == 0

    def test_validate_does_not_store(self, registry: ArtifactRegistry) -> None:
        registry.validate(_table(100))
        assert registry.count() == 0


class TestFromConfig:
    """Tests for config-driven construction."""

    def test_limits_come_from_config(self) -> None:
        config = validate_config_dict({
            "settlement": {"max_contributors": 2, "max_note_length": 3, "digest": "blake2b"}
        })
        registry = ArtifactRegistry.from_config(config.settlement)
        assert registry.max_contributors == 2
        assert registry.digest == "blake2b"

        with pytest.raises(InvalidContributorCountError):
            registry.create(_table(50, 25, 25), context=1)

        contributors = _table(100)
        assert registry.create(contributors, context=1) == derive_artifact_id(
            contributors, 1, "blake2b"
        )
