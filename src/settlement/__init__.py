# Royalty settlement core package
from .identity import derive_artifact_id, canonical_encoding
from .models import Contributor, ContributionRecord, ShareAmount, DistributionResult
from .registry import ArtifactRegistry
from .ledger import RoyaltyLedger
from .engine import SettlementEngine, compute_share_amounts
from .service import RoyaltySettlement
from .logger import EventLogger
from .collaborators import (
    ContextSource, ValueTransfer, OwnershipOracle,
    BlockHeight, ScripLedger, OwnershipTable,
)
from .errors import (
    ErrorCategory, ErrorCode, ErrorResponse, SettlementError, TransferError,
    InvalidShareSumError, InvalidContributorCountError, InvalidContributorError,
    InvalidArgumentError, DuplicateArtifactError, ArtifactNotFoundError,
    NotAuthorizedError, TransferFailureError, NoBalanceError,
)

__all__ = [
    "derive_artifact_id", "canonical_encoding",
    "Contributor", "ContributionRecord", "ShareAmount", "DistributionResult",
    "ArtifactRegistry",
    "RoyaltyLedger",
    "SettlementEngine", "compute_share_amounts",
    "RoyaltySettlement",
    "EventLogger",
    # Host collaborators
    "ContextSource", "ValueTransfer", "OwnershipOracle",
    "BlockHeight", "ScripLedger", "OwnershipTable",
    # Errors
    "ErrorCategory", "ErrorCode", "ErrorResponse", "SettlementError", "TransferError",
    "InvalidShareSumError", "InvalidContributorCountError", "InvalidContributorError",
    "InvalidArgumentError", "DuplicateArtifactError", "ArtifactNotFoundError",
    "NotAuthorizedError", "TransferFailureError", "NoBalanceError",
]
