"""JSONL event logger - append-only record of settlement activity"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import get


class EventLogger:
    """Append-only JSONL event log.

    Every event carries a timestamp, a monotonic 'sequence' counter and
    its 'event_type'. The file is truncated when the logger is created.
    """

    output_path: Path
    _sequence: int

    def __init__(self, output_file: str | Path | None = None) -> None:
        """Initialize the event logger.

        Args:
            output_file: JSONL path (default: logging.output_file from config)
        """
        self._sequence = 0
        resolved_file = output_file or get("logging.output_file") or "settlement_events.jsonl"
        self.output_path = Path(resolved_file)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text("")

    def log(self, event_type: str, data: dict[str, Any]) -> None:
        """Log an event to the JSONL file."""
        self._sequence += 1
        event: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "sequence": self._sequence,
            "event_type": event_type,
            **data,
        }
        with open(self.output_path, "a") as f:
            f.write(json.dumps(event) + "\n")

    def log_artifact_created(
        self, artifact_id: str, creator_id: str, context: int, contributors: list[dict[str, Any]]
    ) -> None:
        self.log("artifact_created", {
            "artifact_id": artifact_id,
            "creator_id": creator_id,
            "context": context,
            "contributors": contributors,
        })

    def log_distribution(
        self,
        artifact_id: str,
        payer_id: str,
        sale_price: int,
        total_distributed: int,
        shares: list[dict[str, Any]],
    ) -> None:
        """Log a successful distribution.

        Args:
            artifact_id: The artifact whose sale was settled
            payer_id: Principal that paid (the token owner)
            sale_price: Amount offered for distribution
            total_distributed: Sum actually credited (floor division)
            shares: Per-contributor breakdown
        """
        self.log("royalties_distributed", {
            "artifact_id": artifact_id,
            "payer_id": payer_id,
            "sale_price": sale_price,
            "total_distributed": total_distributed,
            "remainder": sale_price - total_distributed,
            "shares": shares,
        })

    def log_withdrawal(self, contributor: str, amount: int) -> None:
        self.log("royalties_withdrawn", {"contributor": contributor, "amount": amount})

    def log_failure(self, event_type: str, principal_id: str, response: dict[str, Any]) -> None:
        """Log a failed operation with its error code."""
        self.log(event_type, {
            "principal_id": principal_id,
            "code": response.get("code"),
            "error": response.get("error"),
        })

    def read_recent(self, n: int | None = None) -> list[dict[str, Any]]:
        """Read the last N events from the log.

        N defaults to logging.default_recent from config.
        """
        if n is None:
            default_recent = get("logging.default_recent")
            if isinstance(default_recent, int):
                n = default_recent
            else:
                n = 50
        if not self.output_path.exists():
            return []
        lines = self.output_path.read_text().strip().split("\n")
        lines = [line for line in lines if line]
        recent = lines[-n:] if len(lines) > n else lines
        return [json.loads(line) for line in recent]

    @property
    def sequence(self) -> int:
        """Number of events logged so far."""
        return self._sequence
