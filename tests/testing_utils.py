"""Testing utilities for failure injection.

Usage:
    from tests.testing_utils import FlakyTransfer

    # Fail the second transfer, delegate the rest to a real ScripLedger
    transfer = FlakyTransfer(scrip, fail_on_calls={2})
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.settlement import ScripLedger, TransferError


@dataclass
class FlakyTransfer:
    """ValueTransfer wrapper that fails chosen calls.

    Calls are numbered from 1. A failing call raises TransferError without
    touching the wrapped ledger, matching the all-or-nothing contract.
    Every attempted call is recorded as (amount, sender, recipient).
    """

    inner: ScripLedger
    fail_on_calls: set[int] = field(default_factory=set)
    fail_recipients: set[str] = field(default_factory=set)
    calls: list[tuple[int, str, str]] = field(default_factory=list)

    def transfer_value(self, amount: int, sender: str, recipient: str) -> None:
        self.calls.append((amount, sender, recipient))
        if len(self.calls) in self.fail_on_calls or recipient in self.fail_recipients:
            raise TransferError("injected transfer failure", amount, sender, recipient)
        self.inner.transfer_value(amount, sender, recipient)
