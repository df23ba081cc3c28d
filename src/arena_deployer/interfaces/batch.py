"""BatchBuilder protocol - composes calls into one atomic request."""

from __future__ import annotations

from typing import Protocol, Sequence

from arena_deployer.models.transactions import RegisterCall, TransactionRequest


class BatchBuilder(Protocol):
    """Builds one TransactionRequest whose calls execute all-or-nothing."""

    def build_batch(self, calls: Sequence[RegisterCall]) -> TransactionRequest:
        """Return a request that executes calls atomically, in order."""
        ...
