"""TransactionSubmitter protocol - signs, submits, and streams status."""

from __future__ import annotations

from typing import Any, Callable, Protocol

from arena_deployer.models.transactions import StatusEvent, TransactionRequest

StatusCallback = Callable[[StatusEvent], None]
ErrorCallback = Callable[[Exception], None]
DiagnosticSink = Callable[[StatusEvent], None]


class Subscription(Protocol):
    """Handle on a status stream for one submitted transaction."""

    tx_hash: str

    def unsubscribe(self) -> None:
        """Stop delivering events. Safe to call from inside a callback."""
        ...


class TransactionSubmitter(Protocol):
    """Signs and submits a request, then pushes its status events."""

    async def submit(
        self,
        request: TransactionRequest,
        signer: Any,
        on_status: StatusCallback,
        on_error: ErrorCallback,
    ) -> Subscription:
        """Submit request and open a status subscription scoped to it.

        Raises SubmissionError if the request is rejected before reaching
        the network; in that case no subscription is opened. Stream failures
        after submission are reported through on_error.
        """
        ...
