"""Transaction confirmation monitor - turns a status stream into one outcome.

The submitter pushes StatusEvents through a callback for as long as the
subscription is open. Each submitted transaction gets a _PendingTransaction
that owns one asyncio.Future and moves Pending -> Resolved exactly once;
anything that arrives afterwards is dropped and the subscription is closed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from arena_deployer.errors import ConfirmationTimeout, SubmissionError, SubscriptionError
from arena_deployer.interfaces.submitter import (
    DiagnosticSink,
    Subscription,
    TransactionSubmitter,
)
from arena_deployer.models.transactions import (
    StatusEvent,
    TransactionOutcome,
    TransactionRequest,
    TxStatus,
)

log = logging.getLogger(__name__)


class _PendingTransaction:
    """Single-resolution gate for one submitted transaction."""

    def __init__(
        self,
        future: asyncio.Future,
        sink: DiagnosticSink | None,
        quiet: bool,
    ) -> None:
        self.future = future
        self.tx_hash = ""
        self._sink = sink
        self._quiet = quiet
        self._subscription: Subscription | None = None
        self._unsubscribed = False

    @property
    def resolved(self) -> bool:
        return self.future.done()

    def attach(self, subscription: Subscription) -> None:
        """Take ownership of the subscription returned by submit()."""
        self._subscription = subscription
        if not self.tx_hash:
            self.tx_hash = getattr(subscription, "tx_hash", "") or ""
        # Callbacks may have resolved us before submit() returned
        if self.resolved:
            self.close()

    def on_status(self, event: StatusEvent) -> None:
        if self.resolved:
            log.debug("Dropping status event for %s after resolution", event.tx_hash[:16])
            return
        self.tx_hash = event.tx_hash or self.tx_hash

        if event.events and self._sink is not None and not self._quiet:
            try:
                self._sink(event)
            except Exception as exc:
                log.warning("Diagnostic sink failed for %s: %s", self.tx_hash[:16], exc)

        status = event.terminal_status()
        if status is None:
            return

        self.resolve(
            TransactionOutcome(
                status=status,
                tx_hash=self.tx_hash,
                ledger=event.ledger,
                error=event.error,
            )
        )

    def on_error(self, exc: Exception) -> None:
        if self.resolved:
            log.debug("Dropping stream error for %s after resolution: %s", self.tx_hash[:16], exc)
            return
        if not isinstance(exc, SubscriptionError):
            wrapped = SubscriptionError(f"status stream failed: {exc}")
            wrapped.__cause__ = exc
            exc = wrapped
        self.future.set_exception(exc)
        self.close()

    def resolve(self, outcome: TransactionOutcome) -> None:
        if self.resolved:
            raise RuntimeError(f"transaction {outcome.tx_hash or '?'} resolved twice")
        self.future.set_result(outcome)
        self.close()

    def cancel(self) -> None:
        if not self.resolved:
            self.future.set_result(
                TransactionOutcome(status=TxStatus.CANCELLED, tx_hash=self.tx_hash)
            )
        self.close()

    def close(self) -> None:
        """Unsubscribe once. A no-op until a subscription is attached."""
        if self._unsubscribed or self._subscription is None:
            return
        self._unsubscribed = True
        self._subscription.unsubscribe()


class ConfirmationMonitor:
    """Submits transactions and waits for the first terminal status of each.

    No retries. With timeout=None (or 0) a transaction that never reaches a
    terminal status keeps the caller waiting indefinitely.
    """

    def __init__(
        self,
        submitter: TransactionSubmitter,
        diagnostics: DiagnosticSink | None = None,
        timeout: float | None = None,
    ) -> None:
        self._submitter = submitter
        self._diagnostics = diagnostics
        self._timeout = timeout or None
        self._pending: set[_PendingTransaction] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def submit_and_wait(
        self,
        request: TransactionRequest,
        signer: Any,
        quiet: bool = False,
    ) -> TransactionOutcome:
        """Sign and submit request, then resolve its first terminal status.

        Raises SubmissionError if the request is rejected before a
        subscription is opened, SubscriptionError if the stream fails first,
        and ConfirmationTimeout if a timeout is configured and expires.
        """
        loop = asyncio.get_running_loop()
        pending = _PendingTransaction(loop.create_future(), self._diagnostics, quiet)

        log.info("Submitting transaction with %d call(s)", len(request))
        try:
            subscription = await self._submitter.submit(
                request, signer, pending.on_status, pending.on_error,
            )
        except SubmissionError:
            raise
        except Exception as exc:
            raise SubmissionError(f"submission failed: {exc}") from exc

        pending.attach(subscription)
        log.info("Transaction %s submitted, waiting for status", pending.tx_hash[:16] or "?")

        self._pending.add(pending)
        try:
            if self._timeout is None:
                outcome = await pending.future
            else:
                outcome = await asyncio.wait_for(pending.future, self._timeout)
        except asyncio.TimeoutError:
            raise ConfirmationTimeout(
                f"no terminal status for {pending.tx_hash or 'transaction'} "
                f"after {self._timeout}s"
            ) from None
        except asyncio.CancelledError:
            pending.cancel()
            raise
        finally:
            self._pending.discard(pending)
            pending.close()

        if outcome.status is TxStatus.FAILED:
            log.error("Transaction %s failed: %s", outcome.tx_hash[:16], outcome.error)
        else:
            log.info(
                "Transaction %s %s (ledger=%s)",
                outcome.tx_hash[:16],
                outcome.status.value,
                outcome.ledger if outcome.ledger is not None else "?",
            )
        return outcome

    def cancel_all(self) -> None:
        """Stop monitoring every in-flight transaction, resolving CANCELLED."""
        for pending in list(self._pending):
            log.info("Cancelling monitor for %s", pending.tx_hash[:16] or "?")
            pending.cancel()
