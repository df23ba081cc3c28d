"""Mock implementations of all external-facing components."""

from __future__ import annotations

import asyncio
import hashlib
from typing import Sequence

from arena_deployer.errors import DeploymentError
from arena_deployer.models.contracts import ContractSpec, DeployedContract
from arena_deployer.models.transactions import RegisterCall, StatusEvent, TransactionRequest
from arena_deployer.stellar.batch import LedgerBatchBuilder


def fake_address(label: str) -> str:
    """Deterministic 56-char contract-style address for a label."""
    return "C" + hashlib.sha256(label.encode("utf-8")).hexdigest().upper()[:55]


class MockDeployer:
    """Implements ContractDeployer protocol."""

    def __init__(
        self,
        delays: dict[str, float] | None = None,
        fail: dict[str, Exception] | None = None,
    ) -> None:
        self.delays = delays or {}
        self.fail = fail or {}
        self.deploy_calls: list[str] = []
        self.completed: list[str] = []
        self.cancelled: list[str] = []

    async def deploy(self, spec: ContractSpec) -> DeployedContract:
        self.deploy_calls.append(spec.name)
        try:
            await asyncio.sleep(self.delays.get(spec.name, 0))
        except asyncio.CancelledError:
            self.cancelled.append(spec.name)
            raise
        if spec.name in self.fail:
            raise self.fail[spec.name]
        self.completed.append(spec.name)
        return DeployedContract(
            address=fake_address(spec.name),
            artifact=spec.artifact,
            label=spec.name,
        )


class SpyBatchBuilder:
    """Implements BatchBuilder protocol, recording every batch it builds."""

    def __init__(self) -> None:
        self._inner = LedgerBatchBuilder()
        self.batches: list[list[RegisterCall]] = []

    def build_batch(self, calls: Sequence[RegisterCall]) -> TransactionRequest:
        self.batches.append(list(calls))
        return self._inner.build_batch(calls)


class MockSubscription:
    """Implements Subscription protocol."""

    def __init__(self, tx_hash: str) -> None:
        self.tx_hash = tx_hash
        self.unsubscribe_calls = 0

    @property
    def closed(self) -> bool:
        return self.unsubscribe_calls > 0

    def unsubscribe(self) -> None:
        self.unsubscribe_calls += 1


class ScriptedSubmitter:
    """Implements TransactionSubmitter protocol by replaying a scripted stream.

    Events are pushed one per loop iteration. With respect_unsubscribe=False
    the stream keeps pushing after unsubscribe, like a misbehaving RPC.
    With synchronous=True every event is pushed before submit() returns.
    """

    def __init__(
        self,
        events: Sequence[StatusEvent] = (),
        stream_error: Exception | None = None,
        reject: Exception | None = None,
        tx_hash: str = "mock_tx_abc123",
        respect_unsubscribe: bool = True,
        synchronous: bool = False,
    ) -> None:
        self.events = list(events)
        self.stream_error = stream_error
        self.reject = reject
        self.tx_hash = tx_hash
        self.respect_unsubscribe = respect_unsubscribe
        self.synchronous = synchronous
        self.requests: list[TransactionRequest] = []
        self.subscriptions: list[MockSubscription] = []
        self.events_read = 0
        self._tasks: list[asyncio.Task] = []

    @property
    def subscription(self) -> MockSubscription:
        return self.subscriptions[-1]

    async def submit(self, request, signer, on_status, on_error) -> MockSubscription:
        self.requests.append(request)
        if self.reject is not None:
            raise self.reject

        sub = MockSubscription(self.tx_hash)
        self.subscriptions.append(sub)
        if self.synchronous:
            for event in self.events:
                self.events_read += 1
                on_status(event)
        else:
            self._tasks.append(asyncio.ensure_future(self._replay(sub, on_status, on_error)))
        return sub

    async def _replay(self, sub: MockSubscription, on_status, on_error) -> None:
        for event in self.events:
            await asyncio.sleep(0)
            if sub.closed and self.respect_unsubscribe:
                return
            self.events_read += 1
            on_status(event)
        await asyncio.sleep(0)
        if self.stream_error is not None and not (sub.closed and self.respect_unsubscribe):
            on_error(self.stream_error)

    async def drain(self) -> None:
        """Test helper: wait for every replay task to finish."""
        await asyncio.gather(*self._tasks, return_exceptions=True)


def failing_deployment(label: str) -> DeploymentError:
    return DeploymentError(f"{label}: tx_failed: reverted")
