"""Soroban transaction submitter - send_transaction plus a status stream.

Soroban RPC has no push channel, so PollingStatusSubscription polls
get_transaction and pushes each observed status through the callbacks.
"""

from __future__ import annotations

import asyncio
import logging

from stellar_sdk import Keypair
from stellar_sdk.soroban_rpc import GetTransactionStatus, SendTransactionStatus

from arena_deployer.errors import SubmissionError, SubscriptionError
from arena_deployer.interfaces.submitter import ErrorCallback, StatusCallback
from arena_deployer.models.transactions import StatusEvent, TransactionRequest
from arena_deployer.stellar.batch import build_envelope
from arena_deployer.stellar.events import decode_events, result_code
from arena_deployer.stellar.session import ChainSession

log = logging.getLogger(__name__)

_REJECTED = (SendTransactionStatus.ERROR, SendTransactionStatus.TRY_AGAIN_LATER)


class PollingStatusSubscription:
    """Pushes StatusEvents for one transaction until unsubscribed."""

    def __init__(
        self,
        server,
        tx_hash: str,
        on_status: StatusCallback,
        on_error: ErrorCallback,
        poll_interval: float = 1.0,
    ) -> None:
        self.tx_hash = tx_hash
        self._server = server
        self._on_status = on_status
        self._on_error = on_error
        self._poll_interval = poll_interval
        self._task: asyncio.Task | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        self._task = asyncio.ensure_future(self._run())

    def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._task is not None and self._task is not asyncio.current_task():
            self._task.cancel()
        log.debug("Unsubscribed from %s", self.tx_hash[:16])

    async def _run(self) -> None:
        while not self._closed:
            try:
                response = await self._server.get_transaction(self.tx_hash)
            except Exception as exc:
                log.error("get_transaction(%s) failed: %s", self.tx_hash[:16], exc)
                self._on_error(SubscriptionError(f"get_transaction failed: {exc}"))
                return

            if response.status == GetTransactionStatus.SUCCESS:
                # A closed Stellar ledger is final: included and finalized at once
                self._on_status(
                    StatusEvent(
                        tx_hash=self.tx_hash,
                        is_in_block=True,
                        is_finalized=True,
                        ledger=response.ledger,
                        events=decode_events(response.result_meta_xdr),
                    )
                )
                return
            if response.status == GetTransactionStatus.FAILED:
                self._on_status(
                    StatusEvent(
                        tx_hash=self.tx_hash,
                        is_error=True,
                        ledger=response.ledger,
                        error=result_code(response.result_xdr),
                        events=decode_events(response.result_meta_xdr),
                    )
                )
                return

            log.debug("Transaction %s not found yet", self.tx_hash[:16])
            await asyncio.sleep(self._poll_interval)


class SorobanTransactionSubmitter:
    """Signs a batched request and submits it through Soroban RPC."""

    def __init__(
        self,
        session: ChainSession,
        namespace: str = "arena:",
        base_fee: int = 100,
        tx_timeout: int = 300,
        poll_interval: float = 1.0,
    ) -> None:
        self._session = session
        self._namespace = namespace
        self._base_fee = base_fee
        self._tx_timeout = tx_timeout
        self._poll_interval = poll_interval

    async def submit(
        self,
        request: TransactionRequest,
        signer: Keypair,
        on_status: StatusCallback,
        on_error: ErrorCallback,
    ) -> PollingStatusSubscription:
        server = self._session.server
        try:
            account = await server.load_account(signer.public_key)
            envelope = build_envelope(
                request,
                account,
                self._session.network_passphrase,
                self._namespace,
                self._base_fee,
                self._tx_timeout,
            )
            envelope.sign(signer)
        except SubmissionError:
            raise
        except Exception as exc:
            log.error("Could not build or sign transaction: %s", exc)
            raise SubmissionError(f"could not build or sign transaction: {exc}") from exc

        try:
            response = await server.send_transaction(envelope)
        except Exception as exc:
            log.error("send_transaction failed: %s", exc)
            raise SubmissionError(f"send_transaction failed: {exc}") from exc

        if response.status in _REJECTED:
            code = result_code(response.error_result_xdr)
            log.error("Transaction %s rejected: %s (%s)", response.hash[:16], response.status.value, code)
            raise SubmissionError(f"transaction rejected: {response.status.value} ({code})")

        log.info("Transaction %s accepted by RPC (%s)", response.hash[:16], response.status.value)
        subscription = PollingStatusSubscription(
            server, response.hash, on_status, on_error, self._poll_interval,
        )
        subscription.start()
        return subscription
