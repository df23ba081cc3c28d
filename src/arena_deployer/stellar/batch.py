"""Ledger batch builder - one classic transaction, one manage_data op per call.

Classic Stellar transactions apply all of their operations atomically and in
order, which gives the registration batch its all-or-nothing guarantee.
"""

from __future__ import annotations

import logging
from typing import Sequence

from stellar_sdk import Account, TransactionBuilder
from stellar_sdk.transaction_envelope import TransactionEnvelope

from arena_deployer.errors import SubmissionError
from arena_deployer.models.transactions import RegisterCall, TransactionRequest

log = logging.getLogger(__name__)

MAX_OPERATIONS = 100  # protocol limit per transaction
MAX_DATA_NAME = 64  # bytes


def registry_key(namespace: str, address: str) -> str:
    """manage_data entry name under which a contract address is registered."""
    return f"{namespace}{address}"


class LedgerBatchBuilder:
    """Composes RegisterCalls into a single TransactionRequest."""

    def __init__(self, memo: str | None = None) -> None:
        self._memo = memo

    def build_batch(self, calls: Sequence[RegisterCall]) -> TransactionRequest:
        return TransactionRequest(calls=tuple(calls), memo=self._memo)


def build_envelope(
    request: TransactionRequest,
    account: Account,
    network_passphrase: str,
    namespace: str,
    base_fee: int = 100,
    tx_timeout: int = 300,
) -> TransactionEnvelope:
    """Translate a request into an unsigned classic transaction.

    Raises SubmissionError for requests the network would reject outright.
    """
    if not request.calls:
        raise SubmissionError("empty batch")
    if len(request.calls) > MAX_OPERATIONS:
        raise SubmissionError(
            f"batch has {len(request.calls)} calls, limit is {MAX_OPERATIONS}"
        )

    builder = TransactionBuilder(
        source_account=account,
        network_passphrase=network_passphrase,
        base_fee=base_fee,
    )
    for position, call in enumerate(request.calls):
        key = registry_key(namespace, call.address)
        if len(key.encode("utf-8")) > MAX_DATA_NAME:
            raise SubmissionError(
                f"registry key for {call.address} exceeds {MAX_DATA_NAME} bytes"
            )
        builder.append_manage_data_op(data_name=key, data_value=str(position))

    if request.memo:
        builder.add_text_memo(request.memo)

    envelope = builder.set_timeout(tx_timeout).build()
    log.debug("Built batch envelope with %d operation(s)", len(request.calls))
    return envelope
