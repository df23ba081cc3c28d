"""Decoding of transaction results and emitted contract events."""

from __future__ import annotations

import logging

from stellar_sdk import StrKey, scval, xdr

from arena_deployer.models.transactions import ChainEvent

log = logging.getLogger(__name__)


def result_code(result_xdr: str | None) -> str:
    """Extract the TransactionResultCode name from a base64 result XDR."""
    if not result_xdr:
        return "unknown"
    try:
        result = xdr.TransactionResult.from_xdr(result_xdr)
        return result.result.code.name
    except Exception:
        log.debug("Could not decode result XDR")
        return "unknown"


def _format_scval(val: xdr.SCVal) -> str:
    if val.type == xdr.SCValType.SCV_SYMBOL:
        return scval.from_symbol(val)
    return val.to_xdr()


def _to_chain_event(event: xdr.ContractEvent) -> ChainEvent:
    contract_id = ""
    if event.contract_id is not None:
        # Newer XDR wraps the hash in a ContractID
        raw = getattr(event.contract_id, "contract_id", event.contract_id)
        contract_id = StrKey.encode_contract(raw.hash)
    body = event.body.v0
    return ChainEvent(
        contract_id=contract_id,
        topics=tuple(_format_scval(t) for t in body.topics),
        value=_format_scval(body.data),
    )


def _raw_events(meta: xdr.TransactionMeta) -> list[xdr.ContractEvent]:
    # V4 (protocol 23+) moves contract events onto each operation and keeps
    # fee/refund events in a transaction-level list.
    v4 = getattr(meta, "v4", None)
    if v4 is not None:
        raw = [e for op in v4.operations for e in (op.events or [])]
        raw.extend(te.event for te in (v4.events or []))
        return raw
    v3 = getattr(meta, "v3", None)
    if v3 is not None and v3.soroban_meta is not None:
        return list(v3.soroban_meta.events)
    return []


def decode_events(result_meta_xdr: str | None) -> tuple[ChainEvent, ...]:
    """Decode contract events from a base64 TransactionMeta (v3 or v4).

    Returns an empty tuple when the meta is missing or carries none.
    """
    if not result_meta_xdr:
        return ()
    try:
        meta = xdr.TransactionMeta.from_xdr(result_meta_xdr)
    except Exception:
        log.debug("Could not decode transaction meta XDR")
        return ()

    events: list[ChainEvent] = []
    for raw in _raw_events(meta):
        try:
            events.append(_to_chain_event(raw))
        except Exception as exc:
            log.debug("Could not decode contract event: %s", exc)
    return tuple(events)
