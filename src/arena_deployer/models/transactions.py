"""Transaction requests, status notifications, and terminal outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TxStatus(str, Enum):
    """Terminal status of a monitored transaction."""

    INCLUDED = "included"  # accepted into a ledger/block
    FINALIZED = "finalized"  # irreversible
    FAILED = "failed"  # chain-reported execution error
    CANCELLED = "cancelled"  # monitoring stopped by the caller


@dataclass(frozen=True)
class RegisterCall:
    """Register one deployed contract address with the on-ledger registry."""

    address: str


@dataclass(frozen=True)
class TransactionRequest:
    """An unsigned batch of calls, executed atomically and in order."""

    calls: tuple[RegisterCall, ...]
    memo: str | None = None

    def __len__(self) -> int:
        return len(self.calls)

    @property
    def addresses(self) -> list[str]:
        return [c.address for c in self.calls]


@dataclass(frozen=True)
class ChainEvent:
    """An application-level event emitted while a transaction executed.

    Informational only: never affects the transaction outcome.
    """

    contract_id: str
    topics: tuple[str, ...]
    value: str


@dataclass(frozen=True)
class StatusEvent:
    """One push notification about a submitted transaction."""

    tx_hash: str
    is_in_block: bool = False
    is_finalized: bool = False
    is_error: bool = False
    ledger: int | None = None
    error: str | None = None
    events: tuple[ChainEvent, ...] = ()

    def terminal_status(self) -> TxStatus | None:
        """Classify this event. Failure beats finality beats inclusion."""
        if self.is_error:
            return TxStatus.FAILED
        if self.is_finalized:
            return TxStatus.FINALIZED
        if self.is_in_block:
            return TxStatus.INCLUDED
        return None


@dataclass(frozen=True)
class TransactionOutcome:
    """The single resolved result of monitoring one transaction."""

    status: TxStatus
    tx_hash: str
    ledger: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in (TxStatus.INCLUDED, TxStatus.FINALIZED)
