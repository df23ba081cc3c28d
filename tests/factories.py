"""Synthetic spec and status-event factories for testing."""

from __future__ import annotations

from arena_deployer.models.contracts import ContractArtifact, ContractSpec
from arena_deployer.models.transactions import ChainEvent, StatusEvent

TX_HASH = "mock_tx_abc123"

SIMPLE = ContractArtifact(name="simple", wasm_path="build/simple.wasm")
ADVANCED = ContractArtifact(name="advanced", wasm_path="build/advanced.wasm")
RANDOM = ContractArtifact(name="random", wasm_path="build/random.wasm")


def make_spec(label: str, artifact: ContractArtifact = SIMPLE, args: tuple = ()) -> ContractSpec:
    return ContractSpec(artifact=artifact, args=args, label=label)


def arena_specs() -> list[ContractSpec]:
    """The arena set: three simple instances (0, 1, 2), advanced, random."""
    return [
        make_spec("simple-0", SIMPLE, (0,)),
        make_spec("simple-1", SIMPLE, (1,)),
        make_spec("simple-2", SIMPLE, (2,)),
        make_spec("advanced", ADVANCED),
        make_spec("random", RANDOM),
    ]


def make_chain_event(
    topics: tuple[str, ...] = ("arena", "InstanceRegistered"),
    value: str = "AAAAAw==",
    contract_id: str = "CCEDYFIHUCJFITWEOT7BWUO2HBQQ72L244ZXQ4YNOC6FYRDN3MKDQFK7",
) -> ChainEvent:
    return ChainEvent(contract_id=contract_id, topics=topics, value=value)


def included_event(ledger: int = 100000, **kw) -> StatusEvent:
    return StatusEvent(tx_hash=TX_HASH, is_in_block=True, ledger=ledger, **kw)


def finalized_event(ledger: int = 100000, **kw) -> StatusEvent:
    return StatusEvent(tx_hash=TX_HASH, is_in_block=True, is_finalized=True, ledger=ledger, **kw)


def failed_event(error: str = "txFAILED", ledger: int = 100000, **kw) -> StatusEvent:
    return StatusEvent(tx_hash=TX_HASH, is_error=True, error=error, ledger=ledger, **kw)


def app_event(*events: ChainEvent) -> StatusEvent:
    """A non-terminal notification carrying only application events."""
    return StatusEvent(tx_hash=TX_HASH, events=events or (make_chain_event(),))
