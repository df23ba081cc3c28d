"""Contract artifacts, deployment specs, and deployed instances."""

from __future__ import annotations

from dataclasses import dataclass, field

from arena_deployer.models.transactions import TransactionOutcome


@dataclass(frozen=True)
class ContractArtifact:
    """A compiled contract, either as a local WASM file or an uploaded hash."""

    name: str
    wasm_path: str | None = None
    wasm_hash: str | None = None  # hex, already uploaded on-chain


@dataclass(frozen=True)
class ContractSpec:
    """One contract instance to deploy: artifact plus constructor arguments."""

    artifact: ContractArtifact
    args: tuple = ()
    label: str = ""

    @property
    def name(self) -> str:
        return self.label or self.artifact.name


@dataclass(frozen=True)
class DeployedContract:
    """A contract instance whose creating transaction has been mined."""

    address: str  # Soroban contract strkey (C...)
    artifact: ContractArtifact
    label: str = ""


@dataclass
class DeploymentReport:
    """Result of a full deploy-then-register run."""

    success: bool
    contracts: list[DeployedContract] = field(default_factory=list)
    outcome: TransactionOutcome | None = None
    error: str | None = None
