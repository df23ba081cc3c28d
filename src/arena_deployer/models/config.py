"""Configuration models for a deployment run."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ArtifactConfig:
    """Where to find one contract artifact."""

    name: str
    wasm_path: str | None = None
    wasm_hash: str | None = None


@dataclass
class ContractConfig:
    """One [[contracts]] entry: an instance to deploy."""

    artifact: str
    args: list = field(default_factory=list)
    label: str = ""


def _default_artifacts() -> dict[str, ArtifactConfig]:
    return {
        name: ArtifactConfig(name=name, wasm_path=f"build/{name}.wasm")
        for name in ("simple", "advanced", "random")
    }


def _default_contracts() -> list[ContractConfig]:
    return [
        ContractConfig(artifact="simple", args=[0], label="simple-0"),
        ContractConfig(artifact="simple", args=[1], label="simple-1"),
        ContractConfig(artifact="simple", args=[2], label="simple-2"),
        ContractConfig(artifact="advanced"),
        ContractConfig(artifact="random"),
    ]


@dataclass
class DeployerConfig:
    """Complete deployer configuration."""

    # Deployer
    log_level: str = "info"
    concurrent_deploys: bool = False
    confirm_timeout: float = 0  # seconds, 0 = wait indefinitely
    poll_interval: float = 1.0  # seconds between get_transaction polls
    quiet: bool = False  # suppress application-event diagnostics

    # Stellar
    network: str = "testnet"
    rpc_url: str = "https://soroban-testnet.stellar.org"
    network_passphrase: str = ""  # derived from network when empty
    keypair_secret: str = ""  # loaded from env var ARENA_DEPLOYER_SECRET
    registry_namespace: str = "arena:"  # manage_data name prefix
    base_fee: int = 100  # stroops per operation
    tx_timeout: int = 300  # seconds

    # Contracts
    artifacts: dict[str, ArtifactConfig] = field(default_factory=_default_artifacts)
    contracts: list[ContractConfig] = field(default_factory=_default_contracts)
