"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from arena_deployer.models.config import ArtifactConfig, ContractConfig, DeployerConfig
from arena_deployer.models.contracts import ContractArtifact, ContractSpec


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "ARENA_DEPLOYER_",
) -> DeployerConfig:
    """Load deployer configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (ARENA_DEPLOYER_SECRET, etc.)
        2. TOML config file
        3. Defaults from DeployerConfig
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cfg = DeployerConfig()

    # ── Deployer section ───────────────────────────────────
    deployer = raw.get("deployer", {})
    if v := deployer.get("log_level"):
        cfg.log_level = str(v)
    if "concurrent_deploys" in deployer:
        cfg.concurrent_deploys = bool(deployer["concurrent_deploys"])
    if "confirm_timeout" in deployer:
        cfg.confirm_timeout = float(deployer["confirm_timeout"])
    if v := deployer.get("poll_interval"):
        cfg.poll_interval = float(v)
    if "quiet" in deployer:
        cfg.quiet = bool(deployer["quiet"])

    # ── Stellar section ────────────────────────────────────
    stellar = raw.get("stellar", {})
    if v := stellar.get("network"):
        cfg.network = str(v)
    if v := stellar.get("rpc_url"):
        cfg.rpc_url = str(v)
    if v := stellar.get("network_passphrase"):
        cfg.network_passphrase = str(v)
    if v := stellar.get("keypair_secret"):
        cfg.keypair_secret = str(v)
    if v := stellar.get("registry_namespace"):
        cfg.registry_namespace = str(v)
    if v := stellar.get("base_fee"):
        cfg.base_fee = int(v)
    if v := stellar.get("tx_timeout"):
        cfg.tx_timeout = int(v)

    # ── Artifacts / contracts ──────────────────────────────
    for name, entry in raw.get("artifacts", {}).items():
        cfg.artifacts[name] = ArtifactConfig(
            name=name,
            wasm_path=entry.get("wasm_path"),
            wasm_hash=entry.get("wasm_hash"),
        )
    if "contracts" in raw:
        cfg.contracts = [
            ContractConfig(
                artifact=str(entry["artifact"]),
                args=list(entry.get("args", [])),
                label=str(entry.get("label", "")),
            )
            for entry in raw["contracts"]
        ]

    # ── Environment variable overrides (highest priority) ──
    if secret := os.environ.get(f"{env_prefix}SECRET"):
        cfg.keypair_secret = secret
    if net := os.environ.get(f"{env_prefix}NETWORK"):
        cfg.network = net
    if rpc := os.environ.get(f"{env_prefix}RPC_URL"):
        cfg.rpc_url = rpc
    if timeout := os.environ.get(f"{env_prefix}CONFIRM_TIMEOUT"):
        cfg.confirm_timeout = float(timeout)

    if len(cfg.registry_namespace.encode("utf-8")) > 8:
        raise ValueError("registry_namespace must be at most 8 bytes")

    return cfg


def build_specs(cfg: DeployerConfig) -> list[ContractSpec]:
    """Turn [[contracts]] entries into ContractSpecs, in declaration order."""
    specs: list[ContractSpec] = []
    for entry in cfg.contracts:
        art = cfg.artifacts.get(entry.artifact)
        if art is None:
            raise ValueError(f"contract {entry.label or entry.artifact!r} references unknown artifact {entry.artifact!r}")
        specs.append(
            ContractSpec(
                artifact=ContractArtifact(
                    name=art.name, wasm_path=art.wasm_path, wasm_hash=art.wasm_hash,
                ),
                args=tuple(entry.args),
                label=entry.label,
            )
        )
    return specs
