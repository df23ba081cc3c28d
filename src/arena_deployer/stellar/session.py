"""Chain session: one RPC server handle and signing identity per run."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stellar_sdk import Keypair, SorobanServerAsync

from arena_deployer.models.config import DeployerConfig

log = logging.getLogger(__name__)

NETWORK_PASSPHRASES = {
    "testnet": "Test SDF Network ; September 2015",
    "mainnet": "Public Global Stellar Network ; September 2015",
    "futurenet": "Test SDF Future Network ; October 2022",
}


def resolve_passphrase(cfg: DeployerConfig) -> str:
    return cfg.network_passphrase or NETWORK_PASSPHRASES.get(cfg.network, "")


@dataclass(frozen=True)
class ChainSession:
    """Read-only handles shared by every component of a run."""

    server: SorobanServerAsync
    network_passphrase: str
    keypair: Keypair

    @property
    def public_key(self) -> str:
        return self.keypair.public_key

    async def close(self) -> None:
        """Close the underlying aiohttp session."""
        await self.server.close()


def load_identity(cfg: DeployerConfig) -> tuple[str, Keypair]:
    """Resolve the network passphrase and signing keypair.

    Raises ValueError for an unknown network or a malformed secret
    (``Ed25519SecretSeedInvalidError`` is a ValueError).
    """
    passphrase = resolve_passphrase(cfg)
    if not passphrase:
        raise ValueError(f"No network passphrase known for network {cfg.network!r}")
    return passphrase, Keypair.from_secret(cfg.keypair_secret)


def open_session(cfg: DeployerConfig) -> ChainSession:
    """Build a ChainSession from configuration."""
    passphrase, keypair = load_identity(cfg)
    log.debug("Opening session to %s as %s", cfg.rpc_url, keypair.public_key)
    return ChainSession(
        server=SorobanServerAsync(cfg.rpc_url),
        network_passphrase=passphrase,
        keypair=keypair,
    )
