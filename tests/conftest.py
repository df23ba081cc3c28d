"""Shared fixtures for arena_deployer tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key
from stellar_sdk import Keypair

from arena_deployer.models.config import DeployerConfig
from arena_deployer.monitor import ConfirmationMonitor
from arena_deployer.orchestrator import DeploymentOrchestrator

from tests.mocks import MockDeployer, ScriptedSubmitter, SpyBatchBuilder

TEST_SECRET = "SBWVJTD3F5ETMVWCNI7MM4HUAPUSCUXXMUEJZJTPRWRJGXW2BF4SVQTK"
TEST_PUBLIC = "GDNAG4KFFVF5HCSGRWZIXZNL2SR2KBGJSHW2A6FI6DZI62XF6IBLO4GD"

CONTRACT_ID = "CCEDYFIHUCJFITWEOT7BWUO2HBQQ72L244ZXQ4YNOC6FYRDN3MKDQFK7"
OTHER_CONTRACT_ID = "CACBN6G2EPPLAQORDB3LXN3SULGVYBAETFZTNYTNDQ77B7JFRIBT66V2"

TESTNET_PASSPHRASE = "Test SDF Network ; September 2015"


# ── Report metadata ──────────────────────────────────────────────


def pytest_configure(config):
    """Add network info to the HTML report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Network"] = "Stellar Testnet (mocked)"
    meta["Deployer Account"] = TEST_PUBLIC


def make_test_config(**overrides) -> DeployerConfig:
    """Build a DeployerConfig suitable for testing."""
    defaults = dict(
        rpc_url="https://soroban-testnet.stellar.org",
        network_passphrase=TESTNET_PASSPHRASE,
        keypair_secret=TEST_SECRET,
        poll_interval=0,
        confirm_timeout=0,
    )
    defaults.update(overrides)
    return DeployerConfig(**defaults)


@pytest.fixture
def test_config():
    """Default DeployerConfig for tests."""
    return make_test_config()


@pytest.fixture
def keypair():
    return Keypair.from_secret(TEST_SECRET)


@pytest.fixture
def mock_deployer():
    return MockDeployer()


@pytest.fixture
def batch_builder():
    return SpyBatchBuilder()


@pytest.fixture
def diagnostics():
    """Collects diagnostic events; pass diagnostics.append as the sink."""
    return []


@pytest.fixture
def make_orchestrator(mock_deployer, batch_builder, keypair):
    """Factory for an orchestrator around a scripted submitter."""

    def _make(submitter: ScriptedSubmitter, concurrent: bool = False, timeout: float | None = None):
        monitor = ConfirmationMonitor(submitter, timeout=timeout)
        return DeploymentOrchestrator(
            deployer=mock_deployer,
            batch_builder=batch_builder,
            monitor=monitor,
            signer=keypair,
            concurrent=concurrent,
        )

    return _make
