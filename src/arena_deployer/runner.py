"""Deployment runner - wires all components together for one run."""

from __future__ import annotations

import logging

from arena_deployer.config import build_specs
from arena_deployer.models.config import DeployerConfig
from arena_deployer.models.contracts import DeploymentReport
from arena_deployer.models.transactions import StatusEvent
from arena_deployer.monitor import ConfirmationMonitor
from arena_deployer.orchestrator import DeploymentOrchestrator
from arena_deployer.stellar.batch import LedgerBatchBuilder
from arena_deployer.stellar.deployer import SorobanContractDeployer
from arena_deployer.stellar.session import ChainSession, open_session
from arena_deployer.stellar.submitter import SorobanTransactionSubmitter

log = logging.getLogger(__name__)


def log_chain_events(event: StatusEvent) -> None:
    """Default diagnostic sink: log application events at INFO."""
    for e in event.events:
        log.info(
            "Event from %s: topics=%s value=%s",
            e.contract_id[:16] or "?", list(e.topics), e.value,
        )


class ArenaDeployment:
    """Deploys the configured contracts and registers them in one batch."""

    def __init__(self, cfg: DeployerConfig, session: ChainSession) -> None:
        self._cfg = cfg
        self.session = session

        self.deployer = SorobanContractDeployer(session, cfg.base_fee, cfg.tx_timeout)
        self.batch_builder = LedgerBatchBuilder()
        self.submitter = SorobanTransactionSubmitter(
            session,
            namespace=cfg.registry_namespace,
            base_fee=cfg.base_fee,
            tx_timeout=cfg.tx_timeout,
            poll_interval=cfg.poll_interval,
        )
        self.monitor = ConfirmationMonitor(
            self.submitter,
            diagnostics=log_chain_events,
            timeout=cfg.confirm_timeout,
        )
        self.orchestrator = DeploymentOrchestrator(
            deployer=self.deployer,
            batch_builder=self.batch_builder,
            monitor=self.monitor,
            signer=session.keypair,
            concurrent=cfg.concurrent_deploys,
            quiet=cfg.quiet,
        )

    async def run(self) -> DeploymentReport:
        specs = build_specs(self._cfg)
        log.info("Starting arena deployment")
        log.info("  Network: %s", self._cfg.network)
        log.info("  RPC: %s", self._cfg.rpc_url)
        log.info("  Address: %s", self.session.public_key)
        log.info("  Contracts: %s", ", ".join(s.name for s in specs))
        return await self.orchestrator.run(specs)


async def run_deployment(cfg: DeployerConfig) -> DeploymentReport:
    """Entry point: open a session, run once, always close the session."""
    session = open_session(cfg)
    try:
        return await ArenaDeployment(cfg, session).run()
    finally:
        await session.close()
        log.debug("Session closed")
