"""Deployment orchestrator - deploy every contract, then register them all.

Fail-fast: the first error aborts the run and nothing is retried. Contracts
already created before a deployment failure stay on chain unregistered; they
are still listed in the failed report.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

from arena_deployer.errors import DeployerError, DeploymentError, RegistrationError, SubscriptionError
from arena_deployer.interfaces.batch import BatchBuilder
from arena_deployer.interfaces.deployer import ContractDeployer
from arena_deployer.models.contracts import ContractSpec, DeployedContract, DeploymentReport
from arena_deployer.models.transactions import RegisterCall, TransactionOutcome
from arena_deployer.monitor import ConfirmationMonitor

log = logging.getLogger(__name__)


class DeploymentOrchestrator:
    """Sequences contract deployments and the batched registration."""

    def __init__(
        self,
        deployer: ContractDeployer,
        batch_builder: BatchBuilder,
        monitor: ConfirmationMonitor,
        signer: Any,
        concurrent: bool = False,
        quiet: bool = False,
    ) -> None:
        self._deployer = deployer
        self._batch = batch_builder
        self._monitor = monitor
        self._signer = signer
        self._concurrent = concurrent
        self._quiet = quiet

    async def deploy_all(self, specs: Sequence[ContractSpec]) -> list[DeployedContract]:
        """Deploy every spec. Results are in input order, not completion order."""
        log.info(
            "Deploying %d contract(s) (%s)",
            len(specs), "concurrent" if self._concurrent else "sequential",
        )
        if not self._concurrent:
            deployed: list[DeployedContract] = []
            try:
                for spec in specs:
                    deployed.append(await self._deploy_one(spec))
            except DeploymentError as exc:
                exc.deployed = deployed
                raise
            return deployed

        tasks = [asyncio.ensure_future(self._deploy_one(spec)) for spec in specs]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException as exc:
            for task in tasks:
                task.cancel()
            # Let cancelled deployments unwind before propagating
            await asyncio.gather(*tasks, return_exceptions=True)
            if isinstance(exc, DeploymentError):
                exc.deployed = [
                    t.result() for t in tasks if not t.cancelled() and t.exception() is None
                ]
            raise

    async def _deploy_one(self, spec: ContractSpec) -> DeployedContract:
        try:
            deployed = await self._deployer.deploy(spec)
        except DeploymentError:
            raise
        except SubscriptionError as exc:
            raise DeploymentError(f"{spec.name}: status stream failed: {exc}", spec) from exc
        except Exception as exc:
            raise DeploymentError(f"{spec.name}: {exc}", spec) from exc

        log.info("Deployed %s at %s", spec.name, deployed.address)
        return deployed

    async def register_all(self, addresses: Sequence[str]) -> TransactionOutcome:
        """Register addresses, in the given order, in one atomic batch."""
        calls = [RegisterCall(address=a) for a in addresses]
        request = self._batch.build_batch(calls)
        log.info("Registering %d contract(s) in one batch", len(request))

        try:
            outcome = await self._monitor.submit_and_wait(
                request, self._signer, quiet=self._quiet,
            )
        except SubscriptionError as exc:
            raise RegistrationError(f"registration status stream failed: {exc}") from exc

        if not outcome.ok:
            raise RegistrationError(
                f"registration {outcome.status.value}: {outcome.error or 'no detail'}",
                outcome=outcome,
            )
        return outcome

    async def run(self, specs: Sequence[ContractSpec]) -> DeploymentReport:
        """Deploy all specs then register them. Aborts on the first error."""
        contracts: list[DeployedContract] = []
        try:
            contracts = await self.deploy_all(specs)
            outcome = await self.register_all([c.address for c in contracts])
        except DeployerError as exc:
            log.error("Deployment run aborted: %s", exc)
            if isinstance(exc, DeploymentError):
                contracts = exc.deployed
            return DeploymentReport(
                success=False,
                contracts=contracts,
                outcome=getattr(exc, "outcome", None),
                error=f"{type(exc).__name__}: {exc}",
            )

        log.info(
            "Registered %d contract(s) (tx=%s, %s)",
            len(contracts), outcome.tx_hash[:16], outcome.status.value,
        )
        return DeploymentReport(success=True, contracts=contracts, outcome=outcome)
