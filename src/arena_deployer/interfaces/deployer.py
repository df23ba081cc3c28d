"""ContractDeployer protocol - creates one contract instance on-chain."""

from __future__ import annotations

from typing import Protocol

from arena_deployer.models.contracts import ContractSpec, DeployedContract


class ContractDeployer(Protocol):
    """Deploys a contract instance and waits until its transaction is mined."""

    async def deploy(self, spec: ContractSpec) -> DeployedContract:
        """Create the instance described by spec. Raises DeploymentError."""
        ...
