"""Error taxonomy for the deployment run.

Every error aborts the enclosing operation. Nothing is retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arena_deployer.models.contracts import ContractSpec, DeployedContract
    from arena_deployer.models.transactions import TransactionOutcome


class DeployerError(Exception):
    """Base class for all arena_deployer errors."""


class SubmissionError(DeployerError):
    """A transaction was rejected before it reached the network."""


class SubscriptionError(DeployerError):
    """The status stream errored or closed before any terminal status."""


class ConfirmationTimeout(SubscriptionError):
    """No terminal status arrived within the configured confirm_timeout."""


class DeploymentError(DeployerError):
    """A single contract deployment failed.

    ``deployed`` lists the contracts of the same run that were already
    created on chain when the failure aborted it, in input order.
    """

    def __init__(self, message: str, spec: ContractSpec | None = None) -> None:
        super().__init__(message)
        self.spec = spec
        self.deployed: list[DeployedContract] = []


class RegistrationError(DeployerError):
    """The batched registration transaction did not succeed."""

    def __init__(
        self, message: str, outcome: TransactionOutcome | None = None
    ) -> None:
        super().__init__(message)
        self.outcome = outcome
