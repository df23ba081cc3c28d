"""Protocol interfaces for all arena_deployer components."""

from arena_deployer.interfaces.deployer import ContractDeployer
from arena_deployer.interfaces.batch import BatchBuilder
from arena_deployer.interfaces.submitter import (
    DiagnosticSink,
    ErrorCallback,
    StatusCallback,
    Subscription,
    TransactionSubmitter,
)

__all__ = [
    "ContractDeployer",
    "BatchBuilder",
    "TransactionSubmitter", "Subscription",
    "StatusCallback", "ErrorCallback", "DiagnosticSink",
]
