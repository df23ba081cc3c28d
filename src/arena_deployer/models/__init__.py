"""Data models for arena_deployer."""

from arena_deployer.models.contracts import (
    ContractArtifact,
    ContractSpec,
    DeployedContract,
    DeploymentReport,
)
from arena_deployer.models.transactions import (
    ChainEvent,
    RegisterCall,
    StatusEvent,
    TransactionOutcome,
    TransactionRequest,
    TxStatus,
)
from arena_deployer.models.config import ArtifactConfig, ContractConfig, DeployerConfig

__all__ = [
    "ContractArtifact", "ContractSpec", "DeployedContract", "DeploymentReport",
    "ChainEvent", "RegisterCall", "StatusEvent", "TransactionOutcome",
    "TransactionRequest", "TxStatus",
    "ArtifactConfig", "ContractConfig", "DeployerConfig",
]
