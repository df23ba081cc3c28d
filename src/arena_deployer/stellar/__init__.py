"""Stellar/Soroban integration components."""

from arena_deployer.stellar.batch import LedgerBatchBuilder
from arena_deployer.stellar.deployer import SorobanContractDeployer
from arena_deployer.stellar.session import ChainSession, open_session
from arena_deployer.stellar.submitter import PollingStatusSubscription, SorobanTransactionSubmitter

__all__ = [
    "ChainSession", "open_session",
    "LedgerBatchBuilder",
    "SorobanContractDeployer",
    "SorobanTransactionSubmitter", "PollingStatusSubscription",
]
