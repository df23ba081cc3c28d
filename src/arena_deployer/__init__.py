"""arena_deployer - deploy Soroban contracts and register them in one batch."""

__version__ = "0.1.0"
