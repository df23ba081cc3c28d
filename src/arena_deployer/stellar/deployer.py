"""Soroban contract deployer - uploads WASM and creates contract instances."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from stellar_sdk import scval, xdr
from stellar_sdk.contract import ContractClientAsync
from stellar_sdk.contract.exceptions import SimulationFailedError, TransactionFailedError

from arena_deployer.errors import DeploymentError
from arena_deployer.models.contracts import ContractArtifact, ContractSpec, DeployedContract
from arena_deployer.stellar.session import ChainSession

log = logging.getLogger(__name__)


def encode_arg(value: object) -> xdr.SCVal:
    """Encode one constructor argument as an SCVal.

    bool -> bool, int -> u32, str -> string. Anything else is rejected.
    """
    if isinstance(value, bool):
        return scval.to_bool(value)
    if isinstance(value, int):
        return scval.to_uint32(value)
    if isinstance(value, str):
        return scval.to_string(value)
    raise TypeError(f"Unsupported constructor argument type: {type(value).__name__}")


class SorobanContractDeployer:
    """Deploys contract instances with ContractClientAsync.

    Each artifact's WASM is uploaded at most once per run; concurrent
    deployments of the same artifact share the upload.
    create_contract() only returns once the creating transaction is mined.
    """

    def __init__(self, session: ChainSession, base_fee: int = 100, tx_timeout: int = 300) -> None:
        self._session = session
        self._base_fee = base_fee
        self._tx_timeout = tx_timeout
        self._wasm_ids: dict[str, bytes] = {}
        self._upload_locks: dict[str, asyncio.Lock] = {}

    async def deploy(self, spec: ContractSpec) -> DeployedContract:
        """Create one contract instance for spec."""
        try:
            wasm_id = await self._wasm_id(spec.artifact)
            args = [encode_arg(a) for a in spec.args]
        except DeploymentError as exc:
            exc.spec = exc.spec or spec
            raise
        except (OSError, TypeError, ValueError) as exc:
            raise DeploymentError(f"{spec.name}: {exc}", spec) from exc

        log.info("Creating %s (args=%s)", spec.name, list(spec.args))
        try:
            contract_id = await ContractClientAsync.create_contract(
                wasm_id=wasm_id,
                source=self._session.public_key,
                signer=self._session.keypair,
                soroban_server=self._session.server,
                network_passphrase=self._session.network_passphrase,
                constructor_args=args or None,
                base_fee=self._base_fee,
                transaction_timeout=self._tx_timeout,
            )
        except SimulationFailedError as exc:
            log.warning("create_contract simulation failed for %s: %s", spec.name, exc)
            raise DeploymentError(f"{spec.name}: simulation_failed: {exc}", spec) from exc
        except TransactionFailedError as exc:
            log.error("create_contract tx failed for %s: %s", spec.name, exc)
            raise DeploymentError(f"{spec.name}: tx_failed: {exc}", spec) from exc
        except Exception as exc:
            log.error("create_contract unexpected error for %s: %s", spec.name, exc)
            raise DeploymentError(f"{spec.name}: {exc}", spec) from exc

        return DeployedContract(address=contract_id, artifact=spec.artifact, label=spec.name)

    async def _wasm_id(self, artifact: ContractArtifact) -> bytes:
        if artifact.wasm_hash:
            return bytes.fromhex(artifact.wasm_hash)

        lock = self._upload_locks.setdefault(artifact.name, asyncio.Lock())
        async with lock:
            if artifact.name in self._wasm_ids:
                return self._wasm_ids[artifact.name]
            if not artifact.wasm_path:
                raise DeploymentError(f"artifact {artifact.name!r} has neither wasm_path nor wasm_hash")

            wasm = await asyncio.to_thread(Path(artifact.wasm_path).expanduser().read_bytes)
            log.info("Uploading %s WASM (%d bytes)", artifact.name, len(wasm))
            try:
                wasm_id = await ContractClientAsync.upload_contract_wasm(
                    contract=wasm,
                    source=self._session.public_key,
                    signer=self._session.keypair,
                    soroban_server=self._session.server,
                    network_passphrase=self._session.network_passphrase,
                    base_fee=self._base_fee,
                    transaction_timeout=self._tx_timeout,
                )
            except Exception as exc:
                log.error("WASM upload failed for %s: %s", artifact.name, exc)
                raise DeploymentError(f"upload of {artifact.name!r} failed: {exc}") from exc

            log.info("Uploaded %s (wasm_id=%s)", artifact.name, wasm_id.hex()[:16])
            self._wasm_ids[artifact.name] = wasm_id
            return wasm_id
