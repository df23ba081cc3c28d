"""CLI entry point for arena_deployer."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections import defaultdict

import click

from arena_deployer.config import build_specs, load_config
from arena_deployer.runner import run_deployment
from arena_deployer.stellar.session import load_identity, resolve_passphrase


def _require_secret(cfg):
    """Exit with error if no keypair secret is configured."""
    if not cfg.keypair_secret:
        click.echo("Error: No keypair secret configured.", err=True)
        click.echo("Set ARENA_DEPLOYER_SECRET env var or keypair_secret in config.", err=True)
        sys.exit(1)


def _load(ctx: click.Context):
    try:
        return load_config(ctx.obj["config_path"])
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def _check_runnable(cfg) -> None:
    """Exit with error if the contract plan or signing identity is invalid."""
    try:
        build_specs(cfg)
        load_identity(cfg)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """arena-deployer - deploy arena contracts and register them in one batch."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@cli.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Deploy all contracts, then register them in one transaction."""
    cfg = _load(ctx)
    _require_secret(cfg)
    _check_runnable(cfg)

    click.echo(f"Deploying to {cfg.network}")
    report = asyncio.run(run_deployment(cfg))

    by_artifact: dict[str, list[str]] = defaultdict(list)
    for c in report.contracts:
        by_artifact[c.artifact.name].append(c.address)
    for name, addresses in by_artifact.items():
        click.echo(f"{name}: {', '.join(addresses)}")

    if not report.success:
        click.echo(f"Deployment failed: {report.error}", err=True)
        sys.exit(1)

    outcome = report.outcome
    click.echo(f"Registered {len(report.contracts)} contract(s): {outcome.status.value} (tx {outcome.tx_hash})")


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configuration and the deployment plan."""
    cfg = _load(ctx)
    click.echo(f"Network:    {cfg.network}")
    click.echo(f"RPC URL:    {cfg.rpc_url}")
    click.echo(f"Passphrase: {resolve_passphrase(cfg) or '(unknown)'}")
    click.echo(f"Namespace:  {cfg.registry_namespace}")
    click.echo(f"Timeout:    {f'{cfg.confirm_timeout:g}s' if cfg.confirm_timeout else 'none'}")
    click.echo(f"Concurrent: {cfg.concurrent_deploys}")
    click.echo(f"Secret:     {'***configured***' if cfg.keypair_secret else '(not set)'}")

    try:
        specs = build_specs(cfg)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo("")
    click.echo("Contracts:")
    for i, spec in enumerate(specs):
        source = spec.artifact.wasm_hash or spec.artifact.wasm_path or "?"
        click.echo(f"  {i}. {spec.name:12s} artifact={spec.artifact.name} args={list(spec.args)} ({source})")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
