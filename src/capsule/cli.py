"""Command line interface for inspecting a Capsule project."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from capsule.config import CellLocation
from capsule.errors import CapsuleError, UnrecognizedEnumValue
from capsule.project_context import BuildEnv, Context, DeployEnv
from capsule.version import Version

path_option = click.option(
    "--path",
    "project_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root (defaults to the current directory)",
)


def _load_context(project_dir: Path | None) -> Context:
    """Load the project, turning resolver errors into CLI errors."""
    root = project_dir if project_dir is not None else Path.cwd()
    try:
        return Context.load(root)
    except CapsuleError as e:
        raise click.ClickException(str(e)) from e


def _parse_build_env(
    ctx: click.Context, param: click.Parameter, value: str
) -> BuildEnv:
    try:
        return BuildEnv.parse(value)
    except UnrecognizedEnumValue as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


def _parse_deploy_env(
    ctx: click.Context, param: click.Parameter, value: str
) -> DeployEnv:
    try:
        return DeployEnv.parse(value)
    except UnrecognizedEnumValue as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


@click.group()
@click.version_option(package_name="capsule-project")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Capsule project context tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@path_option
def check(project_dir: Path | None) -> None:
    """Check that the project can be loaded by this Capsule version."""
    context = _load_context(project_dir)
    click.echo(
        f"Project OK: {context.project_path} "
        f"(project version {context.config.version}, "
        f"capsule version {Version.current()})"
    )


@cli.command()
@path_option
@click.option(
    "--build-env",
    default="debug",
    callback=_parse_build_env,
    help="Build environment: debug or release",
)
@click.option(
    "--deploy-env",
    default="dev",
    callback=_parse_deploy_env,
    help="Deployment environment: dev, testnet or mainnet",
)
def paths(
    project_dir: Path | None, build_env: BuildEnv, deploy_env: DeployEnv
) -> None:
    """Show the directories resolved for the project."""
    context = _load_context(project_dir)
    try:
        workspace_dir = context.workspace_dir()
    except CapsuleError as e:
        raise click.ClickException(str(e)) from e

    rows = [
        ("workspace", workspace_dir),
        ("contracts", context.contracts_path()),
        ("build", context.contracts_build_path(build_env)),
        ("migrations", context.migrations_path(deploy_env)),
        ("deployment", context.deployment_path()),
    ]

    table = Table(title=f"{context.project_path}")
    table.add_column("Name", style="cyan")
    table.add_column("Path")
    for name, path in rows:
        table.add_row(name, str(path))

    Console(soft_wrap=True).print(table)


def _describe_location(location: CellLocation) -> str:
    if location.file is not None:
        return f"file {location.file}"
    return f"out point {location.tx_hash}:{location.index}"


@cli.command()
@path_option
def deployment(project_dir: Path | None) -> None:
    """List the cells and dep groups in the deployment document."""
    context = _load_context(project_dir)
    try:
        deploy = context.load_deployment()
    except CapsuleError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Deployment: {context.deployment_path()}")
    if deploy.lock is not None:
        click.echo(
            f"Lock: {deploy.lock.code_hash} "
            f"({deploy.lock.hash_type}) args {deploy.lock.args}"
        )

    click.echo(f"Cells ({len(deploy.cells)}):")
    for cell in deploy.cells:
        type_id = " [type id]" if cell.enable_type_id else ""
        click.echo(f"  {cell.name}: {_describe_location(cell.location)}{type_id}")

    click.echo(f"Dep groups ({len(deploy.dep_groups)}):")
    for group in deploy.dep_groups:
        click.echo(f"  {group.name}: {', '.join(group.cells)}")


@cli.command("dump-config")
@path_option
def dump_config(project_dir: Path | None) -> None:
    """Print the normalized capsule.toml of the project."""
    context = _load_context(project_dir)
    click.echo(context.config.to_toml(), nl=False)


if __name__ == "__main__":
    cli()
