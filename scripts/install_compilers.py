#!/usr/bin/python3
import click
from ape import project

from deployment.compilers import check_sources, install_compilers
from deployment.config import ConfigError, load_config, validate_compilers
from deployment.constants import (
    CONSTRUCTOR_PARAMS_DIR,
    SOLIDITY_COMPILER_VERSIONS,
    SUPPORTED_DOMAINS,
)
from deployment.types import CompilerVersion


@click.command()
@click.option(
    "--domain",
    "-d",
    help="Install the compilers pinned in this domain's params file",
    type=click.Choice(SUPPORTED_DOMAINS),
    required=False,
)
@click.option(
    "--version",
    "-v",
    "versions",
    help="Install a specific solc version instead of the pinned ones",
    type=CompilerVersion(),
    multiple=True,
)
def cli(domain, versions):
    """Install the pinned solidity compilers and show which one builds each source."""
    if domain and versions:
        raise click.BadOptionUsage(
            option_name="--version",
            message="Provide either '--domain' or '--version', not both.",
        )

    if versions:
        versions = list(versions)
    elif domain:
        versions = validate_compilers(load_config(CONSTRUCTOR_PARAMS_DIR / f"{domain}.yml"))
    else:
        versions = list(SOLIDITY_COMPILER_VERSIONS)

    for version in install_compilers(versions):
        click.secho(f"Installed solc {version}", fg="green")

    try:
        selected = check_sources(project.contracts_folder, versions)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    for source, version in selected.items():
        click.echo(f"{source.name}: solc {version}")


if __name__ == "__main__":
    cli()
