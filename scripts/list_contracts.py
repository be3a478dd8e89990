#!/usr/bin/python3
from itertools import groupby

import click
from ape import networks

from deployment.constants import SUPPORTED_DOMAINS
from deployment.registry import read_registry, registry_filepath_from_domain


def chain_label(chain_id: int) -> str:
    """Names a chain after the ape network that uses its id, e.g. 'Ethereum/Sepolia'."""
    for ecosystem_name, ecosystem in networks.ecosystems.items():
        for network_name, network in ecosystem.networks.items():
            if network.chain_id == chain_id:
                return f"{ecosystem_name.capitalize()}/{network_name.capitalize()}"
    return f"Chain {chain_id}"


@click.command(name="list-contracts")
@click.option("--domain", "-d", help="Deployment domain", type=click.Choice(SUPPORTED_DOMAINS))
def cli(domain):
    """List deployed contracts per domain and chain."""
    for deployment_domain in [domain] if domain else SUPPORTED_DOMAINS:
        try:
            entries = read_registry(registry_filepath_from_domain(deployment_domain))
        except ValueError as e:
            click.secho(str(e), fg="red")
            continue

        click.secho(f"\n{deployment_domain.capitalize()} Domain", fg="green")
        for chain_id, chain_entries in groupby(entries, key=lambda e: e.chain_id):
            click.secho(f"    {chain_label(chain_id)}", fg="yellow")
            for index, entry in enumerate(chain_entries, start=1):
                click.secho(f"        {index}. {entry.name} {entry.address}", fg="cyan")


if __name__ == "__main__":
    cli()
