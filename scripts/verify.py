#!/usr/bin/python3
import click
from ape import project
from ape.cli import ConnectedProviderCommand

from deployment.constants import DEPLOYMENT_ORDER
from deployment.networks import active_network
from deployment.options import domain_option
from deployment.registry import contracts_from_registry, registry_filepath_from_domain
from deployment.utils import verify_contracts


@click.command(cls=ConnectedProviderCommand)
@domain_option
@click.option(
    "--contract-name",
    "-c",
    "contract_names",
    help="Contract to verify; repeat for several. Defaults to all three.",
    type=click.Choice(DEPLOYMENT_ORDER),
    multiple=True,
)
def cli(domain, contract_names):
    """Publish the sources of deployed NovaNexHub contracts to the block explorer."""
    registry_filepath = registry_filepath_from_domain(domain)
    chain_id = active_network().chain_id
    deployed = contracts_from_registry(registry_filepath, chain_id=chain_id, project=project)

    missing = [name for name in contract_names or DEPLOYMENT_ORDER if name not in deployed]
    if missing:
        raise click.ClickException(
            f"{', '.join(missing)} not deployed on chain {chain_id} "
            f"according to {registry_filepath.name}"
        )
    verify_contracts([deployed[name] for name in contract_names or DEPLOYMENT_ORDER])


if __name__ == "__main__":
    cli()
