#!/usr/bin/python3
from pathlib import Path
from typing import List

import click
from ape import project
from ape.cli import ConnectedProviderCommand
from ape.contracts import ContractInstance

from deployment.config import ConfigError
from deployment.constants import CONSTRUCTOR_PARAMS_DIR
from deployment.options import autosign_option, domain_option, verify_option
from deployment.params import Deployer


def deploy_contracts(deployer: Deployer) -> List[ContractInstance]:
    """
    Deploys ERC4907, NovaNexHub and NovaNexHubMarketplace, in that order.
    Each deployment is mined before the next one starts.
    """
    erc4907 = deployer.deploy(project.ERC4907)
    novanexhub = deployer.deploy(project.NovaNexHub)
    marketplace = deployer.deploy(project.NovaNexHubMarketplace)

    deployments = [erc4907, novanexhub, marketplace]
    print("Contracts deployed:", *(instance.address for instance in deployments))
    return deployments


@click.command(cls=ConnectedProviderCommand)
@domain_option
@click.option(
    "--params-file",
    "-p",
    help="Params file to use instead of the domain's default one",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
)
@verify_option
@autosign_option
def cli(domain, params_file, verify, autosign):
    """
    Deploys the NovaNexHub contracts and records them in the domain's registry.

    ape run deploy --domain local --network ethereum:local:test --autosign
    ape run deploy --domain sepolia --network ethereum:sepolia:infura --verify
    """
    params_file = params_file or CONSTRUCTOR_PARAMS_DIR / f"{domain}.yml"
    try:
        deployer = Deployer.from_yaml(params_file, verify=verify, autosign=autosign)
    except ConfigError as e:
        raise click.ClickException(f"{params_file.name}: {e}") from e

    deployments = deploy_contracts(deployer)
    deployer.finalize(deployments=deployments)


if __name__ == "__main__":
    cli()
