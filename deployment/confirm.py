from typing import Any, Dict

import click
from ape.utils import ZERO_ADDRESS


def confirm_start() -> None:
    """Asks the user to start the deployment; aborts the command otherwise."""
    click.confirm("Start the deployment?", abort=True)


def confirm_deployment(contract_name: str, arguments: Dict[str, Any]) -> None:
    """Shows the resolved constructor arguments of a contract and asks to deploy it."""
    if arguments:
        click.echo(f"\nConstructor arguments for {contract_name}")
        for name, value in arguments.items():
            click.echo(f"\t{name}={value}")
    else:
        click.echo(f"\n(i) {contract_name} takes no constructor arguments")

    click.confirm(f"Deploy {contract_name}?", abort=True)
    if ZERO_ADDRESS in arguments.values():
        click.confirm("A constructor argument is the zero address; deploy anyway?", abort=True)
