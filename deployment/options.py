import click

from deployment.constants import SUPPORTED_DOMAINS

domain_option = click.option(
    "--domain",
    "-d",
    help="Deployment domain",
    type=click.Choice(SUPPORTED_DOMAINS),
    required=True,
)

verify_option = click.option(
    "--verify/--no-verify",
    help="Publish deployed contracts to the block explorer.",
    default=False,
)

autosign_option = click.option(
    "--autosign",
    help="Deploy without asking for confirmation.",
    is_flag=True,
    default=False,
)
