from ape import networks

from deployment.constants import LOCAL_BLOCKCHAIN_ENVIRONMENTS


def active_network():
    """Returns the network the ape provider is connected to."""
    return networks.provider.network


def provider_name() -> str:
    return networks.provider.name


def is_local_network() -> bool:
    """Returns True if the connected network is a local development chain."""
    return active_network().name in LOCAL_BLOCKCHAIN_ENVIRONMENTS
