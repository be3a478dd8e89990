import json
import os
from pathlib import Path
from typing import Dict, List

from ape.contracts import ContractInstance
from ape_etherscan.utils import API_KEY_ENV_KEY_MAP

from deployment.config import ConfigError
from deployment.constants import ARTIFACTS_DIR, PROJECT_ROOT
from deployment.networks import active_network, is_local_network, provider_name

INFURA_ENVVARS = ("WEB3_INFURA_PROJECT_ID", "WEB3_INFURA_API_KEY")


def _load_json(filepath: Path) -> dict:
    with open(filepath, "r") as file:
        return json.load(file)


def artifact_filepath(config: Dict) -> Path:
    """
    Registry file of a deployment config. Relative `artifacts.dir` values are
    taken from the project root so the working directory does not matter.
    """
    artifacts = config.get("artifacts") or {}
    filename = artifacts.get("filename")
    if not filename:
        raise ConfigError("artifacts.filename is not set in params file.")

    directory = Path(artifacts.get("dir", ARTIFACTS_DIR))
    if not directory.is_absolute():
        directory = PROJECT_ROOT / directory
    return directory / filename


def validate_config(config: Dict) -> Path:
    """
    Checks a deployment config against the connected network and returns its registry file.

    Live deployments are refused when the params file targets another chain, or when the
    registry already records this chain. Local chains start empty every session, so an
    earlier local deployment in the registry is simply replaced.
    """
    print("Validating parameters YAML...")

    chain_id = (config.get("deployment") or {}).get("chain_id")
    if not chain_id:
        raise ConfigError("deployment.chain_id is not set in params file.")
    if not config.get("contracts"):
        raise ConfigError("params file does not list any 'contracts'.")

    chain_id = int(chain_id)
    registry_filepath = artifact_filepath(config)
    if is_local_network():
        return registry_filepath

    connected_chain_id = active_network().chain_id
    if chain_id != connected_chain_id:
        raise ConfigError(
            f"params file targets chain {chain_id} but the provider is "
            f"connected to chain {connected_chain_id}."
        )

    if registry_filepath.exists() and str(chain_id) in _load_json(registry_filepath):
        raise ConfigError(
            f"{registry_filepath.name} already records a deployment on chain {chain_id}."
        )
    return registry_filepath


def check_plugins(verify: bool) -> None:
    """Checks the API keys that live deployments need."""
    if is_local_network():
        return

    print("Checking plugins...")
    if provider_name() == "infura" and not any(os.environ.get(v) for v in INFURA_ENVVARS):
        raise ConfigError(f"Set one of {', '.join(INFURA_ENVVARS)} to deploy through infura.")

    if verify:
        envvar = API_KEY_ENV_KEY_MAP.get(active_network().ecosystem.name)
        if not (envvar and os.environ.get(envvar)):
            raise ConfigError(f"An explorer API key ({envvar}) is required to verify contracts.")


def verify_contracts(contracts: List[ContractInstance]) -> None:
    """Publishes contract sources to the network's block explorer."""
    explorer = active_network().explorer
    for instance in contracts:
        print(f"(i) Verifying {instance.contract_type.name} at {instance.address}...")
        explorer.publish_contract(instance.address)
