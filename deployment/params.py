"""
Deployment parameters and the deployer.

A params file lists the contracts to deploy, in order. An entry is either a bare
contract name (no constructor arguments) or a mapping with a `constructor` section
that is a list (positional) or a mapping (named after the ABI inputs):

    contracts:
      - ERC4907
      - NovaNexHubMarketplace:
          constructor: [$deployer, $FEE_PERCENTAGE]

`$deployer` is the address of the deployer account; `$NAME` is a value from the
file's `constants` section. Positional arguments are checked for count and type,
named ones for their names as well.
"""
from collections import OrderedDict
from pathlib import Path
from typing import Any, Dict, List, Optional

from ape import project
from ape.api import AccountAPI
from ape.contracts import ContractContainer, ContractInstance
from ape.utils import ZERO_ADDRESS
from web3.auto import w3

from deployment.accounts import NamedAccounts
from deployment.compilers import check_sources
from deployment.config import ConfigError, load_config, validate_compilers
from deployment.confirm import confirm_deployment, confirm_start
from deployment.constants import DEPLOYER
from deployment.networks import active_network, is_local_network
from deployment.registry import registry_from_ape_deployments
from deployment.utils import check_plugins, validate_config, verify_contracts

VARIABLE_PREFIX = "$"
CONSTRUCTOR_KEY = "constructor"


class ParameterError(ConfigError):
    """Raised when constructor arguments in a params file do not fit a contract."""


def _resolve(value: Any, constants: Dict[str, Any], deployer_address: str) -> Any:
    if isinstance(value, list):
        return [_resolve(item, constants, deployer_address) for item in value]
    if not (isinstance(value, str) and value.startswith(VARIABLE_PREFIX)):
        return value

    variable = value[len(VARIABLE_PREFIX) :]
    if variable == DEPLOYER:
        return deployer_address
    if variable in constants:
        return constants[variable]
    raise ParameterError(f"Unknown variable '{value}'; use ${DEPLOYER} or a name from 'constants'.")


class ConstructorArguments:
    def __init__(self, contract_name: str, raw: Any, constants: Dict[str, Any]):
        if raw is None:
            raw = []
        if not isinstance(raw, (list, dict)):
            raise ParameterError(f"{contract_name} constructor must be a list or a mapping.")
        self.contract_name = contract_name
        self.raw = raw
        self.constants = constants
        # unknown variables should fail before anything is deployed
        self.resolve(ZERO_ADDRESS)

    @property
    def named(self) -> bool:
        return isinstance(self.raw, dict)

    def resolve(self, deployer_address: str) -> List[Any]:
        values = self.raw.values() if self.named else self.raw
        return [_resolve(value, self.constants, deployer_address) for value in values]

    def validate(self, abi_inputs: List[Any], deployer_address: str) -> "OrderedDict[str, Any]":
        """Returns the resolved arguments keyed by ABI input name."""
        values = self.resolve(deployer_address)
        if len(values) != len(abi_inputs):
            raise ParameterError(
                f"{self.contract_name} constructor takes {len(abi_inputs)} argument(s); "
                f"the params file gives {len(values)}."
            )

        expected_names = [abi_input.name for abi_input in abi_inputs]
        if self.named and list(self.raw) != expected_names:
            raise ParameterError(
                f"{self.contract_name} constructor arguments are {expected_names}; "
                f"the params file names {list(self.raw)}."
            )

        arguments = OrderedDict()
        for position, (abi_input, value) in enumerate(zip(abi_inputs, values)):
            label = abi_input.name or f"_{position}"
            if not w3.is_encodable(abi_input.type, value):
                raise ParameterError(
                    f"{self.contract_name} argument {label}={value!r} "
                    f"is not a valid {abi_input.type}."
                )
            arguments[label] = value
        return arguments


def parse_contracts(config: Dict) -> "OrderedDict[str, ConstructorArguments]":
    """Returns the contracts of a params file, in deployment order."""
    constants = config.get("constants") or {}
    contracts = OrderedDict()
    for item in config.get("contracts") or []:
        if isinstance(item, str):
            name, raw = item, None
        elif isinstance(item, dict) and len(item) == 1:
            name, data = next(iter(item.items()))
            if data is not None and not isinstance(data, dict):
                raise ParameterError(f"Malformed entry for {name} in 'contracts'.")
            raw = (data or {}).get(CONSTRUCTOR_KEY)
        else:
            raise ParameterError(f"Malformed entry in 'contracts': {item!r}")

        if name in contracts:
            raise ParameterError(f"{name} is listed twice in 'contracts'.")
        contracts[name] = ConstructorArguments(name, raw, constants)
    return contracts


def get_contract_container(name: str) -> ContractContainer:
    try:
        return getattr(project, name)
    except AttributeError:
        raise ParameterError(f"{name} is not a contract type of this project.")


class Deployer:
    """The deployer account, bound to the contracts and arguments of one params file."""

    def __init__(
        self,
        config: Dict,
        path: Path,
        verify: bool = False,
        account: Optional[AccountAPI] = None,
        autosign: bool = False,
    ):
        self.path = path
        self.verify = verify
        self.autosign = autosign

        check_plugins(verify)
        self.compilers = validate_compilers(config)
        self.registry_filepath = validate_config(config)
        self.contracts = parse_contracts(config)

        self.account = account or NamedAccounts.from_config(config).resolve(DEPLOYER)
        if autosign and not is_local_network():
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
            self.account.set_autosign(True)

        self._print_deployment_info()
        check_sources(project.contracts_folder, self.compilers)
        for name, arguments in self.contracts.items():
            container = get_contract_container(name)
            arguments.validate(container.constructor.abi.inputs, self.account.address)

        if not autosign:
            confirm_start()

    @classmethod
    def from_yaml(cls, filepath: Path, **kwargs) -> "Deployer":
        return cls(config=load_config(filepath), path=filepath, **kwargs)

    def deploy(self, container: ContractContainer) -> ContractInstance:
        """Deploys a listed contract; returns once the deployment is mined."""
        name = container.contract_type.name
        if name not in self.contracts:
            raise ParameterError(f"{name} is not listed in {self.path}.")

        arguments = self.contracts[name].validate(
            container.constructor.abi.inputs, self.account.address
        )
        if not self.autosign:
            confirm_deployment(name, arguments)
        return self.account.deploy(container, *arguments.values())

    def finalize(self, deployments: List[ContractInstance]) -> None:
        """Records the deployments in the registry and optionally verifies them."""
        registry_from_ape_deployments(deployments, self.registry_filepath)
        if self.verify:
            verify_contracts(deployments)

    def _print_deployment_info(self) -> None:
        network = active_network()
        print(
            f"Account: {self.account.address}",
            f"Config: {self.path}",
            f"Registry: {self.registry_filepath}",
            f"Compilers: {', '.join(self.compilers)}",
            f"Verify: {self.verify}",
            f"Network: {network.name}",
            f"Chain ID: {network.chain_id}",
            sep="\n",
        )
