from typing import Dict

from ape import accounts
from ape.api import AccountAPI
from ape.cli.choices import select_account

from deployment.config import ConfigError, validate_named_accounts
from deployment.networks import is_local_network


class NamedAccounts:
    """
    Maps logical roles (e.g. "deployer") to account indices.

    On local development chains a role resolves to the test account at its index.
    On live networks there is no fixed account ordering, so the user is asked
    to select the account that plays the role.
    """

    def __init__(self, mapping: Dict[str, int]):
        self.mapping = dict(mapping)

    @classmethod
    def from_config(cls, config: Dict) -> "NamedAccounts":
        return cls(mapping=validate_named_accounts(config))

    @property
    def roles(self):
        return list(self.mapping)

    def index(self, role: str) -> int:
        try:
            return self.mapping[role]
        except KeyError:
            raise ConfigError(f"No account index configured for role '{role}'.")

    def resolve(self, role: str) -> AccountAPI:
        index = self.index(role)
        if is_local_network():
            test_accounts = accounts.test_accounts
            if index >= len(test_accounts):
                raise ConfigError(
                    f"Account index {index} for role '{role}' is out of range; "
                    f"only {len(test_accounts)} test accounts are available."
                )
            return test_accounts[index]

        return select_account(prompt_message=f"Select the '{role}' account")
