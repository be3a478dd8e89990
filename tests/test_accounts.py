import pytest

from deployment.accounts import NamedAccounts
from deployment.config import ConfigError


@pytest.fixture
def on_local_network(monkeypatch):
    monkeypatch.setattr("deployment.accounts.is_local_network", lambda: True)


@pytest.fixture
def on_live_network(monkeypatch):
    monkeypatch.setattr("deployment.accounts.is_local_network", lambda: False)


def test_deployer_role_maps_to_first_account(local_config):
    named_accounts = NamedAccounts.from_config(local_config)
    assert named_accounts.index("deployer") == 0
    assert named_accounts.roles == ["deployer"]


def test_unknown_role():
    named_accounts = NamedAccounts({"deployer": 0})
    with pytest.raises(ConfigError, match="treasury"):
        named_accounts.index("treasury")


def test_resolve_on_local_network(on_local_network, accounts):
    named_accounts = NamedAccounts({"deployer": 0, "treasury": 2})
    assert named_accounts.resolve("deployer").address == accounts[0].address
    assert named_accounts.resolve("treasury").address == accounts[2].address


def test_resolve_out_of_range_index(on_local_network):
    named_accounts = NamedAccounts({"deployer": 10_000})
    with pytest.raises(ConfigError, match="out of range"):
        named_accounts.resolve("deployer")


def test_resolve_on_live_network_prompts_for_account(on_live_network, monkeypatch):
    prompts = []
    selected = object()

    def select_account(prompt_message=None):
        prompts.append(prompt_message)
        return selected

    monkeypatch.setattr("deployment.accounts.select_account", select_account)

    named_accounts = NamedAccounts({"deployer": 0})
    assert named_accounts.resolve("deployer") is selected
    assert prompts == ["Select the 'deployer' account"]
