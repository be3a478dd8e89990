from types import SimpleNamespace

import pytest
import yaml

from deployment.config import load_config
from deployment.constants import CONSTRUCTOR_PARAMS_DIR, LOCAL
from deployment.registry import RegistryEntry

# Common constants
LOCAL_CHAIN_ID = 1337
SEPOLIA_CHAIN_ID = 11155111

CONTRACT_NAMES = ["ERC4907", "NovaNexHub", "NovaNexHubMarketplace"]
FEE_CONSTRUCTOR = [("feeAccount", "address"), ("feePercentage", "uint256")]


# Utility functions
def make_entry(name, chain_id=LOCAL_CHAIN_ID, address=None, block_number=1):
    return RegistryEntry(
        chain_id=chain_id,
        name=name,
        address=address or "0x" + "11" * 20,
        abi=[
            {"type": "constructor", "inputs": []},
            {"type": "function", "name": "owner", "inputs": [], "outputs": []},
        ],
        tx_hash="0x" + "ab" * 32,
        block_number=block_number,
        deployer="0x" + "22" * 20,
    )


class FakeAbiItem:
    def __init__(self, **fields):
        self.fields = fields

    def model_dump(self, mode=None):
        return dict(self.fields)


def fake_container(name, constructor_inputs=()):
    """Just enough of an ape ContractContainer for parameter checks and deploys."""
    inputs = [SimpleNamespace(name=n, type=t) for n, t in constructor_inputs]
    return SimpleNamespace(
        contract_type=SimpleNamespace(
            name=name, abi=[FakeAbiItem(type="constructor", inputs=[])]
        ),
        constructor=SimpleNamespace(abi=SimpleNamespace(inputs=inputs)),
    )


class FakeAccount:
    """Records deployments instead of sending transactions."""

    def __init__(self, index, chain_id=LOCAL_CHAIN_ID):
        self.address = "0x" + f"{index + 0xA0:02x}" * 20
        self.chain_id = chain_id
        self.autosign = False
        self.deployed = []

    def set_autosign(self, enabled):
        self.autosign = enabled

    def deploy(self, container, *args):
        self.deployed.append((container.contract_type.name, args))
        return SimpleNamespace(
            address="0x" + f"{len(self.deployed):02x}" * 20,
            contract_type=container.contract_type,
            receipt=SimpleNamespace(
                chain_id=self.chain_id,
                txn_hash="0x" + f"{len(self.deployed):02x}" * 32,
                block_number=len(self.deployed),
                transaction=SimpleNamespace(sender=self.address),
            ),
        )


def fake_network(name, chain_id):
    network = SimpleNamespace(
        name=name,
        chain_id=chain_id,
        ecosystem=SimpleNamespace(name="ethereum"),
        explorer=None,
    )
    return SimpleNamespace(provider=SimpleNamespace(name="node", network=network))


# Fixtures
@pytest.fixture
def local_config():
    return load_config(CONSTRUCTOR_PARAMS_DIR / f"{LOCAL}.yml")


@pytest.fixture
def local_network(monkeypatch):
    networks = fake_network("local", LOCAL_CHAIN_ID)
    monkeypatch.setattr("deployment.networks.networks", networks)
    return networks.provider.network


@pytest.fixture
def live_network(monkeypatch):
    networks = fake_network("sepolia", SEPOLIA_CHAIN_ID)
    monkeypatch.setattr("deployment.networks.networks", networks)
    return networks.provider.network


@pytest.fixture
def fake_accounts(monkeypatch):
    fakes = [FakeAccount(index) for index in range(3)]
    monkeypatch.setattr("deployment.accounts.accounts", SimpleNamespace(test_accounts=fakes))
    return fakes


@pytest.fixture
def novanexhub_project(monkeypatch, tmp_path):
    """Compiled NovaNexHub contract types; the marketplace takes no constructor arguments."""
    project = SimpleNamespace(
        contracts_folder=tmp_path / "contracts",
        **{name: fake_container(name) for name in CONTRACT_NAMES},
    )
    monkeypatch.setattr("deployment.params.project", project)
    return project


@pytest.fixture
def params_file(tmp_path, local_config):
    """Writes a params file whose registry lives in a temporary directory."""

    def write(**overrides):
        config = dict(local_config)
        config["artifacts"] = {"dir": str(tmp_path / "artifacts"), "filename": "local.json"}
        config.update(overrides)
        filepath = tmp_path / "params.yml"
        filepath.write_text(yaml.safe_dump(config))
        return filepath

    return write
