"""
Registry of deployed contracts.

One JSON file per domain, keyed by chain id and then contract name:

    {"1337": {"ERC4907": {"address": ..., "abi": [...], "tx_hash": ...,
                          "block_number": ..., "deployer": ...}}}
"""
import json
from pathlib import Path
from typing import Dict, List, NamedTuple

from ape.contracts import ContractInstance
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from deployment.constants import ARTIFACTS_DIR
from deployment.utils import _load_json


class RegistryEntry(NamedTuple):
    chain_id: int
    name: str
    address: ChecksumAddress
    abi: List[dict]
    tx_hash: str
    block_number: int
    deployer: str

    def to_json(self) -> dict:
        return {
            "address": self.address,
            "abi": sorted(self.abi, key=lambda item: (item["type"], item.get("name", ""))),
            "tx_hash": self.tx_hash,
            "block_number": int(self.block_number),
            "deployer": self.deployer,
        }


def registry_filepath_from_domain(domain: str) -> Path:
    filepath = ARTIFACTS_DIR / f"{domain}.json"
    if not filepath.exists():
        raise ValueError(f"Nothing has been deployed for domain '{domain}' yet.")
    return filepath


def entry_from_deployment(instance: ContractInstance) -> RegistryEntry:
    receipt = instance.receipt
    return RegistryEntry(
        chain_id=receipt.chain_id,
        name=instance.contract_type.name,
        address=to_checksum_address(instance.address),
        abi=[item.model_dump(mode="json") for item in instance.contract_type.abi],
        tx_hash=receipt.txn_hash,
        block_number=receipt.block_number,
        deployer=receipt.transaction.sender,
    )


def read_registry(filepath: Path) -> List[RegistryEntry]:
    entries = list()
    for chain_id, contracts in _load_json(filepath).items():
        for name, artifact in contracts.items():
            entries.append(
                RegistryEntry(
                    chain_id=int(chain_id),
                    name=name,
                    address=artifact["address"],
                    abi=artifact["abi"],
                    tx_hash=artifact["tx_hash"],
                    block_number=artifact["block_number"],
                    deployer=artifact["deployer"],
                )
            )
    return entries


def write_registry(entries: List[RegistryEntry], filepath: Path) -> Path:
    """
    Records entries in a registry file, replacing whatever the file held for their chains.
    Chains that are not part of `entries` are left untouched.
    """
    data: Dict[str, Dict[str, dict]] = _load_json(filepath) if filepath.exists() else {}

    chains = dict()
    for entry in sorted(entries, key=lambda e: (e.chain_id, e.name)):
        chains.setdefault(str(entry.chain_id), {})[entry.name] = entry.to_json()
    data.update(chains)

    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w") as file:
        json.dump(dict(sorted(data.items(), key=lambda item: int(item[0]))), file, indent=4)
    return filepath


def registry_from_ape_deployments(deployments: List[ContractInstance], filepath: Path) -> Path:
    entries = [entry_from_deployment(instance) for instance in deployments]
    write_registry(entries, filepath)
    print(f"(i) Registry written to {filepath}!")
    return filepath


def contracts_from_registry(
    filepath: Path, chain_id: int, project
) -> Dict[str, ContractInstance]:
    """Returns the registered contracts of a chain, bound to the project's contract types."""
    contracts = dict()
    for entry in read_registry(filepath):
        if entry.chain_id == chain_id:
            contracts[entry.name] = getattr(project, entry.name).at(entry.address)
    return contracts
