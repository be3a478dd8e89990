import re
from pathlib import Path
from typing import Dict, List

import yaml

from deployment.constants import DEPLOYER, NAMED_ACCOUNTS, SOLIDITY_COMPILER_VERSIONS

COMPILERS_KEY = "compilers"
NAMED_ACCOUNTS_KEY = "named_accounts"

VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


class ConfigError(ValueError):
    """Raised when a deployment parameters file is malformed."""


def load_config(filepath: Path) -> Dict:
    """Loads a YAML deployment parameters file."""
    with open(filepath, "r") as file:
        config = yaml.safe_load(file)
    if not isinstance(config, dict):
        raise ConfigError(f"Deployment parameters file {filepath} is empty or malformed.")
    return config


def validate_compilers(config: Dict) -> List[str]:
    """
    Returns the pinned solidity compiler versions of a deployment config.
    Falls back to the project-wide defaults when the config does not pin any.
    """
    versions = config.get(COMPILERS_KEY)
    if versions is None:
        return list(SOLIDITY_COMPILER_VERSIONS)

    if not isinstance(versions, list) or not versions:
        raise ConfigError(f"'{COMPILERS_KEY}' must be a non-empty list of versions.")

    for version in versions:
        # unquoted two-part versions (e.g. 0.8) are parsed by YAML as floats
        if not isinstance(version, str) or not VERSION_PATTERN.match(version):
            raise ConfigError(f"Invalid compiler version '{version}'; expected 'X.Y.Z'.")

    duplicates = sorted({v for v in versions if versions.count(v) > 1})
    if duplicates:
        raise ConfigError(f"Duplicate compiler versions: {', '.join(duplicates)}")

    return list(versions)


def validate_named_accounts(config: Dict) -> Dict[str, int]:
    """Returns the role -> account index mapping of a deployment config."""
    named_accounts = config.get(NAMED_ACCOUNTS_KEY)
    if named_accounts is None:
        return dict(NAMED_ACCOUNTS)

    if not isinstance(named_accounts, dict):
        raise ConfigError(f"'{NAMED_ACCOUNTS_KEY}' must be a mapping of role to account index.")

    for role, index in named_accounts.items():
        # bool is an int subclass
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise ConfigError(f"Account index for '{role}' must be a non-negative integer.")

    if DEPLOYER not in named_accounts:
        raise ConfigError(f"'{NAMED_ACCOUNTS_KEY}' is missing the '{DEPLOYER}' role.")

    return dict(named_accounts)
