"""
Solidity compiler pinning.

ape-solidity compiles each source with the newest *installed* solc that satisfies
the source's pragma. Pinning therefore means two things: the pinned versions are
installed, and for every source the version ape will pick is one of the pins.
"""
import re
from pathlib import Path
from typing import Dict, List, Optional

import solcx
from packaging.specifiers import SpecifierSet
from packaging.version import Version

from deployment.config import ConfigError

PRAGMA_PATTERN = re.compile(r"pragma\s+solidity\s+([^;]+);")
_TERM_PATTERN = re.compile(r"(\^|~|>=|<=|>|<|=)?\s*(\d+(?:\.\d+){0,2})")


def installed_compilers() -> List[str]:
    return [str(version) for version in solcx.get_installed_solc_versions()]


def missing_compilers(versions: List[str]) -> List[str]:
    """Returns the pinned versions that are not yet installed, in pinned order."""
    installed = set(installed_compilers())
    return [version for version in versions if version not in installed]


def install_compilers(versions: List[str]) -> List[str]:
    """Installs any missing solc versions and returns the ones that were installed."""
    missing = missing_compilers(versions)
    if not missing:
        print(f"(i) All pinned compilers are installed: {', '.join(versions)}")
        return []

    for version in missing:
        print(f"Installing solc {version}...")
        solcx.install_solc(version)
    return missing


def _pad(version: str) -> Version:
    parts = (version.split(".") + ["0", "0"])[:3]
    return Version(".".join(parts))


def _term_to_specifier(operator: str, version: str) -> str:
    v = _pad(version)
    major, minor, micro = v.major, v.minor, v.micro
    if operator == "^":
        if major:
            upper = f"{major + 1}.0.0"
        elif minor:
            upper = f"0.{minor + 1}.0"
        else:
            upper = f"0.0.{micro + 1}"
        return f">={v},<{upper}"
    if operator == "~":
        return f">={v},<{major}.{minor + 1}.0"
    if not operator or operator == "=":
        return f"=={v}"
    return f"{operator}{v}"


def pragma_specifiers(pragma: str) -> List[SpecifierSet]:
    """
    Translates a solidity version pragma (npm-style ranges) into specifier sets;
    a version satisfies the pragma if it is in any of them.
    """
    specifiers = []
    for alternative in pragma.split("||"):
        terms = _TERM_PATTERN.findall(alternative)
        if not terms:
            raise ConfigError(f"Unsupported solidity pragma '{pragma.strip()}'")
        specifiers.append(SpecifierSet(",".join(_term_to_specifier(op, v) for op, v in terms)))
    return specifiers


def satisfies(version: str, pragma: Optional[str]) -> bool:
    if pragma is None:
        return True
    return any(Version(version) in spec for spec in pragma_specifiers(pragma))


def select_compiler(pragma: Optional[str], pinned: List[str], installed: List[str]) -> str:
    """Returns the solc version ape-solidity will use for a pragma, if it is a pinned one."""
    candidates = [version for version in installed if satisfies(version, pragma)]
    if not candidates:
        raise ConfigError(
            f"No installed solc satisfies 'pragma solidity {pragma}'; "
            "run `ape run install_compilers` first."
        )

    selected = max(candidates, key=Version)
    if selected not in pinned:
        raise ConfigError(
            f"solc {selected} would compile 'pragma solidity {pragma}' "
            f"but is not pinned ({', '.join(pinned)})."
        )
    return selected


def check_sources(contracts_folder: Path, pinned: List[str]) -> Dict[Path, str]:
    """Maps every solidity source to the pinned compiler that will build it."""
    contracts_folder = Path(contracts_folder)
    if not contracts_folder.is_dir():
        return {}

    installed = installed_compilers()
    selected = dict()
    for source in sorted(contracts_folder.rglob("*.sol")):
        match = PRAGMA_PATTERN.search(source.read_text())
        pragma = match.group(1).strip() if match else None
        try:
            selected[source] = select_compiler(pragma, pinned=pinned, installed=installed)
        except ConfigError as e:
            raise ConfigError(f"{source.name}: {e}") from e
    return selected
