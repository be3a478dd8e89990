from pathlib import Path

import deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(deployment.__file__).parent
PROJECT_ROOT = DEPLOYMENT_DIR.parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"
ARTIFACTS_DIR = DEPLOYMENT_DIR / "artifacts"

#
# Domains
#

LOCAL = "local"
SEPOLIA = "sepolia"

SUPPORTED_DOMAINS = [LOCAL, SEPOLIA]

LOCAL_BLOCKCHAIN_ENVIRONMENTS = ["local"]

#
# Build
#

SOLIDITY_COMPILER_VERSIONS = ["0.8.20", "0.8.19", "0.8.0"]

#
# Accounts
#

DEPLOYER = "deployer"

NAMED_ACCOUNTS = {
    # role -> account index
    DEPLOYER: 0,
}

#
# Contracts
#

ERC4907 = "ERC4907"
NOVANEXHUB = "NovaNexHub"
NOVANEXHUB_MARKETPLACE = "NovaNexHubMarketplace"

DEPLOYMENT_ORDER = [ERC4907, NOVANEXHUB, NOVANEXHUB_MARKETPLACE]

# marketplace fee, in percent of the sale price
FEE_PERCENTAGE = 15
