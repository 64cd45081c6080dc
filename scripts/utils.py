import sys
from functools import lru_cache, wraps
from typing import Optional

from brownie import accounts, config, network

from scripts.deployment import DeploymentError, DeploymentNotFoundError, load, validate

DEV_CHAIN_IDS = {1337, 31337}

EXPLORER_URLS = {
    1: "https://etherscan.io",
    56: "https://bscscan.com",
    97: "https://testnet.bscscan.com",
    137: "https://polygonscan.com",
    11155111: "https://sepolia.etherscan.io",
}


def is_live():
    return network.chain.id not in DEV_CHAIN_IDS


def _configured_key() -> Optional[str]:
    key = config.get("wallets", {}).get("from_key")
    # unset env vars are left unexpanded by brownie
    if not key or key.startswith("${"):
        return None
    return key


@lru_cache()
def get_deployer():
    if not is_live():
        return accounts[0]
    key = _configured_key()
    if key is not None:
        return accounts.add(key)
    account_id = config["networks"].get(network.show_active(), {}).get("account")
    if account_id:
        return accounts.load(account_id)
    raise ValueError(f"chain id {network.chain.id} has no configured account")


def explorer_address_url(address: str) -> Optional[str]:
    base_url = EXPLORER_URLS.get(network.chain.id)
    if base_url is None:
        return None
    return f"{base_url}/address/{address}"


def abort(reason, code=1):
    print(f"error: {reason}", file=sys.stderr)
    sys.exit(code)


def load_deployment(full=False):
    try:
        record = load()
        variant = record.variant
        validate(record, variant if full else None)
    except DeploymentNotFoundError:
        abort("Could not read deployment info. Please run the deploy script first.")
    except DeploymentError as exc:
        abort(f"Invalid deployment info: {exc}. Please run the deploy script first.")

    if record.chain_id is not None and record.chain_id != network.chain.id:
        abort(
            f"contract was deployed on chain {record.chain_id}, "
            f"connected to chain {network.chain.id}"
        )
    return record


def with_deployment(full=False):
    """Pass the validated deployment record as first argument.

    With ``full`` the record must also hold the constructor arguments of the
    contract variant it was deployed as.
    """

    def wrapped(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            record = load_deployment(full)
            return f(record, *args, **kwargs)

        return wrapper

    return wrapped
