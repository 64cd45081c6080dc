import pytest
from brownie import config

from scripts.utils import get_deployer

BASE_URI = "ipfs://test-uri/"

NAME = "pbeheyt Art 42"
SYMBOL = "PBA42"


@pytest.fixture(autouse=True)
def isolation_setup(fn_isolation):
    pass


@pytest.fixture(autouse=True)
def fresh_deployer():
    get_deployer.cache_clear()
    yield
    get_deployer.cache_clear()


@pytest.fixture(scope="session")
def owner(accounts):
    return accounts[0]


@pytest.fixture(scope="session")
def alice(accounts):
    return accounts[1]


@pytest.fixture(scope="session")
def bob(accounts):
    return accounts[2]


@pytest.fixture(scope="module")
def nft(owner, NFT42):
    return owner.deploy(NFT42, owner, BASE_URI)


@pytest.fixture(scope="module")
def nft_simple(owner, NFT42Simple):
    return owner.deploy(NFT42Simple, owner)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run scripts from an empty directory, away from any real deployment file."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def nft_config(monkeypatch):
    """Overrides for the ``nft`` config section, undone after the test."""

    class NftConfig:
        def set(self, key, value):
            monkeypatch.setitem(config["nft"], key, value)

    return NftConfig()
