import pytest
from symbolchain.CryptoTypes import PrivateKey
from symbolchain.facade.SymbolFacade import SymbolFacade


@pytest.fixture
def testnet_facade():
    """Fixture providing testnet Symbol facade"""
    return SymbolFacade("testnet")


@pytest.fixture
def random_private_key():
    """Fixture providing a random private key"""
    return PrivateKey.random()


@pytest.fixture
def testnet_account(testnet_facade, random_private_key):
    """Fixture providing a testnet account"""
    return testnet_facade.create_account(random_private_key)


@pytest.fixture
def destination_address(testnet_facade):
    """Fixture providing a valid testnet destination address"""
    return str(testnet_facade.create_account(PrivateKey.random()).address)


@pytest.fixture
def xym_mosaic_id():
    """Fixture providing the testnet currency mosaic ID"""
    return 0x72C0212E67A08BCE


@pytest.fixture
def testnet_node_url():
    """Fixture providing testnet node URL"""
    return "http://sym-test-01.opening-line.jp:3000"


@pytest.fixture(autouse=True)
def isolate_donation_storage(monkeypatch, tmp_path):
    """Keep config, wallet and environment overrides out of the user's home."""
    for name in (
        "DESTINATION",
        "NETWORK",
        "NODE_URL",
        "RESERVE",
        "DELAY",
        "INCLUDE_TOKENS",
    ):
        monkeypatch.delenv(f"SYMBOL_DONATION_{name}", raising=False)
    monkeypatch.setenv("SYMBOL_DONATION_DIR", str(tmp_path / "donation"))
    yield
