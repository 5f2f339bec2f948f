from collections.abc import Callable
from pathlib import Path

import pytest

from abbrws.config import AbbRwsConfig
from abbrws.tests.utils.mock_transport import MockTransport

FIXTURES_DIR = Path(__file__).parent / "data"


@pytest.fixture
def config() -> AbbRwsConfig:
    """Create test config."""
    return AbbRwsConfig(host="robot.local")


@pytest.fixture
def mock_transport() -> MockTransport:
    """Create mock transport."""
    return MockTransport()


@pytest.fixture
def load_fixture() -> Callable[[str], bytes]:
    def _load(name: str) -> bytes:
        return (FIXTURES_DIR / name).read_bytes()

    return _load
