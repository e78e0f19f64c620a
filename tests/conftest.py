"""Pytest fixtures for Risk Configuration tests."""

import pytest
from fastapi.testclient import TestClient

from riskconfig.server.app import create_app
from riskconfig.server.config import GuideConfig, RiskConfigServiceConfig, ServerConfig
from riskconfig.services import ConfigStore
from riskconfig.testing import FakeClock


@pytest.fixture
def clock():
    """Provide a frozen, manually advanced clock."""
    return FakeClock()


@pytest.fixture
def store(clock):
    """Provide an empty store driven by the fake clock."""
    return ConfigStore(clock=clock)


@pytest.fixture
def guide_file(tmp_path):
    """Write a small markdown guide to disk."""
    path = tmp_path / "GUIDE.md"
    path.write_text("# Test Guide\n\nCompare thresholds.\n", encoding="utf-8")
    return path


@pytest.fixture
def test_config(guide_file):
    """Service configuration pointing at the temporary guide."""
    return RiskConfigServiceConfig(
        server=ServerConfig(port=3000, max_body_bytes=4096),
        guide=GuideConfig(path=str(guide_file), title="Test Guide"),
    )


@pytest.fixture
def app(test_config, store):
    """Application with its own isolated store."""
    return create_app(test_config, store=store)


@pytest.fixture
def client(app):
    """Test client for the isolated application."""
    return TestClient(app)
