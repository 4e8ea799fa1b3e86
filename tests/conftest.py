"""Shared pytest fixtures and markers for all tests."""

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def critical_config():
    """Configuration at exactly lambda*."""
    from inekoalaty.models import ParameterConfig
    from inekoalaty.parameters import CRITICAL_VALUE
    return ParameterConfig.from_lambda(CRITICAL_VALUE)


@pytest.fixture
def alice_config():
    """Configuration well above critical (lambda = 1.0)."""
    from inekoalaty.models import ParameterConfig
    return ParameterConfig.from_lambda(1.0)


@pytest.fixture
def bazza_config():
    """Configuration well below critical (lambda = 0.5)."""
    from inekoalaty.models import ParameterConfig
    return ParameterConfig.from_lambda(0.5)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test against the built-in defaults."""
    for name in ("INEKOALATY_MAX_ROUNDS", "INEKOALATY_MAX_WORKERS", "INEKOALATY_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
