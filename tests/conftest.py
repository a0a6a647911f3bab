"""Pytest configuration and shared fixtures for might tests."""

import pytest

from might import _config


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    from might import ok

    return ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    from might import err

    return err('test error')


@pytest.fixture
def fresh_config():
    """Forget any configuration set by init() once the test is done."""
    yield
    _config.reset()
