"""Pytest configuration.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the project root on sys.path so tests import guardrails_policy and the
shared helpers in tests/policy_test_utils.py.
"""

import pytest

from guardrails_policy.domain.config import ConfigurationLoader
from guardrails_policy.infrastructure.gateways.filesystem_gateway import FileSystemGateway


@pytest.fixture
def config_loader() -> ConfigurationLoader:
    return ConfigurationLoader({}, {})


@pytest.fixture
def filesystem() -> FileSystemGateway:
    return FileSystemGateway()
