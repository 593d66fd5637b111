"""
Test Configuration
==================

Pytest configuration with fixtures shared by unit and integration tests.
Settings are forced to the testing environment before any application
module is imported.
"""

import logging
import os

os.environ["SERI_ENVIRONMENT"] = "testing"

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from pydantic_settings import SettingsConfigDict

import seri.config.settings as settings_module
from seri.config.settings import Settings
from seri.core.dsl.parser import parse_schedule
from seri.models.schedule import Schedule

from tests.data.sample_documents import (
    CONFERENCE_DOCUMENT,
    MINIMAL_DOCUMENT,
    UNSCHEDULED_DOCUMENT,
)


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    __test__ = False

    environment: str = "testing"
    debug: bool = True
    log_level: str = "WARNING"
    default_format: str = "tikz"
    standalone: bool = False

    model_config = SettingsConfigDict(env_file=None, env_prefix="SERI_TEST_")


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(autouse=True)
def override_settings(test_settings: TestSettings) -> Generator[TestSettings, None, None]:
    """Install the test settings as the process-wide settings instance."""
    previous = settings_module.settings
    settings_module.settings = test_settings
    yield test_settings
    settings_module.settings = previous


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Undo handlers installed by drivers under test, which may hold captured streams."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def minimal_schedule() -> Schedule:
    return parse_schedule(MINIMAL_DOCUMENT)


@pytest.fixture
def conference_schedule() -> Schedule:
    return parse_schedule(CONFERENCE_DOCUMENT)


@pytest.fixture
def unscheduled_schedule() -> Schedule:
    return parse_schedule(UNSCHEDULED_DOCUMENT)


@pytest.fixture(scope="session")
def fastapi_client() -> Generator[TestClient, None, None]:
    """FastAPI test client."""
    from seri.api.main import create_app

    with TestClient(create_app()) as client:
        yield client
