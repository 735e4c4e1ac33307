"""Shared pytest fixtures for all tests."""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from cli.config import Config
from catalog.database import init_database
from catalog.repositories.memory_repository import InMemoryNodeRepository
from catalog.services.catalog_service import CatalogService


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .catalog directory
    """
    config_dir = tmp_path / '.catalog'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def test_db(monkeypatch) -> Generator[Path, None, None]:
    """
    Create a temporary SQLite database for each test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        monkeypatch.setattr("catalog.database.DATABASE_PATH", str(db_path))
        monkeypatch.setattr("catalog.config.DATABASE_PATH", str(db_path))
        init_database()
        yield db_path


@pytest.fixture
def memory_repo():
    """Empty in-memory node gateway."""
    return InMemoryNodeRepository()


@pytest.fixture
def memory_service(memory_repo):
    """Catalog service over an in-memory gateway with default policies."""
    return CatalogService(
        repository=memory_repo,
        strict_tree=False,
        validate_parent_on_update=False,
        cascade_delete=False,
    )


@pytest.fixture
def api_service():
    """In-memory service installed as the API's shared instance."""
    from catalog.service_locator import set_catalog_service

    service = CatalogService(
        repository=InMemoryNodeRepository(),
        strict_tree=False,
        validate_parent_on_update=False,
        cascade_delete=False,
    )
    set_catalog_service(service)
    yield service
    set_catalog_service(None)


@pytest.fixture
def live_client(temp_config, api_service):
    """
    CatalogClient whose HTTP session talks to the in-process API app.
    """
    from fastapi.testclient import TestClient

    from catalog.main import app
    from cli.catalog_client import CatalogClient

    temp_config.data['max_retries'] = 0
    client = CatalogClient(temp_config)
    client.session.close()
    client.session = TestClient(app, base_url=temp_config.get_base_url())
    yield client
    client.close()
