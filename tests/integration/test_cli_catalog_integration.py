"""Integration tests for CLI-catalog communication over SQLite storage."""

import pytest
from fastapi.testclient import TestClient

from catalog.main import app
from catalog.repositories.node_repository import NodeRepository
from catalog.service_locator import set_catalog_service
from catalog.services.catalog_service import CatalogService
from cli.catalog_client import CatalogClient, CatalogClientError
from cli.commands import handle_cd, handle_ls, handle_mkdir, handle_rm, handle_touch
from cli.models import ChangeDirCommand, ListCommand, MakeDirCommand, RemoveCommand, TouchCommand
from cli.state import CatalogState


def make_client(temp_config, **policies):
    """CatalogClient talking to the app over a SQLite-backed service."""
    set_catalog_service(CatalogService(repository=NodeRepository(), **policies))
    temp_config.data['max_retries'] = 0
    client = CatalogClient(temp_config)
    client.session.close()
    client.session = TestClient(app, base_url=temp_config.get_base_url())
    return client


@pytest.fixture
def catalog_api(test_db, temp_config):
    client = make_client(temp_config, cascade_delete=False, validate_parent_on_update=False, strict_tree=False)
    yield client
    client.close()
    set_catalog_service(None)


@pytest.fixture
def cascading_api(test_db, temp_config):
    client = make_client(temp_config, cascade_delete=True, validate_parent_on_update=True, strict_tree=False)
    yield client
    client.close()
    set_catalog_service(None)


def test_browse_session(catalog_api):
    state = CatalogState(catalog_api, page_size=50)
    state.select_node(None)

    handle_mkdir(MakeDirCommand(name='Documents'), state)
    handle_cd(ChangeDirCommand(target='Documents'), state)
    handle_touch(TouchCommand(name='report.pdf', size=524288, mime_type='application/pdf'), state)

    listing = handle_ls(ListCommand(), state)
    assert 'report.pdf  (512.00 KiB, application/pdf)' in listing

    results = catalog_api.search_nodes('REPORT')
    assert [node.name for node in results] == ['report.pdf']
    assert results[0].size == 524288


def test_large_sizes_survive_storage(catalog_api):
    node = catalog_api.create_node('huge.img', 'FILE', size=2 ** 63 - 1)

    assert catalog_api.get_node(node.id).size == 2 ** 63 - 1


def test_delete_without_cascade_hides_subtree(catalog_api):
    docs = catalog_api.create_node('Documents', 'FOLDER')
    work = catalog_api.create_node('Work', 'FOLDER', parent_id=docs.id)

    catalog_api.delete_node(docs.id)

    assert catalog_api.get_folder_tree() == []
    assert catalog_api.get_node(work.id).parent_id == docs.id


def test_cascade_delete(cascading_api):
    state = CatalogState(cascading_api, page_size=50)
    state.select_node(None)
    handle_mkdir(MakeDirCommand(name='Documents'), state)
    handle_cd(ChangeDirCommand(target='Documents'), state)
    handle_touch(TouchCommand(name='a.txt'), state)
    handle_cd(ChangeDirCommand(target='/'), state)

    assert handle_rm(RemoveCommand(target='Documents'), state) == 'Deleted Documents'
    assert cascading_api.get_all_nodes() == []


def test_move_into_own_subtree_is_rejected(cascading_api):
    a = cascading_api.create_node('A', 'FOLDER')
    b = cascading_api.create_node('B', 'FOLDER', parent_id=a.id)

    with pytest.raises(CatalogClientError, match='own subtree'):
        cascading_api.update_node(a.id, {'parentId': b.id})

    assert cascading_api.get_node(a.id).parent_id is None
