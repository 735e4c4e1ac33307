"""Unit tests for CatalogClient."""

import json

import httpx
import pytest

from cli.catalog_client import CatalogClient, CatalogClientError

NODE = {
    'id': 'n1',
    'name': 'report.pdf',
    'type': 'FILE',
    'parentId': 'f1',
    'size': '9007199254740993',
    'mimeType': 'application/pdf',
    'createdAt': '2024-01-01T00:00:00+00:00',
    'updatedAt': '2024-01-01T00:00:00+00:00',
}

FOLDER = {
    'id': 'f1',
    'name': 'Documents',
    'type': 'FOLDER',
    'parentId': None,
    'size': None,
    'mimeType': None,
    'createdAt': '2024-01-01T00:00:00+00:00',
    'updatedAt': '2024-01-01T00:00:00+00:00',
}


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def mock_transport_success(requests_seen):
    """Mock transport that answers like the catalog API."""
    def handler(request):
        requests_seen.append(request)
        path = request.url.path

        if path == '/api/v1/nodes' and request.method == 'GET':
            return httpx.Response(200, json={'success': True, 'data': [FOLDER, NODE]})
        elif path == '/api/v1/folders/tree':
            return httpx.Response(200, json={'success': True, 'data': [{**FOLDER, 'children': []}]})
        elif path == '/api/v1/nodes/n1' and request.method == 'GET':
            return httpx.Response(200, json={'success': True, 'data': NODE})
        elif path.endswith('/children'):
            return httpx.Response(200, json={
                'success': True,
                'data': [NODE],
                'meta': {'total': 3, 'limit': 1, 'offset': 0, 'hasMore': True},
            })
        elif path == '/api/v1/search':
            return httpx.Response(200, json={
                'success': True,
                'data': [NODE],
                'meta': {'query': request.url.params['q'], 'count': 1},
            })
        elif path == '/api/v1/nodes' and request.method == 'POST':
            body = json.loads(request.content)
            return httpx.Response(200, json={'success': True, 'data': {**NODE, **body, 'id': 'new'}})
        elif path == '/api/v1/nodes/n1' and request.method == 'PUT':
            body = json.loads(request.content)
            return httpx.Response(200, json={'success': True, 'data': {**NODE, **body}})
        elif path == '/api/v1/nodes/n1' and request.method == 'DELETE':
            return httpx.Response(200, json={'success': True, 'message': 'Node deleted successfully'})
        elif path == '/health':
            return httpx.Response(200, json={'status': 'ok'})

        return httpx.Response(200, json={'success': False, 'error': 'Node not found'})

    return httpx.MockTransport(handler)


@pytest.fixture
def client_with_mock(temp_config, mock_transport_success):
    """Create CatalogClient with mocked HTTP transport."""
    client = CatalogClient(temp_config)
    client.session = httpx.Client(
        transport=mock_transport_success,
        base_url=temp_config.get_base_url()
    )
    return client


def test_get_all_nodes(client_with_mock):
    nodes = client_with_mock.get_all_nodes()

    assert [node.name for node in nodes] == ['Documents', 'report.pdf']
    assert nodes[0].is_folder
    assert nodes[0].size is None


def test_size_string_is_parsed_exactly(client_with_mock):
    node = client_with_mock.get_node('n1')

    assert node.size == 9007199254740993
    assert node.parent_id == 'f1'
    assert node.mime_type == 'application/pdf'


def test_get_folder_tree(client_with_mock):
    tree = client_with_mock.get_folder_tree()

    assert tree[0].name == 'Documents'
    assert tree[0].children == []


def test_get_children_uses_root_sentinel(client_with_mock, requests_seen):
    result = client_with_mock.get_children(None, limit=1, offset=0)

    request = requests_seen[-1]
    assert request.url.path == '/api/v1/nodes/root/children'
    assert request.url.params['limit'] == '1'
    assert request.url.params['offset'] == '0'
    assert result.total == 3
    assert result.has_more is True
    assert [node.id for node in result.nodes] == ['n1']


def test_get_children_of_folder(client_with_mock, requests_seen):
    client_with_mock.get_children('f1')

    assert requests_seen[-1].url.path == '/api/v1/nodes/f1/children'
    assert requests_seen[-1].url.params['limit'] == '100'


def test_search_nodes(client_with_mock, requests_seen):
    results = client_with_mock.search_nodes('rep')

    assert [node.id for node in results] == ['n1']
    assert requests_seen[-1].url.params['q'] == 'rep'


def test_create_node_sends_size_as_string(client_with_mock, requests_seen):
    node = client_with_mock.create_node('big.bin', 'FILE', parent_id='f1', size=2 ** 60)

    body = json.loads(requests_seen[-1].content)
    assert body == {
        'name': 'big.bin',
        'type': 'FILE',
        'parentId': 'f1',
        'size': str(2 ** 60),
        'mimeType': None,
    }
    assert node.size == 2 ** 60


def test_update_node(client_with_mock, requests_seen):
    node = client_with_mock.update_node('n1', {'name': 'renamed.pdf'})

    assert json.loads(requests_seen[-1].content) == {'name': 'renamed.pdf'}
    assert node.name == 'renamed.pdf'


def test_delete_node(client_with_mock, requests_seen):
    client_with_mock.delete_node('n1')

    assert requests_seen[-1].method == 'DELETE'


def test_failure_envelope_raises(client_with_mock):
    with pytest.raises(CatalogClientError, match='Node not found'):
        client_with_mock.get_node('missing')


def test_request_id_header_is_sent(client_with_mock, requests_seen):
    client_with_mock.get_all_nodes()

    assert requests_seen[-1].headers['X-Request-ID'] == client_with_mock.request_id


def test_health_uses_server_root(client_with_mock, requests_seen):
    assert client_with_mock.health() == {'status': 'ok'}
    assert requests_seen[-1].url.path == '/health'


def test_non_json_body_raises(temp_config):
    client = CatalogClient(temp_config)
    client.session = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text='<html>')),
        base_url=temp_config.get_base_url()
    )

    with pytest.raises(CatalogClientError):
        client.get_all_nodes()


def test_retries_server_errors(temp_config, monkeypatch):
    monkeypatch.setattr('cli.catalog_client.time.sleep', lambda seconds: None)
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503)
        return httpx.Response(200, json={'success': True, 'data': []})

    client = CatalogClient(temp_config)
    client.session = httpx.Client(transport=httpx.MockTransport(handler), base_url=temp_config.get_base_url())

    assert client.get_all_nodes() == []
    assert len(calls) == 3


def test_connection_failure_raises_connection_error(temp_config, monkeypatch):
    monkeypatch.setattr('cli.catalog_client.time.sleep', lambda seconds: None)

    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = CatalogClient(temp_config)
    client.session = httpx.Client(transport=httpx.MockTransport(handler), base_url=temp_config.get_base_url())

    with pytest.raises(ConnectionError, match='Cannot connect'):
        client.get_all_nodes()


def test_against_live_app(live_client):
    folder = live_client.create_node('Documents', 'FOLDER')
    live_client.create_node('big.bin', 'FILE', parent_id=folder.id, size=2 ** 62)

    result = live_client.get_children(folder.id)

    assert [node.name for node in result.nodes] == ['big.bin']
    assert result.nodes[0].size == 2 ** 62
    assert live_client.get_folder_tree()[0].name == 'Documents'
    assert live_client.health()['status'] == 'ok'
