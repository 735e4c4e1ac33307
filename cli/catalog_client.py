"""HTTP client for communicating with the catalog API."""

import time
import uuid
from typing import Any, Dict, List, Optional

import httpx

from common.constants import DEFAULT_SEARCH_LIMIT, ROOT_SENTINEL
from common.logging_config import get_logger
from cli.config import Config
from cli.models import ChildrenResult, RemoteNode

logger = get_logger(__name__)


class CatalogClientError(Exception):
    """Raised when the API answers with a failure envelope."""

    pass


class CatalogClient:
    """HTTP client for the catalog API with retry logic and envelope unwrapping."""

    def __init__(self, config: Config):
        """
        Initialize catalog client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout(),
            headers={'Content-Type': 'application/json'}
        )
        self.request_id = None
        logger.info(f"Initialized CatalogClient [base_url={config.get_base_url()}]")

    def close(self) -> None:
        self.session.close()

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        retry_config = self.config.get_retry_config()
        max_retries = max_retries if max_retries is not None else retry_config['max_retries']
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        if 'headers' not in kwargs:
            kwargs['headers'] = {}
        kwargs['headers']['X-Request-ID'] = self.request_id

        logger.debug(
            f"Making request: {method} {endpoint} [request_id={self.request_id}]"
        )

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                return response

            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue
                logger.error(
                    f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Server may be overloaded.")
        raise ConnectionError("Cannot connect to catalog server. Is it running?")

    def _unwrap(self, response: httpx.Response, default_error: str, require_data: bool = True) -> Dict[str, Any]:
        """
        Return the envelope of a successful response.

        Raises:
            CatalogClientError: success flag is false, data is missing, or
                the body is not JSON
        """
        try:
            envelope = response.json()
        except ValueError:
            raise CatalogClientError(f"{default_error} (status {response.status_code})")

        if not isinstance(envelope, dict):
            raise CatalogClientError(default_error)

        if not envelope.get('success') or (require_data and envelope.get('data') is None):
            raise CatalogClientError(envelope.get('error') or default_error)

        return envelope

    def health(self) -> Dict[str, Any]:
        response = self._request_with_retry('GET', self.config.get_server_url() + '/health')
        return response.json()

    def get_all_nodes(self) -> List[RemoteNode]:
        envelope = self._unwrap(self._request_with_retry('GET', '/nodes'), 'Failed to fetch nodes')
        return [RemoteNode.from_api(item) for item in envelope['data']]

    def get_folder_tree(self) -> List[RemoteNode]:
        envelope = self._unwrap(
            self._request_with_retry('GET', '/folders/tree'),
            'Failed to fetch folder tree'
        )
        return [RemoteNode.from_api(item) for item in envelope['data']]

    def get_node(self, node_id: str) -> RemoteNode:
        envelope = self._unwrap(self._request_with_retry('GET', f'/nodes/{node_id}'), 'Failed to fetch node')
        return RemoteNode.from_api(envelope['data'])

    def get_children(
        self,
        parent_id: Optional[str],
        limit: Optional[int] = None,
        offset: int = 0
    ) -> ChildrenResult:
        """
        Fetch one page of children. A parent_id of None lists the root level.
        """
        limit = limit if limit is not None else self.config.get_page_size()
        node_id = parent_id or ROOT_SENTINEL

        envelope = self._unwrap(
            self._request_with_retry(
                'GET',
                f'/nodes/{node_id}/children',
                params={'limit': limit, 'offset': offset}
            ),
            'Failed to fetch children'
        )
        meta = envelope.get('meta') or {}

        return ChildrenResult(
            nodes=[RemoteNode.from_api(item) for item in envelope['data']],
            total=meta.get('total', 0),
            has_more=meta.get('hasMore', False),
        )

    def search_nodes(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[RemoteNode]:
        envelope = self._unwrap(
            self._request_with_retry('GET', '/search', params={'q': query, 'limit': limit}),
            'Failed to search nodes'
        )
        return [RemoteNode.from_api(item) for item in envelope['data']]

    def create_node(
        self,
        name: str,
        node_type: str,
        parent_id: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None
    ) -> RemoteNode:
        body = {
            'name': name,
            'type': node_type,
            'parentId': parent_id,
            'size': None if size is None else str(size),
            'mimeType': mime_type,
        }
        logger.info(f"Creating {node_type} node: {name}")
        envelope = self._unwrap(self._request_with_retry('POST', '/nodes', json=body), 'Failed to create node')
        return RemoteNode.from_api(envelope['data'])

    def update_node(self, node_id: str, changes: Dict[str, Any]) -> RemoteNode:
        """
        Send a partial update. Keys use API names (name, parentId, size, mimeType, type).
        """
        body = dict(changes)
        if body.get('size') is not None:
            body['size'] = str(body['size'])

        logger.info(f"Updating node {node_id}: fields={sorted(body)}")
        envelope = self._unwrap(
            self._request_with_retry('PUT', f'/nodes/{node_id}', json=body),
            'Failed to update node'
        )
        return RemoteNode.from_api(envelope['data'])

    def delete_node(self, node_id: str) -> None:
        logger.info(f"Deleting node {node_id}")
        self._unwrap(
            self._request_with_retry('DELETE', f'/nodes/{node_id}'),
            'Failed to delete node',
            require_data=False
        )
