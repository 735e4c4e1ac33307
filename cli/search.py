"""Debounced name search for interactive clients."""

import threading
from typing import List, Optional

from common.constants import DEFAULT_SEARCH_LIMIT
from common.logging_config import get_logger
from cli.catalog_client import CatalogClient
from cli.models import RemoteNode
from cli.state import Observable

logger = get_logger(__name__)


class SearchState(Observable):
    """
    Search results that follow a query typed one keystroke at a time.

    ``set_query`` waits for a quiet period before asking the server; a new
    keystroke cancels the pending request. A blank query clears the results
    at once without a network call. Results of a superseded query are
    discarded even if they arrive late.
    """

    def __init__(
        self,
        client: CatalogClient,
        delay: Optional[float] = None,
        limit: int = DEFAULT_SEARCH_LIMIT
    ):
        super().__init__()
        self.client = client
        self.delay = delay if delay is not None else client.config.get_search_debounce()
        self.limit = limit

        self.query = ''
        self.results: List[RemoteNode] = []
        self.is_searching = False
        self.error: Optional[str] = None

        self._lock = threading.RLock()
        self._timer: Optional[threading.Timer] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        timer = self._timer
        return timer is not None and timer.is_alive()

    def set_query(self, text: str) -> None:
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            generation = self._generation
            self._set('query', text)

            if not text.strip():
                self._set('results', [])
                self._set('is_searching', False)
                return

            self._timer = threading.Timer(self.delay, self._run, args=(text, generation))
            self._timer.daemon = True
            self._timer.start()

    def search_now(self, text: str) -> List[RemoteNode]:
        """
        Run a search immediately in the calling thread, superseding any pending one.
        """
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            generation = self._generation
            self._set('query', text)

        if not text.strip():
            self._set('results', [])
            return []

        self._run(text, generation)
        return self.results

    def clear(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            self._set('query', '')
            self._set('results', [])
            self._set('is_searching', False)
            self._set('error', None)

    def _run(self, text: str, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._set('is_searching', True)
            self._set('error', None)

        results: List[RemoteNode] = []
        error: Optional[str] = None
        try:
            results = self.client.search_nodes(text, limit=self.limit)
        except Exception as e:
            error = str(e) or 'Search failed'
            logger.error(f"Search error: {e}")

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding results of superseded query: {text}")
                return
            self._set('results', results)
            self._set('error', error)
            self._set('is_searching', False)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
