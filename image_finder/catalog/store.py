"""
Catalog Store

Session-scoped holder of the parsed catalog with a single-flight loader:
however many callers ask while a load is in flight, only one fetch runs and
every caller is resolved, in registration order, with its result.

Lifecycle: UNINITIALIZED -> LOADING -> READY | FAILED.
A FAILED store hands out an empty catalog and starts a new fetch on the
next request.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional

from ..exceptions import CatalogError
from ..models import Catalog
from .parser import CatalogParser

logger = logging.getLogger(__name__)


class LoadState(Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class CatalogStore:
    """
    Loads the catalog once per session and shares it.

    Usage:
        store = CatalogStore(CatalogClient(url))

        # Awaitable form
        catalog = await store.load()

        # Callback form (must be called from the running event loop)
        store.get_catalog(lambda catalog: scanner.scan(catalog))
    """

    def __init__(self, client, parser: Optional[CatalogParser] = None):
        """
        Initialize the store.

        Args:
            client: Transport exposing fetch_text() (e.g., CatalogClient)
            parser: Catalog parser (default: CatalogParser())
        """
        self.client = client
        self.parser = parser or CatalogParser()

        self._state = LoadState.UNINITIALIZED
        self._catalog: Optional[Catalog] = None
        self._waiters: List[asyncio.Future] = []
        self.fetch_count = 0

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is LoadState.READY

    @property
    def catalog(self) -> Optional[Catalog]:
        """The resident catalog, or None until a load succeeds."""
        return self._catalog

    async def load(self) -> Catalog:
        """
        Return the catalog, fetching it if needed.

        Concurrent calls during a fetch wait for that fetch instead of
        starting another one.

        Returns:
            The parsed catalog, or an empty catalog if the load failed
        """
        if self._state is LoadState.READY:
            return self._catalog

        loop = asyncio.get_running_loop()

        if self._state is LoadState.LOADING:
            waiter = loop.create_future()
            self._waiters.append(waiter)
            return await waiter

        self._state = LoadState.LOADING
        self.fetch_count += 1

        try:
            text = await loop.run_in_executor(None, self.client.fetch_text)
            catalog = self.parser.parse(text)
        except asyncio.CancelledError:
            # Queued waiters get an empty catalog; the cancellation propagates
            logger.warning("Catalog load cancelled")
            self._state = LoadState.FAILED
            self._resolve_waiters(Catalog.empty())
            raise
        except CatalogError as e:
            logger.error("Error loading catalog (%s): %s", e.code, e.message)
            self._state = LoadState.FAILED
            catalog = Catalog.empty()
        except Exception:
            logger.exception("Unexpected error loading catalog")
            self._state = LoadState.FAILED
            catalog = Catalog.empty()
        else:
            self._catalog = catalog
            self._state = LoadState.READY

        self._resolve_waiters(catalog)
        return catalog

    def get_catalog(self, on_ready: Callable[[Catalog], None]) -> None:
        """
        Callback form of load().

        Invokes on_ready immediately when the catalog is resident, otherwise
        once the (possibly shared) load completes.

        Args:
            on_ready: Called exactly once with the catalog
        """
        if self._state is LoadState.READY:
            on_ready(self._catalog)
            return

        task = asyncio.ensure_future(self.load())
        task.add_done_callback(lambda done: self._deliver(done, on_ready))

    @staticmethod
    def _deliver(task: asyncio.Future, on_ready: Callable[[Catalog], None]) -> None:
        if task.cancelled():
            return
        try:
            on_ready(task.result())
        except Exception:
            logger.exception("Catalog callback failed")

    def _resolve_waiters(self, catalog: Catalog) -> None:
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(catalog)
