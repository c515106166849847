"""
Image Finder Session

Wires the catalog store, scanner and change watcher together for one page
session: an initial processing pass after start-up, then a debounced pass
after every relevant DOM change or navigation. Clicks on injected images
open the enlarged view.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup

from .catalog import CatalogClient, CatalogStore
from .common.config_loader import (
    load_alternate_tables,
    load_page_layouts,
    load_settings,
    load_watch_config,
)
from .matching import MatchResolver
from .models import Catalog, WatchConfig
from .page import (
    CLOSE_BUTTON_CLASS,
    IMAGE_MARKER_CLASS,
    ChangeWatcher,
    DomEventSource,
    ImageOverlay,
    LinkStyle,
    MutationFilter,
    PageScanner,
    RowAugmenter,
)
from .page.dom_utils import has_class

logger = logging.getLogger(__name__)


class ImageFinder:
    """
    One page session of the image finder.

    Usage:
        finder = ImageFinder.from_config(soup)
        await finder.start(event_source)
        ...
        finder.stop()
    """

    def __init__(
        self,
        document: BeautifulSoup,
        store: CatalogStore,
        scanner: PageScanner,
        watch_config: WatchConfig,
        settings: Optional[Dict[str, Any]] = None,
        hide_columns: bool = True,
        overlay: Optional[ImageOverlay] = None
    ):
        self.document = document
        self.store = store
        self.scanner = scanner
        self.watch_config = watch_config
        self.watcher_settings = (settings or {}).get('watcher', {})
        self.hide_columns = hide_columns
        self.overlay = overlay or ImageOverlay(document)

        self.watcher: Optional[ChangeWatcher] = None
        self._initial_pass: Optional[asyncio.TimerHandle] = None
        self.last_augmented = 0

    @classmethod
    def from_config(cls, document: BeautifulSoup, client=None, hide_columns: bool = True) -> "ImageFinder":
        """
        Build a session from config/settings.yaml and config/page_layouts.yaml.

        Args:
            document: Parsed page
            client: Catalog transport (default: CatalogClient for the configured URL)
            hide_columns: Whether to hide the configured table columns
        """
        settings = load_settings()
        if client is None:
            catalog_settings = settings['catalog']
            client = CatalogClient(catalog_settings['url'], timeout=catalog_settings.get('timeout', 30))

        link_style = LinkStyle(**settings['links']) if settings['links'] else None
        scanner = PageScanner(
            document,
            MatchResolver(),
            RowAugmenter(document, link_style),
            load_page_layouts(),
            load_alternate_tables(),
        )
        return cls(document, CatalogStore(client), scanner, load_watch_config(), settings, hide_columns)

    def process_page(self) -> None:
        """
        Run one processing pass.

        Hides columns, then augments rows right away when the catalog is
        resident, or as soon as the (shared) catalog load finishes.
        """
        if self.hide_columns:
            self.scanner.hide_columns()

        if self.store.is_ready:
            self._inject(self.store.catalog)
        else:
            self.store.get_catalog(self._inject)

    def _inject(self, catalog: Catalog) -> None:
        if not catalog:
            logger.info("No catalog data to inject")
            return
        self.last_augmented = self.scanner.scan(catalog)
        logger.debug("Augmented %d rows", self.last_augmented)

    async def run_once(self) -> int:
        """Load the catalog and run a single pass. Returns rows augmented."""
        if self.hide_columns:
            self.scanner.hide_columns()
        catalog = await self.store.load()
        self._inject(catalog)
        return self.last_augmented if catalog else 0

    async def start(self, source: DomEventSource) -> bool:
        """
        Start watching the page.

        Schedules the first pass after the initial delay, routes clicks and
        key presses to the overlay, and attaches the change watcher.

        Returns:
            True if the watched containers were found
        """
        loop = asyncio.get_running_loop()
        self._initial_pass = loop.call_later(
            self.watcher_settings.get('initial_delay', 1.0), self.process_page
        )

        source.add_click_listener(self.on_click)
        source.add_key_listener(self.on_key)

        self.watcher = ChangeWatcher(
            self.process_page,
            MutationFilter(self.watch_config),
            debounce_delay=self.watcher_settings.get('debounce_delay', 0.45),
            navigation_delay=self.watcher_settings.get('navigation_delay', 0.7),
        )
        found = await self.watcher.attach(
            source,
            self.document,
            max_attempts=self.watcher_settings.get('discovery_max_attempts', 20),
            interval=self.watcher_settings.get('discovery_interval', 0.7),
        )
        logger.info("Image finder setup complete")
        return found

    def on_click(self, target) -> bool:
        """
        Handle a click on the page.

        A click on an injected image opens the enlarged view; a click on the
        overlay backdrop or its close button closes it.

        Returns:
            True if the click opened or closed the overlay
        """
        if has_class(target, IMAGE_MARKER_CLASS):
            self.overlay.open_for(target)
            return True

        current = self.overlay.current()
        if current is not None and (target is current or has_class(target, CLOSE_BUTTON_CLASS)):
            return self.overlay.close()
        return False

    def on_key(self, key: str) -> bool:
        """Escape closes the enlarged view."""
        if key == 'Escape':
            return self.overlay.close()
        return False

    def stop(self) -> None:
        """Cancel pending passes."""
        if self._initial_pass is not None:
            self._initial_pass.cancel()
            self._initial_pass = None
        if self.watcher is not None:
            self.watcher.cancel()
