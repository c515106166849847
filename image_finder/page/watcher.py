"""
Change Watcher

Re-runs the page scan when the single-page app swaps table content.

States:
    IDLE            - nothing scheduled
    PENDING_RESCAN  - a relevant mutation or navigation arrived; a timer runs

Every relevant event while PENDING_RESCAN restarts the timer instead of
adding a scan, so a burst of mutations produces exactly one scan once the
page has been quiet for the debounce delay.

DOM events come from a DomEventSource (a browser bridge, or a test double);
the watcher itself never touches a browser API.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Protocol

import soupsieve
from bs4 import BeautifulSoup, Tag

from ..models import WatchConfig
from .augmenter import MARKER_CLASSES
from .dom_utils import has_class

logger = logging.getLogger(__name__)

NAVIGATION_EVENTS = frozenset({'hashchange', 'pushstate', 'replacestate', 'popstate'})
IGNORED_ATTRIBUTES = frozenset({'style'})


@dataclass
class MutationRecord:
    """One DOM change, shaped like the browser's MutationRecord."""
    type: str                                   # "childList" or "attributes"
    target: Any
    added_nodes: List[Any] = field(default_factory=list)
    removed_nodes: List[Any] = field(default_factory=list)
    attribute_name: Optional[str] = None


class DomEventSource(Protocol):
    """Delivers DOM mutations, navigation, clicks and key presses."""

    def observe(self, target: Tag, callback: Callable[[List[MutationRecord]], Any]) -> None:
        ...

    def add_navigation_listener(self, callback: Callable[[str], Any]) -> None:
        ...

    def add_click_listener(self, callback: Callable[[Tag], Any]) -> None:
        ...

    def add_key_listener(self, callback: Callable[[str], Any]) -> None:
        ...


class WatcherState(Enum):
    IDLE = "idle"
    PENDING_RESCAN = "pending_rescan"


def _is_marker(node) -> bool:
    return any(has_class(node, marker) for marker in MARKER_CLASSES)


def _is_element(node) -> bool:
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def _inside_marker(node) -> bool:
    while _is_element(node):
        if _is_marker(node):
            return True
        node = node.parent
    return False


class MutationFilter:
    """
    Decides whether a DOM mutation can change the augmented tables.

    Relevant:
    - childList changes inside a watched container (by id or class)
    - added nodes that are, or contain, product tables or rows
    - attribute changes inside watched tables, on highlighted cells,
      on a tracked attribute, or a title that marks a replaced barcode

    Changes made by the augmenter itself (marker images and links) and
    inline style writes are never relevant.
    """

    def __init__(self, config: WatchConfig):
        self.config = config

    def is_relevant(self, record: MutationRecord) -> bool:
        if self._is_own_write(record):
            return False

        if record.type == 'childList':
            return self._is_relevant_child_list(record)
        if record.type == 'attributes':
            return self._is_relevant_attribute(record)
        return False

    @staticmethod
    def _is_own_write(record: MutationRecord) -> bool:
        if _inside_marker(record.target):
            return True
        return any(_is_marker(node) for node in record.added_nodes + record.removed_nodes)

    def _is_relevant_child_list(self, record: MutationRecord) -> bool:
        if self.in_container(record.target):
            return True

        for node in record.added_nodes:
            if not isinstance(node, Tag):
                continue
            if self._matches(node, self.config.relevant_node_selector):
                return True
            if self.config.relevant_descendant_selector and \
                    node.select_one(self.config.relevant_descendant_selector) is not None:
                return True
        return False

    def _is_relevant_attribute(self, record: MutationRecord) -> bool:
        target = record.target
        name = record.attribute_name or ''
        if name in IGNORED_ATTRIBUTES or not isinstance(target, Tag):
            return False

        if self._closest(target, self.config.watched_table_selector) is not None:
            return True
        if any(has_class(target, highlight) for highlight in self.config.highlight_classes):
            return True
        if name == 'title':
            title = target.get('title') or ''
            if any(marker in title for marker in self.config.title_markers):
                return True
        return name in self.config.tracked_attributes

    def in_container(self, node) -> bool:
        """True if node is, or is inside, a watched container."""
        while _is_element(node):
            if node.get('id') in self.config.container_ids:
                return True
            if any(has_class(node, cls) for cls in self.config.container_classes):
                return True
            node = node.parent
        return False

    @staticmethod
    def _matches(node: Tag, selector: str) -> bool:
        if not selector:
            return False
        return soupsieve.match(selector, node)

    def _closest(self, node, selector: str) -> Optional[Tag]:
        if not selector:
            return None
        while _is_element(node):
            if self._matches(node, selector):
                return node
            node = node.parent
        return None


class ChangeWatcher:
    """
    Debounced rescan trigger.

    Usage:
        watcher = ChangeWatcher(finder.process_page, MutationFilter(config))
        found = await watcher.attach(event_source, soup)

        # The event source then calls:
        watcher.on_mutations(records)
        watcher.on_navigation("pushstate")
    """

    def __init__(
        self,
        rescan: Callable[[], Any],
        mutation_filter: MutationFilter,
        debounce_delay: float = 0.45,
        navigation_delay: float = 0.7,
        loop: Optional[asyncio.AbstractEventLoop] = None
    ):
        """
        Initialize the watcher.

        Args:
            rescan: Called once per quiet period
            mutation_filter: Relevance test for mutation records
            debounce_delay: Quiet period after mutations, in seconds
            navigation_delay: Delay after a navigation event, in seconds
            loop: Event loop for timers (default: the running loop)
        """
        self.rescan = rescan
        self.mutation_filter = mutation_filter
        self.debounce_delay = debounce_delay
        self.navigation_delay = navigation_delay
        self._loop = loop

        self._state = WatcherState.IDLE
        self._timer: Optional[asyncio.TimerHandle] = None
        self._observed: List[Tag] = []
        self._navigation_registered = False
        self.scan_count = 0

    @property
    def state(self) -> WatcherState:
        return self._state

    def on_mutations(self, records: Iterable[MutationRecord]) -> bool:
        """
        Handle a batch of mutation records.

        Returns:
            True if the batch was relevant and (re)started the timer
        """
        if not any(self.mutation_filter.is_relevant(record) for record in records):
            return False
        self._schedule(self.debounce_delay)
        return True

    def on_navigation(self, kind: str) -> bool:
        """Handle a hash or history navigation event."""
        if kind not in NAVIGATION_EVENTS:
            return False
        logger.info("Navigation (%s), re-processing", kind)
        self._schedule(self.navigation_delay)
        return True

    def cancel(self) -> None:
        """Drop the pending rescan, if any."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._state = WatcherState.IDLE

    def _schedule(self, delay: float) -> None:
        loop = self._loop or asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(delay, self._fire)
        self._state = WatcherState.PENDING_RESCAN

    def _fire(self) -> None:
        self._timer = None
        self._state = WatcherState.IDLE
        self.scan_count += 1
        try:
            self.rescan()
        except Exception:
            logger.exception("Rescan failed")

    async def attach(
        self,
        source: DomEventSource,
        document,
        max_attempts: int = 20,
        interval: float = 0.7
    ) -> bool:
        """
        Subscribe to the page and wait for the product containers.

        The containers may be rendered after start-up, so discovery retries
        up to max_attempts times, interval seconds apart. Mutations are
        observed from the first attempt on.

        Args:
            source: Event source to subscribe to
            document: Parsed page
            max_attempts: Number of discovery attempts
            interval: Seconds between attempts

        Returns:
            True if a container was found, False after the last attempt
        """
        if not self._navigation_registered:
            source.add_navigation_listener(self.on_navigation)
            self._navigation_registered = True

        for attempt in range(1, max_attempts + 1):
            root = self.locate_observer_root(document)
            if root is not None and not any(root is observed for observed in self._observed):
                source.observe(root, self.on_mutations)
                self._observed.append(root)

            if self.containers_present(document):
                logger.debug("Watch containers found after %d attempt(s)", attempt)
                return True

            if attempt < max_attempts:
                await asyncio.sleep(interval)

        logger.warning(
            "None of %s found after %d attempts",
            ", ".join(f"#{cid}" for cid in self.mutation_filter.config.container_ids),
            max_attempts,
        )
        return False

    def locate_observer_root(self, document) -> Optional[Tag]:
        """First configured observer root present in the document, else the body."""
        for selector in self.mutation_filter.config.observer_roots:
            root = document.select_one(selector)
            if root is not None:
                return root
        return document.body

    def containers_present(self, document) -> bool:
        return any(
            document.find(id=container_id) is not None
            for container_id in self.mutation_filter.config.container_ids
        )
