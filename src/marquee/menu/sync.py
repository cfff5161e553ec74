"""Keeps menu item slots in sync with their backing pages.

Selecting a ``<menuItem>`` loads its page at most once: a loading
placeholder is shown right away, then the resolved document (or an
error placeholder) replaces it. Later selections reuse the loaded
document unless the element sets ``reloadOnSelect``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from bs4 import Tag

if TYPE_CHECKING:
    from marquee._internal.tasks import TaskSet
    from marquee.dom import Document, Event
    from marquee.menu.bar import Menu, MenuItem
    from marquee.navigation import Navigation

logger = logging.getLogger("marquee.menu")


class MenuSync:
    __slots__ = ("_menu", "_navigation", "_tasks")

    def __init__(self, menu: Menu, navigation: Navigation, tasks: TaskSet) -> None:
        self._menu = menu
        self._navigation = navigation
        self._tasks = tasks

    def on_menu_item_select(self, event: Event) -> asyncio.Task[Any] | None:
        """``select`` listener. Schedules a load when the item needs one."""
        element = event.target
        if not isinstance(element, Tag) or (element.name or "").lower() != "menuitem":
            return None

        item = self._menu.item(element.get("id"))
        if item is None or item.page is None:
            return None
        # already loaded and no reload requested
        if item.page_doc is not None and not item.reload_on_select:
            return None

        self._menu.set_document(
            self._navigation.get_loader_doc(self._menu.loading_message),
            item.id,
        )
        return self._tasks.spawn(self.load(item))

    async def load(self, item: MenuItem) -> Document | None:
        """Resolve an item's page into its slot.

        The loading placeholder is already in the slot when this runs.

        Failures never propagate: they end up as an error placeholder.
        A page that resolves to ``None`` is shown as an error too.
        """
        error: Any = None
        document: Document | None = None
        try:
            document = await item.page({})
        except Exception as exc:
            logger.debug("menu item %s failed to load: %r", item.id, exc)
            error = exc

        if document is not None:
            item.page_doc = document
            self._menu.set_document(document, item.id)
        else:
            self._menu.set_document(self._navigation.get_error_doc(error), item.id)

        self._navigation.dismiss_modal()
        return document
