"""Document-level default handlers.

Every prepared document gets these ``select`` listeners regardless of
its page configuration:

- link navigation — ``data-href-page="details"`` with optional
  ``data-href-page-options='{"id": 42}'`` and ``data-href-page-replace="true"``
- modal dismissal — ``data-alert-dissmiss="close"`` on a button
- menu item loading — see ``marquee.menu.sync``

``add_all()``/``remove_all()`` (de)register these first, then the
configuration's own ``events``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from bs4 import Tag

from marquee._internal.merge import merge
from marquee.dom import Document
from marquee.handlers.binder import ATTACH, DETACH, BindMode, bind

if TYPE_CHECKING:
    from marquee.dom import Event
    from marquee.menu.sync import MenuSync
    from marquee.navigation import Navigation

logger = logging.getLogger("marquee.handler")

# element level attributes used for links to other pages
HREF_ATTRIBUTE = "data-href-page"
HREF_OPTIONS_ATTRIBUTE = "data-href-page-options"
HREF_PAGE_REPLACE_ATTRIBUTE = "data-href-page-replace"
MODAL_CLOSE_BTN_ATTRIBUTE = "data-alert-dissmiss"


class Handlers:
    """Default handler table plus the combined attach/detach entry points.

    The table maps event name -> handler name -> callable. Extra
    defaults can be merged in with ``set_options(handlers=...)``;
    existing entries are kept.

    Link and menu item handlers schedule navigation as tasks, so they need
    a running event loop when a ``select`` is dispatched.
    """

    __slots__ = ("_navigation", "_table")

    def __init__(self, navigation: Navigation, menu_sync: MenuSync | None = None) -> None:
        self._navigation = navigation
        select: dict[str, Callable[..., Any]] = {
            "on_link_click": self.on_link_click,
            "on_modal_close_btn_click": self.on_modal_close_btn_click,
        }
        if menu_sync is not None:
            select["on_menu_item_select"] = menu_sync.on_menu_item_select
        self._table: dict[str, dict[str, Callable[..., Any]]] = {"select": select}

    @property
    def table(self) -> Mapping[str, Mapping[str, Callable[..., Any]]]:
        return self._table

    def set_options(self, handlers: Mapping[str, Mapping[str, Callable[..., Any]]] | None = None) -> None:
        logger.debug("setting handler options... %r", handlers)
        self._table = merge(self._table, handlers)

    # -- Default listeners --

    def on_link_click(self, event: Event) -> None:
        """Navigate to the page named by the target's ``data-href-page``."""
        element = event.target
        if not isinstance(element, Tag):
            return
        page = element.get(HREF_ATTRIBUTE)
        if not page:
            return
        replace = element.get(HREF_PAGE_REPLACE_ATTRIBUTE) == "true"

        attr = element.get(HREF_OPTIONS_ATTRIBUTE) or "{}"
        try:
            options = json.loads(attr)
        except json.JSONDecodeError:
            logger.warning(
                "Invalid value for the page options (%s=%s) in the template.",
                HREF_OPTIONS_ATTRIBUTE,
                attr,
            )
            options = {}
        if not isinstance(options, dict):
            logger.warning("Page options must be a JSON object (%s=%s).", HREF_OPTIONS_ATTRIBUTE, attr)
            options = {}

        self._navigation.navigate(page, options, replace)

    def on_modal_close_btn_click(self, event: Event) -> None:
        element = event.target
        if isinstance(element, Tag) and element.get(MODAL_CLOSE_BTN_ATTRIBUTE):
            logger.debug("close button clicked within the modal, dismissing modal...")
            self._navigation.dismiss_modal()

    def set_default_handlers(self, document: Any, mode: BindMode = ATTACH) -> None:
        if not isinstance(document, Document):
            return
        for event_name, callbacks in self._table.items():
            for callback in callbacks.values():
                if not callable(callback):
                    continue
                if mode == ATTACH:
                    document.add_event_listener(event_name, callback)
                else:
                    document.remove_event_listener(event_name, callback)

    # -- Combined --

    def add_all(self, document: Any, config: Mapping[str, Any] | None) -> None:
        """Attach default handlers, then the configuration's events."""
        self.set_default_handlers(document, ATTACH)
        bind(document, config, ATTACH)

    def remove_all(self, document: Any, config: Mapping[str, Any] | None) -> None:
        """Detach default handlers, then the configuration's events."""
        self.set_default_handlers(document, DETACH)
        bind(document, config, DETACH)
