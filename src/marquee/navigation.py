"""In-memory navigation stack.

Holds the pushed documents plus at most one modal. ``navigate()`` is
safe to call from synchronous event listeners: it schedules the page
load and returns the task.

Documents leaving the stack (popped, replaced, dismissed) are passed to
``on_discard`` so their listeners can be detached.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from marquee.errors import ConfigurationError, PageRejected, TransportError

if TYPE_CHECKING:
    from marquee._internal.tasks import TaskSet
    from marquee.dom import Document
    from marquee.pages.registry import PageFactory
    from marquee.parser import Parser

logger = logging.getLogger("marquee.navigation")

LOADER_TEMPLATE = (
    "<document><loadingTemplate><activityIndicator>"
    "<title>{{ message }}</title>"
    "</activityIndicator></loadingTemplate></document>"
)

ERROR_TEMPLATE = (
    "<document><alertTemplate>"
    "<title>{{ title }}</title>"
    "<description>{{ description }}</description>"
    "</alertTemplate></document>"
)


class Navigation:
    """Navigation stack and placeholder documents."""

    __slots__ = ("_error_message", "_lookup", "_modal", "_parser", "_stack", "_tasks", "on_discard")

    def __init__(
        self,
        parser: Parser,
        tasks: TaskSet,
        lookup: Callable[[str], PageFactory | None],
        *,
        error_message: str = "",
    ) -> None:
        self._parser = parser
        self._tasks = tasks
        self._lookup = lookup
        self._error_message = error_message
        self._stack: list[Document] = []
        self._modal: Document | None = None
        self.on_discard: Callable[[Document], None] | None = None

    @property
    def stack(self) -> tuple[Document, ...]:
        return tuple(self._stack)

    @property
    def current(self) -> Document | None:
        return self._stack[-1] if self._stack else None

    @property
    def modal(self) -> Document | None:
        return self._modal

    # -- Page navigation --

    def navigate(
        self,
        page_name: str,
        options: Mapping[str, Any] | None = None,
        replace: bool = False,
    ) -> asyncio.Task[Document | None]:
        """Schedule loading ``page_name`` and showing its document."""
        logger.debug("navigating... page=%s replace=%s", page_name, replace)
        return self._tasks.spawn(self.load(page_name, options, replace))

    async def load(
        self,
        page_name: str,
        options: Mapping[str, Any] | None = None,
        replace: bool = False,
    ) -> Document | None:
        """Resolve a named page and push (or replace) it.

        Failures are shown as an error modal instead of propagating.
        """
        page = self._lookup(page_name)
        try:
            if page is None:
                msg = f"No page registered under {page_name!r}"
                raise ConfigurationError(msg)
            document = await page({**(options or {}), "replace": replace})
        except Exception as exc:
            logger.warning("navigation to %s failed: %s", page_name, exc)
            self.present_modal(self.get_error_doc(exc))
            return None

        if document is None:
            # suppressed render, the page handled presentation itself
            return None
        if replace:
            self.replace_document(document)
        else:
            self.push_document(document)
        return document

    # -- Stack operations --

    def push_document(self, document: Document) -> None:
        self._stack.append(document)

    def replace_document(self, document: Document) -> None:
        if self._stack:
            self._discard(self._stack.pop())
        self._stack.append(document)

    def pop_document(self) -> Document | None:
        if not self._stack:
            return None
        document = self._stack.pop()
        self._discard(document)
        return document

    def clear(self) -> None:
        while self._stack:
            self.pop_document()
        self.dismiss_modal()

    def present_modal(self, document: Document) -> None:
        self.dismiss_modal()
        self._modal = document

    def dismiss_modal(self) -> None:
        if self._modal is None:
            return
        logger.debug("dismissing modal...")
        modal, self._modal = self._modal, None
        self._discard(modal)

    def _discard(self, document: Document) -> None:
        if self.on_discard is not None:
            self.on_discard(document)

    # -- Placeholder documents --

    def get_loader_doc(self, message: str = "") -> Document:
        return self._parser.dom(LOADER_TEMPLATE, {"message": message})

    def get_error_doc(self, error: Any = None) -> Document:
        title, description = _describe(error, self._error_message)
        return self._parser.dom(ERROR_TEMPLATE, {"title": title, "description": description})


def _describe(error: Any, fallback: str) -> tuple[str, str]:
    """Turn a failure payload into an alert title and description."""
    if isinstance(error, TransportError):
        payload = error.payload
        if isinstance(payload, Mapping) and payload.get("message"):
            return str(error.status or "Error"), str(payload["message"])
        return str(error.status or "Error"), fallback or str(error)
    if isinstance(error, PageRejected):
        error = error.reason
    if isinstance(error, Mapping):
        return str(error.get("title", "Error")), str(error.get("description", fallback))
    if error is None or error == "":
        return "Error", fallback
    return "Error", str(error)
