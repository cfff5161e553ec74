"""Event-capable document adapter over a BeautifulSoup tree.

BeautifulSoup (XML mode, backed by lxml) owns parsing, traversal and
CSS selection. ``Document`` adds the part a TV shell needs on top: an
event-listener table keyed by target node, and ``dispatch_event()``
which walks target -> ancestors -> document.

Listener identity follows the DOM rule: adding a listener that compares
equal to one already registered for the same (target, event) is a no-op,
and removal drops the first equal listener. Bound methods compare equal
when they wrap the same function and receiver, which is what lets the
event binder detach exactly what it attached.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from bs4 import BeautifulSoup, Tag

from marquee.errors import TemplateError


@dataclass(slots=True)
class Event:
    """A dispatched event.

    Attributes:
        type: Event name (``"select"``, ``"play"``, ...).
        target: The node the event was dispatched on.
        document: The owning document.
        detail: Extra keyword data passed to ``dispatch_event()``.
        current_target: The node whose listeners are running.
    """

    type: str
    target: Any
    document: Document
    detail: dict[str, Any] = field(default_factory=dict)
    current_target: Any = None
    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class Document:
    """A parsed TVML document with DOM-style event listeners.

    ``page`` is set by the page pipeline to the configuration the
    document was built from.
    """

    __slots__ = ("_listeners", "_soup", "_targets", "page")

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup
        self._listeners: dict[int, dict[str, list[Callable[..., Any]]]] = {}
        # Strong refs keep ids in ``_listeners`` from being reused
        self._targets: dict[int, Any] = {}
        self.page: dict[str, Any] | None = None

    @classmethod
    def parse(cls, markup: str) -> Document:
        """Parse XML markup into a document.

        Raises ``TemplateError`` when the markup holds no element.
        """
        soup = BeautifulSoup(markup, "xml")
        if soup.find() is None:
            msg = f"Markup does not contain a document element: {markup[:80]!r}"
            raise TemplateError(msg)
        return cls(soup)

    # -- Tree access --

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    @property
    def document_element(self) -> Tag | None:
        """The top-level element (``<document>`` for TVML templates)."""
        for child in self._soup.contents:
            if isinstance(child, Tag):
                return child
        return None

    def get_elements_by_tag_name(self, name: str) -> list[Tag]:
        return list(self._soup.find_all(name))

    def query_selector_all(self, selector: str) -> list[Tag]:
        """Return every element matching ``selector``.

        Raises ``soupsieve.SelectorSyntaxError`` for malformed selectors.
        """
        return list(self._soup.select(selector))

    def query_selector(self, selector: str) -> Tag | None:
        return self._soup.select_one(selector)

    def create_element(self, name: str, attributes: dict[str, Any] | None = None) -> Tag:
        return self._soup.new_tag(name, attrs={k: str(v) for k, v in (attributes or {}).items()})

    def to_string(self) -> str:
        return str(self._soup)

    # -- Events --

    def add_event_listener(
        self,
        event_type: str,
        listener: Callable[..., Any],
        target: Any = None,
    ) -> None:
        node = self if target is None else target
        self._targets[id(node)] = node
        listeners = self._listeners.setdefault(id(node), {}).setdefault(event_type, [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_event_listener(
        self,
        event_type: str,
        listener: Callable[..., Any],
        target: Any = None,
    ) -> None:
        node = self if target is None else target
        listeners = self._listeners.get(id(node), {}).get(event_type)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def listeners(self, event_type: str, target: Any = None) -> list[Callable[..., Any]]:
        """Listeners registered on one target (the document by default)."""
        node = self if target is None else target
        return list(self._listeners.get(id(node), {}).get(event_type, ()))

    def dispatch_event(self, event_type: str, target: Any = None, **detail: Any) -> Event:
        """Dispatch an event on ``target`` and bubble it up to the document.

        Listeners run synchronously, in order. The default ``select``
        handlers (links, menu items) schedule their work on the running
        event loop, so dispatching ``select`` on a document with those
        handlers attached raises ``RuntimeError`` outside of one.
        """
        node = self if target is None else target
        event = Event(type=event_type, target=node, document=self, detail=detail)
        for current in self._propagation_path(node):
            event.current_target = current
            for listener in self.listeners(event_type, current):
                listener(event)
            if event.propagation_stopped:
                break
        return event

    def _propagation_path(self, node: Any) -> list[Any]:
        if node is self:
            return [self]
        path: list[Any] = [node]
        path.extend(p for p in node.parents if not isinstance(p, BeautifulSoup))
        path.append(self)
        return path

    def __repr__(self) -> str:
        root = self.document_element
        name = root.name if root is not None else None
        return f"<Document root={name!r} page={(self.page or {}).get('name')!r}>"
