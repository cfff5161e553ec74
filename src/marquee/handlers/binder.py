"""Declarative event binding.

A page configuration declares its listeners in an ``events`` table::

    {
        "events": {
            "highlight": on_highlight,
            "select listItemLockup title": "on_title_select",
            "play": ["on_title_select", on_play],
        },
        "on_title_select": on_title_select,
    }

Keys are ``"<event>"`` (bind on the document) or ``"<event> <selector>"``
(bind on every element the CSS selector matches). Values are one handler
reference or a list of them. A reference is either a callable or the
name of a callable stored on the same configuration; names are looked
up when binding, not when the configuration is written.

Handlers run with the configuration as ``self``::

    def on_title_select(self, event):
        navigate(self["name"], ...)
"""

import inspect
import logging
import types
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from soupsieve import SelectorSyntaxError

from marquee.dom import Document

logger = logging.getLogger("marquee.handler")

BindMode: TypeAlias = Literal["attach", "detach"]

ATTACH: BindMode = "attach"
DETACH: BindMode = "detach"


@dataclass(frozen=True, slots=True)
class Direct:
    """A handler given as a callable."""

    func: Callable[..., Any]

    def resolve(self, config: Mapping[str, Any]) -> Callable[..., Any] | None:
        return self.func


@dataclass(frozen=True, slots=True)
class ByName:
    """A handler given as the name of a callable on the configuration."""

    name: str

    def resolve(self, config: Mapping[str, Any]) -> Callable[..., Any] | None:
        func = config.get(self.name)
        return func if callable(func) else None


HandlerRef: TypeAlias = Direct | ByName


def handler_refs(value: Any) -> list[HandlerRef]:
    """Normalize an ``events`` value into an ordered list of references.

    Values that are neither callables nor strings are dropped.
    """
    items = value if isinstance(value, (list, tuple)) else [value]
    refs: list[HandlerRef] = []
    for item in items:
        if isinstance(item, str):
            refs.append(ByName(item))
        elif callable(item):
            refs.append(Direct(item))
    return refs


def bound_listener(func: Callable[..., Any], config: Mapping[str, Any]) -> Callable[..., Any]:
    """Bind ``func`` to ``config`` so it receives it as ``self``.

    Any callable is bound (functions, partials, callable objects); only
    methods that already have a receiver are used as they are. Bound
    methods compare equal for the same callable and receiver, so binding
    twice yields listeners that ``remove_event_listener`` matches.
    """
    if inspect.ismethod(func):
        return func
    return types.MethodType(func, config)


def select_targets(document: Document, selector: str) -> list[Any]:
    """Resolve a descriptor's selector to its targets.

    An empty selector targets the document itself. A malformed selector
    targets nothing.
    """
    if not selector:
        return [document]
    try:
        return document.query_selector_all(selector)
    except (SelectorSyntaxError, ValueError, NotImplementedError) as exc:
        logger.warning("Cannot select elements for %r, skipping: %s", selector, exc)
        return []


def bind(document: Any, config: Mapping[str, Any] | None, mode: BindMode = ATTACH) -> None:
    """Attach or detach every listener declared in ``config["events"]``.

    A missing or non-``Document`` argument is ignored.
    """
    if mode not in (ATTACH, DETACH):
        msg = f"Unknown bind mode: {mode!r}"
        raise ValueError(msg)
    if not isinstance(document, Document) or not config:
        return

    events = config.get("events")
    if not isinstance(events, Mapping):
        return

    for descriptor, value in events.items():
        event_name, _, selector = str(descriptor).strip().partition(" ")
        targets = select_targets(document, selector.strip())
        for ref in handler_refs(value):
            func = ref.resolve(config)
            if func is None:
                continue
            listener = bound_listener(func, config)
            logger.debug(
                "%s event on document... %s (%d targets)",
                "adding" if mode == ATTACH else "removing",
                event_name,
                len(targets),
            )
            for target in targets:
                if mode == ATTACH:
                    document.add_event_listener(event_name, listener, target)
                else:
                    document.remove_event_listener(event_name, listener, target)


def add_listeners(document: Any, config: Mapping[str, Any] | None) -> None:
    bind(document, config, ATTACH)


def remove_listeners(document: Any, config: Mapping[str, Any] | None) -> None:
    bind(document, config, DETACH)
