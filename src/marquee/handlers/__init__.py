"""Declarative event handling for documents.

``bind()`` wires a page configuration's ``events`` table onto a document;
``Handlers`` adds the document-level defaults (links, modal dismissal,
menu loading) on top.
"""

from marquee.handlers.binder import (
    ATTACH,
    DETACH,
    ByName,
    Direct,
    HandlerRef,
    add_listeners,
    bind,
    handler_refs,
    remove_listeners,
)
from marquee.handlers.defaults import (
    HREF_ATTRIBUTE,
    HREF_OPTIONS_ATTRIBUTE,
    HREF_PAGE_REPLACE_ATTRIBUTE,
    MODAL_CLOSE_BTN_ATTRIBUTE,
    Handlers,
)

__all__ = [
    "ATTACH",
    "DETACH",
    "HREF_ATTRIBUTE",
    "HREF_OPTIONS_ATTRIBUTE",
    "HREF_PAGE_REPLACE_ATTRIBUTE",
    "MODAL_CLOSE_BTN_ATTRIBUTE",
    "ByName",
    "Direct",
    "HandlerRef",
    "Handlers",
    "add_listeners",
    "bind",
    "handler_refs",
    "remove_listeners",
]
