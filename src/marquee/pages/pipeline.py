"""Page resolution: configuration in, document (or outcome) out.

Strategy is chosen by what the configuration declares, in this order:

1. ``ready(options, resolve, reject)`` — the page decides when and with
   what data to render.
2. ``url`` — fetch through the transport, render the payload.
3. neither — render ``data``/``template`` straight away.

Every document goes through the same construction: transform data,
render the template, apply ``style``, attach handlers, call
``after_ready``, and tag the document with its configuration.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from marquee._internal.invoke import invoke
from marquee.dom import Document
from marquee.errors import TransportError
from marquee.handlers.binder import add_listeners
from marquee.pages.types import Failed, PageOutcome, Recovered, Rendered, Suppressed

if TYPE_CHECKING:
    from marquee.handlers.defaults import Handlers
    from marquee.parser import Parser
    from marquee.transport import Transport

logger = logging.getLogger("marquee.page")

# ``resolve()`` called without an argument
_NO_RESPONSE: Any = object()


def suppresses(value: Any) -> bool:
    """Whether a value given to ``resolve`` means "render nothing".

    Only explicit falsy scalars count: ``None``, ``False``, numeric zero
    (and NaN), and the empty string. Empty containers still render.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or value != value
    return False


def append_style(style: Any, document: Document) -> None:
    """Put ``style`` into a ``<style>`` at the front of the document head.

    A ``<head>`` is created as the first child of the document element
    when there is none.
    """
    if not isinstance(style, str) or not isinstance(document, Document):
        logger.warning("invalid document or style string... %r", style)
        return
    if not style:
        return

    root = document.document_element
    if root is None:
        return
    heads = document.get_elements_by_tag_name("head")
    if heads:
        head = heads[0]
    else:
        head = document.create_element("head")
        root.insert(0, head)

    style_el = head.find("style")
    if style_el is None:
        style_el = document.create_element("style")
        head.insert(0, style_el)
    style_el.string = style


class PagePipeline:
    """Resolves merged page configurations into documents.

    ``handlers`` supplies the default document handlers; without it only
    the configuration's own ``events`` are attached.
    """

    __slots__ = ("_handlers", "_parser", "_transport")

    def __init__(
        self,
        parser: Parser,
        transport: Transport,
        handlers: Handlers | None = None,
    ) -> None:
        self._parser = parser
        self._transport = transport
        self._handlers = handlers

    # -- Document construction --

    def prepare_document(self, document: Any, config: Mapping[str, Any]) -> Document | None:
        """Apply style and attach handlers to an existing document."""
        if not isinstance(document, Document):
            logger.warning("Cannot prepare, the provided element is not a document.")
            return None
        append_style(config.get("style"), document)
        if self._handlers is not None:
            self._handlers.add_all(document, config)
        else:
            add_listeners(document, config)
        return document

    async def make_document(self, config: dict[str, Any], response: Any = None) -> Document:
        """Build, prepare and tag a document from ``config`` and ``response``."""
        data = config.get("data")
        document = self._parser.dom(
            config.get("template", ""),
            data(response) if callable(data) else data,
        )
        self.prepare_document(document, config)

        after_ready = config.get("after_ready")
        if callable(after_ready):
            logger.debug("calling after_ready...")
            await invoke(after_ready, document)

        document.page = config
        return document

    # -- Resolution --

    async def resolve(self, config: dict[str, Any], options: dict[str, Any]) -> PageOutcome:
        """Run one invocation to its terminal state.

        Never raises for page-level failures; they come back as ``Failed``.
        """
        try:
            if callable(config.get("ready")):
                return await self._resolve_ready(config, options)
            if config.get("url"):
                return await self._resolve_url(config)
            return Rendered(await self.make_document(config))
        except Exception as exc:
            logger.debug("page %s failed: %r", config.get("name"), exc)
            return Failed(exc)

    async def _resolve_ready(self, config: dict[str, Any], options: dict[str, Any]) -> PageOutcome:
        settled: asyncio.Future[tuple[bool, Any]] = asyncio.get_running_loop().create_future()

        def resolve(response: Any = _NO_RESPONSE) -> None:
            if not settled.done():
                settled.set_result((True, response))

        def reject(reason: Any = None) -> None:
            if not settled.done():
                settled.set_result((False, reason))

        logger.debug("calling page ready... options: %r", options)
        try:
            await invoke(config["ready"], options, resolve, reject)
        except Exception as exc:
            if settled.done():
                logger.warning("page %s ready raised after settling: %r", config.get("name"), exc)
            else:
                reject(exc)

        ok, value = await settled
        if not ok:
            return Failed(value)
        if value is _NO_RESPONSE:
            return Rendered(await self.make_document(config))
        if suppresses(value):
            return Suppressed(value)
        return Rendered(await self.make_document(config, value))

    async def _resolve_url(self, config: dict[str, Any]) -> PageOutcome:
        try:
            response = await self._transport.get(config["url"], config.get("options"))
        except TransportError as exc:
            on_error = config.get("on_error")
            if not callable(on_error):
                return Failed(exc)
            await invoke(on_error, exc.payload, exc)
            return Recovered(exc)
        return Rendered(await self.make_document(config, response.payload))
