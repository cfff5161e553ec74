"""Named page factories.

``PageRegistry.create()`` stores a configuration under a name and hands
back a ``PageFactory``. Awaiting the factory merges the configuration
with the registry's current defaults and runs the pipeline, so defaults
changed with ``set_options()`` reach pages registered earlier.

Usage::

    home = pages.create("home", {
        "url": "/api/home",
        "template": lambda data: f"<document>...{data['title']}...</document>",
        "events": {"select lockup": "on_lockup_select"},
        "on_lockup_select": on_lockup_select,
    })
    document = await home()
    assert pages.get("home") is home
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from marquee._internal.merge import merge
from marquee.errors import PageRejected
from marquee.pages.types import Failed, PageOutcome, Rendered

if TYPE_CHECKING:
    from marquee.dom import Document
    from marquee.pages.pipeline import PagePipeline

logger = logging.getLogger("marquee.page")


def _missing_template(data: Any) -> str:
    logger.warning("No template exists!")
    return ""


def _identity(data: Any) -> Any:
    return data


PAGE_DEFAULTS: dict[str, Any] = {
    "style": "",
    "template": _missing_template,
    "data": _identity,
    "options": {"response_type": "json"},
}


class PageFactory:
    """An invokable page. ``await factory(options)`` -> ``Document | None``.

    Owned by the registry that created it; the stored ``config`` is never
    mutated by invocations.
    """

    __slots__ = ("_registry", "config", "name")

    def __init__(self, name: str | None, config: dict[str, Any], registry: PageRegistry) -> None:
        self.name = name
        self.config = config
        self._registry = registry

    async def __call__(self, options: Mapping[str, Any] | None = None) -> Document | None:
        """Resolve the page.

        Returns the document, or ``None`` when rendering was suppressed or
        a fetch failure was handled by ``on_error``. Raises the failure
        otherwise: exceptions as they were, other rejection values wrapped
        in ``PageRejected``.
        """
        outcome = await self.resolve(options)
        if isinstance(outcome, Rendered):
            return outcome.document
        if isinstance(outcome, Failed):
            if isinstance(outcome.error, BaseException):
                raise outcome.error
            raise PageRejected(outcome.error)
        return None

    async def resolve(self, options: Mapping[str, Any] | None = None) -> PageOutcome:
        """Resolve the page to its outcome without raising."""
        config = merge(self.config, self._registry.defaults)
        logger.debug("making page... name=%s", self.name)
        return await self._registry.pipeline.resolve(config, dict(options or {}))

    def __repr__(self) -> str:
        return f"<PageFactory {self.name!r}>"


class PageRegistry:
    """Name -> ``PageFactory`` table plus the page-level defaults."""

    __slots__ = ("_defaults", "_pages", "pipeline")

    def __init__(self, pipeline: PagePipeline, defaults: Mapping[str, Any] | None = None) -> None:
        self.pipeline = pipeline
        self._defaults: dict[str, Any] = merge(defaults, PAGE_DEFAULTS)
        self._pages: dict[str, PageFactory] = {}

    @property
    def defaults(self) -> Mapping[str, Any]:
        return self._defaults

    def set_options(self, **defaults: Any) -> None:
        """Override page defaults. Top-level keys replace existing ones."""
        logger.debug("setting default page options... %r", defaults)
        self._defaults = {**self._defaults, **defaults}

    def create(
        self,
        name: str | Mapping[str, Any] | None,
        config: Mapping[str, Any] | None = None,
    ) -> PageFactory:
        """Register a page and return its factory.

        Accepts ``create(name, config)`` or ``create(config)`` where the
        configuration carries ``name``. Unnamed pages still work when
        called directly but cannot be looked up. A name that is already
        taken is overwritten.
        """
        if isinstance(name, Mapping):
            config = name
            name = config.get("name")
        logger.debug("creating page... name=%s", name)

        stored = dict(config or {})
        stored["name"] = name
        factory = PageFactory(name if isinstance(name, str) else None, stored, self)

        if not name or not isinstance(name, str):
            logger.warning("Creating page without a name, name based navigation will not be possible.")
            return factory

        if name in self._pages:
            logger.warning("The given page name %s already exists! Overriding...", name)
        self._pages[name] = factory
        return factory

    def get(self, name: str) -> PageFactory | None:
        return self._pages.get(name)

    def names(self) -> Iterator[str]:
        return iter(self._pages)

    def __contains__(self, name: object) -> bool:
        return name in self._pages

    def __len__(self) -> int:
        return len(self._pages)
