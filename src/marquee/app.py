"""Marquee application shell.

One ``Shell`` owns every piece of shared state: page registry and
defaults, default handler table, menu, navigation stack and the HTTP
transport. Nothing lives at module level, so two shells (or two tests)
never see each other's pages.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

import httpx
from kida import Environment

from marquee._internal.tasks import TaskSet
from marquee.config import ShellConfig
from marquee.handlers.defaults import Handlers
from marquee.menu.bar import Menu
from marquee.menu.sync import MenuSync
from marquee.navigation import Navigation
from marquee.pages.pipeline import PagePipeline
from marquee.pages.registry import PageFactory, PageRegistry
from marquee.parser import Parser
from marquee.transport import Transport

if TYPE_CHECKING:
    import asyncio

    from marquee.dom import Document


class Shell:
    """The marquee application context.

    Usage::

        shell = Shell(ShellConfig(base_url="https://api.example.tv"))

        @shell.page("home", url="/home", events={"select lockup": "on_select"})
        def home(data):
            return render_home(data)

        shell.create_menu(items=[{"id": "home", "name": "Home", "page": shell.get_page("home")}])
        await shell.navigate("home")
        await shell.settle()
    """

    __slots__ = (
        "_tasks",
        "config",
        "handlers",
        "menu",
        "menu_sync",
        "navigation",
        "pages",
        "parser",
        "pipeline",
        "transport",
    )

    def __init__(
        self,
        config: ShellConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        kida_env: Environment | None = None,
    ) -> None:
        self.config: ShellConfig = config or ShellConfig()
        self._tasks = TaskSet()
        self.parser = Parser(kida_env)
        self.transport = Transport(
            self.config.base_url,
            timeout=self.config.request_timeout,
            client=client,
            response_type=self.config.response_type,
        )
        self.navigation = Navigation(
            self.parser,
            self._tasks,
            self.get_page,
            error_message=self.config.error_message,
        )
        self.menu = Menu(
            self.parser,
            attributes=dict(self.config.menu_attributes),
            root_template_attributes=dict(self.config.menu_template_attributes),
            loading_message=self.config.loading_message,
            error_message=self.config.error_message,
        )
        self.menu_sync = MenuSync(self.menu, self.navigation, self._tasks)
        self.handlers = Handlers(self.navigation, self.menu_sync)
        self.pipeline = PagePipeline(self.parser, self.transport, self.handlers)
        self.pages = PageRegistry(
            self.pipeline,
            defaults={
                "style": self.config.style,
                "options": {"response_type": self.config.response_type},
            },
        )
        self.navigation.on_discard = self._release

    # -- Pages --

    def create_page(
        self,
        name: str | Mapping[str, Any] | None,
        config: Mapping[str, Any] | None = None,
    ) -> PageFactory:
        return self.pages.create(name, config)

    def page(self, name: str, **config: Any) -> Callable[[Callable[..., str]], PageFactory]:
        """Register the decorated function as the template of page ``name``."""

        def decorator(template: Callable[..., str]) -> PageFactory:
            return self.pages.create(name, {**config, "template": template})

        return decorator

    def get_page(self, name: str) -> PageFactory | None:
        return self.pages.get(name)

    # -- Navigation & menu --

    def navigate(
        self,
        page_name: str,
        options: Mapping[str, Any] | None = None,
        replace: bool = False,
    ) -> asyncio.Task[Document | None]:
        return self.navigation.navigate(page_name, options, replace)

    def create_menu(self, **options: Any) -> Document:
        """Build the menu document and attach the default handlers to it."""
        self.menu.create(**options)
        document = self.menu.get()
        self.handlers.add_all(document, None)
        return document

    def set_options(
        self,
        *,
        page: Mapping[str, Any] | None = None,
        handlers: Mapping[str, Mapping[str, Callable[..., Any]]] | None = None,
        menu: Mapping[str, Any] | None = None,
        transport: Mapping[str, Any] | None = None,
    ) -> None:
        """Adjust component defaults. Call during setup, before pages load."""
        if page:
            self.pages.set_options(**page)
        if handlers:
            self.handlers.set_options(handlers)
        if menu:
            self.menu.set_options(**menu)
        if transport:
            self.transport.set_options(**transport)

    async def settle(self) -> None:
        """Wait for every navigation and menu load scheduled so far."""
        await self._tasks.settle()

    def _release(self, document: Document) -> None:
        self.handlers.remove_all(document, document.page)
