"""Tests for marquee.menu — menu bar document and item loading."""

import asyncio
import logging

import pytest

from marquee.app import Shell
from marquee.config import ShellConfig
from marquee.dom import Document
from marquee.menu.bar import MENU_ITEM_RELOAD_ATTRIBUTE

PAGE = "<document><stackTemplate><title>page</title></stackTemplate></document>"


def _counting_page(shell: Shell, name: str, calls: list) -> object:
    def ready(options, resolve, reject) -> None:
        calls.append(name)
        resolve({})

    return shell.create_page(name, {"ready": ready, "template": lambda d: PAGE})


def _select(shell: Shell, item_id: str) -> None:
    menu_doc = shell.menu.get()
    menu_doc.dispatch_event("select", shell.menu.item(item_id).element)


# ---------------------------------------------------------------------------
# Menu bar
# ---------------------------------------------------------------------------


class TestMenuBar:
    def test_create_builds_items(self) -> None:
        shell = Shell()
        doc = shell.create_menu(
            attributes={"theme": "dark"},
            root_template_attributes={"autoHighlight": "true"},
            items=[
                {"id": "home", "name": "Home"},
                {"id": "search", "name": lambda: "Search", "attributes": {"autoHighlight": True}},
            ],
        )
        bar = doc.get_elements_by_tag_name("menuBar")[0]
        assert bar["theme"] == "dark"
        assert doc.get_elements_by_tag_name("menuBarTemplate")[0]["autoHighlight"] == "true"
        items = doc.get_elements_by_tag_name("menuItem")
        assert [el["id"] for el in items] == ["home", "search"]
        assert [el.find("title").get_text() for el in items] == ["Home", "Search"]
        assert items[1]["autoHighlight"] == "True"

    def test_create_only_once(self, caplog: pytest.LogCaptureFixture) -> None:
        shell = Shell()
        shell.menu.create(items=[{"id": "home", "name": "Home"}])
        with caplog.at_level(logging.WARNING, logger="marquee.menu"):
            assert shell.menu.create(items=[{"id": "other", "name": "Other"}]) is None
        assert shell.menu.item("other") is None
        assert "already exists" in caplog.text

    def test_get_auto_creates(self) -> None:
        shell = Shell()
        shell.menu.set_options(items=[{"id": "home", "name": "Home"}])
        doc = shell.menu.get()
        assert shell.menu.created
        assert len(doc.get_elements_by_tag_name("menuItem")) == 1

    def test_item_without_id_skipped(self) -> None:
        shell = Shell()
        shell.menu.create(items=[{"name": "Nameless"}])
        assert shell.menu.get().get_elements_by_tag_name("menuItem") == []

    def test_set_document_unknown_id(self, caplog: pytest.LogCaptureFixture) -> None:
        shell = Shell()
        shell.menu.create()
        with caplog.at_level(logging.WARNING, logger="marquee.menu"):
            shell.menu.set_document(Document.parse(PAGE), "ghost")
        assert shell.menu.document_for("ghost") is None
        assert "does not exist" in caplog.text

    def test_set_selected_item(self) -> None:
        shell = Shell()
        shell.menu.create(items=[{"id": "home", "name": "Home"}])
        shell.menu.set_selected_item("home")
        assert shell.menu.selected_item.id == "home"
        shell.menu.set_selected_item("ghost")
        assert shell.menu.selected_item.id == "home"

    def test_messages_from_config_and_callables(self) -> None:
        shell = Shell(ShellConfig(loading_message="Loading...", error_message="Failed"))
        assert shell.menu.loading_message == "Loading..."
        assert shell.menu.error_message == "Failed"
        shell.menu.set_options(loading_message=lambda: "Please wait")
        assert shell.menu.loading_message == "Please wait"


# ---------------------------------------------------------------------------
# Menu synchronization
# ---------------------------------------------------------------------------


class TestMenuSync:
    async def test_select_loads_page_into_slot(self) -> None:
        shell = Shell()
        calls: list = []
        page = _counting_page(shell, "home", calls)
        shell.create_menu(items=[{"id": "home", "name": "Home", "page": page}])

        _select(shell, "home")
        await shell.settle()

        item = shell.menu.item("home")
        assert calls == ["home"]
        assert item.page_doc is not None
        assert shell.menu.document_for("home") is item.page_doc

    async def test_loader_shown_while_loading(self) -> None:
        shell = Shell(ShellConfig(loading_message="Loading..."))
        pending: list = []

        def ready(options, resolve, reject) -> None:
            pending.append(resolve)

        page = shell.create_page("slow", {"ready": ready, "template": lambda d: PAGE})
        shell.create_menu(items=[{"id": "slow", "name": "Slow", "page": page}])

        task = shell.menu_sync.on_menu_item_select(
            shell.menu.get().dispatch_event("noop", shell.menu.item("slow").element)
        )
        while not pending:
            await asyncio.sleep(0)
        loader = shell.menu.document_for("slow")
        assert loader.get_elements_by_tag_name("loadingTemplate")
        assert loader.get_elements_by_tag_name("title")[0].get_text() == "Loading..."

        pending[0]({})
        await task
        assert shell.menu.document_for("slow") is shell.menu.item("slow").page_doc

    async def test_loader_published_on_select(self) -> None:
        shell = Shell(ShellConfig(loading_message="Loading..."))
        pending: list = []
        page = shell.create_page(
            "slow", {"ready": lambda o, res, rej: pending.append(res), "template": lambda d: PAGE}
        )
        shell.create_menu(items=[{"id": "slow", "name": "Slow", "page": page}])

        _select(shell, "slow")

        loader = shell.menu.document_for("slow")
        assert loader is not None
        assert loader.get_elements_by_tag_name("loadingTemplate")
        assert loader.get_elements_by_tag_name("title")[0].get_text() == "Loading..."

        while not pending:
            await asyncio.sleep(0)
        pending[0]({})
        await shell.settle()
        assert shell.menu.document_for("slow") is shell.menu.item("slow").page_doc

    async def test_loaded_item_not_reloaded(self) -> None:
        shell = Shell()
        calls: list = []
        page = _counting_page(shell, "home", calls)
        shell.create_menu(items=[{"id": "home", "name": "Home", "page": page}])

        _select(shell, "home")
        await shell.settle()
        _select(shell, "home")
        await shell.settle()
        assert calls == ["home"]

        shell.menu.item("home").element[MENU_ITEM_RELOAD_ATTRIBUTE] = "true"
        _select(shell, "home")
        await shell.settle()
        assert calls == ["home", "home"]

    async def test_failure_shows_error_document(self) -> None:
        shell = Shell()
        page = shell.create_page("broken", {"ready": lambda o, res, rej: rej({"title": "Oops", "description": "bad"})})
        shell.create_menu(items=[{"id": "broken", "name": "Broken", "page": page}])

        _select(shell, "broken")
        await shell.settle()

        slot = shell.menu.document_for("broken")
        assert slot.get_elements_by_tag_name("alertTemplate")
        assert slot.get_elements_by_tag_name("title")[0].get_text() == "Oops"
        assert shell.menu.item("broken").page_doc is None

    async def test_suppressed_page_shows_error_document(self) -> None:
        shell = Shell(ShellConfig(error_message="Nothing to show"))
        page = shell.create_page("quiet", {"ready": lambda o, res, rej: res(None)})
        shell.create_menu(items=[{"id": "quiet", "name": "Quiet", "page": page}])

        _select(shell, "quiet")
        await shell.settle()

        slot = shell.menu.document_for("quiet")
        assert slot.get_elements_by_tag_name("description")[0].get_text() == "Nothing to show"
        assert shell.menu.item("quiet").page_doc is None

    async def test_load_dismisses_modal(self) -> None:
        shell = Shell()
        calls: list = []
        page = _counting_page(shell, "home", calls)
        shell.create_menu(items=[{"id": "home", "name": "Home", "page": page}])
        shell.navigation.present_modal(Document.parse(PAGE))

        _select(shell, "home")
        await shell.settle()

        assert shell.navigation.modal is None

    async def test_item_without_page_ignored(self) -> None:
        shell = Shell()
        shell.create_menu(items=[{"id": "empty", "name": "Empty"}])
        _select(shell, "empty")
        await shell.settle()
        assert shell.menu.document_for("empty") is None

    async def test_non_menu_item_target_ignored(self) -> None:
        shell = Shell()
        calls: list = []
        page = _counting_page(shell, "home", calls)
        shell.create_menu(items=[{"id": "home", "name": "Home", "page": page}])

        title = shell.menu.item("home").element.find("title")
        event = shell.menu.get().dispatch_event("noop", title)
        assert shell.menu_sync.on_menu_item_select(event) is None
