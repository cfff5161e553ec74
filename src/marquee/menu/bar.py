"""Menu bar document and per-item state.

The menu is a single TVML document::

    <document>
      <menuBarTemplate>
        <menuBar>
          <menuItem id="home"><title>Home</title></menuItem>
          ...
        </menuBar>
      </menuBarTemplate>
    </document>

Each ``<menuItem>`` has a ``MenuItem`` record holding its backing page
and, once loaded, the document shown in its slot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from bs4 import Tag

from marquee.dom import Document

if TYPE_CHECKING:
    from marquee.parser import Parser

logger = logging.getLogger("marquee.menu")

MENU_DOCUMENT = "<document><menuBarTemplate><menuBar></menuBar></menuBarTemplate></document>"

# element level attribute that forces the backing page to load again on select
MENU_ITEM_RELOAD_ATTRIBUTE = "reloadOnSelect"


@dataclass(slots=True)
class MenuItem:
    """State for one ``<menuItem>``.

    ``page_doc`` is set after the backing page resolved to a document;
    from then on selecting the item does not load it again unless the
    element carries a non-empty ``reloadOnSelect`` attribute.
    """

    id: str
    element: Tag
    page: Callable[..., Any] | None = None
    page_doc: Document | None = None

    @property
    def reload_on_select(self) -> bool:
        return bool(self.element.get(MENU_ITEM_RELOAD_ATTRIBUTE))


def _text(value: Callable[[], str] | str | None) -> str:
    if callable(value):
        value = value()
    return "" if value is None else str(value)


class Menu:
    """Builds the menu document and tracks which document each item shows.

    Usage::

        menu.create(
            attributes={},                # <menuBar> attributes
            root_template_attributes={},  # <menuBarTemplate> attributes
            items=[
                {"id": "search", "name": "Search", "page": search_page},
                {"id": "home", "name": "Home", "page": home_page,
                 "attributes": {"autoHighlight": "true"}},
            ],
        )
    """

    __slots__ = (
        "_created",
        "_defaults",
        "_document",
        "_items",
        "_menu_bar",
        "_menu_bar_template",
        "_selected",
        "_slots",
    )

    def __init__(self, parser: Parser, **defaults: Any) -> None:
        self._defaults: dict[str, Any] = {
            "attributes": {},
            "root_template_attributes": {},
            "items": [],
            "loading_message": "",
            "error_message": "",
        }
        self._defaults.update(defaults)
        self._document = parser.dom(MENU_DOCUMENT)
        self._menu_bar = self._document.get_elements_by_tag_name("menuBar")[0]
        self._menu_bar_template = self._document.get_elements_by_tag_name("menuBarTemplate")[0]
        self._items: dict[str, MenuItem] = {}
        self._slots: dict[str, Document] = {}
        self._selected: str | None = None
        self._created = False

    @property
    def created(self) -> bool:
        return self._created

    def set_options(self, **options: Any) -> None:
        logger.debug("setting menu options... %r", options)
        self._defaults.update(options)

    @property
    def loading_message(self) -> str:
        return _text(self._defaults.get("loading_message"))

    @property
    def error_message(self) -> str:
        return _text(self._defaults.get("error_message"))

    def get(self) -> Document:
        """Return the menu document, creating it from the defaults if needed."""
        if not self._created:
            self.create()
        return self._document

    def create(self, **options: Any) -> Document | None:
        """Populate the menu document. Only the first call has an effect."""
        if self._created:
            logger.warning("An instance of menu already exists, skipping creation...")
            return None
        self._defaults.update(options)
        logger.debug("creating menu... %d items", len(self._defaults["items"]))

        _set_attributes(self._menu_bar, self._defaults["attributes"])
        _set_attributes(self._menu_bar_template, self._defaults["root_template_attributes"])
        for item in self._defaults["items"]:
            self.add_item(item)

        self._created = True
        return self._document

    def add_item(self, item: Mapping[str, Any]) -> MenuItem | None:
        """Append a ``<menuItem>``. Items without an ``id`` are skipped."""
        item_id = item.get("id")
        if not item_id:
            logger.warning(
                "Cannot add menuitem. A unique identifier is required for the menuitem to work correctly."
            )
            return None

        attributes = {**(item.get("attributes") or {}), "id": item_id}
        element = self._document.create_element("menuItem")
        _set_attributes(element, attributes)
        title = self._document.create_element("title")
        title.string = _text(item.get("name"))
        element.append(title)
        self._menu_bar.append(element)

        menu_item = MenuItem(id=str(item_id), element=element, page=item.get("page"))
        self._items[menu_item.id] = menu_item
        return menu_item

    def item(self, item_id: str | None) -> MenuItem | None:
        if item_id is None:
            return None
        return self._items.get(item_id)

    def items(self) -> Iterable[MenuItem]:
        return self._items.values()

    def set_document(self, document: Document, item_id: str) -> None:
        """Show ``document`` in the slot of the item with ``item_id``."""
        if item_id not in self._items:
            logger.warning(
                "Cannot set document to the menuitem. The given id %s does not exist.", item_id
            )
            return
        self._slots[item_id] = document

    def document_for(self, item_id: str) -> Document | None:
        """The document currently shown in an item's slot."""
        return self._slots.get(item_id)

    def set_selected_item(self, item_id: str) -> None:
        if item_id not in self._items:
            logger.warning("Cannot select menuitem. The given id %s does not exist.", item_id)
            return
        self._selected = item_id

    @property
    def selected_item(self) -> MenuItem | None:
        return self.item(self._selected)


def _set_attributes(element: Tag, attributes: Mapping[str, Any]) -> None:
    for name, value in attributes.items():
        element[name] = str(value)
