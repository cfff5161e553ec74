"""Menu bar document and menu item loading."""

from marquee.menu.bar import MENU_ITEM_RELOAD_ATTRIBUTE, Menu, MenuItem
from marquee.menu.sync import MenuSync

__all__ = [
    "MENU_ITEM_RELOAD_ATTRIBUTE",
    "Menu",
    "MenuItem",
    "MenuSync",
]
