"""Marquee — a declarative page shell for document-based TV apps.

Pages are configurations registered by name. Awaiting a page resolves
it to a TVML document (fetched, custom-resolved, or rendered straight
from its template), with declared event handlers already attached.

Basic usage::

    from marquee import Shell

    shell = Shell()

    shell.create_page("home", {
        "url": "https://api.example.tv/home",
        "template": "<document><stackTemplate><title>{{ title }}</title></stackTemplate></document>",
        "events": {"select lockup": "on_select"},
        "on_select": lambda self, event: ...,
    })

    document = await shell.get_page("home")()
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "Document",
    "Event",
    "MarqueeError",
    "PageFactory",
    "PageRejected",
    "Shell",
    "ShellConfig",
    "TemplateError",
    "TransportError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import marquee`` fast while providing a clean top-level API.
    """
    if name == "Shell":
        from marquee.app import Shell

        return Shell

    if name == "ShellConfig":
        from marquee.config import ShellConfig

        return ShellConfig

    if name in ("Document", "Event"):
        from marquee import dom

        return getattr(dom, name)

    if name == "PageFactory":
        from marquee.pages.registry import PageFactory

        return PageFactory

    if name in (
        "ConfigurationError",
        "MarqueeError",
        "PageRejected",
        "TemplateError",
        "TransportError",
    ):
        from marquee import errors

        return getattr(errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
