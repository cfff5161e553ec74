"""Page factories and the resolution pipeline.

A page is a configuration mapping registered under a name. Awaiting its
factory resolves it to a ``Document`` through ``ready``, ``url`` or a
plain template, then prepares the document (style, handlers,
``after_ready``).
"""

from marquee.pages.pipeline import PagePipeline, append_style
from marquee.pages.registry import PAGE_DEFAULTS, PageFactory, PageRegistry
from marquee.pages.types import Failed, PageOutcome, Recovered, Rendered, Suppressed

__all__ = [
    "PAGE_DEFAULTS",
    "Failed",
    "PageFactory",
    "PageOutcome",
    "PagePipeline",
    "PageRegistry",
    "Recovered",
    "Rendered",
    "Suppressed",
    "append_style",
]
