"""Shell configuration.

ShellConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ShellConfig:
    """Shell configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ShellConfig(base_url="https://api.example.tv", request_timeout=10.0)

    The values seed the page, menu and transport defaults when the
    ``Shell`` is constructed. Later tweaks go through ``Shell.set_options()``.
    """

    # Transport
    base_url: str = ""
    request_timeout: float = 30.0
    response_type: str = "json"  # "json" | "text"

    # Pages
    style: str = ""

    # Menu
    loading_message: str = ""
    error_message: str = ""
    menu_attributes: dict[str, Any] = field(default_factory=dict)
    menu_template_attributes: dict[str, Any] = field(default_factory=dict)
