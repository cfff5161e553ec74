"""Marquee exception hierarchy.

Shared across the page pipeline, transport, parser and menu so every
module raises and catches the same types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from marquee.transport import TransportResponse


class MarqueeError(Exception):
    """Base for all marquee-specific errors."""


class ConfigurationError(MarqueeError):
    """Raised when shell or page configuration is unusable."""


class TemplateError(MarqueeError):
    """Raised when a template does not produce a parseable document."""


class TransportError(MarqueeError):
    """A request that did not complete with a 2xx status.

    ``response`` is ``None`` when the request never produced a response
    (connection refused, timeout). ``payload`` mirrors the response
    payload so ``on_error`` handlers can read it without unwrapping.
    """

    def __init__(
        self,
        response: TransportResponse | None,
        cause: BaseException | None = None,
    ) -> None:
        self.response = response
        self.cause = cause
        if response is not None:
            detail = f"{response.status} for {response.url}"
        else:
            detail = f"request failed: {cause!r}"
        super().__init__(detail)

    @property
    def status(self) -> int | None:
        return self.response.status if self.response is not None else None

    @property
    def payload(self) -> Any:
        return self.response.payload if self.response is not None else None


class PageRejected(MarqueeError):  # noqa: N818
    """A page ``ready`` resolver called ``reject`` with a non-exception value.

    The original value is kept untouched on ``reason``.
    """

    def __init__(self, reason: Any) -> None:
        self.reason = reason
        super().__init__(f"page rejected: {reason!r}")
