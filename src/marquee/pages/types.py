"""Result types for page resolution.

A pipeline run ends in exactly one of four states:

- ``Rendered`` — a document was built.
- ``Suppressed`` — ``ready`` resolved with an explicit falsy value;
  the caller asked for no document. Not an error.
- ``Recovered`` — the transport failed and the page's ``on_error``
  hook handled it. No document.
- ``Failed`` — the transport failed without ``on_error``, ``ready``
  rejected, or building the document raised.

``PageFactory`` unwraps these: ``Rendered`` gives the document,
``Suppressed`` and ``Recovered`` give ``None``, ``Failed`` raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from marquee.dom import Document


@dataclass(frozen=True, slots=True)
class Rendered:
    document: Document


@dataclass(frozen=True, slots=True)
class Suppressed:
    value: Any = None


@dataclass(frozen=True, slots=True)
class Recovered:
    error: BaseException


@dataclass(frozen=True, slots=True)
class Failed:
    error: Any


PageOutcome: TypeAlias = Rendered | Suppressed | Recovered | Failed

