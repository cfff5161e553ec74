"""Layered defaults merging.

``merge()`` fills in keys that ``target`` does not define from each
source in turn. Values already present are never replaced; when both
sides hold mappings the merge recurses.

The function is pure: nested mappings are copied, so neither ``target``
nor any source is mutated. Callers that want late-bound defaults merge
again at the point of use (the page pipeline does this per invocation).
"""

from collections.abc import Mapping
from typing import Any


def merge(target: Mapping[str, Any] | None, *sources: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return ``target`` deep-merged with ``sources``, left-biased.

    Example::

        >>> merge({"options": {"timeout": 5}}, {"options": {"response_type": "json"}})
        {'options': {'timeout': 5, 'response_type': 'json'}}

    ``None`` targets and sources are treated as empty mappings.
    """
    result: dict[str, Any] = _copy(target or {})
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            if key not in result:
                result[key] = _copy(value) if isinstance(value, Mapping) else value
            elif isinstance(result[key], Mapping) and isinstance(value, Mapping):
                result[key] = merge(result[key], value)
    return result


def _copy(value: Mapping[str, Any]) -> dict[str, Any]:
    return {k: _copy(v) if isinstance(v, Mapping) else v for k, v in value.items()}
