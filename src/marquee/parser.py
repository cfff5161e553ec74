"""Template rendering and document parsing.

A page ``template`` is either a callable that receives the transformed
data and returns markup, or a kida template string rendered with the
data as context. The markup is parsed into a ``marquee.dom.Document``.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from kida import Environment

from marquee.dom import Document
from marquee.errors import TemplateError

logger = logging.getLogger("marquee.parser")

Template = Callable[[Any], str] | str


def template_context(data: Any) -> dict[str, Any]:
    """Build the kida render context for ``data``.

    Mapping keys become top-level names; the whole value is always
    reachable as ``data`` so lists and scalars can be templated too.
    """
    if isinstance(data, Mapping):
        return {"data": data, **data}
    return {"data": data}


class Parser:
    """Turns a template plus data into a ``Document``.

    The kida environment is created once; pass your own to register
    filters or globals::

        env = Environment(autoescape=True)
        env.update_filters({"runtime": format_runtime})
        parser = Parser(env)
    """

    __slots__ = ("_env",)

    def __init__(self, env: Environment | None = None) -> None:
        self._env = env or Environment(autoescape=True)

    @property
    def env(self) -> Environment:
        return self._env

    def render(self, template: Template, data: Any = None) -> str:
        if callable(template):
            markup = template(data)
        elif isinstance(template, str):
            markup = self._env.from_string(template).render(template_context(data))
        else:
            msg = f"Template must be a string or a callable, got {type(template).__name__}"
            raise TemplateError(msg)
        if not isinstance(markup, str):
            msg = f"Template returned {type(markup).__name__}, expected str"
            raise TemplateError(msg)
        return markup

    def dom(self, template: Template, data: Any = None) -> Document:
        """Render ``template`` with ``data`` and parse the result."""
        markup = self.render(template, data)
        logger.debug("parsing document (%d chars)", len(markup))
        return Document.parse(markup)
