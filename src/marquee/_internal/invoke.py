"""Await-if-needed calls for page hooks.

``ready`` resolvers, ``after_ready`` and ``on_error`` hooks may be plain
functions or coroutine functions. The pipeline calls each of them through
``invoke`` so it never branches on which kind it was given::

    await invoke(config["ready"], options, resolve, reject)
"""

import inspect
from typing import Any


async def invoke(hook: Any, *args: Any, **kwargs: Any) -> Any:
    """Call ``hook`` and await what it returns when that is awaitable."""
    result = hook(*args, **kwargs)
    if inspect.isawaitable(result):
        return await result
    return result
