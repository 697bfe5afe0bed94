"""
Async support for logjanitor.

Provides an ``async_wrap`` decorator that converts a synchronous log
service method into an awaitable coroutine using :func:`asyncio.to_thread`.
The janitor pipelines await these coroutines, so one deletion waiting on
the network never blocks the other workers, while the SDK-facing
implementations stay synchronous.

Usage::

    from logjanitor.base.async_support import async_wrap

    class MyLogService:
        def delete_log_group(self, name: str) -> None: ...

        adelete_log_group = async_wrap(delete_log_group)

    # Then in async code:
    await svc.adelete_log_group("/aws/lambda/old")
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from typing import Any, Callable, Coroutine, TypeVar

T = TypeVar("T")


def async_wrap(
    fn: Callable[..., T],
) -> Callable[..., Coroutine[Any, Any, T]]:
    """Return an async version of *fn* that runs it in a thread.

    The wrapper preserves the original function's signature and docstring.

    Args:
        fn: A synchronous callable to wrap.

    Returns:
        An async callable with the same parameters and return type.
    """

    @functools.wraps(fn)
    async def _wrapper(*args: Any, **kwargs: Any) -> T:
        return await asyncio.to_thread(fn, *args, **kwargs)

    return _wrapper


class AsyncMixin:
    """Mixin that auto-generates ``a<method>`` async variants.

    Subclass this *alongside* :class:`LogGroupsBlueprint` to gain async
    versions of every public plain function that is not already a
    coroutine. Properties, class attributes and explicit ``a<method>``
    definitions are left alone.
    The async methods are created once at class definition time.

    Example::

        class CloudWatchLogGroups(LogGroupsBlueprint, AsyncMixin):
            def delete_log_group(self, name: str) -> None: ...
            # => self.adelete_log_group(name) is now available
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for name in list(vars(cls)):
            if name.startswith("_"):
                continue
            attr = getattr(cls, name)
            if inspect.isfunction(attr) and not inspect.iscoroutinefunction(attr):
                async_name = f"a{name}"
                if not hasattr(cls, async_name):
                    setattr(cls, async_name, async_wrap(attr))
