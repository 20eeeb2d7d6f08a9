"""
Hook manager for entity lifecycle events.
"""
from __future__ import annotations

from typing import Callable, Any, Awaitable, TypeVar, ParamSpec
from dataclasses import dataclass, field
from enum import IntEnum
from collections import defaultdict
import logging

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


class HookPriority(IntEnum):
    """Hook execution priority (lower runs first)."""
    FIRST = 0
    EARLY = 25
    NORMAL = 50
    LATE = 75
    LAST = 100


@dataclass
class Hook:
    """Registered hook information."""
    name: str
    handler: Callable[..., Awaitable[Any]]
    priority: HookPriority = HookPriority.NORMAL
    once: bool = False  # Run only once then unregister
    source: str = ""


@dataclass
class HookResult:
    """Result from running hooks."""
    hook_name: str
    results: list[Any] = field(default_factory=list)
    errors: list[tuple[str, Exception]] = field(default_factory=list)
    stopped: bool = False


class HookManager:
    """
    Manages entity lifecycle hooks.

    Entity services trigger, per entity name:
    - <entity>.saved: id=<identifier>, entity=<saved value>
    - <entity>.edited: id=<identifier>, entity=<updated value>
    - <entity>.deleted: id=<identifier>

    Example usage:
    ```python
    hooks = HookManager()

    @hooks.on("book.saved")
    async def index_book(id: UUID, entity: Book):
        await search.index(entity)

    await hooks.trigger("book.saved", id=book.id, entity=book)
    ```
    """

    def __init__(self):
        self._hooks: dict[str, list[Hook]] = defaultdict(list)

    def register(
        self,
        name: str,
        handler: Callable[..., Awaitable[Any]],
        *,
        priority: HookPriority = HookPriority.NORMAL,
        once: bool = False,
        source: str = "",
    ) -> Hook:
        """Register a hook handler."""
        hook = Hook(
            name=name,
            handler=handler,
            priority=priority,
            once=once,
            source=source,
        )

        self._hooks[name].append(hook)
        # Stable sort keeps registration order within a priority
        self._hooks[name].sort(key=lambda h: h.priority)

        logger.debug(f"Registered hook: {name} (priority={priority})")
        return hook

    def unregister(self, name: str, handler: Callable) -> bool:
        """Unregister a hook handler."""
        hooks = self._hooks.get(name, [])
        for i, hook in enumerate(hooks):
            if hook.handler is handler:
                del hooks[i]
                return True
        return False

    def on(
        self,
        name: str,
        *,
        priority: HookPriority = HookPriority.NORMAL,
        once: bool = False,
    ) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
        """Decorator to register a hook handler."""
        def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
            self.register(name, func, priority=priority, once=once)
            return func
        return decorator

    async def trigger(
        self,
        name: str,
        *args,
        stop_on_error: bool = False,
        **kwargs,
    ) -> HookResult:
        """
        Trigger all handlers for a hook.

        Handler errors are logged and collected on the result; they are
        not raised to the caller.

        Args:
            name: Hook name to trigger
            stop_on_error: Stop execution if a handler raises
            *args, **kwargs: Passed to handlers
        """
        result = HookResult(hook_name=name)
        spent: list[Hook] = []

        # Iterate over a snapshot so handlers may register/unregister hooks
        for hook in list(self._hooks.get(name, [])):
            try:
                result.results.append(await hook.handler(*args, **kwargs))
            except Exception as e:
                result.errors.append((hook.source or str(hook.handler), e))
                logger.error(f"Hook {name} handler error: {e}")

                if stop_on_error:
                    result.stopped = True
                    break
            finally:
                if hook.once:
                    spent.append(hook)

        for hook in spent:
            if hook in self._hooks[name]:
                self._hooks[name].remove(hook)

        return result

    def has_hooks(self, name: str) -> bool:
        """Check if any hooks are registered for name."""
        return bool(self._hooks.get(name))

    def list_hooks(self, name: str | None = None) -> list[str]:
        """List registered hook names, optionally filtered by prefix."""
        names = [n for n, registered in self._hooks.items() if registered]
        if name:
            names = [n for n in names if n.startswith(name)]
        return sorted(names)

    def clear(self, name: str | None = None) -> None:
        """Clear hooks. If name given, clear only that hook."""
        if name:
            self._hooks.pop(name, None)
        else:
            self._hooks.clear()


# Global hook manager instance
hooks = HookManager()
