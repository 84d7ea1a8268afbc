"""Owner identity of the running test.

The owner scope lives in a context variable. asyncio tasks copy it when they
are created; threads and executor jobs get it through `carry_owner`.
"""

import functools
from contextvars import ContextVar, Token
from typing import Any, Callable, TypeVar

from .models.scope import GLOBAL, Scope

F = TypeVar("F", bound=Callable[..., Any])

_owner_scope: ContextVar[Scope | None] = ContextVar("efx_owner_scope", default=None)


def init(scope: Scope) -> Token[Scope | None]:
    """Record `scope` as the owner of the current context and its descendants."""
    return _owner_scope.set(scope)


def reset(token: Token[Scope | None]) -> None:
    _owner_scope.reset(token)


def current_scope() -> Scope | None:
    return _owner_scope.get()


def effective_scope() -> Scope:
    """Scope used at effect call sites; unowned contexts fall back to global."""
    scope = _owner_scope.get()
    return GLOBAL if scope is None else scope


def carry_owner(func: F) -> F:
    """Bind the caller's owner scope to `func`.

    The scope is captured when `carry_owner` is called, so the result can be
    handed to a thread or an executor and still see the test's bindings.
    """
    scope = _owner_scope.get()

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        token = _owner_scope.set(scope)
        try:
            return func(*args, **kwargs)
        finally:
            _owner_scope.reset(token)

    return wrapper  # type: ignore[return-value]
