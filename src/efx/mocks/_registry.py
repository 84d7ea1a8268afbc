"""Binding registry.

The registry is the one piece of shared mutable state of efx: it maps a scope
to the mocks of every interface bound in that scope. Tests, the contexts they
spawn and effect call sites all go through it, so every read and write is
serialized by a single lock.
"""

import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, Sequence

from ..models.errors import (
    EffectCallError,
    EffectExhaustedError,
    EffectNotBoundError,
    EffectNotFoundError,
    EffectUnmockedError,
)
from ..models.scope import GLOBAL, OMNIPRESENT, Scope, ScopeKind
from ._mock import Miss, Mock
from ._types import ImplKind, MockedFun

if TYPE_CHECKING:
    from .._declarations import InterfaceSpec

logger = logging.getLogger(__name__)

_MISS_ERRORS: dict[Miss, type[EffectCallError]] = {
    Miss.NOT_FOUND: EffectNotFoundError,
    Miss.UNMOCKED: EffectUnmockedError,
    Miss.EXHAUSTED: EffectExhaustedError,
}

# { scope -> { interface name -> mock } }
RegistryState = dict[Scope, dict[str, Mock]]


class ScopeResolver:
    """Maps a requested scope to the mock that answers a call.

    Calls fall back from an owner to the global scope and then to the
    omnipresent scope. `mocked_chain` deliberately skips the global scope: it
    answers whether a call will certainly be answered by a binding, which only
    the exact scope or an omnipresent binding can promise.
    """

    @staticmethod
    def call_chain(scope: Scope) -> tuple[Scope, ...]:
        match scope.kind:
            case ScopeKind.OWNER:
                return (scope, GLOBAL, OMNIPRESENT)
            case ScopeKind.GLOBAL:
                return (GLOBAL, OMNIPRESENT)
            case _:
                return (OMNIPRESENT,)

    @staticmethod
    def mocked_chain(scope: Scope) -> tuple[Scope, ...]:
        if scope == OMNIPRESENT:
            return (OMNIPRESENT,)
        return (scope, OMNIPRESENT)

    @staticmethod
    def first_match(
        state: RegistryState, chain: Sequence[Scope], interface: str
    ) -> tuple[Scope, Mock] | None:
        for scope in chain:
            mock = state.get(scope, {}).get(interface)
            if mock is not None:
                return scope, mock
        return None

    @classmethod
    def resolve(
        cls, state: RegistryState, scope: Scope, interface: str
    ) -> tuple[Scope, Mock] | None:
        return cls.first_match(state, cls.call_chain(scope), interface)


class BindingRegistry:
    def __init__(self) -> None:
        self._state: RegistryState = {}
        self._lock = threading.Lock()

    def add_fun(
        self,
        scope: Scope,
        interface: "InterfaceSpec",
        name: str,
        arity: int,
        impl: ImplKind | Callable[..., Any],
        expected_calls: int | None = None,
    ) -> MockedFun:
        """Append a binding to the mock of `interface` in `scope`.

        The mock is created on first use. When the function is not declared by
        the interface nothing is stored and `FunctionNotDeclaredError` is
        raised.
        """
        with self._lock:
            scope_state = self._state.get(scope, {})
            mock = scope_state.get(interface.name) or Mock.make(interface)
            mocked_fun = mock.add_fun(name, arity, impl, expected_calls)
            scope_state[interface.name] = mock
            self._state[scope] = scope_state

        logger.debug(
            "Bound %s.%s/%s in scope %s (expected calls: %s)",
            interface.name,
            name,
            arity,
            scope,
            expected_calls,
        )
        return mocked_fun

    def call(
        self,
        scope: Scope,
        interface: "InterfaceSpec",
        name: str,
        args: Sequence[Any],
    ) -> Any:
        arity = len(args)
        with self._lock:
            resolved = ScopeResolver.resolve(self._state, scope, interface.name)
            if resolved is None:
                raise EffectNotBoundError(scope, interface.name, name, arity)

            resolved_scope, mock = resolved
            selected = mock.get_fun(name, arity)
            if isinstance(selected, Miss):
                raise _MISS_ERRORS[selected](resolved_scope, interface.name, name, arity)

            selected.calls_made += 1
            impl = selected.impl

        logger.debug(
            "Calling %s.%s/%s bound in scope %s", interface.name, name, arity, resolved_scope
        )
        # the lock is released here so replacements can call other effects
        match impl:
            case ImplKind.DEFAULT:
                return interface.call_default(name, args)
            case _:
                return impl(*args)

    def is_mocked(self, scope: Scope, interface: "InterfaceSpec") -> bool:
        with self._lock:
            chain = ScopeResolver.mocked_chain(scope)
            return ScopeResolver.first_match(self._state, chain, interface.name) is not None

    def unsatisfied(self, scope: Scope) -> list[MockedFun]:
        with self._lock:
            return [
                mocked_fun.model_copy()
                for mock in self._state.get(scope, {}).values()
                for mocked_fun in mock.get_unsatisfied()
            ]

    def bound_interfaces(self, scope: Scope) -> list[str]:
        with self._lock:
            return list(self._state.get(scope, {}))

    def clean_after_test(self, scope: Scope) -> None:
        """Drop the bindings of `scope` and of the global scope."""
        with self._lock:
            if scope != OMNIPRESENT:
                self._state.pop(scope, None)
            self._state.pop(GLOBAL, None)
        logger.debug("Cleaned bindings of scope %s", scope)


_registry = BindingRegistry()


def get_registry() -> BindingRegistry:
    """Return the registry shared by the whole process."""
    return _registry
