"""Binding API used by test code."""

from typing import Any, Callable

from ._context import current_scope
from ._declarations import Interface, InterfaceSpec, interface_spec
from ._fun_util import Default, resolve_arity
from .mocks._registry import get_registry
from .mocks._types import ImplKind, MockedFun
from .models.errors import BindingContextError
from .models.scope import OMNIPRESENT, Scope

InterfaceRef = type[Interface] | InterfaceSpec | str


def _add(
    scope: Scope,
    interface: InterfaceRef,
    name: str,
    impl: Callable[..., Any] | Default,
    calls: int | None,
    arity: int | None,
) -> MockedFun:
    spec = interface_spec(interface)
    resolved_arity = resolve_arity(impl, spec.arities(name), arity)
    replacement: ImplKind | Callable[..., Any] = (
        ImplKind.DEFAULT if isinstance(impl, Default) else impl
    )
    return get_registry().add_fun(scope, spec, name, resolved_arity, replacement, calls)


def bind(
    interface: InterfaceRef,
    name: str,
    impl: Callable[..., Any] | Default,
    *,
    calls: int | None = None,
    arity: int | None = None,
    scope: Scope | None = None,
) -> MockedFun:
    """Bind the effect `name` of `interface` to another implementation.

    Args:
        interface: The interface class, or its declared name.
        name: Name of the effect function.
        impl: A replacement callable, `Constantly(value)` or `Default(arity)`.
        calls: Expected number of calls. Bindings with an expected number of
            calls are consumed in the order they were added and verified when
            the test ends.
        arity: Arity of the bound function when it cannot be inferred.
        scope: Scope to bind in, the current test's owner scope by default.

    Returns:
        The binding entry that was added.

    Raises:
        BindingContextError: No scope was given and no test is running.
        FunctionNotDeclaredError: The interface does not declare `name` with
            that arity.
    """
    if scope is None:
        scope = current_scope()
    if scope is None:
        raise BindingContextError(
            "bind() needs a running efx test or an explicit scope; use "
            "omnipresent() for bindings shared by all tests"
        )
    return _add(scope, interface, name, impl, calls, arity)


def omnipresent(
    interface: InterfaceRef,
    name: str,
    impl: Callable[..., Any] | Default,
    *,
    arity: int | None = None,
) -> MockedFun:
    """Bind an effect for every test of the process.

    Meant for test bootstrap, e.g. ``conftest.py``. Test and global bindings
    take precedence over omnipresent ones. Omnipresent bindings are never
    verified or reset, so they take no expected number of calls.
    """
    if current_scope() is not None:
        raise BindingContextError(
            "omnipresent() can only be used outside of a running test"
        )
    return _add(OMNIPRESENT, interface, name, impl, None, arity)
