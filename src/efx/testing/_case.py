"""Test lifecycle for bindings."""

import itertools
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator

import pytest

from .._api import InterfaceRef, bind
from .._context import init, reset
from .._fun_util import Default
from ..mocks._registry import get_registry
from ..mocks._types import MockedFun
from ..mocks._verifier import verify
from ..models.scope import GLOBAL, Scope

logger = logging.getLogger(__name__)

_fixture_ids = itertools.count()


class EfxCase:
    """Bindings of one running test."""

    def __init__(self, scope: Scope, global_mode: bool = False):
        self.scope = scope
        self.global_mode = global_mode

    def bind(
        self,
        interface: InterfaceRef,
        name: str,
        impl: Callable[..., Any] | Default,
        *,
        calls: int | None = None,
        arity: int | None = None,
    ) -> MockedFun:
        return bind(interface, name, impl, calls=calls, arity=arity, scope=self.scope)

    def verify(self) -> None:
        verify(self.scope)

    def clean(self) -> None:
        get_registry().clean_after_test(self.scope)


@contextmanager
def efx_case(global_mode: bool = False) -> Iterator[EfxCase]:
    """Run a block as an efx test.

    A fresh owner scope (or the global scope in global mode) is installed for
    the block. Expected calls are verified when the block completes, and the
    bindings are removed in any case.
    """
    scope = GLOBAL if global_mode else Scope.owner()
    case = EfxCase(scope, global_mode=global_mode)
    token = init(scope)
    logger.debug("Starting efx test in scope %s", scope)
    try:
        yield case
        case.verify()
    finally:
        reset(token)
        case.clean()


def setup_effects(interface: InterfaceRef, **bindings: Callable[..., Any] | Default):
    """Build an autouse fixture binding the same effects for many tests.

    Assign the result to a module-level name of a test module:

        _storage = setup_effects(Storage, get=lambda: [1, 2, 3])
    """

    @pytest.fixture(autouse=True, name=f"efx_setup_effects_{next(_fixture_ids)}")
    def _setup_effects(efx: EfxCase) -> None:
        for name, impl in bindings.items():
            efx.bind(interface, name, impl)

    return _setup_effects
