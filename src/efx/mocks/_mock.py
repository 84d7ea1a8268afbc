"""Internal logic of a mocked interface.

A mock is the ordered list of bindings of one interface within one scope. It
finds the binding that answers a call, counts calls and reports which
expectations are still open.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from ..models.errors import DuplicateBindingError, FunctionNotDeclaredError
from ._types import ImplKind, MockedFun

if TYPE_CHECKING:
    from .._declarations import InterfaceSpec

logger = logging.getLogger(__name__)


class Miss(str, Enum):
    """Why no binding could be selected for a call."""

    NOT_FOUND = "not_found"
    UNMOCKED = "unmocked"
    EXHAUSTED = "exhausted"


class Mock:
    def __init__(self, interface: str, mocked_funs: list[MockedFun]):
        self.interface = interface
        self.mocked_funs = mocked_funs

    @classmethod
    def make(cls, interface: "InterfaceSpec") -> "Mock":
        """Create a mock with an unmocked placeholder per declared function."""
        placeholders = [
            MockedFun(
                interface=interface.name,
                name=declaration.name,
                arity=arity,
                impl=ImplKind.UNMOCKED,
            )
            for declaration in interface.effects.values()
            for arity in declaration.arities
        ]
        return cls(interface.name, placeholders)

    def add_fun(
        self,
        name: str,
        arity: int,
        impl: ImplKind | Callable[..., Any],
        expected_calls: int | None = None,
    ) -> MockedFun:
        if not self.is_member(name, arity):
            raise FunctionNotDeclaredError(self.interface, name, arity)

        unbounded = [
            f
            for f in self._funs_for(name, arity)
            if f.expected_calls is None and not f.unmocked
        ]
        if expected_calls is None and unbounded:
            raise DuplicateBindingError(self.interface, name, arity)
        if unbounded:
            logger.warning(
                "%s.%s/%s is bound after a binding without expected calls "
                "and will never be reached",
                self.interface,
                name,
                arity,
            )

        mocked_fun = MockedFun(
            interface=self.interface,
            name=name,
            arity=arity,
            impl=impl,
            expected_calls=expected_calls,
        )
        self.mocked_funs = [
            f for f in self.mocked_funs if not (f.unmocked and f.matches(name, arity))
        ]
        self.mocked_funs.append(mocked_fun)
        return mocked_fun

    def get_fun(self, name: str, arity: int) -> MockedFun | Miss:
        """Return the binding answering the next call, or why there is none."""
        for mocked_fun in self._funs_for(name, arity):
            if mocked_fun.exhausted:
                continue
            if mocked_fun.unmocked:
                return Miss.UNMOCKED
            return mocked_fun

        if self.is_member(name, arity):
            return Miss.EXHAUSTED
        return Miss.NOT_FOUND

    def get_unsatisfied(self) -> list[MockedFun]:
        return [f for f in self.mocked_funs if not f.satisfied]

    def is_member(self, name: str, arity: int) -> bool:
        return any(f.matches(name, arity) for f in self.mocked_funs)

    def _funs_for(self, name: str, arity: int) -> list[MockedFun]:
        return [f for f in self.mocked_funs if f.matches(name, arity)]
