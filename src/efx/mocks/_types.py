"""Binding entry types."""

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field


class ImplKind(str, Enum):
    """Replacement markers that are not callables."""

    UNMOCKED = "unmocked"
    DEFAULT = "default"


class MockedFun(BaseModel):
    """One binding of an effect function.

    The implementation is either a replacement callable or one of the
    `ImplKind` markers: `UNMOCKED` says there is no replacement yet and errors
    when called, `DEFAULT` refers to the interface's default implementation.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    interface: str
    name: str
    arity: int = Field(ge=0)
    impl: ImplKind | Callable[..., Any]
    expected_calls: int | None = Field(default=None, ge=0)
    calls_made: int = Field(default=0, ge=0)

    @property
    def satisfied(self) -> bool:
        return self.expected_calls is None or self.calls_made == self.expected_calls

    @property
    def exhausted(self) -> bool:
        return (
            self.expected_calls is not None
            and self.calls_made == self.expected_calls
        )

    @property
    def unmocked(self) -> bool:
        return self.impl is ImplKind.UNMOCKED

    def matches(self, name: str, arity: int) -> bool:
        return self.name == name and self.arity == arity
