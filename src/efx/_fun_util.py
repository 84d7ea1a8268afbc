"""Binding helpers: replacement markers and arity inference."""

import inspect
from typing import Any, Callable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .models.errors import EfxError

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


class Default(BaseModel):
    """Marker binding an effect to its interface's default implementation."""

    model_config = ConfigDict(frozen=True)

    arity: int | None = Field(default=None, ge=0)

    def __init__(self, arity: int | None = None) -> None:
        super().__init__(arity=arity)


class Constantly:
    """A replacement returning `value` whatever it is called with."""

    def __init__(self, value: Any, arity: int | None = None):
        self.value = value
        self.arity = arity

    def __call__(self, *_args: Any) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"Constantly({self.value!r})"


def positional_arity_range(func: Callable[..., Any]) -> tuple[int, int] | None:
    """Return the (min, max) number of positional arguments `func` accepts.

    `None` means the signature cannot tell: it is not inspectable, takes
    `*args`, or requires keyword-only arguments.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None

    required = total = 0
    for parameter in signature.parameters.values():
        if parameter.kind == inspect.Parameter.VAR_POSITIONAL:
            return None
        if parameter.kind == inspect.Parameter.KEYWORD_ONLY:
            if parameter.default is inspect.Parameter.empty:
                return None
            continue
        if parameter.kind in _POSITIONAL:
            total += 1
            if parameter.default is inspect.Parameter.empty:
                required += 1
    return required, total


def resolve_arity(
    impl: Callable[..., Any] | Default,
    declared: Sequence[int],
    arity: int | None = None,
) -> int:
    """Work out which declared arity a replacement is meant for.

    Checked in order: the explicit `arity`, the marker's own arity, the
    replacement's signature matched against `declared`, and finally the only
    declared arity. An arity nobody declared is returned as is so that the
    registry can reject it.
    """
    if arity is not None:
        return arity

    if isinstance(impl, (Default, Constantly)):
        if impl.arity is not None:
            return impl.arity
        candidates = list(declared)
        fallback = 0
    else:
        arity_range = positional_arity_range(impl)
        if arity_range is None:
            candidates = list(declared)
            fallback = 0
        else:
            low, high = arity_range
            candidates = [a for a in declared if low <= a <= high]
            fallback = high

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        return fallback
    raise EfxError(
        f"Cannot tell which of the arities {sorted(candidates)} {impl!r} "
        f"replaces, pass arity= explicitly"
    )
