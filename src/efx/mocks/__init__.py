"""Binding registry, mocks and verification."""

from ._mock import Miss, Mock
from ._registry import BindingRegistry, ScopeResolver, get_registry
from ._types import ImplKind, MockedFun
from ._verifier import verify

__all__ = [
    "BindingRegistry",
    "ImplKind",
    "Miss",
    "Mock",
    "MockedFun",
    "ScopeResolver",
    "get_registry",
    "verify",
]
