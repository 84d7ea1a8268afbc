from .errors import (
    BindingContextError,
    DuplicateBindingError,
    EffectCallError,
    EffectDeclarationError,
    EffectExhaustedError,
    EffectNotBoundError,
    EffectNotFoundError,
    EffectUnmockedError,
    EfxError,
    FunctionNotDeclaredError,
    VerificationFailure,
)
from .scope import GLOBAL, OMNIPRESENT, Scope, ScopeKind

__all__ = [
    "BindingContextError",
    "DuplicateBindingError",
    "EffectCallError",
    "EffectDeclarationError",
    "EffectExhaustedError",
    "EffectNotBoundError",
    "EffectNotFoundError",
    "EffectUnmockedError",
    "EfxError",
    "FunctionNotDeclaredError",
    "VerificationFailure",
    "GLOBAL",
    "OMNIPRESENT",
    "Scope",
    "ScopeKind",
]
