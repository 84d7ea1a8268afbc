"""Declarative effects and test-time bindings.

Effects are side-effecting functions declared on an `Interface`. In tests
they can be bound to other implementations, optionally with an expected
number of calls, without touching production code paths.
"""

from ._api import bind, omnipresent
from ._config import ConfigurationManager
from ._context import carry_owner, current_scope, init, reset
from ._declarations import Interface, delegate_effect, effect, get_effect_table
from ._fun_util import Constantly, Default
from .mocks import get_registry, verify
from .models.errors import (
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
from .models.scope import GLOBAL, OMNIPRESENT, Scope

__all__ = [
    "BindingContextError",
    "ConfigurationManager",
    "Constantly",
    "Default",
    "DuplicateBindingError",
    "EffectCallError",
    "EffectDeclarationError",
    "EffectExhaustedError",
    "EffectNotBoundError",
    "EffectNotFoundError",
    "EffectUnmockedError",
    "EfxError",
    "FunctionNotDeclaredError",
    "GLOBAL",
    "Interface",
    "OMNIPRESENT",
    "Scope",
    "VerificationFailure",
    "bind",
    "carry_owner",
    "current_scope",
    "delegate_effect",
    "effect",
    "get_effect_table",
    "get_registry",
    "init",
    "omnipresent",
    "reset",
    "verify",
]
