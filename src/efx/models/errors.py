from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..mocks._types import MockedFun
    from .scope import Scope


class EfxError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class EffectDeclarationError(EfxError):
    """Raised when an effect function cannot be declared on an interface."""


class BindingContextError(EfxError):
    """Raised when a binding is installed from the wrong execution context.

    Test bindings need an active test owner, omnipresent bindings must be
    installed before any test starts.
    """


class FunctionNotDeclaredError(EfxError):
    def __init__(self, interface: str, name: str, arity: int):
        self.interface = interface
        self.name = name
        self.arity = arity
        super().__init__(
            f"No matching function found for {interface}: {name}/{arity}"
        )

    def __reduce__(self):
        return self.__class__, (self.interface, self.name, self.arity)


class DuplicateBindingError(EfxError):
    def __init__(self, interface: str, name: str, arity: int):
        self.interface = interface
        self.name = name
        self.arity = arity
        super().__init__(
            f"{interface}.{name}/{arity} already has a binding without an "
            f"expected number of calls in this scope"
        )

    def __reduce__(self):
        return self.__class__, (self.interface, self.name, self.arity)


class EffectCallError(EfxError, AssertionError):
    """Base class for failures while resolving a bound effect call.

    These are assertion errors so that pytest reports them as a failing
    assertion of the test that triggered the call.
    """

    reason = "cannot be resolved"

    def __init__(self, scope: "Scope | None", interface: str, name: str, arity: int):
        self.scope = scope
        self.interface = interface
        self.name = name
        self.arity = arity
        super().__init__(
            f"{interface}.{name}/{arity} {self.reason} in scope {scope}"
        )

    def __reduce__(self):
        return self.__class__, (self.scope, self.interface, self.name, self.arity)


class EffectNotFoundError(EffectCallError):
    reason = "has no binding"


class EffectNotBoundError(EffectNotFoundError):
    reason = "is not bound by any mock"


class EffectUnmockedError(EffectCallError):
    reason = "was called but is unmocked; bind it or default it explicitly"


class EffectExhaustedError(EffectCallError):
    reason = "was called more often than its bindings expect"


class VerificationFailure(EfxError, AssertionError):
    """Raised at test teardown when expected calls were not met."""

    def __init__(self, scope: "Scope", unsatisfied: "list[MockedFun]"):
        self.scope = scope
        self.unsatisfied = unsatisfied
        lines = "\n".join(
            f"- Function {fun.interface}.{fun.name}/{fun.arity} was expected to "
            f"be called {fun.expected_calls} times but was called "
            f"{fun.calls_made} times."
            for fun in unsatisfied
        )
        super().__init__(f"Expectations in scope {scope} were not met:\n{lines}")

    def __reduce__(self):
        from ..mocks._types import ImplKind

        # replacements are often lambdas; the report only needs the counts
        unsatisfied = [
            fun.model_copy(update={"impl": ImplKind.DEFAULT}) for fun in self.unsatisfied
        ]
        return self.__class__, (self.scope, unsatisfied)
