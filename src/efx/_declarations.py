"""Effect declarations and call-site dispatch.

An interface is a class grouping effect functions:

    class Storage(Interface):
        @effect
        def get() -> list:
            return read_rows()

Declaring the class registers every effect, with its default implementation
and its arities, in the process wide effect table. While dispatch is enabled
each effect is replaced by a wrapper that asks the binding registry whether
the interface is bound for the current owner and otherwise runs the default
implementation. With dispatch disabled the effects stay plain functions.
"""

import functools
import inspect
import logging
from typing import Any, Callable, ClassVar, Sequence

from opentelemetry import trace

from ._config import ConfigurationManager
from ._context import effective_scope
from ._fun_util import positional_arity_range
from .mocks._registry import BindingRegistry, get_registry
from .models.errors import EffectDeclarationError, EfxError
from .models.scope import Scope

logger = logging.getLogger(__name__)

BOUND_ANNOTATION_KEY = "efx.bound"
EFFECT_ANNOTATION_KEY = "efx.effect"


class EffectDeclaration:
    """An effect function: its name, default implementation and arities."""

    def __init__(
        self,
        name: str,
        default: Callable[..., Any],
        arities: Sequence[int],
        signature: inspect.Signature | None,
    ):
        self.name = name
        self.default = default
        self.arities = tuple(sorted(set(arities)))
        self.signature = signature

    @property
    def is_async(self) -> bool:
        return inspect.iscoroutinefunction(self.default)

    def positional_args(self, args: Sequence[Any], kwargs: dict[str, Any]) -> tuple:
        """Turn a call into the positional arguments a binding receives.

        Keyword arguments are moved to their positions. Parameters left out
        before the last supplied one get their defaults, the ones after it are
        dropped, so the arity matches what the caller wrote.
        """
        if self.signature is None:
            if kwargs:
                raise TypeError(f"{self.name}() takes positional arguments only")
            return tuple(args)

        bound = self.signature.bind(*args, **kwargs)
        names = list(self.signature.parameters)
        supplied = [names.index(name) for name in bound.arguments]
        if not supplied:
            return ()
        bound.apply_defaults()
        return tuple(bound.arguments[name] for name in names[: max(supplied) + 1])


class InterfaceSpec:
    """Runtime description of an interface used by the registry."""

    def __init__(self, name: str, effects: dict[str, EffectDeclaration]):
        self.name = name
        self.effects = effects

    def arities(self, name: str) -> tuple[int, ...]:
        declaration = self.effects.get(name)
        return declaration.arities if declaration else ()

    def call_default(self, name: str, args: Sequence[Any]) -> Any:
        return self.effects[name].default(*args)

    def __repr__(self) -> str:
        return f"InterfaceSpec({self.name!r})"


class EffectTable:
    """Process wide lookup of declared interfaces by name."""

    def __init__(self) -> None:
        self._interfaces: dict[str, InterfaceSpec] = {}

    def register(self, spec: InterfaceSpec) -> None:
        if spec.name in self._interfaces:
            logger.debug("Redeclaring interface %s", spec.name)
        self._interfaces[spec.name] = spec

    def get(self, name: str) -> InterfaceSpec | None:
        return self._interfaces.get(name)

    def names(self) -> list[str]:
        return sorted(self._interfaces)


_effect_table = EffectTable()


def get_effect_table() -> EffectTable:
    return _effect_table


class _EffectMarker:
    def __init__(
        self,
        default: Callable[..., Any],
        name: str | None = None,
        arities: Sequence[int] | None = None,
        delegated: bool = False,
    ):
        self.default = default
        self.name = name
        self.arities = arities
        self.delegated = delegated

    def declare(self, attribute: str, interface: str) -> EffectDeclaration:
        name = self.name or attribute
        arity_range = positional_arity_range(self.default)

        if self.arities is not None:
            arities = list(self.arities)
        elif arity_range is not None:
            low, high = arity_range
            arities = list(range(low, high + 1))
        else:
            raise EffectDeclarationError(
                f"Cannot declare effect {interface}.{name}: *args, **kwargs and "
                f"keyword-only parameters are not supported"
                + (", pass arities= to delegate_effect" if self.delegated else "")
            )

        if not self.delegated:
            signature = inspect.signature(self.default)
            if any(
                p.kind not in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
                for p in signature.parameters.values()
            ):
                raise EffectDeclarationError(
                    f"Cannot declare effect {interface}.{name}: *args, **kwargs "
                    f"and keyword-only parameters are not supported"
                )
        else:
            signature = None

        return EffectDeclaration(name, self.default, arities, signature)


def effect(func: Callable[..., Any] | None = None, *, name: str | None = None):
    """Declare a function of an `Interface` subclass as an effect.

    The body is the default implementation. Usable bare or with a name:
    ``@effect`` or ``@effect(name="read")``.
    """

    def decorator(f):
        if isinstance(f, staticmethod):
            f = f.__func__
        return _EffectMarker(f, name=name)

    if func is None:
        return decorator
    return decorator(func)


def delegate_effect(
    target: Callable[..., Any],
    arities: Sequence[int] | None = None,
    name: str | None = None,
) -> Any:
    """Declare an effect whose default implementation is `target`.

    Builtins and functions taking ``*args`` need explicit `arities`.
    """
    return _EffectMarker(target, name=name, arities=arities, delegated=True)


def _bound_call(
    registry: BindingRegistry,
    scope: Scope,
    spec: InterfaceSpec,
    declaration: EffectDeclaration,
    args: tuple,
) -> Any:
    result = registry.call(scope, spec, declaration.name, args)

    span = trace.get_current_span()
    span.set_attribute(BOUND_ANNOTATION_KEY, True)
    span.set_attribute(
        EFFECT_ANNOTATION_KEY, f"{spec.name}.{declaration.name}/{len(args)}"
    )
    return result


def _make_dispatcher(spec: InterfaceSpec, declaration: EffectDeclaration):
    default = declaration.default

    if declaration.is_async:

        @functools.wraps(default)
        async def async_dispatch(*args, **kwargs):
            scope = effective_scope()
            registry = get_registry()
            if not registry.is_mocked(scope, spec):
                return await default(*args, **kwargs)

            result = _bound_call(
                registry,
                scope,
                spec,
                declaration,
                declaration.positional_args(args, kwargs),
            )
            if inspect.isawaitable(result):
                result = await result
            return result

        return async_dispatch

    @functools.wraps(default)
    def dispatch(*args, **kwargs):
        scope = effective_scope()
        registry = get_registry()
        if not registry.is_mocked(scope, spec):
            return default(*args, **kwargs)

        return _bound_call(
            registry, scope, spec, declaration, declaration.positional_args(args, kwargs)
        )

    return dispatch


class Interface:
    """Base class of a group of effects that are bound as a set."""

    __efx_interface__: ClassVar[InterfaceSpec]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        name = f"{cls.__module__}.{cls.__qualname__}"
        # dispatchers are bound to the spec of the class that declared them
        parents = [
            base.__efx_interface__.name
            for base in cls.__mro__[1:]
            if base is not Interface and "__efx_interface__" in vars(base)
        ]
        if parents:
            raise EffectDeclarationError(
                f"Cannot declare interface {name}: it subclasses the interface "
                f"{parents[0]}; declare a separate Interface subclass instead"
            )

        markers = {
            attribute: value
            for attribute, value in vars(cls).items()
            if isinstance(value, _EffectMarker)
        }

        declarations: dict[str, EffectDeclaration] = {}
        attributes: dict[str, EffectDeclaration] = {}
        for attribute, marker in markers.items():
            declaration = marker.declare(attribute, name)
            if declaration.name in declarations:
                raise EffectDeclarationError(
                    f"Effect {name}.{declaration.name} is declared twice"
                )
            declarations[declaration.name] = declaration
            attributes[attribute] = declaration

        spec = InterfaceSpec(name, declarations)
        cls.__efx_interface__ = spec
        _effect_table.register(spec)

        dispatch_enabled = ConfigurationManager().dispatch_enabled
        for attribute, declaration in attributes.items():
            if dispatch_enabled:
                setattr(cls, attribute, staticmethod(_make_dispatcher(spec, declaration)))
            else:
                setattr(cls, attribute, staticmethod(declaration.default))

        logger.debug(
            "Declared interface %s with effects %s (dispatch %s)",
            name,
            sorted(declarations),
            "on" if dispatch_enabled else "off",
        )

    @classmethod
    def __effects__(cls) -> list[tuple[str, tuple[int, ...]]]:
        return [
            (declaration.name, declaration.arities)
            for declaration in cls.__efx_interface__.effects.values()
        ]


def interface_spec(interface: "type[Interface] | InterfaceSpec | str") -> InterfaceSpec:
    """Resolve an interface class, spec or declared name to its spec."""
    if isinstance(interface, InterfaceSpec):
        return interface
    if isinstance(interface, str):
        spec = _effect_table.get(interface)
        if spec is None:
            raise EfxError(f"No interface named {interface} has been declared")
        return spec
    if isinstance(interface, type) and issubclass(interface, Interface):
        if interface is not Interface:
            return interface.__efx_interface__
    raise EfxError(f"{interface!r} is not an efx interface")
