import pytest

from efx import GLOBAL, Scope, VerificationFailure
from efx.mocks import BindingRegistry, verify
from tests.support.examples import Counter, EfxExample

EXAMPLE = EfxExample.__efx_interface__
COUNTER = Counter.__efx_interface__


@pytest.fixture
def registry() -> BindingRegistry:
    return BindingRegistry()


@pytest.fixture
def owner() -> Scope:
    return Scope.owner()


class TestVerify:
    def test_does_not_raise_if_everything_is_satisfied(self, registry, owner):
        registry.add_fun(owner, EXAMPLE, "get", 0, lambda: [], 1)
        registry.call(owner, EXAMPLE, "get", [])

        verify(owner, registry)

    def test_does_not_raise_without_expected_calls(self, registry, owner):
        registry.add_fun(owner, EXAMPLE, "get", 0, lambda: [])

        verify(owner, registry)

    def test_does_not_raise_without_bindings(self, registry, owner):
        verify(owner, registry)

    def test_raises_if_unsatisfied(self, registry, owner):
        registry.add_fun(owner, EXAMPLE, "get", 0, lambda: [], 1)

        with pytest.raises(VerificationFailure) as exc_info:
            verify(owner, registry)

        assert exc_info.value.scope == owner
        assert "get/0 was expected to be called 1 times but was called 0 times" in str(
            exc_info.value
        )

    def test_aggregates_every_unmet_expectation(self, registry, owner):
        registry.add_fun(owner, EXAMPLE, "get", 0, lambda: [], 2)
        registry.add_fun(owner, EXAMPLE, "append_get", 1, lambda arg: [arg], 1)
        registry.add_fun(owner, COUNTER, "increment", 1, lambda step: step, 3)
        registry.call(owner, EXAMPLE, "get", [])

        with pytest.raises(VerificationFailure) as exc_info:
            verify(owner, registry)

        message = exc_info.value.message
        assert len(exc_info.value.unsatisfied) == 3
        assert f"{EXAMPLE.name}.get/0" in message
        assert f"{EXAMPLE.name}.append_get/1" in message
        assert f"{COUNTER.name}.increment/1 was expected to be called 3 times" in message

    def test_is_an_assertion_error(self, registry, owner):
        registry.add_fun(owner, EXAMPLE, "get", 0, lambda: [], 1)

        with pytest.raises(AssertionError):
            verify(owner, registry)

    def test_only_checks_the_given_scope(self, registry, owner):
        registry.add_fun(GLOBAL, EXAMPLE, "get", 0, lambda: [], 1)

        verify(owner, registry)
        with pytest.raises(VerificationFailure):
            verify(GLOBAL, registry)
