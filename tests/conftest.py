import pytest

from efx import Constantly, ConfigurationManager, omnipresent
from tests.support.examples import EfxOmnipresentExample

pytest_plugins = ["pytester", "efx.testing.pytest_plugin"]

# installed once at bootstrap, outside of any test
omnipresent(EfxOmnipresentExample, "get", lambda: [42])
omnipresent(EfxOmnipresentExample, "another_get", Constantly(["foo"]))


@pytest.fixture
def config_manager(monkeypatch: pytest.MonkeyPatch):
    """Provide the configuration manager, re-read from a patched environment."""
    manager = ConfigurationManager()
    manager.refresh()
    yield manager
    monkeypatch.undo()
    manager.refresh()
