import pytest

from efx import ConfigurationManager


class TestConfigurationManager:
    def test_is_a_singleton(self):
        assert ConfigurationManager() is ConfigurationManager()

    def test_dispatch_is_enabled_under_pytest_by_default(self, config_manager, monkeypatch):
        monkeypatch.delenv("EFX_DISPATCH", raising=False)
        config_manager.refresh()

        assert config_manager.dispatch_enabled is True

    @pytest.mark.parametrize(
        "value, expected",
        [("1", True), ("true", True), ("ON", True), ("0", False), ("off", False)],
    )
    def test_reads_dispatch_from_environment(
        self, config_manager, monkeypatch, value, expected
    ):
        monkeypatch.setenv("EFX_DISPATCH", value)
        config_manager.refresh()

        assert config_manager.dispatch_enabled is expected
        assert config_manager.config.dispatch_enabled is expected

    def test_rejects_invalid_values(self, config_manager, monkeypatch):
        monkeypatch.setenv("EFX_DISPATCH", "sometimes")
        config_manager.refresh()

        with pytest.raises(ValueError, match="EFX_DISPATCH"):
            config_manager.dispatch_enabled

    def test_caches_until_refreshed(self, config_manager, monkeypatch):
        monkeypatch.setenv("EFX_DISPATCH", "1")
        config_manager.refresh()
        assert config_manager.dispatch_enabled is True

        monkeypatch.setenv("EFX_DISPATCH", "0")
        assert config_manager.dispatch_enabled is True

        config_manager.refresh()
        assert config_manager.dispatch_enabled is False
