import os
import sys
from functools import cached_property

from pydantic import BaseModel

ENV_DISPATCH = "EFX_DISPATCH"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class Config(BaseModel):
    dispatch_enabled: bool


class ConfigurationManager:
    """Singleton configuration manager."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @cached_property
    def dispatch_enabled(self) -> bool:
        """Whether effects dispatch through the binding registry.

        Interfaces declared while this is off keep plain functions and never
        consult the registry. Unset means on whenever pytest is loaded.
        """
        value = os.getenv(ENV_DISPATCH, None)
        if value is None or not value.strip():
            return "pytest" in sys.modules

        value = value.strip().lower()
        if value in _TRUTHY:
            return True
        if value in _FALSY:
            return False
        raise ValueError(
            f"Invalid value for {ENV_DISPATCH}: {value!r}, expected one of "
            f"{sorted(_TRUTHY | _FALSY)}"
        )

    @property
    def config(self) -> Config:
        return Config(dispatch_enabled=self.dispatch_enabled)

    def refresh(self) -> None:
        """Forget cached settings so they are read again from the environment."""
        self.__dict__.pop("dispatch_enabled", None)
