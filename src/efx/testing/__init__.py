"""Test support for efx bindings."""

from ._case import EfxCase, efx_case, setup_effects

__all__ = ["EfxCase", "efx_case", "setup_effects"]
