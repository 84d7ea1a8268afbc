"""End-of-test verification of expected calls."""

import logging

from ..models.errors import VerificationFailure
from ..models.scope import Scope
from ._registry import BindingRegistry, get_registry

logger = logging.getLogger(__name__)


def verify(scope: Scope, registry: BindingRegistry | None = None) -> None:
    """Check that every binding in `scope` was called as often as expected.

    Bindings without an expected number of calls never fail verification.

    Args:
        scope: The scope whose bindings are checked. Fallback scopes are not
            consulted.
        registry: The registry to check, the shared one by default.

    Raises:
        VerificationFailure: Naming every binding whose expectation was not met.
    """
    unsatisfied = (registry or get_registry()).unsatisfied(scope)
    if unsatisfied:
        logger.debug("%d unmet expectations in scope %s", len(unsatisfied), scope)
        raise VerificationFailure(scope, unsatisfied)
