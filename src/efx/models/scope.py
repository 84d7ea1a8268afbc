"""Visibility scopes of bindings."""

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict


class ScopeKind(str, Enum):
    """Supported scope kinds, narrowest first."""

    OWNER = "owner"
    GLOBAL = "global"
    OMNIPRESENT = "omnipresent"


class Scope(BaseModel):
    """Where a binding is visible.

    - owner: bound to one test execution and the contexts it hands its owner to
    - global: shared by tests that are deliberately run one after another
    - omnipresent: installed once at bootstrap, visible to every test
    """

    model_config = ConfigDict(frozen=True)

    kind: ScopeKind
    owner_id: str | None = None

    @classmethod
    def owner(cls, owner_id: str | None = None) -> "Scope":
        return cls(kind=ScopeKind.OWNER, owner_id=owner_id or uuid.uuid4().hex)

    @property
    def is_owner(self) -> bool:
        return self.kind == ScopeKind.OWNER

    def __str__(self) -> str:
        if self.kind == ScopeKind.OWNER:
            return f"owner:{self.owner_id}"
        return self.kind.value


GLOBAL = Scope(kind=ScopeKind.GLOBAL)
OMNIPRESENT = Scope(kind=ScopeKind.OMNIPRESENT)
