"""Supported code action kinds and document language identifiers."""

from __future__ import annotations

import enum
from typing import Iterable

REFACTOR_REWRITE = "refactor.rewrite"


class CodeActions(dict):
    """Code action kinds mapped to whether they are enabled."""

    def as_list(self) -> list[str]:
        """The kinds in sorted order."""
        return sorted(self)

    def only(self, only: Iterable[str]) -> "CodeActions":
        """The subset whose kinds are listed in ``only``."""
        return CodeActions({kind: self[kind] for kind in only if kind in self})


SUPPORTED_CODE_ACTIONS = CodeActions({REFACTOR_REWRITE: True})


class LanguageID(str, enum.Enum):
    """Languages of the documents served."""

    TERRAFORM = "terraform"
    TFVARS = "terraform-vars"

    def __str__(self) -> str:
        return self.value