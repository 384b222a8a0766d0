from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass
class ValidationIssue:
    level: Literal["error", "warning"]
    path: str  # e.g. "hooks.Stop[0].hooks[1].type"; "" for the document itself
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ValidationResult:
    """Findings for one settings document.

    Errors make the document unusable; warnings (such as a matcher repeated
    within one event array) are reported but do not block load or save.
    """

    issues: list[ValidationIssue] = field(default_factory=list)

    def error(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue("error", path, message))

    def warning(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue("warning", path, message))

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == "warning"]

    @property
    def first_error(self) -> ValidationIssue | None:
        return next(iter(self.errors), None)
