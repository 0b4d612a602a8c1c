"""
Validation result

Issues found in a composition. Issues are data: they are always returned
and never raised.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class IssueSeverity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class IssueLocation:
    """Where an issue applies; any combination of the ids may be set."""
    primitive_id: Optional[str] = None
    connection_id: Optional[str] = None
    parameter_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {k: v for k, v in (
            ("primitive_id", self.primitive_id),
            ("connection_id", self.connection_id),
            ("parameter_id", self.parameter_id),
        ) if v is not None}


@dataclass(frozen=True)
class ValidationIssue:
    severity: IssueSeverity
    message: str
    location: Optional[IssueLocation] = None

    @property
    def is_error(self) -> bool:
        return self.severity == IssueSeverity.ERROR

    def to_dict(self) -> dict:
        result = {"severity": self.severity.value, "message": self.message}
        if self.location is not None:
            result["location"] = self.location.to_dict()
        return result

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.message}"


@dataclass
class ValidationResult:
    """
    Ordered list of issues plus the overall verdict.

    The composition is valid iff no issue has severity ERROR; warnings and
    infos never block validity.
    """
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not any(issue.is_error for issue in self.issues)

    def add(self, severity: IssueSeverity, message: str, location: Optional[IssueLocation] = None) -> None:
        self.issues.append(ValidationIssue(severity=severity, message=message, location=location))

    def _with_severity(self, severity: IssueSeverity) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == severity]

    @property
    def errors(self) -> List[ValidationIssue]:
        return self._with_severity(IssueSeverity.ERROR)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return self._with_severity(IssueSeverity.WARNING)

    @property
    def infos(self) -> List[ValidationIssue]:
        return self._with_severity(IssueSeverity.INFO)

    def issues_for_primitive(self, primitive_id: str) -> List[ValidationIssue]:
        return [
            issue for issue in self.issues
            if issue.location is not None and issue.location.primitive_id == primitive_id
        ]

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> dict:
        return {"valid": self.valid, "issues": [issue.to_dict() for issue in self.issues]}

    def summary(self) -> str:
        verdict = "valid" if self.valid else "invalid"
        return (
            f"{verdict}: {len(self.errors)} error(s), {len(self.warnings)} warning(s), "
            f"{len(self.infos)} info"
        )
