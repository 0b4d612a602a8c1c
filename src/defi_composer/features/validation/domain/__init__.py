"""
Domain layer for validation feature.
"""
from defi_composer.features.validation.domain.validation_result import (
    IssueLocation,
    IssueSeverity,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    'IssueLocation',
    'IssueSeverity',
    'ValidationIssue',
    'ValidationResult',
]
