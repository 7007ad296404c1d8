"""Accuracy auditing of calculation responses."""

from tdeecoach.validation.accuracy import ValidationResult, validate_tdee_accuracy
from tdeecoach.validation.suite import (
    CANNED_PROFILES,
    ValidationCase,
    ValidationSuite,
    run_validation_suite,
)

__all__ = [
    "CANNED_PROFILES",
    "ValidationCase",
    "ValidationResult",
    "ValidationSuite",
    "run_validation_suite",
    "validate_tdee_accuracy",
]
