"""
Utility helpers used by the migration tool.

This subpackage exposes the migrator's exception types, convenience
functions for structured logging and the Management API pre-flight checks.
"""

from .errors import (
    ERRORS,
    FetchError,
    MigrationError,
    MissingSourceAttribute,
    RegistrationError,
    TransformerError,
    UploadError,
    report_error,
    report_ok,
)
from .pre_flight_checks import PreFlightCheckError, run_kontent_pre_flight_checks

__all__ = [
    "ERRORS",
    "FetchError",
    "MigrationError",
    "MissingSourceAttribute",
    "PreFlightCheckError",
    "RegistrationError",
    "TransformerError",
    "UploadError",
    "report_error",
    "report_ok",
    "run_kontent_pre_flight_checks",
]
