"""Diagnostic code constants and severity mappings."""

from lsprotocol import types

UNKNOWN_OPTION = "picolsp/unknown-option"
MISSING_VALUE = "picolsp/missing-value"
INVALID_VALUE = "picolsp/invalid-value"
UNKNOWN_MAPPING = "picolsp/unknown-mapping"
MISSING_DEVICE = "picolsp/missing-device"
EXTRA_ARGUMENT = "picolsp/extra-argument"

DIAGNOSTIC_SEVERITY: dict[str, types.DiagnosticSeverity] = {
    MISSING_VALUE: types.DiagnosticSeverity.Error,
    INVALID_VALUE: types.DiagnosticSeverity.Error,
    MISSING_DEVICE: types.DiagnosticSeverity.Information,
}

DEFAULT_SEVERITY: types.DiagnosticSeverity = types.DiagnosticSeverity.Warning


def severity_for(code: str) -> types.DiagnosticSeverity:
    """Severity published for a diagnostic code."""
    return DIAGNOSTIC_SEVERITY.get(code, DEFAULT_SEVERITY)
