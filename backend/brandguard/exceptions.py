"""
BrandGuard exception hierarchy.

Malformed colors and missing layer fields never raise; they degrade into
violations. Only the collaborator boundaries and the rules loader raise.
"""
from typing import Any, Dict, Optional


class BrandGuardError(Exception):
    """Base exception for all BrandGuard errors."""

    code: str = "BG_INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ExtractionError(BrandGuardError):
    """A snapshot provider could not produce the document's layers."""
    code = "BG_EXTRACTION_FAILED"


class MutationError(BrandGuardError):
    """A layer mutator failed to apply one remediation action."""
    code = "BG_MUTATION_FAILED"


class RulesConfigError(BrandGuardError):
    """Brand rules could not be loaded or failed schema validation."""
    code = "BG_RULES_INVALID"
