# passguard/errors.py
"""Error taxonomy for the password engine

A failed password check is not an error: it is a ValidationResult with
is_valid=False. The classes below cover caller mistakes, rejected policy
updates and failures of the persistence collaborator.
"""
from typing import Any, Dict, List, Optional


class PassguardError(Exception):
    """Base exception for all engine errors"""
    default_code = 'ERROR'
    status_code = 500
    retryable = False

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = self.default_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error for JSON responses"""
        data = {'error': self.code, 'message': self.message}
        if self.details:
            data['details'] = self.details
        if self.retryable:
            data['retryable'] = True
        return data


class InvalidInputError(PassguardError):
    """Malformed caller arguments; retrying the same call cannot succeed"""
    default_code = 'INVALID_INPUT'
    status_code = 400


class PolicyValidationError(PassguardError):
    """Rejected policy candidate, carrying every violated rule"""
    default_code = 'POLICY_VALIDATION_FAILED'
    status_code = 422

    def __init__(self, errors: List[str]):
        super().__init__('Policy validation failed: ' + ', '.join(errors))
        self.errors = list(errors)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['errors'] = self.errors
        return data


class PersistenceError(PassguardError):
    """Failure reported by the persistence collaborator"""
    default_code = 'PERSISTENCE_ERROR'
    status_code = 503
    retryable = True


class GenerationError(PassguardError):
    """Generator could not produce a compliant password"""
    default_code = 'GENERATION_FAILED'
    status_code = 500
