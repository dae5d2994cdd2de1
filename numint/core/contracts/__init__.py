"""
Contract Validation Module

Модуль для валидации JSON контрактов batch-запросов numint.
"""

from .validators import (
    ContractValidator,
    IntegrationRequestValidator,
    SchemaLoader,
    ValidationError,
    load_integration_request,
    validate_integration_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "IntegrationRequestValidator",
    # Exceptions
    "ValidationError",
    # Functions
    "validate_integration_request",
    "load_integration_request",
]
