"""
Custom exceptions for the provenance engine.

Provides specific exception types for different error scenarios.
Provider errors never reach the caller of the detection service; each one
only removes that provider's contribution from the consensus.
"""

from typing import Dict


class ProvenanceError(Exception):
    """Base exception for all provenance engine errors"""
    pass


class ProviderError(ProvenanceError):
    """Raised when an external judge provider cannot produce a judgment"""

    def __init__(self, provider: str, message: str, original_error: Exception = None):
        self.provider = provider
        self.original_error = original_error
        super().__init__(f"Provider {provider} failed: {message}")


class ProviderAuthMissing(ProviderError):
    """Raised when a provider has no credential configured.

    Treated as "provider absent" rather than as a failure.
    """

    def __init__(self, provider: str):
        super().__init__(provider, "no credential configured")


class ProviderTimeout(ProviderError):
    """Raised when a provider call exceeds its timeout"""

    def __init__(self, provider: str, timeout: float = None, original_error: Exception = None):
        self.timeout = timeout
        detail = f"timed out after {timeout:.1f}s" if timeout is not None else "timed out"
        super().__init__(provider, detail, original_error=original_error)


class ProviderMalformedResponse(ProviderError):
    """Raised when a provider answers with output that holds no usable judgment"""
    pass


class ProviderTransportError(ProviderError):
    """Raised when a provider request fails at the HTTP level"""
    pass


class ProviderAllModelsExhausted(ProviderError):
    """Raised when every model in a provider's ordered list has failed"""

    def __init__(self, provider: str, failures: Dict[str, str]):
        self.failures = dict(failures)
        tried = ", ".join(f"{model} ({reason})" for model, reason in self.failures.items())
        super().__init__(provider, f"all models failed: {tried or 'no models configured'}")


class ValidationError(ProvenanceError):
    """Raised when input validation fails"""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error for '{field}': {message}")


class ConfigurationError(ProvenanceError):
    """Raised when configuration is invalid"""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Configuration error for '{key}': {message}")


class PersistenceError(ProvenanceError):
    """Raised when a result store operation fails"""

    def __init__(self, operation: str, message: str, original_error: Exception = None):
        self.operation = operation
        self.original_error = original_error
        super().__init__(f"Result store {operation} failed: {message}")
