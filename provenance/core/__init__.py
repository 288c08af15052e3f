"""
Core abstractions and interfaces for the provenance engine.

This module defines the core protocols, types, configuration and errors
used throughout the system.
"""

from provenance.core.interfaces import (
    FeatureExtractorProtocol,
    ProviderClientProtocol,
    ExplainerProtocol,
    ResultStore,
)
from provenance.core.types import (
    TextSample,
    LinguisticMetrics,
    ProviderJudgment,
    ProviderSettlement,
    Indicator,
    ConsensusResult,
    DetectionState,
)
from provenance.core.config import DetectionConfig, AI_CONFIDENCE_THRESHOLD
from provenance.core.exceptions import (
    ProvenanceError,
    ProviderError,
    ProviderAuthMissing,
    ProviderTimeout,
    ProviderMalformedResponse,
    ProviderTransportError,
    ProviderAllModelsExhausted,
    ValidationError,
    ConfigurationError,
    PersistenceError,
)

__all__ = [
    # Protocols
    "FeatureExtractorProtocol",
    "ProviderClientProtocol",
    "ExplainerProtocol",
    "ResultStore",
    # Types
    "TextSample",
    "LinguisticMetrics",
    "ProviderJudgment",
    "ProviderSettlement",
    "Indicator",
    "ConsensusResult",
    "DetectionState",
    # Configuration
    "DetectionConfig",
    "AI_CONFIDENCE_THRESHOLD",
    # Exceptions
    "ProvenanceError",
    "ProviderError",
    "ProviderAuthMissing",
    "ProviderTimeout",
    "ProviderMalformedResponse",
    "ProviderTransportError",
    "ProviderAllModelsExhausted",
    "ValidationError",
    "ConfigurationError",
    "PersistenceError",
]
