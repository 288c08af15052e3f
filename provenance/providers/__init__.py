"""
External judge providers for the provenance engine.

This module contains the provider clients that implement the
ProviderClientProtocol interface and the orchestrator that fans out to
them.
"""

from provenance.providers.base import BaseProviderClient
from provenance.providers.parser import ResponseParser, ParsedResponse
from provenance.providers.cloudflare import CloudflareProvider
from provenance.providers.anthropic import AnthropicProvider
from provenance.providers.orchestrator import ProviderOrchestrator

__all__ = [
    "BaseProviderClient",
    "ResponseParser",
    "ParsedResponse",
    "CloudflareProvider",
    "AnthropicProvider",
    "ProviderOrchestrator",
]
