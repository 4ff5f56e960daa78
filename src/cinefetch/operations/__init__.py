"""
Extraction operations for cinefetch.

- deterministic: rule-based extraction with context windows
- ai_extraction: structured-output extraction via an AI provider
- coordinator: mode selection, busy guard and outcome classification
"""

from cinefetch.operations.ai_extraction import (
    AIExtractionOrchestrator,
    build_extraction_messages,
    parse_extraction_response,
)
from cinefetch.operations.coordinator import ExtractionCoordinator
from cinefetch.operations.deterministic import build_context, extract_links

__all__ = [
    "AIExtractionOrchestrator",
    "ExtractionCoordinator",
    "build_context",
    "build_extraction_messages",
    "extract_links",
    "parse_extraction_response",
]
