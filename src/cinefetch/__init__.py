"""
cinefetch - Find video links buried in any text.

Locates video URLs in pasted markup, logs and documents, and classifies
each by hosting platform:
1. Deterministic mode - ordered platform regex rules, no network
2. AI mode - one structured-output call to an AI provider, which also
   recovers obfuscated links ("youtu dot be slash ...")
"""

from cinefetch.config import (
    CinefetchConfig,
    ConfigSource,
    clear_config_cache,
    get_config,
)
from cinefetch.exceptions import (
    CinefetchError,
    ExtractionBusyError,
    ExtractionServiceError,
    InputEmptyError,
    UnreadableFileError,
)
from cinefetch.export import (
    format_report,
    links_to_clipboard_text,
    parse_report,
    write_report,
)
from cinefetch.inputs import decode_text, read_text_file
from cinefetch.models import (
    ExtractedLink,
    ExtractionMode,
    ExtractionOutcome,
    ExtractionStatus,
    Platform,
)
from cinefetch.operations import (
    AIExtractionOrchestrator,
    ExtractionCoordinator,
    extract_links,
)
from cinefetch.rules import (
    DEFAULT_RULES,
    VIDEO_PLATFORMS,
    detect_platform,
    list_supported_platforms,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "ExtractionCoordinator",
    "AIExtractionOrchestrator",
    "extract_links",
    # Models
    "ExtractedLink",
    "ExtractionMode",
    "ExtractionOutcome",
    "ExtractionStatus",
    "Platform",
    # Rules
    "DEFAULT_RULES",
    "VIDEO_PLATFORMS",
    "detect_platform",
    "list_supported_platforms",
    # Input / output
    "decode_text",
    "read_text_file",
    "format_report",
    "parse_report",
    "links_to_clipboard_text",
    "write_report",
    # Config
    "CinefetchConfig",
    "ConfigSource",
    "get_config",
    "clear_config_cache",
    # Exceptions
    "CinefetchError",
    "InputEmptyError",
    "ExtractionBusyError",
    "ExtractionServiceError",
    "UnreadableFileError",
]
