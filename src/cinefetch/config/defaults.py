"""
Default configuration values for cinefetch.

Note: Values can be overridden via config/loader.py which supports
environment variables, project config, and user config.
"""

# Provider used for AI extraction (see providers/registry.py for aliases)
DEFAULT_AI_PROVIDER = "google"

# Hard cap on characters of input sent to the AI service per run
AI_MAX_INPUT_CHARS = 15_000

# Artificial delay (seconds) before deterministic results are returned
SMOOTHING_DELAY = 0.6

# Export file name prefix (cinefetch_export_<epoch ms>.txt)
EXPORT_FILE_PREFIX = "cinefetch_export_"
