"""Application settings and configuration."""

import os

# Name mdBook knows this preprocessor by
PREPROCESSOR_NAME = "external-links-preprocessor"

# mdBook release the JSON protocol model was written against
SUPPORTED_MDBOOK_VERSION = "0.4.40"

# Logging defaults
DEFAULT_LOG_LEVEL = os.getenv("MDBOOK_EXTERNAL_LINKS_LOG_LEVEL", "WARNING")
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

__all__ = [
    "PREPROCESSOR_NAME",
    "SUPPORTED_MDBOOK_VERSION",
    "DEFAULT_LOG_LEVEL",
    "VALID_LOG_LEVELS",
]
