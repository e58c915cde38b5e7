"""Application configuration."""

import os
from pathlib import Path

VERSION = "0.2.0"

# Where key files land when no --output-dir is given
OUTPUT_DIR = Path(os.getenv("MFCKEYS_OUTPUT_DIR", "."))

# Logging
LOG_LEVEL = os.getenv("MFCKEYS_LOG_LEVEL", "WARNING").upper()
API_LOG_LEVEL = os.getenv("MFCKEYS_API_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
