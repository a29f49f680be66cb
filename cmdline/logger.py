# cmdline — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for cmdline."""
import logging

logger: logging.Logger = logging.getLogger("cmdline")
