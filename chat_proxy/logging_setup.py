# chat_proxy/logging_setup.py
"""Process-wide logging setup."""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Send chat_proxy.* records to stderr. Safe to call more than once."""
    root = logging.getLogger("chat_proxy")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        root.addHandler(handler)
