"""Exceptions raised for malformed sequencing input."""

from typing import Dict, Optional


class ConfigurationError(Exception):
    """Malformed dimensions or values, rejected before any solve begins."""

    def __init__(self, message: str, context: Optional[Dict] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with context."""
        msg = f"Configuration Error: {self.message}"
        if self.context:
            msg += "\n\nContext:"
            for key, value in self.context.items():
                msg += f"\n  {key}: {value}"
        return msg
