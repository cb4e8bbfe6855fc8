"""
Custom exceptions for the MIDI Bridge application.

This module defines custom exceptions to provide more meaningful error messages
and better error handling throughout the application.
"""
from typing import Optional, Dict, Any


class MIDIBridgeError(Exception):
    """Base exception class for all MIDI Bridge specific exceptions."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(MIDIBridgeError):
    """Raised when there is an error in the application configuration."""
    pass


class InvalidPathError(MIDIBridgeError):
    """Raised when a host path has no drive root the bridge can mount."""
    pass


class LaunchError(MIDIBridgeError):
    """Raised when the bridge process could not be spawned."""
    pass
