"""
MIDI Bridge

Runs an audio-to-MIDI conversion program inside a WSL environment on behalf of
an HTTP service and reports the result.
"""

__version__ = "0.1.0"
