"""
Conversion workflow: path translation, process supervision and result
classification for the WSL-hosted transcription program.
"""

from .classifier import classify_outcome
from .models import (
    ConversionFailure,
    ConversionRequest,
    ConversionResult,
    ConversionSuccess,
    FailureKind,
    ProcessOutcome,
)
from .orchestrator import AudioConversionOrchestrator
from .paths import from_wsl_path, to_wsl_path
from .supervisor import ProcessSupervisor

__all__ = [
    'AudioConversionOrchestrator',
    'ConversionFailure',
    'ConversionRequest',
    'ConversionResult',
    'ConversionSuccess',
    'FailureKind',
    'ProcessOutcome',
    'ProcessSupervisor',
    'classify_outcome',
    'from_wsl_path',
    'to_wsl_path',
]
