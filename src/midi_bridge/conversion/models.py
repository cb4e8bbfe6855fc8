"""Value types shared by the conversion workflow."""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Optional, Union


@dataclass
class ConversionRequest:
    """An uploaded audio stream and the name it was uploaded under."""
    stream: BinaryIO
    filename: str

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix


@dataclass(frozen=True)
class ProcessOutcome:
    """Terminal state of one supervised process run.

    ``exit_code`` is only meaningful when ``exit_completed`` is true. A run
    that hit the timeout carries whatever output was captured before the
    process was killed.
    """
    exit_completed: bool
    exit_code: Optional[int]
    stdout: str
    stderr: str
    timed_out: bool
    pid: Optional[int] = None
    duration: float = 0.0


class FailureKind(str, Enum):
    INVALID_PATH = "invalid_path"
    LAUNCH_ERROR = "launch_error"
    TIMEOUT = "timeout"
    MISSING_OUTPUT = "missing_output"
    PROGRAM_ERROR = "program_error"
    EXIT_CODE = "exit_code"
    SYSTEM_ERROR = "system_error"


@dataclass(frozen=True)
class ConversionSuccess:
    output_path: Path
    message: str = "Processing completed"

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class ConversionFailure:
    kind: FailureKind
    message: str

    @property
    def success(self) -> bool:
        return False

    @property
    def output_path(self) -> None:
        return None


ConversionResult = Union[ConversionSuccess, ConversionFailure]
