"""
Classification of a finished conversion run.

The conversion program reports its result on stdout: ``SUCCESS:`` when it
wrote the MIDI file, ``ERROR:<message>`` when it gave up. Its exit code is
advisory only. All knowledge of these markers lives in this module.
"""
from pathlib import Path
from typing import Union

from .models import ConversionFailure, ConversionResult, ConversionSuccess, FailureKind, ProcessOutcome

SUCCESS_MARKER = "SUCCESS:"
ERROR_MARKER = "ERROR:"


def classify_outcome(outcome: ProcessOutcome, output_path: Union[str, Path]) -> ConversionResult:
    """Decide whether a run produced a usable artifact at ``output_path``.

    ``output_path`` must be the host-side path; the program was handed the
    WSL path to the same file.
    """
    output_path = Path(output_path)

    if outcome.timed_out:
        return ConversionFailure(
            FailureKind.TIMEOUT,
            f"Processing timed out after {outcome.duration:.0f}s"
        )

    if outcome.exit_code == 0 and SUCCESS_MARKER in outcome.stdout:
        if output_path.exists():
            return ConversionSuccess(output_path)
        return ConversionFailure(
            FailureKind.MISSING_OUTPUT,
            "Processing completed but no output produced"
        )

    if ERROR_MARKER in outcome.stdout:
        detail = outcome.stdout.partition(ERROR_MARKER)[2].strip()
        return ConversionFailure(FailureKind.PROGRAM_ERROR, f"Processing error: {detail}")

    return ConversionFailure(
        FailureKind.EXIT_CODE,
        f"Processing failed with exit code {outcome.exit_code}"
    )
