"""
Audio-to-MIDI conversion workflow.

Stages an uploaded file, runs the conversion program through the WSL bridge
and turns whatever happens into a ``ConversionResult``. Callers never see an
exception from ``process``.
"""
import asyncio
import os
import re
import shlex
import shutil
import uuid
from pathlib import Path
from typing import Callable, Optional, Tuple

from .classifier import classify_outcome
from .models import ConversionFailure, ConversionRequest, ConversionResult, FailureKind
from .paths import to_wsl_path
from .supervisor import ProcessSupervisor
from ..config import BridgeConfig
from ..utils.exceptions import InvalidPathError, LaunchError
from ..utils.logging import BridgeLogger, get_logger

PathTranslator = Callable[[Path], str]

_PLACEHOLDER_RE = re.compile(r"\{(input|output)\}")


class AudioConversionOrchestrator:
    """
    Runs one conversion per ``process`` call.

    Requests share nothing but the staging directories; every request gets
    its own uuid-named input and output files, so concurrent calls need no
    locking.
    """

    def __init__(
        self,
        config: BridgeConfig,
        supervisor: Optional[ProcessSupervisor] = None,
        translate: Optional[PathTranslator] = None,
        logger: Optional[BridgeLogger] = None,
    ):
        self.config = config
        self.logger = logger or get_logger("AudioConversionOrchestrator")
        self.supervisor = supervisor or ProcessSupervisor(config.bridge_command, logger=self.logger)
        self.translate = translate or (lambda path: to_wsl_path(path, mount_root=config.mount_root))

    async def process(self, request: ConversionRequest) -> ConversionResult:
        """Convert one uploaded audio file to MIDI."""
        input_path: Optional[Path] = None
        try:
            self._ensure_directories()
            input_path, output_path = self._allocate_paths(request.extension)

            await asyncio.to_thread(self._stage_upload, request, input_path)
            self.logger.info(f"File saved to: {input_path}")

            try:
                foreign_input = self.translate(input_path)
                foreign_output = self.translate(output_path)
            except InvalidPathError as e:
                self.logger.error(f"Path translation failed: {e}")
                return ConversionFailure(FailureKind.INVALID_PATH, f"Invalid path: {e.message}")

            self.logger.info(f"Path translation: {input_path} -> {foreign_input}")
            self.logger.info(f"Path translation: {output_path} -> {foreign_output}")

            command = self.build_command(foreign_input, foreign_output)

            try:
                outcome = await asyncio.to_thread(
                    self.supervisor.run, command, self.config.timeout_seconds
                )
            except LaunchError as e:
                self.logger.error(str(e))
                return ConversionFailure(FailureKind.LAUNCH_ERROR, f"System error: {e.message}")

            # The program wrote through the WSL mount; check the same file from the host side
            result = classify_outcome(outcome, output_path)
            if result.success:
                self.logger.success(f"Conversion finished: {result.output_path}")
            else:
                self.logger.warning(f"Conversion failed ({result.kind.value}): {result.message}")
            return result

        except Exception as e:
            self.logger.exception("Unexpected error while processing audio")
            return ConversionFailure(FailureKind.SYSTEM_ERROR, f"System error: {e}")

        finally:
            if input_path is not None:
                self._remove_input(input_path)

    def build_command(self, foreign_input: str, foreign_output: str) -> str:
        """Fill the command template with shell-quoted WSL paths."""
        values = {"input": shlex.quote(foreign_input), "output": shlex.quote(foreign_output)}
        # Other braces belong to the shell (awk programs, ${VAR}, {a,b})
        return _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], self.config.command_template)

    def _ensure_directories(self) -> None:
        self.config.uploads_dir.mkdir(parents=True, exist_ok=True)
        self.config.outputs_dir.mkdir(parents=True, exist_ok=True)

    def _allocate_paths(self, extension: str) -> Tuple[Path, Path]:
        input_path = (self.config.uploads_dir / f"{uuid.uuid4().hex}{extension}").absolute()
        output_path = (self.config.outputs_dir / f"{uuid.uuid4().hex}.mid").absolute()
        return input_path, output_path

    @staticmethod
    def _stage_upload(request: ConversionRequest, input_path: Path) -> None:
        with open(input_path, "wb") as f:
            shutil.copyfileobj(request.stream, f)
            f.flush()
            os.fsync(f.fileno())

    def _remove_input(self, input_path: Path) -> None:
        try:
            input_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.warning(f"Could not remove transient input {input_path}: {e}")
