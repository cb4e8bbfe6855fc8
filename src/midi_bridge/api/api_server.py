"""
MIDI Bridge API Server

FastAPI-based REST API that converts uploaded audio to MIDI by running the
transcription program inside WSL.
"""

import asyncio
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel
import uvicorn

from .. import __version__
from ..config import BridgeConfig, load_config
from ..conversion import AudioConversionOrchestrator, ConversionRequest, FailureKind
from ..delivery import count_midi_notes, get_file_download, get_relative_url
from ..utils.logging import BridgeLogger


class TranscriptionResponse(BaseModel):
    """Response model for a finished transcription."""
    success: bool
    message: str
    midi_url: Optional[str] = None
    num_notes: Optional[int] = None
    processing_time: Optional[float] = None
    created_at: str


app = FastAPI(
    title="MIDI Bridge API",
    description="Convert audio files to MIDI through a WSL-hosted transcription program",
    version=__version__
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global state
bridge_config: Optional[BridgeConfig] = None
orchestrator: Optional[AudioConversionOrchestrator] = None
logger = BridgeLogger("api_server")

CONFIG_PATH_ENV = "MIDI_BRIDGE_CONFIG"

FAILURE_STATUS = {
    FailureKind.TIMEOUT: 504,
    FailureKind.MISSING_OUTPUT: 422,
    FailureKind.PROGRAM_ERROR: 422,
    FailureKind.EXIT_CODE: 422,
    FailureKind.INVALID_PATH: 500,
    FailureKind.LAUNCH_ERROR: 500,
    FailureKind.SYSTEM_ERROR: 500,
}


def get_config() -> BridgeConfig:
    global bridge_config
    if bridge_config is None:
        bridge_config = load_config(os.getenv(CONFIG_PATH_ENV))
    return bridge_config


def get_orchestrator() -> AudioConversionOrchestrator:
    global orchestrator
    if orchestrator is None:
        orchestrator = AudioConversionOrchestrator(get_config(), logger=logger)
    return orchestrator


@app.on_event("startup")
async def startup_event():
    """Initialize the API server."""
    logger.info("🚀 Starting MIDI Bridge API Server...")

    config = get_config()
    config.uploads_dir.mkdir(parents=True, exist_ok=True)
    config.outputs_dir.mkdir(parents=True, exist_ok=True)

    if shutil.which(config.bridge_command[0]) is None:
        logger.warning(f"Bridge executable not found on PATH: {config.bridge_command[0]}")

    get_orchestrator()
    logger.success("🎵 MIDI Bridge API Server ready!")


@app.get("/", response_model=dict)
async def root():
    """API root endpoint."""
    return {
        "message": "MIDI Bridge API",
        "version": __version__,
        "status": "running",
        "endpoints": {
            "transcribe": "/transcribe",
            "download": "/outputs/{file_name}",
            "health": "/health"
        }
    }


@app.get("/health", response_model=dict)
async def health_check():
    """Health check endpoint."""
    config = get_config()
    return {
        "status": "healthy",
        "bridge": "available" if shutil.which(config.bridge_command[0]) else "missing",
        "timestamp": datetime.now().isoformat()
    }


@app.post("/transcribe", response_model=TranscriptionResponse)
async def transcribe_audio(
    audio_file: UploadFile = File(..., description="Audio file to transcribe"),
):
    """
    Transcribe an audio file to MIDI.

    The request waits for the conversion program; the response carries the
    download URL of the generated file.
    """
    config = get_config()

    if not audio_file.filename:
        raise HTTPException(status_code=400, detail="No file provided")
    if not Path(audio_file.filename).suffix:
        raise HTTPException(status_code=400, detail="Uploaded file name has no extension")

    audio_file.file.seek(0, os.SEEK_END)
    size = audio_file.file.tell()
    audio_file.file.seek(0)
    if size > config.max_file_size:
        raise HTTPException(status_code=413, detail="File too large")

    logger.info(f"🎵 New transcription request: {audio_file.filename} ({size} bytes)")

    start_time = datetime.now()
    result = await get_orchestrator().process(
        ConversionRequest(stream=audio_file.file, filename=audio_file.filename)
    )
    processing_time = (datetime.now() - start_time).total_seconds()

    if not result.success:
        logger.error(f"Transcription failed for {audio_file.filename}: {result.message}")
        raise HTTPException(status_code=FAILURE_STATUS[result.kind], detail=result.message)

    try:
        num_notes = await asyncio.to_thread(count_midi_notes, result.output_path)
    except Exception as e:
        logger.warning(f"Could not read generated MIDI {result.output_path}: {e}")
        num_notes = None

    return TranscriptionResponse(
        success=True,
        message=result.message,
        midi_url=get_relative_url(result.output_path, Path(config.web_root).absolute()),
        num_notes=num_notes,
        processing_time=processing_time,
        created_at=start_time.isoformat()
    )


@app.get("/outputs/{file_name}")
async def download_midi(file_name: str, download_name: Optional[str] = None):
    """Download a generated MIDI file."""
    if Path(file_name).name != file_name or file_name in ("", ".", ".."):
        raise HTTPException(status_code=400, detail="Invalid file name")

    if download_name:
        download_name = Path(download_name).name.replace('"', '') or None

    try:
        download = get_file_download(get_config().outputs_dir / file_name, download_name)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="MIDI file not found")

    return Response(
        content=download.content,
        media_type=download.media_type,
        headers={"Content-Disposition": f'attachment; filename="{download.filename}"'}
    )


def run_server(host: str = "0.0.0.0", port: int = 8000, config_path: Optional[str] = None):
    """
    Run the API server.

    Args:
        host: Host to bind to
        port: Port to bind to
        config_path: Optional YAML configuration file
    """
    if config_path:
        os.environ[CONFIG_PATH_ENV] = config_path

    logger.info(f"🚀 Starting MIDI Bridge API on {host}:{port}")

    uvicorn.run(
        "midi_bridge.api.api_server:app",
        host=host,
        port=port,
        reload=False,
        log_level="info"
    )
