"""
Delivery of generated artifacts to HTTP clients.
"""
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import pretty_midi

DEFAULT_MEDIA_TYPE = "application/octet-stream"

mimetypes.add_type("audio/midi", ".mid")
mimetypes.add_type("audio/midi", ".midi")


@dataclass(frozen=True)
class FileDownload:
    content: bytes
    media_type: str
    filename: str


def get_file_download(file_path: Union[str, Path], download_name: Optional[str] = None) -> FileDownload:
    """
    Read a file for download.

    Args:
        file_path: File to send
        download_name: Suggested filename for the client (defaults to the file's name)

    Returns:
        FileDownload: File bytes with a media type resolved from the extension

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    filename = download_name or path.name
    media_type, _ = mimetypes.guess_type(filename)

    return FileDownload(
        content=path.read_bytes(),
        media_type=media_type or DEFAULT_MEDIA_TYPE,
        filename=filename,
    )


def get_relative_url(absolute_path: Union[str, Path], web_root: Union[str, Path]) -> str:
    """Turn a path under ``web_root`` into a site-relative URL."""
    relative = str(absolute_path).replace(str(web_root), "", 1)
    return "/" + relative.replace("\\", "/").lstrip("/")


def count_midi_notes(midi_path: Union[str, Path]) -> int:
    """Count the notes across all instruments of a MIDI file."""
    midi = pretty_midi.PrettyMIDI(str(midi_path))
    return sum(len(instrument.notes) for instrument in midi.instruments)
