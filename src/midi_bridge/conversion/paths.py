"""
Translation between Windows host paths and their WSL mount points.

``C:\\site\\uploads\\a.wav`` is visible inside WSL as
``/mnt/c/site/uploads/a.wav``. Both directions are pure string operations;
nothing here touches the filesystem.
"""
import ntpath
import posixpath
import re
from pathlib import Path
from typing import Union

from ..utils.exceptions import InvalidPathError

_DRIVE_RE = re.compile(r"^[A-Za-z]:$")


def to_wsl_path(host_path: Union[str, Path], mount_root: str = "/mnt") -> str:
    """Translate a rooted Windows path into its WSL equivalent.

    Args:
        host_path: Absolute (or cwd-relative, on Windows) host path
        mount_root: Directory under which WSL mounts the host drives

    Returns:
        str: Path usable inside the WSL environment

    Raises:
        InvalidPathError: If the path has no ``<letter>:`` drive root
    """
    windows_path = ntpath.abspath(str(host_path))
    drive, remainder = ntpath.splitdrive(windows_path)

    if not _DRIVE_RE.match(drive):
        raise InvalidPathError(
            "Invalid Windows path: no drive letter",
            details={"path": str(host_path)}
        )

    drive_letter = drive[0].lower()
    relative = remainder.replace("\\", "/").lstrip("/")

    return f"{mount_root.rstrip('/')}/{drive_letter}/{relative}"


def from_wsl_path(wsl_path: str, mount_root: str = "/mnt") -> str:
    """Map a path under the WSL drive mounts back to its Windows form."""
    prefix = mount_root.rstrip("/") + "/"
    normalized = posixpath.normpath(wsl_path)

    if not normalized.startswith(prefix):
        raise InvalidPathError(
            f"Path is not under {mount_root}",
            details={"path": wsl_path}
        )

    drive_letter, _, relative = normalized[len(prefix):].partition("/")
    if len(drive_letter) != 1 or not drive_letter.isalpha():
        raise InvalidPathError("Invalid WSL mount path: no drive segment", details={"path": wsl_path})

    return f"{drive_letter.upper()}:\\" + relative.replace("/", "\\")
