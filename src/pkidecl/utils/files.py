# pkidecl/utils/files.py

from __future__ import annotations

from pathlib import Path
from typing import Union
import os
import tempfile

from pkidecl.constants import ARTIFACT_SUFFIX
from pkidecl.utils.formatting import error

StrPath = Union[str, Path]

def read_bytes(path: StrPath) -> bytes:
    """Read a file as bytes; exits with a message on failure."""
    file_path = Path(path)

    try:
        return file_path.read_bytes()
    except OSError as err:
        error(f"Unable to read '{file_path}': {err.strerror or err}", 1)

def write_bytes(
    path: StrPath,
    data: bytes,
    *,
    overwrite: bool = False,
    create_dirs: bool = False,
    mode: int = 0o600,
) -> Path:
    """
    Write bytes to a file through a temporary file in the same directory, so
    a reader never sees a partly written artifact.
    Exits with a message on failure (consistent with read_bytes()).

    Args:
        path: Destination file path.
        data: Bytes to write.
        overwrite: If False and path exists, abort.
        create_dirs: Create parent directories if needed.
        mode: Permission bits of the written file.

    Returns:
        The Path of the written file.
    """
    file_path = Path(path)

    if file_path.exists() and not overwrite:
        error(f"File '{file_path}' already exists. Use --overwrite to replace it.", 1)

    try:
        if create_dirs:
            file_path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=file_path.parent, prefix=f".{file_path.name}.")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, file_path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    except OSError as err:
        error(f"Unable to write '{file_path}': {err.strerror or err}", 1)

    return file_path

def artifact_path(output_dir: StrPath, name: str, artifact: str) -> Path:
    """
    Path of a generated artifact, e.g. ``out/root-key.key.pem``

    Args:
        output_dir: Directory holding generated artifacts
        name: Key pair, certificate or request name
        artifact: One of 'key', 'certificate', 'request'
    """
    return Path(output_dir) / f"{name}{ARTIFACT_SUFFIX[artifact]}"
