"""File emission for the write pipeline.

The emitter owns every file-system side effect of a run: clearing the old
mod folder, creating folders (each at most once per run), JSON encoding and
copying binary payloads. Any failure surfaces as :class:`EmitError` naming
the destination and summarizing the payload, chained to the original
exception.
"""

from __future__ import annotations

import json
import reprlib
import shutil
from pathlib import Path, PurePosixPath
from typing import Any, List, Mapping, Set

from ..errors import E_PATH_ESCAPE, E_PAYLOAD_TYPE, E_WRITE_IO, EmitError
from ..logging import get_logger
from ..utils.paths import safe_file_path
from .paths import containing_folder

__all__ = ["Emitter", "clear_output", "summarize_payload"]

_REPR = reprlib.Repr()
_REPR.maxlevel = 4
_REPR.maxdict = 8
_REPR.maxlist = 8
_REPR.maxstring = 60
_REPR.maxother = 60


def summarize_payload(payload: Any) -> str:
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return f"<{len(payload)} bytes>"
    if hasattr(payload, "read"):
        return f"<{type(payload).__name__} stream>"
    return _REPR.repr(payload)


def clear_output(directory: Path) -> bool:
    """Recursively delete ``directory``; True if something was removed.

    A missing folder is not an error. Other removal failures are logged and
    the run continues, overwriting file by file.
    """
    logger = get_logger()
    try:
        shutil.rmtree(directory)
    except FileNotFoundError:
        logger.debug("No previous output at %s", directory)
        return False
    except OSError as e:
        logger.warning("Could not clear previous output %s: %s", directory, e)
        return False
    logger.debug("Cleared previous output %s", directory)
    return True


class Emitter:
    def __init__(
        self,
        directory: Path,
        *,
        minify_json: bool = False,
        dry_run: bool = False,
    ) -> None:
        self.directory = Path(directory)
        self.minify_json = minify_json
        self.dry_run = dry_run
        self.written: List[PurePosixPath] = []
        self.bytes_written = 0
        self.folders_created = 0
        self._checked_folders: Set[PurePosixPath] = set()

    def encode_json(self, payload: Any) -> bytes:
        if self.minify_json:
            text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        else:
            text = json.dumps(payload, ensure_ascii=False, indent=4)
        return text.encode("utf-8")

    def _ensure_folder(self, folder: PurePosixPath, target: Path) -> None:
        if folder in self._checked_folders:
            return
        target.mkdir(parents=True, exist_ok=True)
        self.folders_created += 1
        self._checked_folders.add(folder)

    def _encode(self, payload: Any) -> Any:
        """Bytes for in-memory payloads; streams are passed through."""
        if isinstance(payload, (bytes, bytearray, memoryview)):
            return bytes(payload)
        if isinstance(payload, str):
            return payload.encode("utf-8")
        if isinstance(payload, (Mapping, list, tuple)):
            return self.encode_json(payload)
        if hasattr(payload, "read"):
            return payload
        raise EmitError(
            code=E_PAYLOAD_TYPE,
            message=f"Unsupported payload type {type(payload).__name__}",
            context={"payload": summarize_payload(payload)},
        )

    def _write(self, target: Path, data: Any) -> int:
        if isinstance(data, bytes):
            target.write_bytes(data)
            return len(data)
        if self.dry_run:
            return len(data.read())
        with target.open("wb") as out:
            shutil.copyfileobj(data, out)
            return out.tell()

    def emit(self, path: PurePosixPath | str, payload: Any) -> int:
        """Write ``payload`` to ``path`` (relative to the mod folder).

        Returns the number of bytes written (or that would be written in
        dry-run mode). Stream payloads are always closed, even on failure.
        """
        try:
            return self._emit(PurePosixPath(path), payload)
        finally:
            if hasattr(payload, "read"):
                payload.close()

    def _emit(self, rel: PurePosixPath, payload: Any) -> int:
        try:
            target = safe_file_path(self.directory, rel)
        except ValueError as e:
            raise EmitError(
                code=E_PATH_ESCAPE,
                message=f"Output path {rel} leaves {self.directory}",
                context={"path": str(rel)},
            ) from e
        try:
            data = self._encode(payload)
            if self.dry_run and isinstance(data, bytes):
                size = len(data)
            elif self.dry_run:
                size = self._write(target, data)
            else:
                self._ensure_folder(containing_folder(rel), target.parent)
                size = self._write(target, data)
        except EmitError:
            raise
        except Exception as e:
            raise EmitError(
                code=E_WRITE_IO,
                message=f"Error writing {rel}: {e}",
                context={
                    "path": str(rel),
                    "payload": summarize_payload(payload),
                },
            ) from e
        self.written.append(rel)
        self.bytes_written += size
        get_logger().debug("wrote %s (%d bytes)", rel, size)
        return size
