"""
Reading file headers from uploads, streams and paths.

Only the first few bytes of a file are ever read. Any I/O failure is
logged and turned into a failed HeaderResult; callers never see the
exception.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from fastapi import UploadFile

logger = logging.getLogger(__name__)

# Leading bytes read from every file; EMPTY_HEADER in file_validation is this many zero bytes
HEADER_SIZE = 4


@dataclass(frozen=True)
class HeaderResult:
    header: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.header is not None

    @classmethod
    def success(cls, header: Optional[str]) -> "HeaderResult":
        if header is None:
            return cls.failure("No header bytes")
        return cls(header=header)

    @classmethod
    def failure(cls, reason: str) -> "HeaderResult":
        return cls(error=reason)


def bytes_to_hex(data: Optional[bytes]) -> Optional[str]:
    """Uppercase hex of `data`, two digits per byte. None when empty."""
    if not data:
        return None
    return data.hex().upper()


def leading_header(contents: bytes, size: int = HEADER_SIZE) -> Optional[str]:
    """
    Hex header of the first `size` bytes of `contents`.

    Short contents are zero-filled to `size` bytes, so an empty file
    yields "00000000" for the default size.
    """
    if size <= 0:
        return None
    return bytes_to_hex(contents[:size].ljust(size, b"\x00"))


def read_header(stream: BinaryIO, size: int = HEADER_SIZE) -> HeaderResult:
    """Read the header from a binary file-like object positioned at its start."""
    try:
        data = stream.read(size) or b""
    except (OSError, ValueError) as e:
        logger.exception("Failed to read file header")
        return HeaderResult.failure(str(e))
    return HeaderResult.success(leading_header(data, size))


def read_path_header(
    path: Union[str, Path],
    size: int = HEADER_SIZE,
) -> HeaderResult:
    try:
        with open(path, "rb") as f:
            return read_header(f, size)
    except OSError as e:
        logger.exception(f"Failed to open {path}")
        return HeaderResult.failure(str(e))


async def read_upload_header(
    upload: UploadFile,
    size: int = HEADER_SIZE,
) -> HeaderResult:
    """Read the header of an upload and rewind it for later consumers."""
    try:
        data = await upload.read(size)
        await upload.seek(0)
    except (OSError, ValueError) as e:
        logger.exception(f"Failed to read header of upload {upload.filename!r}")
        return HeaderResult.failure(str(e))
    return HeaderResult.success(leading_header(data or b"", size))


def get_extension(filename: Optional[str]) -> str:
    """
    Extension of `filename` without the dot, case kept as found.
    Empty when the base name has no dot.
    """
    if not filename:
        return ""
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1]
