# utils.py

"""Utility functions for minitiff."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any

__all__ = [
    'HeaderInvalidError',
    'IncompleteDirectoryError',
    'MiniTiffError',
    'ParameterInvalidError',
    'ShortReadError',
    'ShortWriteError',
    'SinkUnavailableError',
    'SourceUnavailableError',
    'UnresolvedBitDepthError',
    'UnsupportedFeatureError',
    'enumstr',
    'format_size',
    'logger',
    'swap16',
    'swap32',
]


class MiniTiffError(ValueError):
    """Exception to indicate invalid or unsupported TIFF structure."""


class ParameterInvalidError(MiniTiffError):
    """Image dimensions or format passed to writer are not supported."""


class SinkUnavailableError(MiniTiffError):
    """Destination file cannot be created."""


class SourceUnavailableError(MiniTiffError):
    """Source file cannot be opened."""


class HeaderInvalidError(MiniTiffError):
    """Byte order marker or magic number of file header are invalid."""


class UnsupportedFeatureError(MiniTiffError):
    """Directory requests compression, multiple strips, or planar storage."""


class IncompleteDirectoryError(MiniTiffError):
    """Directory lacks fields required to locate the image data."""


class UnresolvedBitDepthError(MiniTiffError):
    """BitsPerSample does not resolve to 8, 16, or 32."""


class ShortReadError(MiniTiffError):
    """Fewer bytes were read from file than requested."""


class ShortWriteError(MiniTiffError):
    """Fewer bytes were written to file than requested."""


def logger() -> logging.Logger:
    """Return logger for minitiff module."""
    return logging.getLogger('minitiff')


def swap16(value: int, /) -> int:
    """Return 16-bit unsigned integer with bytes reversed.

    >>> hex(swap16(0x1234))
    '0x3412'

    """
    return ((value >> 8) | (value << 8)) & 0xFFFF


def swap32(value: int, /) -> int:
    """Return 32-bit unsigned integer with bytes reversed.

    >>> hex(swap32(0x12345678))
    '0x78563412'

    """
    return (
        ((value >> 24) & 0xFF)
        | ((value << 8) & 0xFF0000)
        | ((value >> 8) & 0xFF00)
        | ((value << 24) & 0xFF000000)
    )


def format_size(size: float, /, threshold: float = 1536) -> str:
    """Return file size as string from byte size.

    >>> format_size(1234)
    '1234 B'
    >>> format_size(12345678901)
    '11.50 GiB'

    """
    if size < threshold:
        return f'{size} B'
    for unit in ('KiB', 'MiB', 'GiB', 'TiB'):
        size /= 1024.0
        if size < threshold:
            return f'{size:.2f} {unit}'
    return 'ginormous'


def enumstr(enum_type: type[enum.IntEnum], value: Any, /) -> str:
    """Return name of enum member matching value, else value as string.

    >>> from minitiff.enums import PHOTOMETRIC
    >>> enumstr(PHOTOMETRIC, 2)
    'RGB'
    >>> enumstr(PHOTOMETRIC, 99)
    '99'

    """
    try:
        return enum_type(value).name
    except ValueError:
        return str(value)
