# enums.py

"""TIFF enumeration types."""

from __future__ import annotations

import enum

__all__ = [
    'COMPRESSION',
    'DATATYPE',
    'FILLORDER',
    'PHOTOMETRIC',
    'PLANARCONFIG',
    'SAMPLEFORMAT',
    'TAG',
]


class TAG(enum.IntEnum):
    """Codes of TIFF tags known to minitiff.

    Only tags that take part in decoding or that are commonly written by
    other applications next to the baseline tags are listed.

    """

    NEWSUBFILETYPE = 0x00FE
    """Kind of data in subfile. Must be 0."""
    IMAGEWIDTH = 0x0100
    IMAGELENGTH = 0x0101
    BITSPERSAMPLE = 0x0102
    """Bits per component, or offset to per-component values."""
    COMPRESSION = 0x0103
    PHOTOMETRIC = 0x0106
    FILLORDER = 0x010A
    STRIPOFFSETS = 0x0111
    ORIENTATION = 0x0112
    SAMPLESPERPIXEL = 0x0115
    ROWSPERSTRIP = 0x0116
    STRIPBYTECOUNTS = 0x0117
    XRESOLUTION = 0x011A
    YRESOLUTION = 0x011B
    PLANARCONFIG = 0x011C
    RESOLUTIONUNIT = 0x0128
    SOFTWARE = 0x0131
    DATETIME = 0x0132
    EXTRASAMPLES = 0x0152
    """Meaning of extra components, for example alpha in RGBA."""
    SAMPLEFORMAT = 0x0153
    XMP = 0x02BC
    """XML packet."""
    PHOTOSHOP = 0x8649
    EXIFIFD = 0x8769
    ICCPROFILE = 0x8773


class DATATYPE(enum.IntEnum):
    """TIFF tag data types."""

    BYTE = 1
    """8-bit unsigned integer."""
    ASCII = 2
    """8-bit byte with last byte null, containing 7-bit ASCII code."""
    SHORT = 3
    """16-bit unsigned integer."""
    LONG = 4
    """32-bit unsigned integer."""
    RATIONAL = 5
    """Two 32-bit unsigned integers, numerator and denominator of fraction."""
    SBYTE = 6
    UNDEFINED = 7
    """8-bit byte that may contain anything."""
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10
    FLOAT = 11
    """Single precision (4-byte) IEEE format."""
    DOUBLE = 12
    """Double precision (8-byte) IEEE format."""


class COMPRESSION(enum.IntEnum):
    """Values of Compression tag.

    Only uncompressed image data can be read or written.

    """

    NONE = 1
    """No compression (default)."""
    LZW = 5
    JPEG = 7
    ADOBE_DEFLATE = 8
    PACKBITS = 32773


class PHOTOMETRIC(enum.IntEnum):
    """Values of PhotometricInterpretation tag.

    The color space of the image data.

    """

    MINISWHITE = 0
    MINISBLACK = 1
    """Grayscale, used for single component images."""
    RGB = 2
    """RGB, used for three and four component images."""
    PALETTE = 3


class FILLORDER(enum.IntEnum):
    """Values of FillOrder tag.

    A value of MSB2LSB requests the components of 16 and 32-bit image data
    to be byte swapped when read.

    """

    MSB2LSB = 1
    LSB2MSB = 2


class PLANARCONFIG(enum.IntEnum):
    """Values of PlanarConfiguration tag.

    Specifies how components of each pixel are stored.

    """

    CONTIG = 1
    """Chunky, component values are stored contiguously (default)."""
    SEPARATE = 2
    """Planar, component values are stored in separate planes."""


class SAMPLEFORMAT(enum.IntEnum):
    """Values of SampleFormat tag.

    Data type of samples in a pixel.

    """

    UINT = 1
    """Unsigned integer."""
    INT = 2
    """Signed integer."""
    IEEEFP = 3
    """IEEE floating-point"""
    VOID = 4
    """Undefined."""
