# minitiff.py

# Copyright (c) 2026, minitiff developers
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# 1. Redistributions of source code must retain the above copyright notice,
#    this list of conditions and the following disclaimer.
#
# 2. Redistributions in binary form must reproduce the above copyright notice,
#    this list of conditions and the following disclaimer in the documentation
#    and/or other materials provided with the distribution.
#
# 3. Neither the name of the copyright holder nor the names of its
#    contributors may be used to endorse or promote products derived from
#    this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

r"""Read and write minimal TIFF files.

Minitiff is a small Python library to read and write single-strip,
uncompressed TIFF files with interleaved 8, 16, or 32-bit components and
one (gray), three (RGB), or four (RGBA) components per pixel.

Image data are not buffered by the library when reading: :py:func:`load`
validates the image file directory, positions a reader at the start of the
image data, and passes it to a callback that reads the bytes directly into
a caller-provided buffer.

:License: BSD-3-Clause
:Version: 2026.10.19

Requirements
------------

- `CPython <https://www.python.org>`_ 3.11 or newer
- `NumPy <https://pypi.org/project/numpy>`_

Examples
--------

Write a 16-bit RGB image and read it back into a preallocated array:

>>> import numpy
>>> data = numpy.arange(32 * 16 * 3, dtype='uint16').reshape(32, 16, 3)
>>> save('temp.tif', 16, 32, 3, 16, data)
True
>>> out = numpy.empty_like(data)
>>> def fill(width, height, components, bits, reader):
...     return reader.read_bytes(out)
...
>>> load('temp.tif', fill)
True
>>> numpy.array_equal(out, data)
True

Use the NumPy interface:

>>> imwrite('temp.tif', data)
>>> imread('temp.tif').shape
(32, 16, 3)

Inspect the image file directory:

>>> info('temp.tif', lambda code, value, dtype, count: None)
True

"""

from __future__ import annotations

__version__ = '2026.10.19'

__all__ = [
    'COMPRESSION',
    'DATATYPE',
    'FILLORDER',
    'PHOTOMETRIC',
    'PLANARCONFIG',
    'SAMPLEFORMAT',
    'TAG',
    'TAGNAMES',
    'TIFF',
    'ByteOrder',
    'FileHandle',
    'FileReader',
    'FileWriter',
    'HeaderInvalidError',
    'IfdEntry',
    'ImageParameters',
    'IncompleteDirectoryError',
    'MiniTiffError',
    'ParameterInvalidError',
    'ShortReadError',
    'ShortWriteError',
    'SinkUnavailableError',
    'SourceUnavailableError',
    'TiffHeader',
    'UnresolvedBitDepthError',
    'UnsupportedFeatureError',
    '__version__',
    'imread',
    'imwrite',
    'info',
    'load',
    'main',
    'save',
    'tagname',
]

import logging
import os
import sys
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING

import numpy

from .enums import (
    COMPRESSION,
    DATATYPE,
    FILLORDER,
    PHOTOMETRIC,
    PLANARCONFIG,
    SAMPLEFORMAT,
    TAG,
)
from .fileio import ByteOrder, FileHandle, FileReader, FileWriter
from .tags import TAGNAMES, IfdEntry, TiffHeader, tagname
from .utils import (
    HeaderInvalidError,
    IncompleteDirectoryError,
    MiniTiffError,
    ParameterInvalidError,
    ShortReadError,
    ShortWriteError,
    SinkUnavailableError,
    SourceUnavailableError,
    UnresolvedBitDepthError,
    UnsupportedFeatureError,
    enumstr,
    format_size,
    logger,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence
    from typing import Any, TypeAlias

    from numpy.typing import ArrayLike, NDArray

    FileType: TypeAlias = str | os.PathLike[Any] | IO[bytes]
    LoadCallback: TypeAlias = Callable[[int, int, int, int, FileReader], bool]
    InfoCallback: TypeAlias = Callable[[int, int, int, int], Any]


class _TIFF:
    """Constants of the minitiff file layout, accessible via `TIFF`."""

    MAGIC = TiffHeader.MAGIC
    """Magic number following byte order marker."""

    HEADER_SIZE = TiffHeader.SIZE
    """Size of file header."""

    ENTRY_SIZE = IfdEntry.SIZE
    """Size of image file directory entry."""

    IFD_OFFSET = 8
    """Position of image file directory written by minitiff."""

    DATA_OFFSET = 256
    """Position of image data written by minitiff."""

    BITSPERSAMPLE = frozenset({8, 16, 32})
    """Supported bits per component."""

    SAMPLESPERPIXEL = frozenset({1, 3, 4})
    """Supported number of components per pixel."""

    MAX_DATA_SIZE = 2**32 - 1 - 256
    """Maximum size of image data addressable with 32-bit offsets."""

    def __repr__(self) -> str:
        return '<minitiff.TIFF>'


TIFF = _TIFF()


@dataclass(frozen=True)
class ImageParameters:
    """Image properties decoded from a validated image file directory."""

    width: int
    """Number of columns."""

    height: int
    """Number of rows."""

    component_count: int
    """Number of components per pixel."""

    bits_per_component: int
    """Bits per component, 8, 16, or 32."""

    data_offset: int
    """Position of image data in file."""

    data_bytecount: int
    """Number of bytes of image data according to StripByteCounts."""

    swap_components: bool = False
    """Components of 16 and 32-bit image data are byte swapped on read."""

    sample_format: int | None = None
    """Value of SampleFormat tag if stored inline, else None."""

    @property
    def nbytes(self) -> int:
        """Number of bytes of image data derived from image geometry."""
        return (
            self.width
            * self.height
            * self.component_count
            * (self.bits_per_component // 8)
        )

    @property
    def shape(self) -> tuple[int, ...]:
        """Shape of image array, (height, width[, components])."""
        if self.component_count == 1:
            return (self.height, self.width)
        return (self.height, self.width, self.component_count)

    @property
    def dtype(self) -> numpy.dtype[Any]:
        """NumPy data type of components in host byte order."""
        if self.bits_per_component == 8:
            return numpy.dtype(numpy.uint8)
        if self.bits_per_component == 16:
            return numpy.dtype(numpy.uint16)
        if self.sample_format == SAMPLEFORMAT.UINT:
            return numpy.dtype(numpy.uint32)
        if self.sample_format == SAMPLEFORMAT.INT:
            return numpy.dtype(numpy.int32)
        return numpy.dtype(numpy.float32)


def save(
    file: FileType,
    /,
    width: int,
    height: int,
    component_count: int,
    bits_per_component: int,
    data: Any,
) -> bool:
    """Write image data to minimal TIFF file.

    Parameters:
        file:
            File name or writable binary stream. Streams are written at
            their current position, which must be the start of the file.
        width:
            Number of columns, greater than 0.
        height:
            Number of rows, greater than 0.
        component_count:
            Number of components per pixel, 1, 3, or 4.
        bits_per_component:
            Bits per component, 8, 16, or 32 (IEEE float).
        data:
            Object supporting the buffer protocol, containing exactly
            `width * height * component_count * bits_per_component / 8`
            bytes of interleaved image data in host byte order.

    Returns:
        *True* if the file was written. *False* if parameters are not
        supported or the file cannot be written. The reason is logged.

    """
    try:
        _save(
            file, width, height, component_count, bits_per_component, data
        )
    except (MiniTiffError, OSError) as exc:
        logger().warning(f'<minitiff.save> {exc}')
        return False
    return True


def _validate(
    width: int,
    height: int,
    component_count: int,
    bits_per_component: int,
    data: Any,
    /,
) -> memoryview:
    """Return data as byte view or raise ParameterInvalidError."""
    if width <= 0 or height <= 0:
        msg = f'invalid image size {width}x{height}'
        raise ParameterInvalidError(msg)
    if bits_per_component not in TIFF.BITSPERSAMPLE:
        msg = f'{bits_per_component=} not in {sorted(TIFF.BITSPERSAMPLE)}'
        raise ParameterInvalidError(msg)
    if component_count not in TIFF.SAMPLESPERPIXEL:
        msg = f'{component_count=} not in {sorted(TIFF.SAMPLESPERPIXEL)}'
        raise ParameterInvalidError(msg)
    if data is None:
        msg = 'no image data'
        raise ParameterInvalidError(msg)
    try:
        view = memoryview(data).cast('B')
    except TypeError as exc:
        msg = f'image data is not a contiguous buffer: {exc}'
        raise ParameterInvalidError(msg) from exc
    nbytes = width * height * component_count * (bits_per_component // 8)
    if nbytes > TIFF.MAX_DATA_SIZE:
        msg = f'image data too large ({format_size(nbytes)})'
        raise ParameterInvalidError(msg)
    if view.nbytes != nbytes:
        msg = f'image data size {view.nbytes} does not match {nbytes}'
        raise ParameterInvalidError(msg)
    return view


def _directory_entries(
    width: int,
    height: int,
    component_count: int,
    bits_per_component: int,
    /,
) -> list[IfdEntry]:
    """Return ordered directory entries written by minitiff."""
    photometric = (
        PHOTOMETRIC.MINISBLACK if component_count == 1 else PHOTOMETRIC.RGB
    )
    entries = [
        IfdEntry(TAG.NEWSUBFILETYPE, 0),
        IfdEntry(TAG.IMAGEWIDTH, width),
        IfdEntry(TAG.IMAGELENGTH, height),
        IfdEntry(TAG.BITSPERSAMPLE, bits_per_component),
        IfdEntry(TAG.COMPRESSION, COMPRESSION.NONE),
        IfdEntry(TAG.PHOTOMETRIC, photometric),
        IfdEntry(TAG.STRIPOFFSETS, TIFF.DATA_OFFSET),
        IfdEntry(TAG.SAMPLESPERPIXEL, component_count),
    ]
    if bits_per_component == 32:
        entries.append(IfdEntry(TAG.SAMPLEFORMAT, SAMPLEFORMAT.IEEEFP))
    entries.append(IfdEntry(TAG.ROWSPERSTRIP, height))
    entries.append(
        IfdEntry(
            TAG.STRIPBYTECOUNTS,
            width * height * component_count * (bits_per_component // 8),
        )
    )
    return entries


def _save(
    file: FileType,
    width: int,
    height: int,
    component_count: int,
    bits_per_component: int,
    data: Any,
    /,
) -> int:
    """Write minimal TIFF file and return number of bytes written."""
    view = _validate(width, height, component_count, bits_per_component, data)
    entries = _directory_entries(
        width, height, component_count, bits_per_component
    )
    with FileHandle(file, 'wb') as fh:
        writer = FileWriter(fh)
        writer.write(TiffHeader.native().tobytes())
        writer.write_u16(len(entries))
        for entry in entries:
            writer.write(entry.tobytes())
        writer.write_empty(TIFF.DATA_OFFSET - writer.bytes_written)
        writer.write(view)
        fh.flush()
        logger().debug(
            f'<minitiff.save> wrote {fh.name!r} {width}x{height}x'
            f'{component_count} {bits_per_component}-bit, '
            f'{format_size(writer.bytes_written)}'
        )
        return writer.bytes_written


def _read_directory(
    fh: FileHandle, /
) -> tuple[FileReader, Iterator[IfdEntry]]:
    """Return reader and iterator over entries of first directory."""
    header = TiffHeader.fromfile(fh)
    reader = FileReader(fh, header.byteorder)
    reader.seek(header.ifdoffset)
    count = reader.read_u16()
    logger().debug(
        f'<minitiff> {fh.name!r} {header!r} {count} directory entries'
    )
    return reader, (IfdEntry.fromfile(reader) for _ in range(count))


def _resolve_bitspersample(reader: FileReader, value: int, /) -> int:
    """Return bits per component stored inline or at file offset value."""
    if value in TIFF.BITSPERSAMPLE:
        return value
    reader.seek(value)
    try:
        bits = reader.read_u16()
    except ShortReadError as exc:
        msg = f'BitsPerSample offset {value} is outside of file'
        raise UnresolvedBitDepthError(msg) from exc
    if bits not in TIFF.BITSPERSAMPLE:
        msg = f'BitsPerSample {bits} at offset {value} not supported'
        raise UnresolvedBitDepthError(msg)
    return bits


def _read_parameters(
    fh: FileHandle, /
) -> tuple[ImageParameters, FileReader]:
    """Return validated image parameters and reader positioned at data.

    Raises:
        MiniTiffError: File is not a supported minimal TIFF file.

    """
    reader, entries = _read_directory(fh)

    width = 0
    height = 0
    component_count = 1
    bits_per_component = 0
    data_offset: int | None = None
    data_bytecount = 0
    rows_per_strip: int | None = None
    swap_components = False
    sample_format: int | None = None

    for entry in entries:
        value = entry.value
        logger().debug(
            f'<minitiff.load> {entry.code:04x}:{entry.dtype:04x}:'
            f'{entry.count:04x}:{value:08x} {entry.name}'
        )
        try:
            tag = TAG(entry.code)
        except ValueError:
            continue

        match tag:
            case TAG.NEWSUBFILETYPE:
                if value != 0:
                    msg = f'NewSubfileType {value} not supported'
                    raise UnsupportedFeatureError(msg)
            case TAG.IMAGEWIDTH:
                width = value
            case TAG.IMAGELENGTH:
                height = value
            case TAG.BITSPERSAMPLE:
                bits_per_component = value
            case TAG.COMPRESSION:
                if value != COMPRESSION.NONE:
                    msg = (
                        f'Compression {enumstr(COMPRESSION, value)} '
                        'not supported'
                    )
                    raise UnsupportedFeatureError(msg)
            case TAG.PHOTOMETRIC:
                if value not in {PHOTOMETRIC.MINISBLACK, PHOTOMETRIC.RGB}:
                    msg = (
                        'PhotometricInterpretation '
                        f'{enumstr(PHOTOMETRIC, value)} not supported'
                    )
                    raise UnsupportedFeatureError(msg)
            case TAG.STRIPOFFSETS:
                data_offset = value
            case TAG.SAMPLESPERPIXEL:
                component_count = value
            case TAG.ROWSPERSTRIP:
                rows_per_strip = value
                if height and rows_per_strip != height:
                    msg = f'RowsPerStrip {rows_per_strip} != {height=}'
                    raise UnsupportedFeatureError(msg)
            case TAG.STRIPBYTECOUNTS:
                data_bytecount = value
            case TAG.PLANARCONFIG:
                if value != PLANARCONFIG.CONTIG:
                    msg = (
                        'PlanarConfiguration '
                        f'{enumstr(PLANARCONFIG, value)} not supported'
                    )
                    raise UnsupportedFeatureError(msg)
            case TAG.FILLORDER:
                swap_components = value == FILLORDER.MSB2LSB
            case TAG.SAMPLEFORMAT:
                if entry.count == 1:
                    sample_format = value
            case (
                TAG.ORIENTATION
                | TAG.XRESOLUTION
                | TAG.YRESOLUTION
                | TAG.RESOLUTIONUNIT
                | TAG.SOFTWARE
                | TAG.DATETIME
                | TAG.EXTRASAMPLES
                | TAG.XMP
                | TAG.PHOTOSHOP
                | TAG.EXIFIFD
                | TAG.ICCPROFILE
            ):
                pass

    if (
        width == 0
        or height == 0
        or data_bytecount == 0
        or data_offset is None
    ):
        msg = (
            f'missing required tags: {width=}, {height=}, '
            f'{data_bytecount=}, {data_offset=}'
        )
        raise IncompleteDirectoryError(msg)
    if rows_per_strip is not None and rows_per_strip != height:
        msg = f'RowsPerStrip {rows_per_strip} != {height=}'
        raise UnsupportedFeatureError(msg)
    if bits_per_component == 0:
        msg = 'missing required tag BitsPerSample'
        raise IncompleteDirectoryError(msg)

    bits_per_component = _resolve_bitspersample(reader, bits_per_component)

    parameters = ImageParameters(
        width=width,
        height=height,
        component_count=component_count,
        bits_per_component=bits_per_component,
        data_offset=data_offset,
        data_bytecount=data_bytecount,
        swap_components=swap_components,
        sample_format=sample_format,
    )
    if parameters.nbytes != data_bytecount:
        logger().warning(
            f'<minitiff.load> StripByteCounts {data_bytecount} '
            f'does not match image size {parameters.nbytes}'
        )

    itemsize = bits_per_component // 8
    reader = reader.with_component_swap(
        itemsize if swap_components and itemsize > 1 else 0
    )
    reader.seek(data_offset)
    logger().debug(f'<minitiff.load> {parameters!r}')
    return parameters, reader


def load(file: FileType, callback: LoadCallback, /) -> bool:
    """Validate minimal TIFF file and pass reader of image data to callback.

    Parameters:
        file:
            File name or seekable binary stream.
        callback:
            Function called with `width`, `height`, `component_count`,
            `bits_per_component`, and a :py:class:`FileReader` positioned
            at the start of the image data. The reader is only valid during
            the call. The callback returns *True* if it read the image data.

    Returns:
        Return value of `callback`, or *False* if the file cannot be opened,
        is not a supported minimal TIFF file, or a read by the callback
        raised :py:class:`MiniTiffError`. The reason is logged.

    """
    try:
        with FileHandle(file) as fh:
            parameters, reader = _read_parameters(fh)
            return bool(
                callback(
                    parameters.width,
                    parameters.height,
                    parameters.component_count,
                    parameters.bits_per_component,
                    reader,
                )
            )
    except MiniTiffError as exc:
        logger().warning(f'<minitiff.load> {exc}')
        return False


def info(file: FileType, callback: InfoCallback, /) -> bool:
    """Pass all entries of image file directory to callback.

    Parameters:
        file:
            File name or seekable binary stream.
        callback:
            Function called for every directory entry in file order with
            tag `code`, `value`, `dtype`, and `count` in host byte order.
            The return value is ignored.

    Returns:
        *True* if all entries were read, *False* if the file cannot be
        opened or its header or directory are invalid.

    """
    try:
        with FileHandle(file) as fh:
            _, entries = _read_directory(fh)
            for entry in entries:
                callback(entry.code, entry.value, entry.dtype, entry.count)
    except MiniTiffError as exc:
        logger().warning(f'<minitiff.info> {exc}')
        return False
    return True


def imwrite(file: FileType, data: ArrayLike, /) -> None:
    """Write NumPy array to minimal TIFF file.

    Parameters:
        file:
            File name or writable binary stream.
        data:
            Array of shape (height, width) or (height, width, components)
            and type uint8, uint16, or float32.

    Raises:
        ParameterInvalidError: Array shape or type not supported.
        MiniTiffError, OSError: File cannot be written.

    """
    data = numpy.asarray(data)
    dtype = data.dtype
    if not (
        (dtype.kind == 'u' and dtype.itemsize in {1, 2})
        or (dtype.kind == 'f' and dtype.itemsize == 4)
    ):
        msg = f'data type {dtype} not supported'
        raise ParameterInvalidError(msg)
    if data.ndim == 2:
        height, width = data.shape
        component_count = 1
    elif data.ndim == 3:
        height, width, component_count = data.shape
    else:
        msg = f'{data.ndim}-dimensional data not supported'
        raise ParameterInvalidError(msg)
    data = numpy.ascontiguousarray(data, dtype.newbyteorder('='))
    _save(file, width, height, component_count, dtype.itemsize * 8, data)


def imread(file: FileType, /) -> NDArray[Any]:
    """Return image data from minimal TIFF file as NumPy array.

    32-bit components are returned as float32 unless the SampleFormat tag
    specifies unsigned (uint32) or signed (int32) integers.

    Raises:
        MiniTiffError: File is not a supported minimal TIFF file or
            image data are truncated.

    """
    with FileHandle(file) as fh:
        parameters, reader = _read_parameters(fh)
        data = reader.read_array(
            parameters.dtype, parameters.nbytes // parameters.dtype.itemsize
        )
    return data.reshape(parameters.shape)


def main(argv: Sequence[str] | None = None) -> int:
    """Minitiff command line usage main function."""
    import argparse

    parser = argparse.ArgumentParser(
        prog='minitiff',
        description='Display image file directory of minimal TIFF file.',
    )
    parser.add_argument('path', help='TIFF file to inspect')
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='validate directory and display image parameters',
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='log trace of directory decoding',
    )
    parser.add_argument(
        '--version', action='version', version=f'%(prog)s {__version__}'
    )
    args = parser.parse_args(argv)

    logging.basicConfig(format='%(levelname)s: %(message)s')
    logger().setLevel(logging.DEBUG if args.debug else logging.INFO)

    def print_entry(code: int, value: int, dtype: int, count: int) -> None:
        print(
            f'{code:5d} {tagname(code):<26} '
            f'{enumstr(DATATYPE, dtype):<9} [{count}] {value}'
        )

    print(args.path)
    try:
        with FileHandle(args.path) as fh:
            header = TiffHeader.fromfile(fh)
    except MiniTiffError as exc:
        print(f'invalid: {exc}')
        return 1
    endian = 'little' if header.byteorder.byteorder == '<' else 'big'
    print(f'TIFF {endian}-endian, first IFD @{header.ifdoffset}')
    if not info(args.path, print_entry):
        return 1
    if not args.verbose:
        return 0

    try:
        with FileHandle(args.path) as fh:
            parameters, _ = _read_parameters(fh)
    except MiniTiffError as exc:
        print(f'invalid: {exc}')
        return 1
    print(
        f'{parameters.width}x{parameters.height}x'
        f'{parameters.component_count} '
        f'{parameters.bits_per_component}-bit {parameters.dtype}, '
        f'{format_size(parameters.data_bytecount)} @{parameters.data_offset}'
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
