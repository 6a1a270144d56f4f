# tags.py

"""TIFF header, directory entry, and tag name classes."""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING, final, overload

from .enums import DATATYPE, TAG
from .fileio import ByteOrder
from .utils import HeaderInvalidError, ShortReadError, enumstr

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from .fileio import FileHandle, FileReader

__all__ = [
    'TAGNAMES',
    'IfdEntry',
    'TiffHeader',
    'TiffTagRegistry',
    'tagname',
]


@final
class TiffTagRegistry:
    """Registry of TIFF tag codes and names.

    Map tag codes and names to names and codes respectively.

    Parameters:
        arg: Mapping of codes to names.

    Examples:
        >>> tags = TiffTagRegistry([(256, 'ImageWidth')])
        >>> tags.add(257, 'ImageLength')
        >>> tags['ImageWidth']
        256
        >>> tags[257]
        'ImageLength'
        >>> len(tags)
        2

    """

    __slots__ = ('_dict',)

    _dict: dict[int | str, str | int]

    def __init__(
        self,
        arg: dict[int, str] | Sequence[tuple[int, str]],
        /,
    ) -> None:
        self._dict = {}
        if isinstance(arg, dict):
            arg = list(arg.items())
        for code, name in arg:
            self.add(code, name)

    def add(self, code: int, name: str, /) -> None:
        """Add code and name to registry."""
        self._dict[int(code)] = name
        self._dict[name] = int(code)

    def items(self) -> list[tuple[int, str]]:
        """Return all registry items as (code, name)."""
        items = (i for i in self._dict.items() if isinstance(i[0], int))
        return sorted(items, key=lambda i: i[0])  # type: ignore[arg-type]

    @overload
    def get(self, key: int, /, default: str) -> str: ...

    @overload
    def get(self, key: str, /, default: int | None) -> int | None: ...

    def get(
        self, key: int | str, /, default: str | int | None = None
    ) -> str | int | None:
        """Return code or name if exists, else default."""
        return self._dict.get(key, default)

    def __getitem__(self, key: int | str, /) -> int | str:
        """Return code or name. Raise KeyError if not found."""
        return self._dict[key]

    def __contains__(self, item: int | str, /) -> bool:
        return item in self._dict

    def __iter__(self) -> Iterator[tuple[int, str]]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self._dict) // 2

    def __repr__(self) -> str:
        return f'<minitiff.TiffTagRegistry @0x{id(self):016X}>'


TAGNAMES = TiffTagRegistry(
    (
        (TAG.NEWSUBFILETYPE, 'NewSubfileType'),
        (TAG.IMAGEWIDTH, 'ImageWidth'),
        (TAG.IMAGELENGTH, 'ImageLength'),
        (TAG.BITSPERSAMPLE, 'BitsPerSample'),
        (TAG.COMPRESSION, 'Compression'),
        (TAG.PHOTOMETRIC, 'PhotometricInterpretation'),
        (TAG.FILLORDER, 'FillOrder'),
        (TAG.STRIPOFFSETS, 'StripOffsets'),
        (TAG.ORIENTATION, 'Orientation'),
        (TAG.SAMPLESPERPIXEL, 'SamplesPerPixel'),
        (TAG.ROWSPERSTRIP, 'RowsPerStrip'),
        (TAG.STRIPBYTECOUNTS, 'StripByteCounts'),
        (TAG.XRESOLUTION, 'XResolution'),
        (TAG.YRESOLUTION, 'YResolution'),
        (TAG.PLANARCONFIG, 'PlanarConfiguration'),
        (TAG.RESOLUTIONUNIT, 'ResolutionUnit'),
        (TAG.SOFTWARE, 'Software'),
        (TAG.DATETIME, 'DateTime'),
        (TAG.EXTRASAMPLES, 'ExtraSamples'),
        (TAG.SAMPLEFORMAT, 'SampleFormat'),
        (TAG.XMP, 'XMP'),
        (TAG.PHOTOSHOP, 'Photoshop'),
        (TAG.EXIFIFD, 'ExifTag'),
        (TAG.ICCPROFILE, 'InterColorProfile'),
    )
)
"""Names of TIFF tags known to minitiff."""


def tagname(code: int, /) -> str:
    """Return name of TIFF tag code or 'Unknown'.

    >>> tagname(258)
    'BitsPerSample'
    >>> tagname(1)
    'Unknown'

    """
    return TAGNAMES.get(int(code), 'Unknown')


@final
class TiffHeader:
    """TIFF file header.

    Byte order marker, magic number, and offset of first image file
    directory (IFD).

    Parameters:
        byteorder:
            Byte order policy of file.
        ifdoffset:
            Position of first IFD in file.

    """

    __slots__ = ('byteorder', 'ifdoffset')

    MAGIC = 42
    SIZE = 8

    byteorder: ByteOrder
    """Byte order policy derived from byte order marker."""

    ifdoffset: int
    """Position of first IFD in file, in host order."""

    def __init__(self, byteorder: ByteOrder, ifdoffset: int = 8, /) -> None:
        self.byteorder = byteorder
        self.ifdoffset = ifdoffset

    @classmethod
    def native(cls) -> TiffHeader:
        """Return header in host byte order with IFD following header."""
        return cls(ByteOrder.native(), cls.SIZE)

    @classmethod
    def frombytes(cls, data: bytes, /) -> TiffHeader:
        """Return validated header from 8 bytes.

        Raises:
            ShortReadError: Fewer than 8 bytes.
            HeaderInvalidError: Byte order marker or magic number invalid.

        """
        if len(data) < cls.SIZE:
            msg = f'TIFF header too short: {len(data)} bytes'
            raise ShortReadError(msg)
        marker = data[:2]
        if marker[0] != marker[1]:
            msg = f'not a TIFF file: byte order marker {marker!r}'
            raise HeaderInvalidError(msg)
        try:
            byteorder = ByteOrder({b'II': '<', b'MM': '>'}[marker])
        except KeyError:
            msg = f'not a TIFF file: byte order marker {marker!r}'
            raise HeaderInvalidError(msg) from None
        magic = struct.unpack(byteorder.byteorder + 'H', data[2:4])[0]
        if magic != cls.MAGIC:
            msg = f'not a TIFF file: {magic=}'
            raise HeaderInvalidError(msg)
        ifdoffset = byteorder.u32(struct.unpack('=I', data[4:8])[0])
        return cls(byteorder, ifdoffset)

    @classmethod
    def fromfile(cls, fh: FileHandle, /) -> TiffHeader:
        """Return validated header read from start of file."""
        fh.seek(0)
        return cls.frombytes(fh.read(cls.SIZE))

    def tobytes(self) -> bytes:
        """Return header as bytes in header's byte order."""
        byteorder = self.byteorder.byteorder
        marker = b'II' if byteorder == '<' else b'MM'
        return marker + struct.pack(
            byteorder + 'HI', self.MAGIC, self.ifdoffset
        )

    def __repr__(self) -> str:
        return f'<minitiff.TiffHeader {self.byteorder!r} @{self.ifdoffset}>'


@final
class IfdEntry:
    """TIFF image file directory entry.

    A 12-byte record of tag code, data type, item count, and a value that is
    either stored inline or is an offset to the value in the file.

    Parameters:
        code:
            Tag code.
        value:
            Inline value or offset to value.
        dtype:
            Data type of value items. The default is LONG.
        count:
            Number of value items. The default is 1.

    """

    __slots__ = ('code', 'count', 'dtype', 'value')

    SIZE = 12

    code: int
    """Tag code."""

    dtype: int
    """:py:class:`DATATYPE` of value items."""

    count: int
    """Number of value items."""

    value: int
    """Inline value or offset to value, in host order."""

    def __init__(
        self,
        code: int,
        value: int = 0,
        /,
        dtype: int = DATATYPE.LONG,
        count: int = 1,
    ) -> None:
        self.code = int(code)
        self.value = int(value)
        self.dtype = int(dtype)
        self.count = int(count)

    @property
    def is_short(self) -> bool:
        """Value is a single 16-bit integer stored in first two slot bytes."""
        return self.dtype == DATATYPE.SHORT and self.count == 1

    @property
    def name(self) -> str:
        """Name of tag."""
        return tagname(self.code)

    @classmethod
    def frombytes(cls, data: bytes, byteorder: ByteOrder, /) -> IfdEntry:
        """Return entry decoded from 12 bytes in file byte order.

        A single SHORT value is swapped as a 16-bit quantity, all other
        values, including offsets, as 32-bit quantities.

        """
        code, dtype, count = struct.unpack('=HHI', data[:8])
        entry = cls(
            byteorder.u16(code),
            0,
            byteorder.u16(dtype),
            byteorder.u32(count),
        )
        if entry.is_short:
            entry.value = byteorder.u16(struct.unpack('=H', data[8:10])[0])
        else:
            entry.value = byteorder.u32(struct.unpack('=I', data[8:12])[0])
        return entry

    @classmethod
    def fromfile(cls, reader: FileReader, /) -> IfdEntry:
        """Return entry read from current position of reader."""
        return cls.frombytes(reader.read(cls.SIZE), reader.byteorder)

    def tobytes(self, byteorder: ByteOrder | None = None, /) -> bytes:
        """Return entry as bytes, by default in host byte order."""
        fmt = '=' if byteorder is None else byteorder.byteorder
        if self.is_short:
            return struct.pack(
                fmt + 'HHIH2x', self.code, self.dtype, self.count, self.value
            )
        return struct.pack(
            fmt + 'HHII', self.code, self.dtype, self.count, self.value
        )

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IfdEntry) and (
            (self.code, self.dtype, self.count, self.value)
            == (other.code, other.dtype, other.count, other.value)
        )

    def __hash__(self) -> int:
        return hash((self.code, self.dtype, self.count, self.value))

    def __repr__(self) -> str:
        return (
            f'<minitiff.IfdEntry {self.code} {self.name} '
            f'{enumstr(DATATYPE, self.dtype)}[{self.count}] {self.value}>'
        )
