# fileio.py

"""File I/O helpers for minitiff."""

from __future__ import annotations

import io
import os
import struct
import sys
from typing import IO, TYPE_CHECKING, cast, final

import numpy

from .utils import (
    MiniTiffError,
    ShortReadError,
    ShortWriteError,
    SinkUnavailableError,
    SourceUnavailableError,
    swap16,
    swap32,
)

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Any, Literal, Self

    from numpy.typing import DTypeLike, NDArray

__all__ = ['ByteOrder', 'FileHandle', 'FileReader', 'FileWriter']


@final
class ByteOrder:
    """Byte order policy of a TIFF file relative to the host.

    Created once from the file header and passed to every reader that
    decodes multi-byte values from that file.

    Parameters:
        byteorder:
            Byte order of file, '<' (little-endian) or '>' (big-endian).

    Examples:
        >>> ByteOrder.native().swap
        False

    """

    __slots__ = ('byteorder', 'swap')

    byteorder: Literal['<', '>']
    """Byte order of file."""

    swap: bool
    """Multi-byte values must be byte swapped to host order."""

    def __init__(self, byteorder: Literal['<', '>'], /) -> None:
        if byteorder not in {'<', '>'}:
            msg = f'invalid {byteorder=!r}'
            raise ValueError(msg)
        self.byteorder = byteorder
        self.swap = byteorder != ('<' if sys.byteorder == 'little' else '>')

    @classmethod
    def native(cls) -> ByteOrder:
        """Return byte order policy of host."""
        return cls('<' if sys.byteorder == 'little' else '>')

    def u16(self, value: int, /) -> int:
        """Return 16-bit value in host order."""
        return swap16(value) if self.swap else value

    def u32(self, value: int, /) -> int:
        """Return 32-bit value in host order."""
        return swap32(value) if self.swap else value

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ByteOrder) and self.byteorder == other.byteorder
        )

    def __hash__(self) -> int:
        return hash(self.byteorder)

    def __repr__(self) -> str:
        endian = 'little' if self.byteorder == '<' else 'big'
        swap = ', swapped' if self.swap else ''
        return f'<minitiff.ByteOrder {endian}-endian{swap}>'


@final
class FileHandle:
    """Binary file handle.

    Open a file by name or wrap a seekable binary stream. Files opened by
    name are closed when the handle is closed; streams are left open.

    FileHandle instances are not thread-safe.

    Parameters:
        file:
            File name or seekable binary stream, such as open file or BytesIO.
        mode:
            File open mode if `file` is file name, 'rb' (default) or 'wb'.
        name:
            Name of file if `file` is binary stream.

    Raises:
        SourceUnavailableError: File cannot be opened for reading, or
            `file` is not a file name or seekable binary stream.
        SinkUnavailableError: Same as above for mode 'wb'.

    """

    __slots__ = ('_close', '_fh', '_mode', '_name')

    _fh: IO[bytes] | None
    _mode: str
    _name: str
    _close: bool

    def __init__(
        self,
        file: str | os.PathLike[Any] | IO[bytes],
        /,
        mode: Literal['rb', 'wb'] | None = None,
        *,
        name: str | None = None,
    ) -> None:
        self._mode = 'rb' if mode is None else mode
        if self._mode not in {'rb', 'wb'}:
            msg = f'invalid mode {self._mode}'
            raise ValueError(msg)
        self._fh = None
        self._name = name if name else ''
        self._close = True

        if isinstance(file, os.PathLike):
            file = os.fspath(file)

        if isinstance(file, str):
            # file name
            file = os.path.realpath(file)
            self._name = os.path.basename(file)
            try:
                self._fh = open(file, self._mode)  # noqa: SIM115
            except OSError as exc:
                raise self._unavailable(f'{file!r}: {exc}') from exc
        elif hasattr(file, 'seek'):
            # binary stream: open file, BytesIO
            if isinstance(file, io.TextIOBase):
                msg = f'{file!r} is not open in binary mode'
                raise self._unavailable(msg)
            try:
                file.tell()
            except Exception as exc:
                msg = f'binary stream is not seekable: {exc}'
                raise self._unavailable(msg) from exc
            self._fh = cast(IO[bytes], file)
            self._close = False
            if not self._name:
                try:
                    self._name = os.path.basename(self._fh.name)
                except (AttributeError, TypeError):
                    self._name = 'Unnamed binary stream'
        else:
            msg = (
                'the first parameter must be a file name '
                'or seekable binary file object, '
                f'not {type(file)!r}'
            )
            raise self._unavailable(msg)

    def _unavailable(self, msg: str, /) -> MiniTiffError:
        """Return exception for file that cannot be opened in mode."""
        if self._mode == 'wb':
            return SinkUnavailableError(f'cannot create {msg}')
        return SourceUnavailableError(f'cannot open {msg}')

    def close(self) -> None:
        """Close file handle."""
        if self._close and self._fh is not None:
            self._fh.close()
        self._fh = None

    def tell(self) -> int:
        """Return file's current position."""
        assert self._fh is not None
        return self._fh.tell()

    def seek(self, offset: int, /, whence: int = 0) -> int:
        """Set file's current position."""
        assert self._fh is not None
        return self._fh.seek(offset, whence)

    def read(self, size: int = -1, /) -> bytes:
        """Return bytes read from file."""
        assert self._fh is not None
        return self._fh.read(size)

    def readinto(self, buffer: Any, /) -> int:
        """Read bytes from file into buffer and return number of bytes read."""
        assert self._fh is not None
        try:
            n = self._fh.readinto(buffer)  # type: ignore[attr-defined]
        except AttributeError:
            data = self._fh.read(len(buffer))
            n = len(data)
            buffer[:n] = data
        return 0 if n is None else n

    def write(self, buffer: Any, /) -> int:
        """Write bytes to file and return number of bytes written."""
        assert self._fh is not None
        return self._fh.write(buffer)

    def flush(self) -> None:
        """Flush write buffers of stream if applicable."""
        assert self._fh is not None
        if hasattr(self._fh, 'flush'):
            self._fh.flush()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f'<minitiff.FileHandle {self._name!r}>'

    @property
    def name(self) -> str:
        """Name of file or stream."""
        return self._name


@final
class FileReader:
    """Sequential reader over an open file handle.

    Multi-byte values are converted to host order according to the file's
    byte order policy. Image data read with :py:meth:`read_bytes` can
    additionally be byte swapped per component.

    Parameters:
        fh:
            Open file handle to read from.
        byteorder:
            Byte order policy of file.
        component_swap:
            Size in bytes of image components to swap, 0 (default), 2, or 4.

    """

    __slots__ = ('_fh', 'byteorder', 'bytes_read', 'component_swap')

    _fh: FileHandle

    byteorder: ByteOrder
    """Byte order policy of file."""

    component_swap: int
    """Size of components swapped by read_bytes, or 0."""

    bytes_read: int
    """Number of bytes read by this reader."""

    def __init__(
        self,
        fh: FileHandle,
        byteorder: ByteOrder,
        /,
        component_swap: int = 0,
    ) -> None:
        if component_swap not in {0, 2, 4}:
            msg = f'invalid {component_swap=}'
            raise ValueError(msg)
        self._fh = fh
        self.byteorder = byteorder
        self.component_swap = component_swap
        self.bytes_read = 0

    def with_component_swap(self, itemsize: int, /) -> FileReader:
        """Return reader on same file swapping components of size itemsize."""
        return FileReader(self._fh, self.byteorder, itemsize)

    @property
    def filehandle(self) -> FileHandle:
        """File handle."""
        return self._fh

    def seek(self, offset: int, /) -> int:
        """Set file position relative to start of file."""
        return self._fh.seek(offset)

    def tell(self) -> int:
        """Return file position."""
        return self._fh.tell()

    def read_bytes(self, buffer: Any, count: int | None = None, /) -> bool:
        """Read bytes from file into writable buffer.

        If the reader swaps components, every call swaps the bytes it read
        as whole components starting at the first byte read. Image data
        read in several calls must therefore be split at multiples of
        :py:attr:`component_swap`, else components are swapped misaligned.

        Parameters:
            buffer:
                Writable, C-contiguous object supporting the buffer protocol,
                for example, bytearray or NumPy array.
            count:
                Number of bytes to read. The default is the size of buffer.

        Returns:
            *True* if `count` bytes were read, *False* on short read.

        """
        view = memoryview(buffer).cast('B')
        if count is None:
            count = view.nbytes
        elif count > view.nbytes:
            msg = f'buffer too small for {count} bytes'
            raise ValueError(msg)
        n = self._fh.readinto(view[:count])
        self.bytes_read += n
        itemsize = self.component_swap
        if itemsize and n >= itemsize:
            numpy.frombuffer(
                view[: n - n % itemsize], dtype=f'u{itemsize}'
            ).byteswap(inplace=True)
        return n == count

    def read(self, size: int, /) -> bytes:
        """Return size bytes read from file.

        Raises:
            ShortReadError: Fewer than size bytes are available.

        """
        data = bytearray(size)
        if not self.read_bytes(data):
            msg = f'failed to read {size} bytes at offset {self.tell()}'
            raise ShortReadError(msg)
        return bytes(data)

    def read_u16(self) -> int:
        """Return 16-bit unsigned integer in host order."""
        return self.byteorder.u16(struct.unpack('=H', self.read(2))[0])

    def read_u32(self) -> int:
        """Return 32-bit unsigned integer in host order."""
        return self.byteorder.u32(struct.unpack('=I', self.read(4))[0])

    def read_array(self, dtype: DTypeLike, count: int, /) -> NDArray[Any]:
        """Return NumPy array of count items read from file in host order.

        Raises:
            ShortReadError: Fewer bytes are available than requested.

        """
        result = numpy.empty(count, dtype)
        if not self.read_bytes(result):
            msg = f'failed to read {result.nbytes} bytes'
            raise ShortReadError(msg)
        return result

    def __repr__(self) -> str:
        return (
            f'<minitiff.FileReader {self._fh.name!r} '
            f'{self.byteorder.byteorder} swap={self.component_swap}>'
        )


@final
class FileWriter:
    """Sequential writer over an open file handle in host byte order.

    Parameters:
        fh: Open file handle to write to.

    """

    __slots__ = ('_fh', 'bytes_written')

    _fh: FileHandle

    bytes_written: int
    """Number of bytes written by this writer."""

    def __init__(self, fh: FileHandle, /) -> None:
        self._fh = fh
        self.bytes_written = 0

    def write(self, data: Any, /) -> int:
        """Write bytes-like object to file.

        Raises:
            ShortWriteError: Not all bytes were written.

        """
        view = memoryview(data).cast('B')
        n = self._fh.write(view)
        if n is None:
            n = view.nbytes
        self.bytes_written += n
        if n != view.nbytes:
            msg = f'failed to write {view.nbytes} bytes, wrote {n}'
            raise ShortWriteError(msg)
        return n

    def write_u16(self, value: int, /) -> int:
        """Write 16-bit unsigned integer in host order."""
        return self.write(struct.pack('=H', value))

    def write_empty(self, size: int, /) -> int:
        """Write size null-bytes to file."""
        if size < 1:
            return 0
        return self.write(bytes(size))

    def __repr__(self) -> str:
        return f'<minitiff.FileWriter {self._fh.name!r}>'
