"""Tests for reading, writing, and inspecting minimal TIFF files."""

from __future__ import annotations

import io
import logging
import struct
import sys

import numpy
import pytest

import minitiff
from minitiff import (
    DATATYPE,
    TAG,
    ByteOrder,
    IfdEntry,
    TiffHeader,
    imread,
    imwrite,
    info,
    load,
    save,
)

NATIVE = '<' if sys.byteorder == 'little' else '>'
FOREIGN = '>' if NATIVE == '<' else '<'

DTYPES = {8: numpy.uint8, 16: numpy.uint16, 32: numpy.float32}


class Unseekable(io.BytesIO):
    """Binary stream that does not support random access."""

    def seekable(self):
        return False

    def seek(self, *args):
        raise io.UnsupportedOperation('seek')

    def tell(self):
        raise io.UnsupportedOperation('tell')


class ShortSink(io.BytesIO):
    """Binary stream that drops the last byte of every write."""

    def write(self, data):
        return super().write(bytes(data)[:-1])


def make_tiff(
    entries: list[IfdEntry],
    /,
    byteorder: str = NATIVE,
    data: bytes = b'',
    extra: dict[int, bytes] | None = None,
) -> bytes:
    """Return TIFF file with entries in byteorder and data at offset 256."""
    order = ByteOrder(byteorder)
    buf = bytearray(TiffHeader(order, 8).tobytes())
    buf += struct.pack(byteorder + 'H', len(entries))
    for entry in entries:
        buf += entry.tobytes(order)
    assert len(buf) <= 192
    buf += bytes(256 - len(buf))
    for offset, value in (extra or {}).items():
        buf[offset : offset + len(value)] = value
    buf += data
    return bytes(buf)


def directory(
    width: int = 4,
    height: int = 2,
    components: int = 1,
    bits: int = 8,
    /,
    dtype: int = DATATYPE.LONG,
) -> list[IfdEntry]:
    """Return entries of valid directory, scalars stored as dtype."""
    nbytes = width * height * components * bits // 8
    return [
        IfdEntry(TAG.NEWSUBFILETYPE, 0, DATATYPE.LONG),
        IfdEntry(TAG.IMAGEWIDTH, width, dtype),
        IfdEntry(TAG.IMAGELENGTH, height, dtype),
        IfdEntry(TAG.BITSPERSAMPLE, bits, DATATYPE.SHORT),
        IfdEntry(TAG.COMPRESSION, 1, DATATYPE.SHORT),
        IfdEntry(TAG.PHOTOMETRIC, min(components, 2), DATATYPE.SHORT),
        IfdEntry(TAG.STRIPOFFSETS, 256, DATATYPE.LONG),
        IfdEntry(TAG.SAMPLESPERPIXEL, components, DATATYPE.SHORT),
        IfdEntry(TAG.ROWSPERSTRIP, height, dtype),
        IfdEntry(TAG.STRIPBYTECOUNTS, nbytes, DATATYPE.LONG),
    ]


def replace(
    entries: list[IfdEntry], code: int, value: int, /
) -> list[IfdEntry]:
    """Return entries with value of tag code replaced."""
    return [
        IfdEntry(e.code, value, e.dtype, e.count) if e.code == code else e
        for e in entries
    ]


class Loaded:
    """Callback recording parameters and image data passed by load."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.calls = 0
        self.parameters: tuple[int, int, int, int] | None = None
        self.data = b''

    def __call__(self, width, height, components, bits, reader) -> bool:
        self.calls += 1
        self.parameters = (width, height, components, bits)
        buffer = bytearray(width * height * components * bits // 8)
        if not reader.read_bytes(buffer):
            return False
        self.data = bytes(buffer)
        return self.result


class TestSave:
    """Tests for save."""

    def test_file_size(self, tmp_path):
        fname = tmp_path / 'zeros.tif'
        data = bytes(32 * 32 * 3)
        assert save(fname, 32, 32, 3, 8, data)
        assert fname.stat().st_size == 3328
        loaded = Loaded()
        assert load(fname, loaded)
        assert loaded.parameters == (32, 32, 3, 8)
        assert loaded.data == bytes(3072)

    def test_layout(self):
        stream = io.BytesIO()
        data = bytes(range(6))
        assert save(stream, 3, 2, 1, 8, data)
        raw = stream.getvalue()
        assert raw[:2] == (b'II' if NATIVE == '<' else b'MM')
        header = TiffHeader.frombytes(raw[:8])
        assert header.ifdoffset == 8
        assert struct.unpack('=H', raw[8:10])[0] == 10
        assert raw[130:256] == bytes(126)
        assert raw[256:] == data

    @pytest.mark.parametrize(
        'args',
        [
            (0, 2, 1, 8),
            (2, 0, 1, 8),
            (-1, 2, 1, 8),
            (2, 2, 2, 8),
            (2, 2, 5, 8),
            (2, 2, 1, 12),
            (2, 2, 1, 64),
        ],
    )
    def test_invalid_parameters(self, tmp_path, args):
        fname = tmp_path / 'invalid.tif'
        width, height, components, bits = args
        data = bytes(max(width * height * components * bits // 8, 0))
        assert not save(fname, width, height, components, bits, data)
        assert not fname.exists()

    def test_no_data(self, tmp_path):
        fname = tmp_path / 'nodata.tif'
        assert not save(fname, 2, 2, 1, 8, None)
        assert not fname.exists()

    @pytest.mark.parametrize('size', [3, 5])
    def test_data_size_mismatch(self, tmp_path, size):
        fname = tmp_path / 'size.tif'
        assert not save(fname, 2, 2, 1, 8, bytes(size))
        assert not fname.exists()

    def test_sink_unavailable(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING, logger='minitiff')
        fname = tmp_path / 'missing' / 'file.tif'
        assert not save(fname, 2, 2, 1, 8, bytes(4))
        assert 'cannot create' in caplog.text

    def test_sink_unseekable(self, caplog):
        caplog.set_level(logging.WARNING, logger='minitiff')
        assert not save(Unseekable(), 2, 2, 1, 8, bytes(4))
        assert 'not seekable' in caplog.text

    @pytest.mark.parametrize('sink', [None, 'text'])
    def test_sink_invalid(self, sink, caplog):
        caplog.set_level(logging.WARNING, logger='minitiff')
        sink = io.StringIO() if sink == 'text' else sink
        assert not save(sink, 2, 2, 1, 8, bytes(4))
        assert 'cannot create' in caplog.text

    def test_short_write(self, caplog):
        caplog.set_level(logging.WARNING, logger='minitiff')
        assert not save(ShortSink(), 2, 2, 1, 8, bytes(4))
        assert 'failed to write' in caplog.text

    def test_float_entry(self):
        codes = []
        stream = io.BytesIO()
        assert save(stream, 2, 2, 1, 32, bytes(16))
        stream.seek(0)
        assert info(stream, lambda code, *args: codes.append(code))
        assert len(codes) == 11
        assert codes[8] == TAG.SAMPLEFORMAT


class TestLoad:
    """Tests for load."""

    @pytest.mark.parametrize('bits', [8, 16, 32])
    @pytest.mark.parametrize('components', [1, 3, 4])
    def test_roundtrip(self, tmp_path, bits, components):
        fname = tmp_path / f'rt_{components}_{bits}.tif'
        rng = numpy.random.default_rng(42)
        shape = (5, 7, components)
        if bits == 32:
            data = rng.random(shape, dtype=numpy.float32)
        else:
            data = rng.integers(0, 2**bits, shape, dtype=DTYPES[bits])
        assert save(fname, 7, 5, components, bits, data)

        out = numpy.empty_like(data)

        def callback(width, height, num_components, bits_per_component, f):
            assert (width, height) == (7, 5)
            assert num_components == components
            assert bits_per_component == bits
            return f.read_bytes(out)

        assert load(fname, callback)
        numpy.testing.assert_array_equal(out, data)

    def test_stream(self):
        stream = io.BytesIO()
        assert save(stream, 4, 2, 1, 8, bytes(range(8)))
        stream.seek(0)
        loaded = Loaded()
        assert load(stream, loaded)
        assert loaded.data == bytes(range(8))
        assert not stream.closed

    def test_callback_result(self):
        stream = io.BytesIO(make_tiff(directory(), data=bytes(8)))
        assert not load(stream, Loaded(result=False))

    def test_callback_exception(self):
        stream = io.BytesIO(make_tiff(directory(), data=bytes(8)))

        def callback(*args):
            raise RuntimeError('callback failed')

        with pytest.raises(RuntimeError):
            load(stream, callback)

    def test_short_read(self):
        stream = io.BytesIO(make_tiff(directory(), data=bytes(7)))
        loaded = Loaded()
        assert not load(stream, loaded)
        assert loaded.calls == 1

    def test_short_read_raises(self):
        stream = io.BytesIO(make_tiff(directory(), data=bytes(7)))
        assert not load(stream, lambda w, h, c, b, f: bool(f.read(8)))

    def test_source_unavailable(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING, logger='minitiff')
        assert not load(tmp_path / 'missing.tif', Loaded())
        assert 'cannot open' in caplog.text

    def test_source_unseekable(self, caplog):
        caplog.set_level(logging.WARNING, logger='minitiff')
        loaded = Loaded()
        assert not load(Unseekable(make_tiff(directory())), loaded)
        assert loaded.calls == 0
        assert 'not seekable' in caplog.text

    @pytest.mark.parametrize('source', [42, 'text'])
    def test_source_invalid(self, source, caplog):
        caplog.set_level(logging.WARNING, logger='minitiff')
        source = io.StringIO('II') if source == 'text' else source
        assert not load(source, Loaded())
        assert 'cannot open' in caplog.text

    @pytest.mark.parametrize('byteorder', ['<', '>'])
    @pytest.mark.parametrize('dtype', [DATATYPE.SHORT, DATATYPE.LONG])
    def test_byteorder(self, byteorder, dtype):
        entries = directory(300, 2, 3, 8, dtype=dtype)
        data = bytes(range(256)) * 7 + bytes(range(8))
        stream = io.BytesIO(make_tiff(entries, byteorder, data))
        loaded = Loaded()
        assert load(stream, loaded)
        assert loaded.parameters == (300, 2, 3, 8)
        assert loaded.data == data

    @pytest.mark.parametrize('byteorder', [NATIVE, FOREIGN])
    @pytest.mark.parametrize('bits', [16, 32])
    def test_fillorder_swaps_components(self, byteorder, bits):
        values = numpy.arange(1, 7, dtype=f'u{bits // 8}') * 0x0102
        entries = directory(3, 2, 1, bits)
        entries.append(IfdEntry(TAG.FILLORDER, 1, DATATYPE.SHORT))
        data = values.astype(values.dtype.newbyteorder(FOREIGN)).tobytes()
        stream = io.BytesIO(make_tiff(entries, byteorder, data))
        out = numpy.zeros_like(values)
        assert load(stream, lambda w, h, c, b, f: f.read_bytes(out))
        numpy.testing.assert_array_equal(out, values)

    def test_fillorder_ignored_for_bytes(self):
        entries = directory(4, 2, 1, 8)
        entries.append(IfdEntry(TAG.FILLORDER, 1, DATATYPE.SHORT))
        stream = io.BytesIO(make_tiff(entries, FOREIGN, bytes(range(8))))
        loaded = Loaded()
        assert load(stream, loaded)
        assert loaded.data == bytes(range(8))

    def test_no_fillorder_keeps_bytes(self):
        values = numpy.arange(8, dtype='u2')
        data = values.astype(values.dtype.newbyteorder(FOREIGN)).tobytes()
        stream = io.BytesIO(make_tiff(directory(4, 2, 1, 16), FOREIGN, data))
        loaded = Loaded()
        assert load(stream, loaded)
        assert loaded.parameters == (4, 2, 1, 16)
        assert loaded.data == data

    @pytest.mark.parametrize(
        'header',
        [
            b'IM*\x00\x08\x00\x00\x00',
            b'MI\x00*\x00\x00\x00\x08',
            b'II\x00*\x08\x00\x00\x00',
            b'MM*\x00\x00\x00\x00\x08',
            b'XX*\x00\x08\x00\x00\x00',
            b'II+\x00\x08\x00\x00\x00',
            b'II*\x00',
            b'',
        ],
    )
    def test_invalid_header(self, header):
        raw = make_tiff(directory(), data=bytes(8))
        if len(header) == 8:
            raw = header + raw[8:]
        else:
            raw = header
        stream = io.BytesIO(raw)
        loaded = Loaded()
        assert not load(stream, loaded)
        assert loaded.calls == 0
        stream.seek(0)
        entries = []
        assert not info(stream, lambda *args: entries.append(args))
        assert entries == []

    @pytest.mark.parametrize(
        ('code', 'value', 'message'),
        [
            (TAG.COMPRESSION, 5, 'Compression LZW'),
            (TAG.COMPRESSION, 32773, 'Compression PACKBITS'),
            (TAG.ROWSPERSTRIP, 1, 'RowsPerStrip'),
            (TAG.PHOTOMETRIC, 3, 'PhotometricInterpretation'),
            (TAG.NEWSUBFILETYPE, 1, 'NewSubfileType'),
        ],
    )
    def test_unsupported(self, caplog, code, value, message):
        caplog.set_level(logging.WARNING, logger='minitiff')
        entries = replace(directory(), code, value)
        stream = io.BytesIO(make_tiff(entries, data=bytes(8)))
        loaded = Loaded()
        assert not load(stream, loaded)
        assert loaded.calls == 0
        assert message in caplog.text

    def test_planar_separate(self):
        entries = directory(4, 2, 3, 8)
        entries.append(IfdEntry(TAG.PLANARCONFIG, 2, DATATYPE.SHORT))
        stream = io.BytesIO(make_tiff(entries, data=bytes(24)))
        assert not load(stream, Loaded())

    def test_planar_contig(self):
        entries = directory(4, 2, 3, 8)
        entries.append(IfdEntry(TAG.PLANARCONFIG, 1, DATATYPE.SHORT))
        stream = io.BytesIO(make_tiff(entries, data=bytes(24)))
        assert load(stream, Loaded())

    @pytest.mark.parametrize(('rows', 'expected'), [(2, True), (1, False)])
    def test_rowsperstrip_before_height(self, rows, expected):
        entries = directory(4, 2)
        rowsperstrip = IfdEntry(TAG.ROWSPERSTRIP, rows)
        entries = [rowsperstrip] + [
            e for e in entries if e.code != TAG.ROWSPERSTRIP
        ]
        stream = io.BytesIO(make_tiff(entries, data=bytes(8)))
        assert load(stream, Loaded()) is expected

    def test_entry_order(self):
        entries = list(reversed(directory(4, 2, 3, 16)))
        stream = io.BytesIO(make_tiff(entries, data=bytes(48)))
        loaded = Loaded()
        assert load(stream, loaded)
        assert loaded.parameters == (4, 2, 3, 16)

    @pytest.mark.parametrize(
        'code',
        [
            TAG.IMAGEWIDTH,
            TAG.IMAGELENGTH,
            TAG.STRIPOFFSETS,
            TAG.STRIPBYTECOUNTS,
            TAG.BITSPERSAMPLE,
        ],
    )
    def test_incomplete_directory(self, caplog, code):
        caplog.set_level(logging.WARNING, logger='minitiff')
        entries = [e for e in directory() if e.code != code]
        stream = io.BytesIO(make_tiff(entries, data=bytes(8)))
        assert not load(stream, Loaded())
        assert 'missing required tag' in caplog.text

    @pytest.mark.parametrize('byteorder', ['<', '>'])
    @pytest.mark.parametrize('bits', [8, 16, 32])
    def test_indirect_bitspersample(self, byteorder, bits):
        entries = replace(directory(2, 2, 3, bits), TAG.BITSPERSAMPLE, 200)
        entries = [
            IfdEntry(e.code, e.value, DATATYPE.SHORT, 3)
            if e.code == TAG.BITSPERSAMPLE
            else e
            for e in entries
        ]
        extra = {200: struct.pack(byteorder + '3H', bits, bits, bits)}
        data = bytes(2 * 2 * 3 * bits // 8)
        stream = io.BytesIO(make_tiff(entries, byteorder, data, extra))
        loaded = Loaded()
        assert load(stream, loaded)
        assert loaded.parameters == (2, 2, 3, bits)

    @pytest.mark.parametrize(('offset', 'value'), [(200, 12), (200, 1)])
    def test_indirect_bitspersample_invalid(self, caplog, offset, value):
        caplog.set_level(logging.WARNING, logger='minitiff')
        entries = [
            IfdEntry(e.code, offset, DATATYPE.SHORT, 3)
            if e.code == TAG.BITSPERSAMPLE
            else e
            for e in directory(2, 2, 3, 8)
        ]
        extra = {offset: struct.pack(NATIVE + '3H', value, value, value)}
        stream = io.BytesIO(make_tiff(entries, data=bytes(12), extra=extra))
        assert not load(stream, Loaded())
        assert 'BitsPerSample' in caplog.text

    def test_indirect_bitspersample_outside_file(self):
        entries = [
            IfdEntry(TAG.BITSPERSAMPLE, 100000, DATATYPE.LONG)
            if e.code == TAG.BITSPERSAMPLE
            else e
            for e in directory(2, 2, 1, 8)
        ]
        stream = io.BytesIO(make_tiff(entries, data=bytes(4)))
        assert not load(stream, Loaded())

    @pytest.mark.parametrize('position', [0, 5, 10])
    def test_unknown_tag(self, position):
        entries = directory(4, 2, 1, 16)
        entries.insert(position, IfdEntry(0x9999, 0xDEADBEEF))
        entries.insert(position, IfdEntry(TAG.SOFTWARE, 200, DATATYPE.ASCII))
        data = bytes(range(16))
        stream = io.BytesIO(make_tiff(entries, data=data))
        loaded = Loaded()
        assert load(stream, loaded)
        assert loaded.parameters == (4, 2, 1, 16)
        assert loaded.data == data

    def test_bytecount_mismatch_warns(self, caplog):
        caplog.set_level(logging.WARNING, logger='minitiff')
        entries = replace(directory(4, 2), TAG.STRIPBYTECOUNTS, 100)
        stream = io.BytesIO(make_tiff(entries, data=bytes(8)))
        assert load(stream, Loaded())
        assert 'does not match image size' in caplog.text


class TestInfo:
    """Tests for info."""

    def test_entries(self, tmp_path):
        fname = tmp_path / 'info.tif'
        assert save(fname, 7, 5, 4, 16, bytes(7 * 5 * 4 * 2))
        entries = []
        assert info(fname, lambda *args: entries.append(args))
        assert entries == [
            (TAG.NEWSUBFILETYPE, 0, DATATYPE.LONG, 1),
            (TAG.IMAGEWIDTH, 7, DATATYPE.LONG, 1),
            (TAG.IMAGELENGTH, 5, DATATYPE.LONG, 1),
            (TAG.BITSPERSAMPLE, 16, DATATYPE.LONG, 1),
            (TAG.COMPRESSION, 1, DATATYPE.LONG, 1),
            (TAG.PHOTOMETRIC, 2, DATATYPE.LONG, 1),
            (TAG.STRIPOFFSETS, 256, DATATYPE.LONG, 1),
            (TAG.SAMPLESPERPIXEL, 4, DATATYPE.LONG, 1),
            (TAG.ROWSPERSTRIP, 5, DATATYPE.LONG, 1),
            (TAG.STRIPBYTECOUNTS, 280, DATATYPE.LONG, 1),
        ]

    def test_foreign_byteorder(self):
        entries = directory(300, 2, dtype=DATATYPE.SHORT)
        entries.append(IfdEntry(0x9999, 0x01020304))
        stream = io.BytesIO(make_tiff(entries, FOREIGN))
        found = {}
        assert info(stream, lambda code, value, *args: found.setdefault(
            code, value
        ))
        assert found[TAG.IMAGEWIDTH] == 300
        assert found[TAG.BITSPERSAMPLE] == 8
        assert found[0x9999] == 0x01020304

    def test_no_validation(self):
        entries = replace(directory(), TAG.COMPRESSION, 5)
        stream = io.BytesIO(make_tiff(entries))
        count = []
        assert info(stream, lambda *args: count.append(1))
        assert len(count) == len(entries)

    def test_truncated_directory(self):
        raw = make_tiff(directory())[:50]
        assert not info(io.BytesIO(raw), lambda *args: None)

    def test_source_unseekable(self):
        stream = Unseekable(make_tiff(directory()))
        assert not info(stream, lambda *args: None)


class TestNumpy:
    """Tests for imread and imwrite."""

    @pytest.mark.parametrize(
        ('shape', 'dtype'),
        [
            ((16, 31), numpy.uint8),
            ((16, 31, 3), numpy.uint16),
            ((8, 9, 4), numpy.float32),
            ((1, 1, 1), numpy.uint8),
        ],
    )
    def test_roundtrip(self, tmp_path, shape, dtype):
        fname = tmp_path / 'array.tif'
        data = (numpy.arange(numpy.prod(shape)) % 251).astype(dtype)
        data = data.reshape(shape)
        imwrite(fname, data)
        result = imread(fname)
        assert result.dtype == dtype
        numpy.testing.assert_array_equal(result.reshape(shape), data)

    def test_noncontiguous(self):
        data = numpy.arange(64, dtype=numpy.uint8).reshape(8, 8)[:, ::2]
        stream = io.BytesIO()
        imwrite(stream, data)
        stream.seek(0)
        numpy.testing.assert_array_equal(imread(stream), data)

    def test_foreign_dtype(self):
        data = numpy.arange(12, dtype=FOREIGN + 'u2').reshape(3, 4)
        stream = io.BytesIO()
        imwrite(stream, data)
        stream.seek(0)
        result = imread(stream)
        assert result.dtype.isnative
        numpy.testing.assert_array_equal(result, data)

    @pytest.mark.parametrize(
        'data',
        [
            numpy.zeros((4, 4), numpy.int16),
            numpy.zeros((4, 4), numpy.float64),
            numpy.zeros((4, 4), numpy.uint32),
            numpy.zeros((2, 4, 4, 3), numpy.uint8),
            numpy.zeros(4, numpy.uint8),
            numpy.zeros((4, 4, 2), numpy.uint8),
        ],
    )
    def test_unsupported(self, data):
        with pytest.raises(minitiff.ParameterInvalidError):
            imwrite(io.BytesIO(), data)

    def test_invalid_file(self):
        with pytest.raises(minitiff.HeaderInvalidError):
            imread(io.BytesIO(b'GIF89a\x00\x00' + bytes(300)))

    def test_unsupported_file(self):
        entries = replace(directory(), TAG.COMPRESSION, 8)
        with pytest.raises(minitiff.UnsupportedFeatureError):
            imread(io.BytesIO(make_tiff(entries, data=bytes(8))))

    def test_truncated_file(self):
        with pytest.raises(minitiff.ShortReadError):
            imread(io.BytesIO(make_tiff(directory(), data=bytes(5))))

    def test_uint32_sampleformat(self):
        entries = directory(2, 2, 1, 32)
        entries.append(IfdEntry(TAG.SAMPLEFORMAT, 1, DATATYPE.SHORT))
        data = numpy.array([1, 2, 3, 4], numpy.uint32)
        stream = io.BytesIO(make_tiff(entries, data=data.tobytes()))
        result = imread(stream)
        assert result.dtype == numpy.uint32
        numpy.testing.assert_array_equal(result.ravel(), data)

    def test_int32_sampleformat(self):
        entries = directory(2, 2, 1, 32)
        entries.append(IfdEntry(TAG.SAMPLEFORMAT, 2, DATATYPE.SHORT))
        data = numpy.array([-1, 2, -3, 4], numpy.int32)
        stream = io.BytesIO(make_tiff(entries, data=data.tobytes()))
        result = imread(stream)
        assert result.dtype == numpy.int32
        numpy.testing.assert_array_equal(result.ravel(), data)

    def test_fillorder_float(self):
        entries = directory(3, 1, 1, 32)
        entries.append(IfdEntry(TAG.FILLORDER, 1, DATATYPE.SHORT))
        data = numpy.array([0.5, -1.0, 3.25], FOREIGN + 'f4')
        stream = io.BytesIO(make_tiff(entries, FOREIGN, data.tobytes()))
        result = imread(stream)
        assert result.dtype == numpy.float32
        numpy.testing.assert_array_equal(result.ravel(), [0.5, -1.0, 3.25])


class TestMain:
    """Tests for command line script."""

    def test_main(self, tmp_path, capsys):
        fname = tmp_path / 'main.tif'
        assert save(fname, 32, 32, 3, 8, bytes(3072))
        assert minitiff.main([str(fname)]) == 0
        out = capsys.readouterr().out
        assert 'first IFD @8' in out
        assert 'ImageWidth' in out
        assert 'StripByteCounts' in out
        assert '[1] 3072' in out

    def test_verbose(self, tmp_path, capsys):
        fname = tmp_path / 'verbose.tif'
        assert save(fname, 2, 3, 1, 32, bytes(24))
        assert minitiff.main(['-v', str(fname)]) == 0
        out = capsys.readouterr().out
        assert '2x3x1 32-bit float32' in out

    def test_verbose_unsupported(self, tmp_path, capsys):
        fname = tmp_path / 'lzw.tif'
        entries = replace(directory(), TAG.COMPRESSION, 5)
        fname.write_bytes(make_tiff(entries, data=bytes(8)))
        assert minitiff.main(['-v', str(fname)]) == 1
        assert 'Compression LZW' in capsys.readouterr().out

    def test_invalid(self, tmp_path, capsys):
        fname = tmp_path / 'invalid.tif'
        fname.write_bytes(b'not a tiff file')
        assert minitiff.main([str(fname)]) == 1
        assert 'invalid: not a TIFF file' in capsys.readouterr().out


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
