# ppmfile.py

# Copyright (c) 2011-2026, Christoph Gohlke
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

"""Decode binary Portable Pixel Map files.

Ppmfile is a Python library to read RGB image data from files in the
binary Portable Pixel Map (PPM, P6) format into NumPy arrays.

The header is scanned byte by byte: comments starting with '#' are removed
up to the next CR or LF, tokens are separated by any of TAB, LF, VT, FF, CR,
or SPACE, and exactly one whitespace byte separates the last header value
from the pixel data. Samples are 8-bit if maxval is less than 256, else
16-bit big-endian.

The plain text variant (P3), maxval values larger than 65535, reading
scanlines, and writing files are not supported.

The PPM format is specified at http://netpbm.sourceforge.net/doc/ppm.html.

No gamma correction or scaling is performed.

:License: BSD 3-Clause
:Version: 2026.10.18

Quickstart
----------

Install the ppmfile package and all dependencies::

    python -m pip install -U ppmfile[all]

See `Examples`_ for using the programming interface.

Requirements
------------

This release has been tested with the following requirements and dependencies
(other versions may work):

- `CPython 3.9, 3.10, 3.11, 3.12 <https://www.python.org>`_
- `NumPy 1.26 <https://pypi.org/project/numpy/>`_
- `Matplotlib 3.8 <https://pypi.org/project/matplotlib/>`_ (optional)

Revisions
---------

2026.10.18

- Initial release.
- Decode P6 files with 8-bit and 16-bit samples.
- Reject plain P3 files and maxval above 65535 with dedicated errors.
- Check image size against maxbytes before reading image data.
- Continue short reads from unbuffered and non-blocking streams.

Examples
--------

Decode a PPM image from an open binary file:

>>> import io
>>> with PpmDecoder(io.BytesIO(b'P6 1 1 255 123')) as ppm:
...     ppm.dimensions()
...     ppm.colortype()
...     ppm.row_len()
...     ppm.read_image().data.tolist()
(1, 1)
ColorType(name='RGB', bitdepth=8)
3
[49, 50, 51]

Comments are removed anywhere in the header:

>>> image = imread(io.BytesIO(b"P6 1 1 2#comment\\n55 \\x01\\x02\\x03"))
>>> image.shape
(1, 1, 3)
>>> image.dtype
dtype('uint8')

Header values are strictly decimal:

>>> imread(io.BytesIO(b"P6 0x01 1 255 123"))  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
 ...
ppmfile.ppmfile.FormatError: invalid number in header: '0x01'

View the image and metadata in a PPM file from the command line::

    $ python -m ppmfile _tmp.ppm

"""

from __future__ import annotations

__version__ = '2026.10.18'

__all__ = [
    'imread',
    'read_header',
    'read_magic',
    'read_exact',
    'parse_uint',
    'comment_transition',
    'CommentState',
    'HeaderTokenizer',
    'PpmHeader',
    'ColorType',
    'DecodingResult',
    'ImageDecoder',
    'PpmDecoder',
    'FormatError',
    'UnsupportedFormatError',
    'DimensionError',
    'ReadError',
    'MAXBYTES',
    'MAXVAL',
]

import sys
import os
import io
import re
import abc
import enum
import warnings

import numpy

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from typing import BinaryIO, Iterator, Union

    PathLike = Union[str, os.PathLike]

MAXBYTES = 2**32 - 1
"""Default maximum number of bytes of image data."""

MAXVAL = 65535
"""Largest supported maximum sample value."""

WHITESPACE = b'\t\n\x0b\x0c\r '
"""Bytes separating header tokens."""


class FormatError(ValueError):
    """Malformed or unsupported PPM header."""


class UnsupportedFormatError(FormatError):
    """Well-formed PPM header using a feature that is not supported."""


class DimensionError(ValueError):
    """Image dimensions exceed the addressable size."""


class ReadError(OSError):
    """Image data could not be read from the stream."""


def imread(
    file: PathLike | BinaryIO, /, *, maxbytes: int | None = None
) -> numpy.ndarray:
    """Return image data from PPM file.

    Parameters:
        file:
            Name of file or open binary file to read.
        maxbytes:
            Maximum number of bytes of image data.
            By default, this is MAXBYTES.

    """
    with PpmDecoder(file, maxbytes=maxbytes) as ppm:
        image = ppm.asarray()
    return image


class CommentState(enum.Enum):
    """State of header comment scanner."""

    NORMAL = 0
    COMMENT = 1


def comment_transition(
    state: CommentState, byte: int, /
) -> tuple[CommentState, bool]:
    """Return next comment state and whether byte is header content.

    A '#' starts a comment in the NORMAL state. All bytes of a comment,
    including the '#' and the terminating CR or LF, are discarded.

    """
    if state is CommentState.NORMAL:
        if byte == 0x23:
            return CommentState.COMMENT, False
        return CommentState.NORMAL, True
    if byte == 0x0A or byte == 0x0D:
        return CommentState.NORMAL, False
    return CommentState.COMMENT, False


class HeaderTokenizer:
    """Read whitespace separated ASCII tokens from PPM header.

    Parameters:
        fh:
            Open binary file positioned after the magic number.

    """

    _fh: BinaryIO

    def __init__(self, fh: BinaryIO, /) -> None:
        self._fh = fh

    def content(self) -> Iterator[int]:
        """Yield header bytes outside of comments."""
        state = CommentState.NORMAL
        while True:
            byte = self._fh.read(1)
            if not byte:
                return
            state, keep = comment_transition(state, byte[0])
            if keep:
                yield byte[0]

    def read_token(self) -> str:
        """Return next token and consume one whitespace byte after it."""
        token = bytearray()
        try:
            for byte in self.content():
                if byte in WHITESPACE:
                    if token:
                        break
                    continue
                token.append(byte)
        except OSError as exc:
            if not token:
                raise FormatError('unexpected end of stream') from exc
        if not token:
            raise FormatError('unexpected end of stream')
        if any(byte < 0x21 or byte > 0x7E for byte in token):
            raise FormatError(
                f'non-ASCII character in header: {bytes(token)!r}'
            )
        try:
            return token.decode('ascii')
        except UnicodeDecodeError as exc:
            raise FormatError(f'could not decode header: {exc}') from exc

    def read_uint(self) -> int:
        """Return next token as unsigned integer."""
        return parse_uint(self.read_token())


def parse_uint(token: str, /) -> int:
    """Return unsigned 32-bit integer from decimal header token."""
    if re.fullmatch(r'[0-9]+', token) is None:
        raise FormatError(f'invalid number in header: {token!r}')
    value = int(token)
    if value > 0xFFFFFFFF:
        raise FormatError(f'invalid number in header: {token!r}')
    return value


def read_exact(fh: BinaryIO, size: int, /) -> bytearray:
    """Return exactly size bytes read from open binary file.

    Short reads are continued until the buffer is full.

    Raises:
        ReadError:
            Stream ends, would block, or fails before size bytes are read.

    """
    data = bytearray(size)
    count = 0
    with memoryview(data) as view:
        while count < size:
            try:
                chunk = fh.readinto(view[count:])  # type: ignore
            except OSError as exc:
                raise ReadError(f'could not read from stream: {exc}') from exc
            if chunk is None:
                raise ReadError(
                    f'stream would block after {count} of {size} bytes'
                )
            if chunk == 0:
                raise ReadError(
                    f'unexpected end of stream: read {count} of {size} bytes'
                )
            count += chunk
    return data


def read_magic(fh: BinaryIO, /) -> str:
    """Return magic number from first two bytes of open binary file."""
    magic = bytes(read_exact(fh, 2))
    if magic[:1] != b'P' or magic[1:] not in (b'3', b'6'):
        raise FormatError(f'not a PPM file: {magic!r}')
    if magic == b'P3':
        raise UnsupportedFormatError('plain PPM format P3 not supported')
    return magic.decode('ascii')


class PpmHeader(NamedTuple):
    """PPM header values."""

    magicnumber: str
    """ID determining Netpbm type."""

    width: int
    """Number of columns in image."""

    height: int
    """Number of rows in image."""

    maxval: int
    """Maximum value of image samples."""

    @property
    def samplewidth(self) -> int:
        """Number of bytes per sample."""
        return 1 if self.maxval < 256 else 2


def read_header(fh: BinaryIO, /) -> PpmHeader:
    """Return header read from start of PPM stream.

    On return, the stream is positioned at the first byte of image data.

    """
    magicnumber = read_magic(fh)
    tokenizer = HeaderTokenizer(fh)
    width = tokenizer.read_uint()
    height = tokenizer.read_uint()
    maxval = tokenizer.read_uint()
    if not 0 < maxval <= MAXVAL:
        raise UnsupportedFormatError(f'maxval {maxval} out of range')
    return PpmHeader(magicnumber, width, height, maxval)


class ColorType(NamedTuple):
    """Color model and bits per sample of decoded image."""

    name: str
    bitdepth: int


class DecodingResult(NamedTuple):
    """Decoded image samples.

    The data is a one-dimensional array of uint8 samples if bitdepth is 8,
    or big-endian uint16 samples if bitdepth is 16.

    """

    bitdepth: int
    data: numpy.ndarray


class ImageDecoder(abc.ABC):
    """Capabilities of image decoders."""

    supports_scanline: bool = False
    """Decoder can read images row by row."""

    @abc.abstractmethod
    def dimensions(self) -> tuple[int, int]:
        """Return width and height of image."""

    @abc.abstractmethod
    def colortype(self) -> ColorType:
        """Return color model of decoded samples."""

    @abc.abstractmethod
    def row_len(self) -> int:
        """Return number of bytes in one row of image."""

    @abc.abstractmethod
    def read_image(self) -> DecodingResult:
        """Return all samples of image."""

    def read_scanline(self, buf: bytearray, /) -> int:
        """Read next row of image into buffer and return row index.

        Raises:
            io.UnsupportedOperation:
                Decoder does not support reading scanlines.

        """
        raise io.UnsupportedOperation(
            f'{self.__class__.__name__} does not support reading scanlines'
        )


class PpmDecoder(ImageDecoder):
    """Decode binary Portable Pixel Map.

    The header is read on initialization. The decoder owns the stream from
    then on: image data is read from the position after the header and the
    stream must not be read or repositioned by other code.

    Parameters:
        file:
            Name of file or open binary file to read.
        maxbytes:
            Maximum number of bytes of image data.
            By default, this is MAXBYTES.

    """

    header: PpmHeader
    """Values parsed from PPM header."""

    filename: str
    """File name."""

    maxbytes: int
    """Maximum number of bytes of image data."""

    _data: numpy.ndarray | None
    _fh: BinaryIO | None

    def __init__(
        self,
        file: PathLike | BinaryIO,
        /,
        *,
        maxbytes: int | None = None,
    ) -> None:
        self.filename = ''
        self.maxbytes = MAXBYTES if maxbytes is None else int(maxbytes)
        self._data = None

        if isinstance(file, (str, os.PathLike)):
            self._fh = open(file, 'rb')
            self.filename = os.fspath(file)
        else:
            self._fh = file

        try:
            self.header = read_header(self._fh)
        except Exception:
            self.close()
            raise

    @property
    def width(self) -> int:
        """Number of columns in image."""
        return self.header.width

    @property
    def height(self) -> int:
        """Number of rows in image."""
        return self.header.height

    @property
    def maxval(self) -> int:
        """Maximum value of image samples."""
        return self.header.maxval

    @property
    def shape(self) -> tuple[int, int, int]:
        """Shape of image array."""
        return self.header.height, self.header.width, 3

    @property
    def axes(self) -> str:
        """Axes of image array."""
        return 'YXS'

    @property
    def dtype(self) -> numpy.dtype:
        """Data type of image array."""
        return numpy.dtype('u1' if self.header.samplewidth == 1 else '>u2')

    def dimensions(self) -> tuple[int, int]:
        return self.header.width, self.header.height

    def colortype(self) -> ColorType:
        samplewidth = self.header.samplewidth
        if samplewidth not in (1, 2):
            raise FormatError(f'{samplewidth} bytes per sample not supported')
        return ColorType('RGB', 8 * samplewidth)

    def row_len(self) -> int:
        return self.header.width * 3 * self.header.samplewidth

    def read_image(self) -> DecodingResult:
        """Return all samples of image read from stream.

        Raises:
            DimensionError:
                Size of image data exceeds maxbytes.
            ReadError:
                Stream ends before all image data is read.

        """
        if self._fh is None:
            raise ValueError('I/O operation on closed file')
        size = self._bytecount()
        if size == 0:
            log_warning(f'{self!r} image is empty {self.dimensions()}')

        data = read_exact(self._fh, size)

        if self.header.samplewidth == 1:
            return DecodingResult(8, numpy.frombuffer(data, 'u1'))
        return DecodingResult(16, numpy.frombuffer(data, '>u2'))

    def asarray(
        self,
        *,
        copy: bool = True,
        cache: bool = False,
    ) -> numpy.ndarray:
        """Return image array of shape (height, width, 3).

        Parameters:
            copy:
                Return a copy of image array.
            cache:
                Keep a copy of image data after reading from file.

        """
        data = self._data
        if data is None:
            data = self.read_image().data.reshape(self.shape)
            if cache:
                self._data = data
            else:
                return data
        return numpy.copy(data) if copy else data

    def close(self) -> None:
        """Close open file."""
        if self.filename and self._fh is not None:
            self._fh.close()
            self._fh = None

    def _bytecount(self) -> int:
        """Return number of bytes of image data."""
        width, height = self.dimensions()
        size = width * height
        if size <= self.maxbytes:
            size *= 3
            if size <= self.maxbytes:
                size *= self.header.samplewidth
                if size <= self.maxbytes:
                    return size
        raise DimensionError(
            f'image of {width} x {height} RGB samples with maxval '
            f'{self.header.maxval} exceeds {self.maxbytes} bytes'
        )

    def __enter__(self) -> PpmDecoder:
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __repr__(self) -> str:
        if self.filename:
            arg = f'{os.path.split(os.path.normcase(self.filename))[-1]!r}'
        elif self._fh is not None:
            arg = str(type(self._fh).__name__)
        else:
            arg = ''
        return f'<{self.__class__.__name__}({arg})>'

    def __str__(self) -> str:
        return indent(
            repr(self),
            f'magicnumber: {self.header.magicnumber}',
            f'axes: {self.axes}',
            f'shape: {self.shape}',
            f'dtype: {self.dtype}',
            f'maxval: {self.header.maxval}',
        )


def indent(*args) -> str:
    """Return joined string representations of objects with indented lines."""
    text = '\n'.join(str(arg) for arg in args)
    return '\n'.join(
        ('  ' + line if line else line) for line in text.splitlines() if line
    )[2:]


def log_warning(msg, *args, **kwargs):
    """Log message with level WARNING."""
    import logging

    logging.getLogger('ppmfile').warning(msg, *args, **kwargs)


def main(argv: list[str] | None = None) -> int:
    """Command line usage main function.

    Show images specified on command line or all images in directory.

    """
    from glob import glob
    from matplotlib import pyplot

    if argv is None:
        argv = sys.argv

    if len(argv) > 1 and '--doctest' in argv:
        import doctest

        doctest.testmod(sys.modules[__name__])
        return 0

    if len(argv) == 1:
        files = glob('*.ppm')
    elif '*' in argv[1]:
        files = glob(argv[1])
    elif os.path.isdir(argv[1]):
        files = glob(f'{argv[1]}/*.ppm')
    else:
        files = argv[1:]

    for fname in files:
        try:
            with PpmDecoder(fname) as ppm:
                print(ppm)
                img = ppm.asarray(copy=False)
                print()
        except (ValueError, OSError) as exc:
            # raise  # enable for debugging
            print(fname, exc)
            continue

        title = f'{os.path.split(fname)[-1]} {ppm.header.magicnumber} '
        title += f'{img.shape} {img.dtype}'

        if ppm.maxval != 255:
            warnings.warn('converting RGB image for display')
            img = img / float(ppm.maxval)
            img *= 255
            numpy.rint(img, out=img)
            numpy.clip(img, 0, 255, out=img)
            img = img.astype('uint8')
        pyplot.imshow(img, interpolation='nearest')
        pyplot.title(title)
        pyplot.show()
    return 0


if __name__ == '__main__':
    sys.exit(main())
