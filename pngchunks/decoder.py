import io
import logging
import struct

from pngchunks import exceptions as exc
from pngchunks import models


logger = logging.getLogger(__name__)


PNG_SIGNATURE = bytes([
    # High bit set to detect non-8-bit-clean transmission
    0x89,
    # ASCII letters PNG
    0x50, 0x4E, 0x47,
    # DOS line ending (CRLF)
    0x0D, 0x0A,
    # end-of-file charater
    0x1A,
    # Unix line ending (LF)
    0x0A
])
PNG_MAX_CHUNK_LENGTH = 2**31 - 1  # Max length of chunk data
_LENGTH_FIELD_SIZE = _CRC_FIELD_SIZE = 4


class ChunkRecordReader(object):
    """
    Reads chunk records from a binary stream and produces
    :class:`models.Chunk` instances.

    Responsible for validating the low-level portions of a PNG
    stream:

    -   Signature (PNG magic number)
    -   Valid chunk length declaration
    -   Valid chunk type code
    -   CRC32 checksum

    Every failure raises; nothing is repaired or skipped.

    :ivar total_bytes_read:
        Total number of bytes consumed from the underlying file object
    :type total_bytes_read: int
    """
    def __init__(self, stream):
        self._stream = stream
        self.total_bytes_read = 0

    def __iter__(self):
        """
        Decode chunk records until the stream is exhausted.

        The signature must have been consumed already with
        :meth:`validate_signature`.
        """
        while True:
            # First read a single byte to detect EOF
            initial = self._stream.read(1)
            if not initial:
                # If EOF happens here, the stream ended properly at the end
                # of the last chunk.
                break
            self.total_bytes_read += len(initial)
            yield self.read_chunk(initial)

    def validate_signature(self):
        header = self._stream.read(len(PNG_SIGNATURE))
        self.total_bytes_read += len(header)
        if len(header) != len(PNG_SIGNATURE):
            raise exc.HeaderLenMismatch(len(header))
        if header != PNG_SIGNATURE:
            raise exc.HeaderMismatch(header)

    def read_chunk(self, initial=b''):
        """
        Read a full chunk record, starting with the 4 byte big-endian
        data length.

        :param initial: Bytes of the length field already read
        :type initial: bytes
        :rtype: :class:`models.Chunk`
        """
        start_position = self.total_bytes_read - len(initial)
        [length] = struct.unpack('>I', self._read(
            _LENGTH_FIELD_SIZE, exc.ChunkSizeReadError, initial))
        return self.read_chunk_body(length, start_position)

    def read_chunk_body(self, length, start_position=None):
        """
        Read the type code, ``length`` bytes of data, and the CRC32 of
        a chunk record, then check the CRC32.

        :param length: The declared length of the chunk data
        :type length: int
        :rtype: :class:`models.Chunk`
        """
        if start_position is None:
            start_position = self.total_bytes_read
        if length > PNG_MAX_CHUNK_LENGTH:
            fmt = (
                "Chunk claims to be {actual} bytes long, must be "
                "no longer than {max}."
            )
            raise exc.PNGSyntaxError(fmt.format(
                actual=length,
                max=PNG_MAX_CHUNK_LENGTH
            ))
        type_code = self._read(
            models.PNG_CHUNK_TYPE_CODE_LENGTH, exc.ChunkTypeReadError)
        chunk_type = models.ChunkType(type_code)
        data = self._read(length, exc.ChunkDataReadError)
        [declared_crc32] = struct.unpack(
            '>I', self._read(_CRC_FIELD_SIZE, exc.ChunkCrcReadError))

        chunk = models.Chunk(chunk_type, data)
        if chunk.crc != declared_crc32:
            raise exc.CRCMismatch(declared_crc32, chunk.crc)
        logger.debug(
            'Decoded %s chunk with %d data bytes at byte %d',
            chunk_type, length, start_position,
        )
        return chunk

    def _read(self, length, eof_error, initial=b''):
        """
        Read until ``length`` bytes are available (counting those in
        ``initial``), update :ivar:`total_bytes_read`, and return
        the bytes.

        If the stream runs out first, raise ``eof_error``.
        """
        data = self._stream.read(length - len(initial))
        actual = len(initial) + len(data)
        self.total_bytes_read += len(data)
        assert length >= actual, "Read more bytes than requested"
        if length > actual:
            raise eof_error(length, actual)
        return initial + data


def decode_chunk(data):
    """
    Decode the length-prefixed chunk record at the start of ``data``.
    """
    return ChunkRecordReader(io.BytesIO(data)).read_chunk()


def decode_chunk_body(length, data):
    """
    Decode a chunk record whose length field was already read;
    ``data`` starts at the type code.
    """
    return ChunkRecordReader(io.BytesIO(data)).read_chunk_body(length)
