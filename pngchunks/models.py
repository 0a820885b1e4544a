import itertools
import struct
import zlib

import attr

from pngchunks import exceptions as exc


PNG_CHUNK_TYPE_PROPERTY_BITMASK = 0b00100000
PNG_CHUNK_TYPE_CODE_ALLOWED_BYTES = frozenset(
    itertools.chain(range(65, 91), range(97, 123)))
PNG_CHUNK_TYPE_CODE_LENGTH = 4


_valid_bytes = attr.validators.instance_of(bytes)


def _valid_chunk_type_code(instance, attribute, value):
    _valid_bytes(instance, attribute, value)
    if len(value) != PNG_CHUNK_TYPE_CODE_LENGTH:
        raise exc.TypeCodeLengthMismatch(value)
    if not PNG_CHUNK_TYPE_CODE_ALLOWED_BYTES.issuperset(value):
        try:
            text = value.decode('utf-8')
        except UnicodeDecodeError as err:
            raise exc.NotUtf8(value, err) from err
        raise exc.NotAlphabetic(text)


@attr.attributes(frozen=True)
class ChunkType:
    """
    A PNG chunk type code.

    The case of each of the four letters is a property bit: bit 5 of
    the byte is clear for uppercase and set for lowercase.
    """
    code = attr.attr(validator=_valid_chunk_type_code)  # type: bytes

    @classmethod
    def from_str(cls, text):
        """
        Build a chunk type from a string like ``'tEXt'``.

        :raises exceptions.NotAlphabetic:
            if any character is not an ASCII letter
        :raises exceptions.TypeCodeLengthMismatch:
            if there aren't exactly 4 letters
        """
        if not PNG_CHUNK_TYPE_CODE_ALLOWED_BYTES.issuperset(map(ord, text)):
            raise exc.NotAlphabetic(text)
        return cls(text.encode('ascii'))

    @property
    def is_critical(self):
        # pylint: disable=unsubscriptable-object
        return not self.code[0] & PNG_CHUNK_TYPE_PROPERTY_BITMASK

    @property
    def is_public(self):
        # pylint: disable=unsubscriptable-object
        return not self.code[1] & PNG_CHUNK_TYPE_PROPERTY_BITMASK

    @property
    def is_reserved_bit_valid(self):
        # pylint: disable=unsubscriptable-object
        return not self.code[2] & PNG_CHUNK_TYPE_PROPERTY_BITMASK

    @property
    def is_safe_to_copy(self):
        # pylint: disable=unsubscriptable-object
        return bool(self.code[3] & PNG_CHUNK_TYPE_PROPERTY_BITMASK)

    @property
    def is_valid(self):
        return self.is_reserved_bit_valid

    def __str__(self):
        if all(byte < 0x80 for byte in self.code):
            return self.code.decode('ascii')
        return ' '.join(str(byte) for byte in self.code)


def _chunk_data(data):
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError('Chunk data must be bytes, not {type}'.format(
            type=type(data)
        ))
    return bytes(data)


def chunk_crc32(chunk_type, data):
    """
    Compute the CRC32 of a chunk record: the type code followed by
    the data.
    """
    crc = zlib.crc32(chunk_type.code)
    return zlib.crc32(data, crc)


@attr.attributes(repr=False)
class Chunk:
    """
    A PNG chunk: type code, opaque data, and the CRC32 over both.

    The CRC is computed on construction and on :meth:`update_data`,
    and can't be set directly.

    :ivar chunk_type: The chunk's type code
    :type chunk_type: :class:`ChunkType`
    :ivar data: The chunk data
    :type data: bytes
    :ivar crc: The CRC32 of the type code and data
    :type crc: int
    """
    _chunk_type = attr.attr(
        validator=attr.validators.instance_of(ChunkType))  # type: ChunkType
    _data = attr.attr(converter=_chunk_data)  # type: bytes
    _crc = attr.attr(init=False)  # type: int

    def __attrs_post_init__(self):
        self._crc = chunk_crc32(self._chunk_type, self._data)

    @property
    def chunk_type(self):
        return self._chunk_type

    @property
    def data(self):
        return self._data

    @property
    def crc(self):
        return self._crc

    @property
    def length(self):
        return len(self._data)

    def update_data(self, data):
        """
        Replace the chunk data and recompute the CRC.
        """
        data = _chunk_data(data)
        self._crc = chunk_crc32(self._chunk_type, data)
        self._data = data

    def data_as_string(self):
        """
        Decode the chunk data as UTF-8.

        :raises exceptions.DataNotUtf8: if the data isn't valid UTF-8
        """
        try:
            return self._data.decode('utf-8')
        except UnicodeDecodeError as err:
            raise exc.DataNotUtf8(self._data, err) from err

    def to_bytes(self):
        """
        Serialize to a chunk record: length, type code, data, CRC32.
        """
        return b''.join([
            struct.pack('>I4s', self.length, self._chunk_type.code),
            self._data,
            struct.pack('>I', self._crc),
        ])

    def __repr__(self):
        fmt = '{name}(chunk_type={type!r}, length={length}, crc={crc:#010x})'
        return fmt.format(
            name=self.__class__.__name__,
            type=self._chunk_type,
            length=self.length,
            crc=self._crc,
        )

    def __str__(self):
        try:
            data = repr(self.data_as_string())
        except exc.DataNotUtf8:
            data = repr(self._data)
        return '{type} {data}'.format(type=self._chunk_type, data=data)
