class PNGChunkError(Exception):
    pass


class DecodeError(PNGChunkError):
    pass


class SignatureMismatch(DecodeError):
    pass


class HeaderLenMismatch(SignatureMismatch):
    def __init__(self, actual):
        self.actual = actual
        super().__init__(
            "Expected an 8 byte signature, got {actual} bytes".format(
                actual=actual,
            )
        )


class HeaderMismatch(SignatureMismatch):
    def __init__(self, bytes_):
        self.bytes = bytes_
        super().__init__(
            "Signature does not match, got {actual!r}".format(actual=bytes_)
        )


class UnexpectedEOF(DecodeError):
    """
    The data ended while reading a field of a chunk record.

    :ivar field: Which field was being read
    :ivar expected: Number of bytes requested
    :ivar actual: Number of bytes available
    """
    field = None

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        fmt = "Expected to read {expected} bytes of chunk {field}, got {actual}"
        super().__init__(fmt.format(
            expected=expected,
            field=self.field,
            actual=actual,
        ))


class ChunkSizeReadError(UnexpectedEOF):
    field = 'length'


class ChunkTypeReadError(UnexpectedEOF):
    field = 'type'


class ChunkDataReadError(UnexpectedEOF):
    field = 'data'


class ChunkCrcReadError(UnexpectedEOF):
    field = 'crc'


class CRCMismatch(DecodeError):
    """
    The CRC32 declared in a chunk record doesn't match the one
    computed from its type and data.
    """
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            "Declared CRC {expected:#010x}, computed {actual:#010x}".format(
                expected=expected,
                actual=actual,
            )
        )


class PNGSyntaxError(DecodeError):
    pass


class InvalidTypeCode(PNGChunkError, ValueError):
    pass


class TypeCodeLengthMismatch(InvalidTypeCode):
    def __init__(self, bytes_):
        self.bytes = bytes_
        super().__init__(
            "Chunk type code must be exactly 4 bytes long, got {code!r}".format(
                code=bytes_,
            )
        )


class NotAlphabetic(InvalidTypeCode):
    def __init__(self, text):
        self.text = text
        super().__init__(
            "Chunk type code {text!r} must be ASCII letters only".format(
                text=text,
            )
        )


class NotUtf8(InvalidTypeCode):
    def __init__(self, bytes_, cause):
        self.bytes = bytes_
        self.cause = cause
        super().__init__(
            "Chunk type code {code!r} is not valid UTF-8: {cause}".format(
                code=bytes_,
                cause=cause,
            )
        )


class ChunkNotFound(PNGChunkError, LookupError):
    def __init__(self, chunk_type):
        self.chunk_type = chunk_type
        super().__init__(
            "No chunk with type {code} found".format(code=chunk_type)
        )


class ChunkIndexError(PNGChunkError, IndexError):
    def __init__(self, index, length):
        self.index = index
        self.length = length
        super().__init__(
            "Chunk index {index} out of range for {length} chunks".format(
                index=index,
                length=length,
            )
        )


class DataNotUtf8(PNGChunkError, ValueError):
    def __init__(self, bytes_, cause):
        self.bytes = bytes_
        self.cause = cause
        super().__init__(
            "Chunk data is not valid UTF-8: {cause}".format(cause=cause)
        )
