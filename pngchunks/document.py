import io
import itertools
import logging

import attr

from pngchunks import exceptions as exc
from pngchunks import models
from pngchunks.decoder import ChunkRecordReader, PNG_SIGNATURE


logger = logging.getLogger(__name__)


def read_all(path):
    with open(path, 'rb') as pngfile:
        return pngfile.read()


def write_all(path, data):
    with open(path, 'wb') as pngfile:
        pngfile.write(data)


def _as_chunk_type(chunk_type):
    if isinstance(chunk_type, models.ChunkType):
        return chunk_type
    return models.ChunkType.from_str(chunk_type)


@attr.attributes
class PNGDocument:
    """
    A PNG file as the signature followed by an ordered list of chunks.

    Chunk order is the order in the file. Type codes need not be
    unique; lookups by type use the first match.

    Chunk types may be given as :class:`models.ChunkType` instances
    or as strings like ``'tEXt'``.
    """
    _chunks = attr.attr(
        default=attr.Factory(list),
        converter=list,
        validator=attr.validators.deep_iterable(
            attr.validators.instance_of(models.Chunk)),
    )  # type: list

    @classmethod
    def from_bytes(cls, data):
        """
        Parse a complete PNG file.

        Any error aborts the whole parse.
        """
        reader = ChunkRecordReader(io.BytesIO(data))
        reader.validate_signature()
        return cls(reader)

    @classmethod
    def from_file(cls, path):
        return cls.from_bytes(read_all(path))

    def to_file(self, path):
        write_all(path, self.to_bytes())

    @property
    def signature(self):
        return PNG_SIGNATURE

    @property
    def chunks(self):
        return tuple(self._chunks)

    def __len__(self):
        return len(self._chunks)

    def __iter__(self):
        return iter(self._chunks)

    def chunk_at(self, index):
        """
        Return the chunk at ``index`` in file order.

        :raises exceptions.ChunkIndexError: if there's no such chunk
        """
        if not 0 <= index < len(self._chunks):
            raise exc.ChunkIndexError(index, len(self._chunks))
        return self._chunks[index]

    def chunk_by_type(self, chunk_type):
        """
        Return the first chunk with the type, or ``None``.
        """
        chunk_type = _as_chunk_type(chunk_type)
        for chunk in self._chunks:
            if chunk.chunk_type == chunk_type:
                return chunk
        return None

    def chunks_by_type(self, chunk_type):
        """
        Return all chunks with the type, in file order.
        """
        chunk_type = _as_chunk_type(chunk_type)
        return [c for c in self._chunks if c.chunk_type == chunk_type]

    def append_chunk(self, chunk):
        if not isinstance(chunk, models.Chunk):
            raise TypeError('Expected a Chunk, not {type}'.format(
                type=type(chunk)
            ))
        self._chunks.append(chunk)

    def upsert(self, chunk_type, data):
        """
        Replace the data of the first chunk with the type, keeping its
        position, or append a new chunk if there isn't one.

        :return: The updated or new chunk
        """
        chunk_type = _as_chunk_type(chunk_type)
        chunk = self.chunk_by_type(chunk_type)
        if chunk is not None:
            logger.debug('Updating data of %s chunk', chunk_type)
            chunk.update_data(data)
            return chunk
        chunk = models.Chunk(chunk_type, data)
        logger.debug(
            'Appending %s chunk at index %d', chunk_type, len(self._chunks))
        self._chunks.append(chunk)
        return chunk

    def remove(self, chunk_type):
        """
        Remove the first chunk with the type and return it.

        :raises exceptions.ChunkNotFound: if there's no such chunk
        """
        chunk_type = _as_chunk_type(chunk_type)
        for index, chunk in enumerate(self._chunks):
            if chunk.chunk_type == chunk_type:
                logger.debug(
                    'Removing %s chunk at index %d', chunk_type, index)
                del self._chunks[index]
                return chunk
        raise exc.ChunkNotFound(chunk_type)

    def to_bytes(self):
        """
        Serialize the signature followed by every chunk record.
        """
        return b''.join(
            itertools.chain(
                [PNG_SIGNATURE],
                (chunk.to_bytes() for chunk in self._chunks),
            )
        )
