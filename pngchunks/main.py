import argparse
import logging
import os
import sys

from pngchunks.document import PNGDocument
from pngchunks.exceptions import PNGChunkError
from pngchunks.version import __version__

logger = logging.getLogger(__name__)


def create(args):
    PNGDocument().to_file(args.file_path)


def encode(args):
    document = PNGDocument.from_file(args.file_path)
    document.upsert(args.chunk_type, os.fsencode(args.message))
    document.to_file(args.output_file or args.file_path)


def remove(args):
    document = PNGDocument.from_file(args.file_path)
    document.remove(args.chunk_type)
    document.to_file(args.output_file or args.file_path)


def print_chunks(args):
    document = PNGDocument.from_file(args.file_path)
    if args.index is not None:
        chunk = document.chunk_at(args.index)
    elif args.chunk_type is not None:
        chunk = document.chunk_by_type(args.chunk_type)
        if chunk is None:
            logger.warning(
                'No chunk with type %s found, listing chunk types',
                args.chunk_type,
            )
    else:
        chunk = None

    if chunk is None:
        print(' '.join(str(c.chunk_type) for c in document))
        return

    if args.as_string:
        print(chunk.data_as_string())
    else:
        print(list(chunk.data))


def _build_argument_parser():
    parser = argparse.ArgumentParser(
        prog='pngchunks',
        description='Inspect and edit the chunks of a PNG file.',
    )
    parser.add_argument('--version', action='version', version=__version__)
    parser.add_argument(
        '-v', '--verbose', action='store_true', help='log debug output')
    subparsers = parser.add_subparsers(dest='command_name', required=True)

    create_parser = subparsers.add_parser(
        'create', help='write an empty PNG (signature only)')
    create_parser.add_argument('file_path', help='file path to create')
    create_parser.set_defaults(command=create)

    encode_parser = subparsers.add_parser(
        'encode', help='set the data of a chunk, adding it if needed')
    encode_parser.add_argument('file_path', help='file to read from')
    encode_parser.add_argument(
        'chunk_type', help='a chunk type code of 4 ASCII letters')
    encode_parser.add_argument(
        'message', help='the chunk data, stored as the raw argument bytes')
    encode_parser.add_argument(
        'output_file', nargs='?', help='file to write (default: file_path)')
    encode_parser.set_defaults(command=encode)

    remove_parser = subparsers.add_parser(
        'remove', help='remove the first chunk of a type')
    remove_parser.add_argument('file_path', help='file to read from')
    remove_parser.add_argument(
        '-c', '--chunk-type', required=True, help='the chunk type to remove')
    remove_parser.add_argument(
        'output_file', nargs='?', help='file to write (default: file_path)')
    remove_parser.set_defaults(command=remove)

    print_parser = subparsers.add_parser(
        'print', help='list chunk types, or print the data of one chunk')
    print_parser.add_argument('file_path', help='file to read from')
    selector = print_parser.add_mutually_exclusive_group()
    selector.add_argument(
        '-i', '--index', type=int, help='print the data at this index')
    selector.add_argument(
        '-c', '--chunk-type',
        help='print the data of this chunk type (lists the chunk types '
             'if there is none)')
    print_parser.add_argument(
        '-s', '--string', dest='as_string', action='store_true',
        help='print the data as a UTF-8 string')
    print_parser.set_defaults(command=print_chunks)
    return parser


def main(argv=None):
    args = _build_argument_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(stream=sys.stderr, level=level)
    try:
        args.command(args)
    except (PNGChunkError, OSError) as err:
        logger.error('%s failed: %s', args.command_name, err)
        return 1
    return 0
