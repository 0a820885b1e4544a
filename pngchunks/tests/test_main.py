# pylint: disable=redefined-outer-name
import logging
import os

import pytest


@pytest.fixture
def png_path(tmp_path):
    from pngchunks.document import PNGDocument
    from pngchunks.models import Chunk, ChunkType

    document = PNGDocument([
        Chunk(ChunkType(b'IHDR'), b'\x00' * 13),
        Chunk(ChunkType(b'tEXt'), b'hello'),
        Chunk(ChunkType(b'IEND'), b''),
    ])
    path = tmp_path / 'image.png'
    document.to_file(str(path))
    return path


def load(path):
    from pngchunks.document import PNGDocument

    return PNGDocument.from_file(str(path))


def run(*argv):
    from pngchunks.main import main

    return main([str(arg) for arg in argv])


def test_create(tmp_path):
    from pngchunks.decoder import PNG_SIGNATURE

    path = tmp_path / 'new.png'
    assert run('create', path) == 0
    assert path.read_bytes() == PNG_SIGNATURE


def test_encode_in_place(png_path):
    assert run('encode', png_path, 'RuSt', 'secret') == 0
    document = load(png_path)
    assert [str(c.chunk_type) for c in document] == [
        'IHDR', 'tEXt', 'IEND', 'RuSt']
    assert document.chunk_by_type('RuSt').data_as_string() == 'secret'


def test_encode_stores_raw_argument_bytes(png_path):
    assert run('encode', png_path, 'RuSt', os.fsdecode(b'\xff')) == 0
    assert load(png_path).chunk_by_type('RuSt').data == b'\xff'


def test_encode_existing_to_output(png_path, tmp_path):
    output = tmp_path / 'out.png'
    before = png_path.read_bytes()
    assert run('encode', png_path, 'tEXt', 'changed', output) == 0
    assert png_path.read_bytes() == before
    assert load(output).chunk_at(1).data == b'changed'


def test_encode_invalid_type(png_path, caplog):
    before = png_path.read_bytes()
    with caplog.at_level(logging.ERROR):
        assert run('encode', png_path, 'Ru5t', 'secret') == 1
    assert png_path.read_bytes() == before
    assert 'encode failed' in caplog.text
    assert 'Ru5t' in caplog.text


def test_remove(png_path):
    assert run('remove', png_path, '-c', 'tEXt') == 0
    assert [str(c.chunk_type) for c in load(png_path)] == ['IHDR', 'IEND']


def test_remove_missing(png_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert run('remove', png_path, '--chunk-type', 'RuSt') == 1
    assert 'No chunk with type RuSt found' in caplog.text


def test_print_types(png_path, capsys):
    assert run('print', png_path) == 0
    assert capsys.readouterr().out == 'IHDR tEXt IEND\n'


def test_print_by_index(png_path, capsys):
    assert run('print', png_path, '-i', 1) == 0
    assert capsys.readouterr().out == '[104, 101, 108, 108, 111]\n'


def test_print_by_type_as_string(png_path, capsys):
    assert run('print', png_path, '-c', 'tEXt', '-s') == 0
    assert capsys.readouterr().out == 'hello\n'


def test_print_index_out_of_range(png_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert run('print', png_path, '--index', 7) == 1
    assert 'out of range' in caplog.text


def test_print_missing_type_lists_types(png_path, capsys, caplog):
    with caplog.at_level(logging.WARNING):
        assert run('print', png_path, '-c', 'zzZz') == 0
    assert capsys.readouterr().out == 'IHDR tEXt IEND\n'
    assert 'No chunk with type zzZz found' in caplog.text


def test_corrupt_file(tmp_path, caplog):
    path = tmp_path / 'bad.png'
    path.write_bytes(b'not a png at all')
    with caplog.at_level(logging.ERROR):
        assert run('print', path) == 1
    assert 'Signature does not match' in caplog.text


def test_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert run('print', tmp_path / 'missing.png') == 1
    assert 'print failed' in caplog.text
