import io
import os
import pickle
import stat

import pytest

from fts.codec import FORMAT_NAME, dumps_index, load_index, loads_index, save_index
from fts.errors import IndexCorruptError
from fts.posting import InvertedIndex


@pytest.fixture
def built_index(donut_docs):
    index = InvertedIndex()
    index.add(donut_docs)
    return index


def test_round_trip_through_file(built_index, index_path):
    save_index(built_index, index_path)
    loaded = load_index(index_path)
    assert loaded == built_index
    for term in built_index.tokens():
        assert loaded.get_postings(term) == built_index.get_postings(term)


def test_round_trip_through_file_object(built_index):
    buf = io.BytesIO()
    save_index(built_index, buf)
    buf.seek(0)
    assert load_index(buf) == built_index


def test_round_trip_preserves_order_and_unicode_terms():
    index = InvertedIndex.from_dict({"москва": [2, 40, 41], "東京": [0], "x": list(range(1000))})
    assert loads_index(dumps_index(index)).to_dict() == index.to_dict()


def test_round_trip_empty_index():
    assert loads_index(dumps_index(InvertedIndex())) == InvertedIndex()


def test_loaded_index_answers_queries(built_index, index_path):
    save_index(built_index, index_path)
    assert load_index(index_path).search("donuts") == [0, 1]


def test_save_leaves_no_temporary_files(built_index, index_path):
    save_index(built_index, index_path)
    save_index(built_index, index_path)
    assert sorted(p.name for p in index_path.parent.iterdir()) == [index_path.name]


def test_failed_save_keeps_previous_file(built_index, index_path, monkeypatch):
    save_index(built_index, index_path)
    before = index_path.read_bytes()

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("fts.codec.os.replace", broken_replace)
    with pytest.raises(OSError):
        save_index(InvertedIndex(), index_path)
    assert index_path.read_bytes() == before
    assert sorted(p.name for p in index_path.parent.iterdir()) == [index_path.name]


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"not a pickle at all",
        pickle.dumps({"format": FORMAT_NAME, "version": 1, "postings": {}})[:-5],
    ],
)
def test_undecodable_blob_is_corrupt(data):
    with pytest.raises(IndexCorruptError):
        loads_index(data)


@pytest.mark.parametrize(
    "obj",
    [
        {"cat": [1]},
        ["cat"],
        {"format": "something-else", "version": 1, "postings": {}},
        {"format": FORMAT_NAME, "version": 99, "postings": {}},
        {"format": FORMAT_NAME, "version": 1, "postings": None},
    ],
)
def test_foreign_envelope_is_corrupt(obj):
    with pytest.raises(IndexCorruptError):
        loads_index(pickle.dumps(obj))


def test_load_corrupt_file(index_path):
    index_path.parent.mkdir(parents=True)
    index_path.write_bytes(b"\x00\x01garbage")
    with pytest.raises(IndexCorruptError):
        load_index(index_path)


def test_saved_file_follows_umask(built_index, index_path):
    old = os.umask(0o022)
    try:
        save_index(built_index, index_path)
    finally:
        os.umask(old)
    assert stat.S_IMODE(index_path.stat().st_mode) == 0o644
