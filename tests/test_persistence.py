"""
Tests for whole-document read and write.
"""

import json

import pytest

from flatstore.config import StoreSettings
from flatstore.core.persistence import read_document, serialize_document, write_document
from flatstore.exceptions import LoadError, PersistError


class TestReadDocument:
    """Parsing the document from disk."""

    def test_reads_array_root(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text('[[{"id": 1}], []]', encoding="utf-8")
        assert read_document(path) == [[{"id": 1}], []]

    def test_reads_object_root(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text('{"users": []}', encoding="utf-8")
        assert read_document(path) == {"users": []}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text("[[", encoding="utf-8")
        with pytest.raises(LoadError) as exc_info:
            read_document(path)
        assert exc_info.value.details["path"] == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError):
            read_document(tmp_path / "gone.json")

    def test_wrong_encoding(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_bytes(b'[["\xff\xfe"]]')
        with pytest.raises(LoadError):
            read_document(path, encoding="utf-8")

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_literal(self, tmp_path, literal):
        path = tmp_path / "db.json"
        path.write_text('[[{"score": ' + literal + '}]]', encoding="utf-8")
        with pytest.raises(LoadError) as exc_info:
            read_document(path)
        assert literal in exc_info.value.message

    @pytest.mark.parametrize("payload", ['"text"', "3", "null", "true"])
    def test_scalar_root(self, tmp_path, payload):
        path = tmp_path / "db.json"
        path.write_text(payload, encoding="utf-8")
        with pytest.raises(LoadError):
            read_document(path)


class TestWriteDocument:
    """Replacing the document on disk."""

    def test_atomic_replace(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text("[]", encoding="utf-8")

        write_document(path, '[[{"id": 1}]]')

        assert json.loads(path.read_text(encoding="utf-8")) == [[{"id": 1}]]
        assert not (tmp_path / "db.json.tmp").exists()

    def test_in_place(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text("[[1, 2, 3, 4, 5, 6]]", encoding="utf-8")

        write_document(path, "[[]]", atomic=False)

        assert path.read_text(encoding="utf-8") == "[[]]"

    def test_missing_directory(self, tmp_path):
        with pytest.raises(PersistError) as exc_info:
            write_document(tmp_path / "nowhere" / "db.json", "[]")
        assert exc_info.value.code == "PERSIST_FAILED"

    def test_failed_rename_removes_temp_file(self, tmp_path):
        target = tmp_path / "db.json"
        target.mkdir()

        with pytest.raises(PersistError):
            write_document(target, "[]")
        assert not (tmp_path / "db.json.tmp").exists()


class TestSerializeDocument:
    """JSON layout options."""

    def test_compact_default(self):
        assert serialize_document([[{"a": 1}]], StoreSettings()) == '[[{"a": 1}]]'

    def test_non_ascii_kept(self):
        assert serialize_document([["ñ"]], StoreSettings()) == '[["ñ"]]'

    def test_ensure_ascii(self):
        assert serialize_document([["ñ"]], StoreSettings(ensure_ascii=True)) == '[["\\u00f1"]]'

    def test_rejects_nan(self):
        with pytest.raises(ValueError):
            serialize_document([[float("nan")]], StoreSettings())
