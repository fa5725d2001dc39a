# tests/test_importer.py
import json

import pytest

from hitzkale.core.dictionary import DictionaryStore
from hitzkale.core.errors import DatasetImportError
from hitzkale.importer import import_csv, plan_import


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "words.json"
    path.write_text(json.dumps([
        {"id": 1, "word": "etxe", "translation": "casa"},
        {"id": 7, "word": "lan", "translation": "trabajo"},
    ]), encoding="utf-8")
    return path


def write_csv(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_import_appends_new_words(tmp_path, data_file):
    csv_path = write_csv(tmp_path / "new.csv", (
        "basque,spanish\n"
        "lankide,colega\n"
        " etxe ,hogar\n"
        "lantegi,\n"
        ",nada\n"
        "lankide,otra vez\n"
        "harategi,carnicería\n"
    ))
    added = import_csv(csv_path, data_file)
    assert added == [
        {"id": 8, "word": "lankide", "translation": "colega"},
        {"id": 9, "word": "harategi", "translation": "carnicería"},
    ]
    rows = json.loads(data_file.read_text(encoding="utf-8"))
    assert [r["word"] for r in rows] == ["etxe", "lan", "lankide", "harategi"]
    # the result is loadable by the store
    assert len(DictionaryStore.from_sources(data_file)) == 4


def test_dry_run_leaves_file_alone(tmp_path, data_file):
    before = data_file.read_text(encoding="utf-8")
    csv_path = write_csv(tmp_path / "new.csv", "basque,spanish\nlankide,colega\n")
    assert len(import_csv(csv_path, data_file, dry_run=True)) == 1
    assert data_file.read_text(encoding="utf-8") == before


def test_nothing_new(tmp_path, data_file):
    csv_path = write_csv(tmp_path / "new.csv", "basque,spanish\netxe,casa\n")
    assert import_csv(csv_path, data_file) == []


def test_missing_column(tmp_path, data_file):
    csv_path = write_csv(tmp_path / "new.csv", "word,meaning\nlankide,colega\n")
    with pytest.raises(DatasetImportError):
        import_csv(csv_path, data_file)


def test_custom_columns(tmp_path, data_file):
    csv_path = write_csv(tmp_path / "new.csv", "word,meaning\nlankide,colega\n")
    added = import_csv(csv_path, data_file, word_column="word", translation_column="meaning")
    assert added[0]["word"] == "lankide"


def test_bad_data_file(tmp_path):
    data = tmp_path / "bad.json"
    data.write_text('{"id": 1}', encoding="utf-8")
    csv_path = write_csv(tmp_path / "new.csv", "basque,spanish\nlankide,colega\n")
    with pytest.raises(DatasetImportError):
        import_csv(csv_path, data)
    with pytest.raises(DatasetImportError):
        import_csv(tmp_path / "missing.csv", data)


def test_plan_starts_ids_at_one_for_empty_file():
    new, skipped = plan_import([], [{"basque": "etxe", "spanish": "casa"}])
    assert new == [{"id": 1, "word": "etxe", "translation": "casa"}]
    assert skipped == 0


def test_csv_not_utf8(tmp_path, data_file):
    csv_path = tmp_path / "latin1.csv"
    csv_path.write_bytes("basque,spanish\nlankide,compañero\n".encode("latin-1"))
    with pytest.raises(DatasetImportError, match="cannot read"):
        import_csv(csv_path, data_file)


def test_data_file_with_non_object_row(tmp_path):
    data = tmp_path / "words.json"
    data.write_text('[{"id": 1, "word": "etxe", "translation": "casa"}, "lan"]', encoding="utf-8")
    csv_path = write_csv(tmp_path / "new.csv", "basque,spanish\nlankide,colega\n")
    with pytest.raises(DatasetImportError, match=r"\[1\]"):
        import_csv(csv_path, data)


def test_unreadable_data_path(tmp_path):
    data = tmp_path / "words_dir"
    data.mkdir()
    csv_path = write_csv(tmp_path / "new.csv", "basque,spanish\nlankide,colega\n")
    with pytest.raises(DatasetImportError):
        import_csv(csv_path, data)
