# tests/test_dictionary.py
import json

import pytest

from hitzkale.core.dictionary import DEFAULT_SOURCES, DictionaryStore, read_source
from hitzkale.core.errors import DictionaryLoadError
from hitzkale.core.models import WordEntry


def test_sources_concatenate_in_order_without_dedup():
    first = [{"id": 1, "word": "etxe", "translation": "casa"}]
    second = [
        {"id": 10, "word": "etxe", "translation": "hogar"},
        {"id": 11, "word": "jan", "translation": "comer"},
    ]
    store = DictionaryStore.from_sources(first, second)
    assert [e.id for e in store] == [1, 10, 11]
    assert len(store) == 3
    assert store[1] == WordEntry(10, "etxe", "hogar")


def test_json_file_source(tmp_path):
    path = tmp_path / "words.json"
    path.write_text(json.dumps([{"id": "a1", "word": "lan", "translation": "trabajo"}]), encoding="utf-8")
    store = DictionaryStore.from_sources(path, [{"id": 2, "word": "lankide", "translation": "colega"}])
    assert store.words() == ["lan", "lankide"]
    assert store.max_id() == 2


@pytest.mark.parametrize(
    "row",
    [
        {"id": 1, "translation": "casa"},
        {"id": 1, "word": "   ", "translation": "casa"},
        {"id": 1, "word": 42, "translation": "casa"},
        {"word": "etxe", "translation": "casa"},
        {"id": True, "word": "etxe", "translation": "casa"},
        {"id": 1.5, "word": "etxe", "translation": "casa"},
        {"id": 1, "word": "etxe", "translation": ["casa"]},
    ],
)
def test_malformed_rows_fail_at_load(row):
    with pytest.raises(DictionaryLoadError):
        DictionaryStore.from_sources([row])


def test_non_list_json_fails(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"id": 1}', encoding="utf-8")
    with pytest.raises(DictionaryLoadError):
        read_source(path)


def test_missing_file_fails(tmp_path):
    with pytest.raises(DictionaryLoadError):
        read_source(tmp_path / "nope.json")


def test_missing_translation_defaults_to_empty():
    store = DictionaryStore.from_sources([{"id": 1, "word": "etxe"}])
    assert store[0].translation == ""


def test_candidate_lookup_keeps_source_order(sample_store):
    assert [e.word for e in sample_store.starting_with("ETXE")] == ["etxe", "etxekide", "etxetegi"]
    assert [e.word for e in sample_store.ending_with("gi")] == ["etxetegi"]
    assert sample_store.starting_with("x") == []


def test_membership_is_case_insensitive(sample_store, sample_entries):
    assert "EtxeKide" in sample_store
    assert "etx" not in sample_store
    assert sample_entries[0] in sample_store
    assert 3 not in sample_store


def test_store_is_read_only(sample_store):
    with pytest.raises(Exception):
        sample_store[0].word = "changed"
    assert not hasattr(sample_store, "append")


def test_bundled_data_loads(bundled_store):
    assert len(bundled_store) > 50
    assert bundled_store[0].word == "etxe"
    # verbs come after words
    assert bundled_store[-1].id >= 1000
    ids = [e.id for e in bundled_store]
    assert len(ids) == len(set(ids))
    assert all(p.exists() for p in DEFAULT_SOURCES)
