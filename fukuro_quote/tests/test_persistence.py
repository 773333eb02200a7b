"""
Tests: JSON file stores for quotes and projects.

Run with:
    pytest fukuro_quote/tests/test_persistence.py -v
"""

import json

import pytest

from fukuro_quote.models.schemas import Project, QuoteBreakdown, QuoteRequest
from fukuro_quote.persistence import JsonFileStore, ProjectNotFoundError, ProjectStore, QuoteStore


class TestJsonFileStore:
    def test_creates_empty_file(self, tmp_path):
        store = JsonFileStore(tmp_path / "nested" / "items.json")
        assert store.path.exists()
        assert store.read() == []

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonFileStore(path).read() == []

    def test_non_list_reads_empty(self, tmp_path):
        path = tmp_path / "items.json"
        path.write_text(json.dumps({"a": 1}), encoding="utf-8")
        assert JsonFileStore(path).read() == []

    def test_write_then_read(self, tmp_path):
        store = JsonFileStore(tmp_path / "items.json")
        store.write([{"name": "Canción"}])
        assert store.read() == [{"name": "Canción"}]


class TestQuoteStore:
    def test_create_and_list(self, tmp_path):
        store = QuoteStore(tmp_path)
        quote = store.create_quote(QuoteRequest(project_name="Jingle"), QuoteBreakdown(total=10))
        assert quote.id.startswith("Q-")
        listed = store.list_quotes()
        assert [q.id for q in listed] == [quote.id]
        assert listed[0].breakdown.total == 10

    def test_ids_are_unique(self, tmp_path):
        store = QuoteStore(tmp_path)
        ids = {store.create_quote(QuoteRequest(), QuoteBreakdown()).id for _ in range(5)}
        assert len(ids) == 5

    def test_list_for_project_ignores_case(self, tmp_path):
        store = QuoteStore(tmp_path)
        store.create_quote(QuoteRequest(project_name="Jingle"), QuoteBreakdown())
        store.create_quote(QuoteRequest(project_name="Other"), QuoteBreakdown())
        assert len(store.list_for_project("  JINGLE ")) == 1


class TestProjectStore:
    def test_upsert_creates_once(self, tmp_path):
        store = ProjectStore(tmp_path)
        first = store.upsert("Jingle")
        second = store.upsert("jingle")
        assert first.id == second.id
        assert len(store.list_projects()) == 1

    def test_get_unknown_raises(self, tmp_path):
        with pytest.raises(ProjectNotFoundError):
            ProjectStore(tmp_path).get("missing")

    def test_record_quote_counts(self, tmp_path):
        store = ProjectStore(tmp_path)
        store.record_quote("Jingle")
        project = store.record_quote("JINGLE")
        assert project.quote_count == 2
        assert store.get(project.id).quote_count == 2

    def test_save_replaces_by_id(self, tmp_path):
        store = ProjectStore(tmp_path)
        project = store.upsert("Jingle")
        project.name = "Jingle v2"
        store.save(project)
        assert [p.name for p in store.list_projects()] == ["Jingle v2"]

    def test_save_stamps_updated_at(self, tmp_path):
        store = ProjectStore(tmp_path)
        project = Project(name="Jingle")
        before = project.updated_at
        saved = store.save(project)
        assert saved.updated_at >= before
