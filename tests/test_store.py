"""Tests for FileGraphStore."""

from pathlib import Path

import pytest

from figdag import FileGraphStore, Graph, build_graph


@pytest.fixture
def store(tmp_path: Path) -> FileGraphStore:
    return FileGraphStore(tmp_path / "store")


@pytest.fixture
def graph() -> Graph:
    return build_graph([{"id": "a", "label": "A"}, {"id": "b"}], [{"sourceId": "a", "targetId": "b"}])


class TestFileGraphStore:
    def test_path_layout(self, store: FileGraphStore) -> None:
        assert store.path_for("KEY", "123") == store.root / "graphs" / "KEY-123.json"

    def test_load_missing_returns_none(self, store: FileGraphStore) -> None:
        assert store.load("KEY", "1") is None
        assert store.exists("KEY", "1") is False

    def test_save_and_load(self, store: FileGraphStore, graph: Graph) -> None:
        store.save("KEY", "1", graph)

        assert store.exists("KEY", "1") is True
        loaded = store.load("KEY", "1")
        assert loaded is not None
        assert list(loaded.nodes) == ["a", "b"]
        assert [edge.key for edge in loaded.edges] == [("a", "b")]
        assert loaded.nodes["a"].data["label"] == "A"

    def test_versions_are_separate(self, store: FileGraphStore, graph: Graph) -> None:
        store.save("KEY", "1", graph)
        assert store.load("KEY", "2") is None

    def test_save_replaces(self, store: FileGraphStore, graph: Graph) -> None:
        store.save("KEY", "1", graph)
        store.save("KEY", "1", build_graph([{"id": "z"}], []))

        loaded = store.load("KEY", "1")
        assert loaded is not None
        assert list(loaded.nodes) == ["z"]

    def test_no_temporary_files_left(self, store: FileGraphStore, graph: Graph) -> None:
        store.save("KEY", "1", graph)
        assert [p.name for p in (store.root / "graphs").iterdir()] == ["KEY-1.json"]

    @pytest.mark.parametrize(
        ("document_id", "version"),
        [("", "1"), ("KEY", ""), ("../KEY", "1"), ("KEY", "a/b"), ("..", "1"), ("KEY", "a\\b")],
    )
    def test_invalid_keys(self, store: FileGraphStore, document_id: str, version: str) -> None:
        with pytest.raises(ValueError, match="required|Invalid key"):
            store.path_for(document_id, version)
