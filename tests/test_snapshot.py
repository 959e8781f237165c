from __future__ import annotations

import json

from conftest import icon_dict
from icons.schemas import Icon
from icons.snapshot import LocalSnapshot


def test_read_returns_records_in_file_order(snapshot):
    result = snapshot.read()

    assert result.ok
    assert [i.id for i in result.value] == ["home", "search"]


def test_missing_file_is_empty_baseline(tmp_path):
    result = LocalSnapshot(tmp_path / "nope.json").read()

    assert result.ok
    assert result.value == []


def test_malformed_file_is_empty_baseline_with_error(tmp_path):
    path = tmp_path / "icons.json"
    path.write_text("{not json", encoding="utf-8")

    result = LocalSnapshot(path).read()

    assert result.value == []
    assert result.error is not None
    assert result.error.source == "snapshot"


def test_non_array_file_is_rejected(tmp_path):
    path = tmp_path / "icons.json"
    path.write_text(json.dumps({"icons": []}), encoding="utf-8")

    result = LocalSnapshot(path).read()

    assert result.value == []
    assert result.error is not None


def test_invalid_entries_are_skipped(tmp_path):
    path = tmp_path / "icons.json"
    path.write_text(json.dumps([icon_dict("ok"), {"id": "no-path"}, "junk"]), encoding="utf-8")

    result = LocalSnapshot(path).read()

    assert result.ok
    assert [i.id for i in result.value] == ["ok"]


def test_append_adds_record_to_end_of_file(tmp_path):
    path = tmp_path / "nested" / "icons.json"
    snap = LocalSnapshot(path, writable=True)

    result = snap.append(Icon(id="cup", path="M2 2", generated=True, generated_at=7))

    assert result.ok and result.value is True
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == [
        {
            "id": "cup",
            "name": "",
            "category": "objects",
            "tags": [],
            "path": "M2 2",
            "generated": True,
            "generatedAt": 7,
        }
    ]


def test_append_keeps_entries_it_cannot_read(tmp_path):
    path = tmp_path / "icons.json"
    original = [icon_dict("home"), icon_dict("draft", path=""), icon_dict("x", author="me"), "junk"]
    path.write_text(json.dumps(original), encoding="utf-8")

    result = LocalSnapshot(path).append(Icon(id="cup", path="M2 2"))

    assert result.ok
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data[:4] == original
    assert data[4]["id"] == "cup"


def test_append_leaves_unreadable_file_alone(tmp_path):
    path = tmp_path / "icons.json"
    path.write_text('[{"id": "home", "path": "M2 2"', encoding="utf-8")

    result = LocalSnapshot(path).append(Icon(id="cup", path="M2 2"))

    assert result.value is False
    assert result.error is not None
    assert path.read_text(encoding="utf-8") == '[{"id": "home", "path": "M2 2"'


def test_append_refuses_id_held_by_skipped_entry(tmp_path):
    path = tmp_path / "icons.json"
    path.write_text(json.dumps([icon_dict("draft", path="")]), encoding="utf-8")
    before = path.read_text(encoding="utf-8")

    result = LocalSnapshot(path).append(Icon(id="draft", path="M2 2"))

    assert result.value is False
    assert result.error is not None and result.error.duplicate
    assert path.read_text(encoding="utf-8") == before


def test_append_is_skipped_when_not_writable(snapshot_path):
    before = snapshot_path.read_text(encoding="utf-8")
    snap = LocalSnapshot(snapshot_path, writable=False)

    result = snap.append(Icon(id="cup", path="M2 2"))

    assert result.ok
    assert result.value is False
    assert snapshot_path.read_text(encoding="utf-8") == before
