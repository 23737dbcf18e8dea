"""Tests for the built-in inbox and YAML datasets."""

from collections import Counter

import pytest

from commglass.engine.dataset import load_dataset, mock_content, record_from_dict
from commglass.engine.errors import DatasetError
from commglass.engine.models import ContentType, Platform, Priority


def test_mock_content_shape():
    records = mock_content()
    assert len(records) == 17
    assert len({r.id for r in records}) == 17

    priorities = Counter(r.priority for r in records)
    assert priorities[Priority.HIGH] == 7
    assert priorities[Priority.MEDIUM] == 6
    assert priorities[Priority.LOW] == 4

    # Every platform and content type is represented
    assert {r.platform for r in records} == set(Platform)
    assert {r.type for r in records} == set(ContentType)


def test_mock_content_returns_fresh_objects():
    first = mock_content()
    second = mock_content()
    first[0].toggle_action_item(0)
    assert not second[0].action_items[0].completed


def test_record_from_dict():
    record = record_from_dict({
        "id": "r1",
        "type": "Topic",
        "platform": "discord",
        "priority": "Low",
        "title": "Guild notes",
        "content": "Weekly notes",
        "timestamp": "1 day ago",
        "action_items": ["Read", {"text": "Reply", "completed": True}],
        "participants": ["Kim"],
        "tags": ["notes"],
    })
    assert record.id == "r1"
    assert record.type is ContentType.TOPIC
    assert record.body_text == "Weekly notes"
    assert record.timestamp_label == "1 day ago"
    assert [i.completed for i in record.action_items] == [False, True]
    assert record.pending_action_count == 1


def test_record_from_dict_missing_field():
    with pytest.raises(ValueError, match="platform"):
        record_from_dict({"type": "message", "priority": "high", "title": "x"})


def test_load_dataset(tmp_path):
    path = tmp_path / "inbox.yaml"
    path.write_text(
        "- type: message\n"
        "  platform: slack\n"
        "  priority: high\n"
        "  title: Budget sync\n"
        "  timestamp_label: 20 mins ago\n"
        "  tags: [budget]\n"
        "- type: contact\n"
        "  platform: gmail\n"
        "  priority: low\n"
        "  title: Dana Lee\n"
    )
    records = load_dataset(path)
    assert [r.title for r in records] == ["Budget sync", "Dana Lee"]
    assert records[0].tags == ["budget"]
    assert records[1].id


def test_load_dataset_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_dataset(path) == []


def test_load_dataset_bad_priority(tmp_path):
    path = tmp_path / "inbox.yaml"
    path.write_text(
        "- {type: message, platform: slack, priority: high, title: ok}\n"
        "- {type: message, platform: slack, priority: urgent, title: bad}\n"
    )
    with pytest.raises(DatasetError) as exc_info:
        load_dataset(path)
    assert exc_info.value.index == 1
    assert "urgent" in str(exc_info.value)


def test_load_dataset_rejects_mapping(tmp_path):
    path = tmp_path / "inbox.yaml"
    path.write_text("title: not a list\n")
    with pytest.raises(DatasetError, match="Expected a list"):
        load_dataset(path)


def test_load_dataset_invalid_yaml(tmp_path):
    path = tmp_path / "inbox.yaml"
    path.write_text("- [unclosed\n")
    with pytest.raises(DatasetError, match="Invalid YAML"):
        load_dataset(path)


def test_load_dataset_missing(tmp_path):
    with pytest.raises(DatasetError, match="not found"):
        load_dataset(tmp_path / "nope.yaml")
