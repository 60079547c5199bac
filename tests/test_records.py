"""Tests for inbound record validation."""

import pytest
from pydantic import ValidationError

from figdag import EdgeRecord, NodeRecord


class TestNodeRecord:
    def test_payload_keeps_recognized_fields(self) -> None:
        record = NodeRecord.model_validate({"id": "1", "label": "Home", "type": "FRAME", "x": 10})
        assert record.id == "1"
        assert record.payload() == {"label": "Home", "type": "FRAME", "image": None}

    def test_missing_id_validates_to_none(self) -> None:
        assert NodeRecord.model_validate({"label": "Home"}).id is None

    def test_records_are_frozen(self) -> None:
        record = NodeRecord(id="1")
        with pytest.raises(ValidationError):
            record.label = "changed"  # type: ignore[misc]


class TestEdgeRecord:
    def test_accepts_camel_case_keys(self) -> None:
        record = EdgeRecord.model_validate(
            {"sourceId": "1", "targetId": "2", "triggerType": "ON_CLICK", "actionType": "NAVIGATE"},
        )
        assert (record.source_id, record.target_id) == ("1", "2")
        assert record.trigger_type == "ON_CLICK"

    def test_accepts_field_names(self) -> None:
        record = EdgeRecord(source_id="1", target_id="2", label="Click on Buy")
        assert record.payload() == {
            "triggerType": None,
            "actionType": None,
            "label": "Click on Buy",
            "image": None,
        }

    def test_payload_excludes_endpoints(self) -> None:
        record = EdgeRecord.model_validate({"sourceId": "1", "targetId": "2"})
        assert "sourceId" not in record.payload()
        assert "targetId" not in record.payload()

    def test_rejects_non_string_label(self) -> None:
        with pytest.raises(ValidationError):
            EdgeRecord.model_validate({"sourceId": "1", "targetId": "2", "label": {"text": "x"}})
