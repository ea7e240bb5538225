"""Unit tests for response model decoding."""

import pytest
from pydantic import ValidationError

from enigma.core import Operation
from enigma.models import (
    DataResponse,
    ErrorEnvelope,
    ExportResponse,
    MetaParentNodeResponse,
    MetaTableNodeResponse,
    StatsResponse,
)


def test_data_response_keeps_opaque_result(data_page):
    page = DataResponse.model_validate(data_page)
    assert page.result == data_page["result"]
    assert page.info.total_results == 420
    assert page.info.has_next_page


def test_data_response_requires_info():
    with pytest.raises(ValidationError):
        DataResponse.model_validate({"result": []})


def test_data_response_is_frozen(data_page):
    page = DataResponse.model_validate(data_page)
    with pytest.raises(ValidationError):
        page.data_path = "other"


def test_stats_response_operations(stats_page):
    stats = StatsResponse.model_validate(stats_page)
    assert stats.info.operations == [Operation.SUM]
    assert stats.info.column == {"id": "total_people", "type": "int"}
    assert not stats.info.has_next_page


def test_stats_response_unknown_operation_kept_as_string(stats_page):
    stats_page["info"]["operations"] = ["median"]
    stats = StatsResponse.model_validate(stats_page)
    assert stats.info.operations == ["median"]


def test_export_response_requires_urls():
    with pytest.raises(ValidationError):
        ExportResponse.model_validate({"data_path": "x", "export_url": "https://f"})


def test_parent_node_response():
    body = {
        "data_path": "us.gov",
        "result": {
            "path": [{"level": "us", "label": "United States", "description": ""}],
            "immediate_nodes": [{"datapath": "us.gov.whitehouse", "label": "White House"}],
            "children_tables": [
                {"datapath": "us.gov.whitehouse.visitor-list", "label": "Visitor List"}
            ],
        },
        "info": {"result_type": "parent", "children_tables_total": 1, "total_pages": 1},
    }
    node = MetaParentNodeResponse.model_validate(body)
    assert node.result.immediate_nodes[0].datapath == "us.gov.whitehouse"
    assert node.result.children_tables[0].label == "Visitor List"
    assert node.info.children_tables_total == 1


def test_table_node_column_ids_follow_index():
    body = {
        "datapath": "us.gov.whitehouse.visitor-list",
        "result": {
            "columns": [
                {"id": "appt_made_date", "type": "date", "index": 2},
                {"id": "namefull", "type": "string", "index": 1},
            ],
            "ancestor_datapaths": ["us", "us.gov"],
            "documents": [{"url": "https://x/doc.pdf", "title": "Readme", "type": "pdf"}],
        },
        "info": {"result_type": "table"},
    }
    table = MetaTableNodeResponse.model_validate(body)
    assert table.column_ids == ["namefull", "appt_made_date"]
    assert table.result.documents[0].title == "Readme"


def test_error_envelope():
    envelope = ErrorEnvelope.model_validate({"info": {"additional": "not found"}})
    assert envelope.info.additional == "not found"
    with pytest.raises(ValidationError):
        ErrorEnvelope.model_validate({"error": "nope"})
