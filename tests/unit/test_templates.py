"""Unit tests for the service log template model."""

import json

import pytest
from pydantic import ValidationError

from servicelogger.errors import TemplateError
from servicelogger.templates import Template

SAMPLE = {
    "severity": "Warning",
    "service_name": "SREManualAction",
    "log_type": "cluster-configuration",
    "summary": "Action required: review cluster alerts",
    "description": "Your cluster has firing alerts that need attention.",
    "internal_only": False,
    "doc_references": ["https://docs.example.com/alerts"],
    "_tags": ["t_alerts"],
}


def test_from_json_parses_fields():
    template = Template.from_json(json.dumps(SAMPLE).encode())

    assert template.severity == "Warning"
    assert template.service_name == "SREManualAction"
    assert template.tags == ["t_alerts"]
    assert template.doc_references == ["https://docs.example.com/alerts"]


@pytest.mark.parametrize("raw", [b"", b"   \n", "not json", "[1, 2]"])
def test_from_json_rejects_unusable_input(raw):
    with pytest.raises(TemplateError):
        Template.from_json(raw)


def test_from_json_requires_summary():
    data = dict(SAMPLE)
    del data["summary"]

    with pytest.raises(TemplateError, match="summary"):
        Template.from_json(json.dumps(data))


def test_from_json_rejects_unknown_severity():
    with pytest.raises(TemplateError):
        Template.from_json(json.dumps({**SAMPLE, "severity": "Catastrophic"}))


def test_template_is_immutable():
    template = Template.from_json(json.dumps(SAMPLE))

    with pytest.raises(ValidationError):
        template.summary = "changed"


def test_payload_excludes_tags_and_adds_cluster_id():
    template = Template.from_json(json.dumps(SAMPLE))

    payload = template.to_payload("cluster-123")

    assert payload["cluster_id"] == "cluster-123"
    assert "_tags" not in payload
    assert "tags" not in payload
    assert "event_stream_id" not in payload
    assert payload["summary"] == SAMPLE["summary"]


def test_payload_keeps_unknown_keys():
    template = Template.from_json(json.dumps({**SAMPLE, "subscription_id": "sub-1"}))

    assert template.to_payload("c1")["subscription_id"] == "sub-1"


def test_markdown_contains_summary_and_references():
    template = Template.from_json(json.dumps(SAMPLE))

    text = template.to_markdown()

    assert text.startswith("# Action required: review cluster alerts")
    assert "**Severity**: Warning" in text
    assert "**Internal only**: no" in text
    assert "- https://docs.example.com/alerts" in text
    assert str(template) == text


def test_markdown_omits_empty_sections():
    data = {k: v for k, v in SAMPLE.items() if k not in ("doc_references", "log_type")}
    text = Template.from_json(json.dumps(data)).to_markdown()

    assert "References" not in text
    assert "**Type**" not in text


def test_plain_tags_key_is_sent_verbatim():
    """Only `_tags` is local metadata; a `tags` key is an ordinary extra field."""
    template = Template.from_json(json.dumps({**SAMPLE, "tags": ["customer-visible"]}))

    payload = template.to_payload("c1")

    assert payload["tags"] == ["customer-visible"]
    assert "_tags" not in payload
