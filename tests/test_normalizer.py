"""Tests for result normalization and severity ranking."""

import json

import pytest

from apiassist.models.enums import Severity
from apiassist.models.integration import IntegrationResult, SecurityFinding
from apiassist.models.publish import PublishResult
from apiassist.services.normalizer import (
    normalize_integration_result,
    normalize_publish_result,
    rank_findings,
)
from apiassist.services.unwrap import deep_unwrap


def test_full_integration_payload(integration_payload):
    result, structured = normalize_integration_result(integration_payload)
    assert structured is True
    assert len(result.code_output.code_snippets) == 1
    assert result.code_output.code_snippets[0].filename == "payment_client.py"
    assert result.code_output.authentication_type == "Bearer"
    assert result.code_output.dependencies[0].packages == ["requests>=2.31.0"]
    assert len(result.findings) == 2
    assert result.security_output.risk_score == "6.5/10"
    assert result.documentation_output.endpoints[0].method == "POST"
    assert result.readiness_assessment == "Production Readiness: 7/10."


def test_empty_mapping_is_fully_shaped():
    result, structured = normalize_integration_result({})
    assert structured is True
    assert result == IntegrationResult()
    assert result.code_output.code_snippets == []
    assert result.security_output.findings == []
    assert result.documentation_output.endpoints == []
    assert result.integration_summary == ""


def test_wrong_types_fall_back_to_defaults():
    payload = {
        "code_output": {
            "code_snippets": "not a list",
            "dependencies": [{"language": "Go", "packages": ["a", 3, {"b": 1}]}],
            "usage_notes": 12,
            "authentication_type": None,
        },
        "security_output": ["not", "a", "mapping"],
        "documentation_output": {"endpoints": [{"method": "GET"}, "junk", 7]},
        "integration_summary": {"nested": True},
    }
    result, structured = normalize_integration_result(payload)
    assert structured is True
    assert result.code_output.code_snippets == []
    assert result.code_output.usage_notes == ""
    assert result.code_output.authentication_type == ""
    assert result.code_output.dependencies[0].packages == ["a", "3", '{"b": 1}']
    assert result.security_output.findings == []
    assert len(result.documentation_output.endpoints) == 1
    assert result.documentation_output.endpoints[0].path == ""
    assert result.integration_summary == ""


def test_partial_finding_defaults():
    result, _ = normalize_integration_result(
        {"security_output": {"findings": [{"id": "SEC-9", "severity": 5}]}}
    )
    finding = result.findings[0]
    assert finding.id == "SEC-9"
    assert finding.severity == ""
    assert finding.remediation == ""
    assert finding.severity_label == "Low"


@pytest.mark.parametrize("value", ["integration generated successfully", None, 17, ["a", "b"], True])
def test_non_mapping_never_raises(value):
    result, structured = normalize_integration_result(value)
    assert structured is False
    assert result.code_output.code_snippets == []
    assert result.code_output.dependencies == []
    assert result.security_output.findings == []
    assert result.security_output.alert_rules == []
    assert result.documentation_output.endpoints == []


def test_degraded_text_placement():
    text = "integration generated successfully"
    result, structured = normalize_integration_result(text)
    assert structured is False
    assert result.code_output.usage_notes == text
    assert result.documentation_output.documentation == text
    assert result.integration_summary == text
    assert result.readiness_assessment == ""


def test_degraded_non_string_is_json_encoded():
    result, _ = normalize_integration_result([1, 2])
    assert result.integration_summary == "[1, 2]"


def _encode(value, depth):
    """JSON-encode every container in value, nesting the encoding depth levels deep."""
    if depth == 0:
        return value
    if isinstance(value, dict):
        return json.dumps({k: _encode(v, depth - 1) for k, v in value.items()})
    if isinstance(value, list):
        return json.dumps([_encode(v, depth - 1) for v in value])
    return value


@pytest.mark.parametrize("depth", [0, 1, 2, 3])
def test_wrapping_depth_does_not_change_result(integration_payload, depth):
    wrapped = _encode(integration_payload, depth)
    expected, _ = normalize_integration_result(deep_unwrap(integration_payload))
    actual, structured = normalize_integration_result(deep_unwrap(wrapped))
    assert structured is True
    assert actual == expected


def test_publish_payload(publish_payload):
    result, structured = normalize_publish_result(publish_payload)
    assert structured is True
    assert result.actions_taken[0].type == "file_push"
    assert result.issues_created[0].number == 42
    assert result.pull_request.files_changed == 3
    assert result.errors == []


def test_publish_missing_pull_request_is_zeroed():
    result, _ = normalize_publish_result({"summary": "done", "errors": ["rate limited", 404]})
    assert result.pull_request.title == ""
    assert result.pull_request.files_changed == 0
    assert result.errors == ["rate limited", "404"]


def test_publish_integer_coercion():
    result, _ = normalize_publish_result(
        {
            "issues_created": [{"number": "12"}, {"number": 7.0}, {"number": True}],
            "pull_request": {"files_changed": 2.5},
        }
    )
    assert [i.number for i in result.issues_created] == [0, 7, 0]
    assert result.pull_request.files_changed == 0


def test_publish_non_mapping():
    result, structured = normalize_publish_result("pushed everything")
    assert structured is False
    assert result == PublishResult(summary="pushed everything")


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Critical", Severity.CRITICAL),
        ("WARNING", Severity.WARNING),
        (" info ", Severity.INFO),
        ("low", Severity.LOW),
        ("High", Severity.LOW),
        ("", Severity.LOW),
        (None, Severity.LOW),
    ],
)
def test_severity_from_label(label, expected):
    assert Severity.from_label(label) == expected


def test_rank_findings_orders_and_filters():
    findings = [
        SecurityFinding(id="a", severity="Info"),
        SecurityFinding(id="b", severity="critical"),
        SecurityFinding(id="c", severity="mystery"),
        SecurityFinding(id="d", severity="Warning"),
        SecurityFinding(id="e", severity="Critical"),
    ]
    assert [f.id for f in rank_findings(findings)] == ["b", "e", "d", "a", "c"]
    assert [f.id for f in rank_findings(findings, "Warning")] == ["b", "e", "d"]
    assert [f.id for f in rank_findings(findings, Severity.CRITICAL)] == ["b", "e"]
