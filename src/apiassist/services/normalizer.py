"""Total defaulting functions from unwrapped agent payloads to result models.

Each aggregate is defaulted bottom-up: leaf records first, then the outputs
that contain them, then the top-level result. None of these functions raise;
a payload that is not a mapping yields the degraded fallback shape.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from apiassist.models.enums import Severity
from apiassist.models.integration import (
    AlertRule,
    CodeArtifact,
    CodeOutput,
    DependencySpec,
    DocumentationOutput,
    Endpoint,
    IntegrationResult,
    SecurityFinding,
    SecurityOutput,
)
from apiassist.models.publish import (
    PublishAction,
    PublishIssue,
    PublishResult,
    PullRequest,
)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _integer(data: dict, key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _mapping(data: dict, key: str) -> dict:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _records(data: dict, key: str, build: Callable[[dict], T]) -> list[T]:
    """Keep a list field only if it is a list; drop items that are not mappings."""
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [build(item) for item in value if isinstance(item, dict)]


def _strings(data: dict, key: str) -> list[str]:
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else json.dumps(item) for item in value]


def _raw_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return str(value)


# ---------------------------------------------------------------------------
# Integration Result
# ---------------------------------------------------------------------------


def _code_artifact(data: dict) -> CodeArtifact:
    return CodeArtifact(
        language=_text(data, "language"),
        code=_text(data, "code"),
        filename=_text(data, "filename"),
        description=_text(data, "description"),
    )


def _dependency_spec(data: dict) -> DependencySpec:
    return DependencySpec(
        language=_text(data, "language"),
        packages=_strings(data, "packages"),
    )


def _code_output(data: dict) -> CodeOutput:
    return CodeOutput(
        code_snippets=_records(data, "code_snippets", _code_artifact),
        dependencies=_records(data, "dependencies", _dependency_spec),
        usage_notes=_text(data, "usage_notes"),
        authentication_type=_text(data, "authentication_type"),
    )


def _security_finding(data: dict) -> SecurityFinding:
    return SecurityFinding(
        id=_text(data, "id"),
        severity=_text(data, "severity"),
        category=_text(data, "category"),
        title=_text(data, "title"),
        description=_text(data, "description"),
        remediation=_text(data, "remediation"),
        evidence=_text(data, "evidence"),
    )


def _alert_rule(data: dict) -> AlertRule:
    return AlertRule(
        name=_text(data, "name"),
        condition=_text(data, "condition"),
        severity=_text(data, "severity"),
        action=_text(data, "action"),
    )


def _security_output(data: dict) -> SecurityOutput:
    return SecurityOutput(
        findings=_records(data, "findings", _security_finding),
        risk_score=_text(data, "risk_score"),
        alert_rules=_records(data, "alert_rules", _alert_rule),
        summary=_text(data, "summary"),
    )


def _endpoint(data: dict) -> Endpoint:
    return Endpoint(
        method=_text(data, "method"),
        path=_text(data, "path"),
        description=_text(data, "description"),
        parameters=_text(data, "parameters"),
        response_schema=_text(data, "response_schema"),
    )


def _documentation_output(data: dict) -> DocumentationOutput:
    return DocumentationOutput(
        documentation=_text(data, "documentation"),
        endpoints=_records(data, "endpoints", _endpoint),
        getting_started=_text(data, "getting_started"),
        changelog_entry=_text(data, "changelog_entry"),
        troubleshooting=_text(data, "troubleshooting"),
    )


def normalize_integration_result(value: Any) -> tuple[IntegrationResult, bool]:
    """Shape an unwrapped generate payload into an IntegrationResult.

    Returns:
        The result and whether it was built from a structured mapping. When
        ``value`` is not a mapping its text lands in the usage notes, the
        documentation body and the summary, and every list is empty.
    """
    if not isinstance(value, dict):
        text = _raw_text(value)
        return (
            IntegrationResult(
                code_output=CodeOutput(usage_notes=text),
                documentation_output=DocumentationOutput(documentation=text),
                integration_summary=text,
            ),
            False,
        )

    return (
        IntegrationResult(
            code_output=_code_output(_mapping(value, "code_output")),
            security_output=_security_output(_mapping(value, "security_output")),
            documentation_output=_documentation_output(_mapping(value, "documentation_output")),
            integration_summary=_text(value, "integration_summary"),
            readiness_assessment=_text(value, "readiness_assessment"),
        ),
        True,
    )


# ---------------------------------------------------------------------------
# Publish Result
# ---------------------------------------------------------------------------


def _publish_action(data: dict) -> PublishAction:
    return PublishAction(
        type=_text(data, "type"),
        description=_text(data, "description"),
        url=_text(data, "url"),
        status=_text(data, "status"),
    )


def _publish_issue(data: dict) -> PublishIssue:
    return PublishIssue(
        title=_text(data, "title"),
        number=_integer(data, "number"),
        url=_text(data, "url"),
        severity=_text(data, "severity"),
    )


def _pull_request(data: dict) -> PullRequest:
    return PullRequest(
        title=_text(data, "title"),
        url=_text(data, "url"),
        branch=_text(data, "branch"),
        files_changed=_integer(data, "files_changed"),
    )


def normalize_publish_result(value: Any) -> tuple[PublishResult, bool]:
    """Shape an unwrapped publish payload into a PublishResult.

    A payload that is not a mapping becomes a result whose summary holds the
    raw text.
    """
    if not isinstance(value, dict):
        return PublishResult(summary=_raw_text(value)), False

    return (
        PublishResult(
            actions_taken=_records(value, "actions_taken", _publish_action),
            issues_created=_records(value, "issues_created", _publish_issue),
            pull_request=_pull_request(_mapping(value, "pull_request")),
            summary=_text(value, "summary"),
            errors=_strings(value, "errors"),
        ),
        True,
    )


# ---------------------------------------------------------------------------
# Severity views
# ---------------------------------------------------------------------------


def rank_findings(
    findings: Iterable[SecurityFinding],
    min_severity: str | Severity | None = None,
) -> list[SecurityFinding]:
    """Order findings most-severe-first, optionally dropping those below a threshold.

    The sort is stable, so findings of equal severity keep their original order.
    """
    floor = Severity.from_label(min_severity).rank if min_severity else Severity.LOW.rank
    kept = [f for f in findings if f.severity_level.rank >= floor]
    return sorted(kept, key=lambda f: f.severity_level.rank, reverse=True)
