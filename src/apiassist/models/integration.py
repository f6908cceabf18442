"""Pydantic models for the generation agent's Integration Result.

Every list field defaults to empty and every text field to ``""`` so that a
result is always fully shaped, however little the remote agent returned.
"""

from pydantic import BaseModel, ConfigDict, Field

from apiassist.models.enums import Severity


class CodeArtifact(BaseModel):
    """One generated source file."""

    model_config = ConfigDict(frozen=True)

    language: str = ""
    code: str = ""
    filename: str = ""
    description: str = ""


class DependencySpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    language: str = ""
    packages: list[str] = Field(default_factory=list)


class CodeOutput(BaseModel):
    code_snippets: list[CodeArtifact] = Field(default_factory=list)
    dependencies: list[DependencySpec] = Field(default_factory=list)
    usage_notes: str = ""
    authentication_type: str = ""


class SecurityFinding(BaseModel):
    id: str = ""
    severity: str = ""
    category: str = ""
    title: str = ""
    description: str = ""
    remediation: str = ""
    evidence: str = ""

    @property
    def severity_level(self) -> Severity:
        return Severity.from_label(self.severity)

    @property
    def severity_label(self) -> str:
        return self.severity or "Low"


class AlertRule(BaseModel):
    name: str = ""
    condition: str = ""
    severity: str = ""
    action: str = ""


class SecurityOutput(BaseModel):
    findings: list[SecurityFinding] = Field(default_factory=list)
    risk_score: str = ""
    alert_rules: list[AlertRule] = Field(default_factory=list)
    summary: str = ""


class Endpoint(BaseModel):
    method: str = ""
    path: str = ""
    description: str = ""
    parameters: str = ""
    response_schema: str = ""


class DocumentationOutput(BaseModel):
    documentation: str = ""
    endpoints: list[Endpoint] = Field(default_factory=list)
    getting_started: str = ""
    changelog_entry: str = ""
    troubleshooting: str = ""


class IntegrationResult(BaseModel):
    """Aggregate produced by one successful generate cycle."""

    code_output: CodeOutput = Field(default_factory=CodeOutput)
    security_output: SecurityOutput = Field(default_factory=SecurityOutput)
    documentation_output: DocumentationOutput = Field(default_factory=DocumentationOutput)
    integration_summary: str = ""
    readiness_assessment: str = ""

    @property
    def findings(self) -> list[SecurityFinding]:
        return self.security_output.findings
