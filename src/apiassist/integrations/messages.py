"""Request text sent to each agent."""

import json

from apiassist.models.integration import IntegrationResult


def build_generate_message(specification: str, languages: list[str]) -> str:
    return (
        "Analyze the following API specification and generate integration code, "
        "security analysis, and documentation.\n\n"
        f"Target Languages: {', '.join(languages)}\n\n"
        f"API Specification:\n{specification}"
    )


def build_publish_message(
    result: IntegrationResult,
    *,
    repository: str,
    branch: str,
    commit_message: str,
    file_path: str,
    include_findings: bool,
) -> str:
    """Describe the push for the publishing agent.

    Findings are only sent when issues should be opened for them.
    """
    findings = result.security_output.findings if include_findings else []
    code = json.dumps(result.code_output.model_dump(mode="json"))
    issues = json.dumps([f.model_dump(mode="json") for f in findings])
    docs = json.dumps(result.documentation_output.model_dump(mode="json"))
    return (
        f"Push the following integration outputs to GitHub repository {repository} "
        f"on branch {branch}.\n\n"
        f"Commit Message: {commit_message}\n\n"
        f"File Path: {file_path}\n\n"
        f"Code to push:\n{code}\n\n"
        f"Security findings to create issues for:\n{issues}\n\n"
        f"Documentation to update:\n{docs}"
    )
