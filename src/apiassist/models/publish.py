"""Pydantic models for the publishing agent's Publish Result."""

from pydantic import BaseModel, Field


class PublishAction(BaseModel):
    type: str = ""
    description: str = ""
    url: str = ""
    status: str = ""


class PublishIssue(BaseModel):
    title: str = ""
    number: int = 0
    url: str = ""
    severity: str = ""


class PullRequest(BaseModel):
    title: str = ""
    url: str = ""
    branch: str = ""
    files_changed: int = 0


class PublishResult(BaseModel):
    actions_taken: list[PublishAction] = Field(default_factory=list)
    issues_created: list[PublishIssue] = Field(default_factory=list)
    pull_request: PullRequest = Field(default_factory=PullRequest)
    summary: str = ""
    errors: list[str] = Field(default_factory=list)
