"""User preferences persisted between sessions."""

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer

from apiassist.models.enums import CodeStyle, DocFormat


class UserSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    default_repo: str = ""
    default_branch: str = "main"
    preferred_languages: set[str] = Field(default_factory=lambda: {"Python", "Node.js"})
    code_style: CodeStyle = CodeStyle.ASYNC
    doc_format: DocFormat = DocFormat.MARKDOWN
    alert_severity_threshold: str = "Warning"

    @field_serializer("preferred_languages")
    def _serialize_languages(self, languages: set[str]) -> list[str]:
        return sorted(languages)

    @classmethod
    def from_stored(cls, data: object) -> "UserSettings":
        """Build settings from a stored record, defaulting bad or missing fields.

        Unknown keys are ignored and each known key is validated on its own, so
        one corrupt value does not discard the rest of the record.
        """
        if not isinstance(data, dict):
            return cls()
        accepted: dict = {}
        for name in cls.model_fields:
            if name not in data:
                continue
            try:
                cls.model_validate({**accepted, name: data[name]})
            except ValidationError:
                continue
            accepted[name] = data[name]
        return cls.model_validate(accepted)
