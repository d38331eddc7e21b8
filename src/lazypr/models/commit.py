"""Data models for commits and generated pull requests."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class Commit(BaseModel):
    """A single commit that would be part of a pull request."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "hash": "abc123def4567890abc123def4567890abc123de",
                "short_hash": "abc123d",
                "author": "John Doe",
                "date": "2024-01-15",
                "message": "feat: add user authentication",
            }
        },
    )

    hash: str = Field(..., description="Full commit SHA hash")
    short_hash: str = Field(..., description="Abbreviated commit SHA hash")
    author: str = Field("", description="Author name")
    date: str = Field("", description="Author date (YYYY-MM-DD)")
    message: str = Field("", description="Commit subject line")


class TokenUsage(BaseModel):
    """Token counts reported by the provider for one generation."""

    input_tokens: int = Field(0, description="Prompt tokens")
    output_tokens: int = Field(0, description="Completion tokens")
    total_tokens: int = Field(0, description="Prompt + completion tokens")


class PullRequestContent(BaseModel):
    """Structured pull request content requested from the provider."""

    title: str = Field(..., min_length=5, max_length=100, description="Pull request title")
    description: str = Field(..., min_length=100, description="Markdown pull request body")
    labels: List[str] = Field(default_factory=list, description="Labels describing the change")

    @field_validator("labels")
    @classmethod
    def labels_must_be_available(cls, labels: List[str], info: ValidationInfo) -> List[str]:
        """Reject labels outside of the available set when one is given."""
        available = (info.context or {}).get("available_labels")
        if available is None:
            return labels
        unknown = [label for label in labels if label not in available]
        if unknown:
            raise ValueError(
                f"Unknown labels {unknown}; expected a subset of {list(available)}"
            )
        return labels


class GeneratedPullRequest(BaseModel):
    """Pull request content together with provider usage metadata."""

    content: PullRequestContent
    usage: TokenUsage = Field(default_factory=TokenUsage)
    finish_reason: Optional[str] = Field(None, description="Provider finish reason")
