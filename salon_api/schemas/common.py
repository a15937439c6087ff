"""Shared pydantic building blocks for the public form endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Shape check only; no deliverability lookup.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class FormRequest(BaseModel):
    """Base for browser form submissions.

    The site posts camelCase JSON; snake_case names are accepted as well.
    The ``website`` field is a honeypot hidden from humans: bots fill it in.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    website: str | None = Field(
        default=None,
        description="Honeypot field. Must be left empty.",
    )


class CamelResponse(BaseModel):
    """Base for JSON responses: field names go out in camelCase like the requests."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


class SubmissionResponse(CamelResponse):
    """Acknowledgement returned once a form submission is accepted."""

    success: bool = True
    message: str
