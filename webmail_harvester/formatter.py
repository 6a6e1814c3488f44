# webmail_harvester/formatter.py
"""
Email list cleaning collaborators.

A formatter is any callable ``(emails) -> emails`` that returns the subset of
its input considered valid. Two implementations ship with the package:

* :class:`OpenAIEmailFormatter` asks an OpenAI chat model to drop malformed
  entries and returns its JSON answer.
* :class:`RegexEmailFormatter` applies a strict pattern locally; it is
  deterministic and needs no network.
"""
from __future__ import annotations

import os
import re
from typing import Any, List, Optional, Protocol, Sequence

from openai import OpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from webmail_harvester.logger import get_logger

logger = get_logger("formatter")

__all__ = [
    "EmailFormatter",
    "FormattingError",
    "OpenAIEmailFormatter",
    "RegexEmailFormatter",
]


class FormattingError(RuntimeError):
    """Raised when a formatter cannot produce a cleaned list."""


class EmailFormatter(Protocol):
    def __call__(self, emails: Sequence[str]) -> List[str]: ...


class RegexEmailFormatter:
    """Keeps only addresses matching a strict local pattern."""

    STRICT_RE = re.compile(
        r"^[A-Za-z0-9_%+-]+(?:\.[A-Za-z0-9_%+-]+)*@(?:[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?\.)+[A-Za-z]{2,}$"
    )

    def __call__(self, emails: Sequence[str]) -> List[str]:
        return [email for email in emails if self.STRICT_RE.match(email)]


class _FormattedEmails(BaseModel):
    formattedEmails: List[str]


_SYSTEM_PROMPT = "You are an expert in data cleansing and standardization."

_USER_PROMPT = """You are given a list of scraped email addresses. Your task is to format and \
standardize these emails, removing any incorrect or malformed data.

Input Emails:
{emails}

Output the formatted and standardized email addresses.
Ensure that the output only contains valid email addresses.
Answer with a JSON object of the form {{"formattedEmails": ["..."]}}."""


def _build_client() -> OpenAI:
    """
    Lazily construct the OpenAI client.

    Avoids crashing at import-time when OPENAI_API_KEY is missing.
    """
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise FormattingError(
            "OPENAI_API_KEY is not set. Set it in the environment before formatting emails."
        )
    return OpenAI(api_key=api_key)


class OpenAIEmailFormatter:
    """Cleans an email list with an OpenAI chat model."""

    def __init__(self, model: str = "gpt-4o-mini", client: Optional[Any] = None) -> None:
        self.model = model
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = _build_client()
        return self._client

    def __call__(self, emails: Sequence[str]) -> List[str]:
        if not emails:
            return []
        prompt = _USER_PROMPT.format(emails="\n".join(emails))
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=0,
            )
        except OpenAIError as exc:
            raise FormattingError(f"OpenAI request failed: {exc}") from exc

        content = response.choices[0].message.content or ""
        try:
            parsed = _FormattedEmails.model_validate_json(content)
        except ValidationError as exc:
            raise FormattingError(f"Unexpected formatter answer: {exc}") from exc
        logger.debug("Formatter kept %d of %d emails", len(parsed.formattedEmails), len(emails))
        return parsed.formattedEmails
