"""Text-completion client for fortune summaries.

Calls an OpenAI-compatible Responses endpoint. Every failure surfaces as
NarrativeError; callers decide how to present it.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Sequence

import requests

from fortune_merge.config import NarrativeConfig

from .prompt import NarrativeMessage

logger = logging.getLogger(__name__)


class NarrativeError(Exception):
    """The summary could not be produced."""


def to_response_input(messages: Sequence[NarrativeMessage]) -> list[dict[str, Any]]:
    """Convert messages to the Responses API input format."""
    return [
        {
            "role": message.role,
            "content": [{"type": "input_text", "text": message.content}],
        }
        for message in messages
    ]


def extract_summary(data: dict[str, Any]) -> str | None:
    """Pull the summary text out of a Responses API body.

    Items and parts that are not objects are skipped.
    """
    output_text = data.get("output_text")
    if isinstance(output_text, str) and output_text.strip():
        return output_text.strip()

    output = data.get("output")
    if not isinstance(output, list):
        return None

    segments = []
    for item in output:
        if not isinstance(item, dict):
            continue
        content = item.get("content")
        if not isinstance(content, list):
            continue
        for part in content:
            if not isinstance(part, dict):
                continue
            text = part.get("text")
            if isinstance(text, str) and text.strip():
                segments.append(text.strip())

    text = "\n".join(segments).strip()
    return text or None


class NarrativeClient:
    """Synchronous client for the completion service."""

    def __init__(self, config: NarrativeConfig | None = None, session: requests.Session | None = None):
        """Initialize client.

        Args:
            config: Service settings (defaults if not provided)
            session: HTTP session (a new one if not provided)
        """
        self.config = config or NarrativeConfig()
        self.session = session or requests.Session()

    def _api_key(self) -> str:
        api_key = os.environ.get(self.config.api_key_env)
        if not api_key:
            raise NarrativeError(f"Environment variable {self.config.api_key_env} is not set")
        return api_key

    def request_summary(self, messages: Sequence[NarrativeMessage]) -> str:
        """Request a summary for the given messages.

        Args:
            messages: System and user messages

        Returns:
            Summary text

        Raises:
            NarrativeError: On transport errors, HTTP errors, incomplete or
                empty responses
        """
        if not messages:
            raise NarrativeError("At least one message is required")

        url = f"{self.config.base_url.rstrip('/')}/responses"
        logger.info(f"Requesting fortune summary ({self.config.model}, {len(messages)} messages)")

        try:
            response = self.session.post(
                url,
                headers={"Authorization": f"Bearer {self._api_key()}"},
                json={
                    "model": self.config.model,
                    "input": to_response_input(messages),
                    "max_output_tokens": self.config.max_output_tokens,
                },
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise NarrativeError(f"Summary request failed: {e}") from e

        if not response.ok:
            logger.error(f"Summary API returned HTTP {response.status_code}: {response.text[:500]}")
            raise NarrativeError(f"Summary API call failed (HTTP {response.status_code})")

        try:
            data = response.json()
        except ValueError as e:
            raise NarrativeError("Summary API returned invalid JSON") from e

        if not isinstance(data, dict):
            logger.error(f"Summary API returned a {type(data).__name__} body")
            raise NarrativeError("Summary API returned an unexpected body")

        if data.get("status") == "incomplete":
            details = data.get("incomplete_details")
            reason = details.get("reason", "unknown") if isinstance(details, dict) else "unknown"
            raise NarrativeError(f"Summary response was incomplete (reason: {reason})")

        summary = extract_summary(data)
        if not summary:
            raise NarrativeError("Summary response was empty")
        return summary
