"""Async fortune summary service, isolated from the engine."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Sequence

from fortune_merge.config import NarrativeConfig
from fortune_merge.models.fortune import FortuneReport

from .client import NarrativeClient, NarrativeError
from .prompt import build_fortune_messages

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NarrativeResult:
    """Summary text or the reason it is missing."""

    summary: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.summary is not None


class NarrativeService:
    """Fetches fortune summaries without ever raising to the caller."""

    def __init__(self, config: NarrativeConfig | None = None, client: NarrativeClient | None = None):
        self.config = config or NarrativeConfig()
        self.client = client or NarrativeClient(self.config)

    async def summarize(
        self,
        report: FortuneReport,
        score: int,
        logs: Sequence[str] = (),
    ) -> NarrativeResult:
        """Fetch a summary for a finished game.

        The blocking HTTP call runs in the default executor.

        Args:
            report: Fortune report of the finished game
            score: Final score
            logs: Optional recent game messages

        Returns:
            NarrativeResult (error set on any failure)
        """
        if not self.config.enabled:
            return NarrativeResult(error="disabled")

        messages = build_fortune_messages(report, score, logs)
        loop = asyncio.get_running_loop()
        try:
            summary = await loop.run_in_executor(None, self.client.request_summary, messages)
        except NarrativeError as e:
            logger.warning(f"Fortune summary unavailable: {e}")
            return NarrativeResult(error=str(e))
        except Exception as e:
            logger.exception("Fortune summary request crashed")
            return NarrativeResult(error=f"Summary request crashed: {e}")

        return NarrativeResult(summary=summary)
