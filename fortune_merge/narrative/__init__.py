"""Fortune summary narration."""

from .client import NarrativeClient, NarrativeError
from .prompt import NarrativeMessage, build_fortune_messages
from .service import NarrativeResult, NarrativeService

__all__ = [
    "NarrativeClient",
    "NarrativeError",
    "NarrativeMessage",
    "NarrativeResult",
    "NarrativeService",
    "build_fortune_messages",
]
