"""Best-effort LLM summaries of activity batches."""

import logging
from collections.abc import Sequence

from codetribute.activity.models import ActivityRecord
from codetribute.constants import (
    DEFAULT_SUMMARIZATION_MODEL,
    SUMMARIZATION_PROMPT,
    SUMMARY_FALLBACK_ERROR,
    SUMMARY_FALLBACK_NO_COMPLETION,
)
from codetribute.exceptions import UninitializedError
from codetribute.summarization.client import ChatCompletionClient
from codetribute.worklog.formatter import render_detailed_log

logger = logging.getLogger(__name__)


def build_prompt(records: Sequence[ActivityRecord]) -> str:
    """Build the single user prompt sent to the model."""
    return SUMMARIZATION_PROMPT.format(detailed_log=render_detailed_log(records))


class Summarizer:
    """Summarize activity batches through a chat completions client.

    ``summarize`` always returns a string. Failures degrade to one of two
    fixed fallbacks:

    - "Summary could not be generated." when the call succeeds without a
      completion;
    - "Error generating summary." for every other failure, including a
      missing client.
    """

    def __init__(
        self,
        client: ChatCompletionClient | None,
        model: str = DEFAULT_SUMMARIZATION_MODEL,
    ):
        self.client = client
        self.model = model

    def request_summary(self, records: Sequence[ActivityRecord]) -> str | None:
        """Ask the model for a summary.

        Returns:
            The first completion's text, or None if the response has none.

        Raises:
            UninitializedError: If no client is configured.
            httpx.HTTPError: On transport or provider failures.
        """
        if self.client is None:
            raise UninitializedError("Summarization client is not initialized", "summarizer")

        response = self.client.create_chat_completion(
            messages=[{"role": "user", "content": build_prompt(records)}],
            model=self.model,
        )

        choices = response.get("choices") if isinstance(response, dict) else None
        if not isinstance(choices, list) or not choices:
            logger.debug(f"API returned no choices. Full response: {response}")
            return None

        # Any missing or null level means there is no completion
        choice = choices[0]
        message = choice.get("message") if isinstance(choice, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not content:
            logger.debug(f"API returned no completion text. First choice: {choice}")
            return None
        return content

    def summarize(self, records: Sequence[ActivityRecord]) -> str:
        """Summarize a drained batch.

        Args:
            records: The batch snapshot, in arrival order.

        Returns:
            The model's summary or a fixed fallback string.
        """
        logger.info(f"Summarizing {len(records)} activity records")
        try:
            summary = self.request_summary(records)
        except Exception as e:
            logger.error(f"Error summarizing work log: {e}")
            return SUMMARY_FALLBACK_ERROR

        if summary is None:
            return SUMMARY_FALLBACK_NO_COMPLETION

        logger.debug(f"Summary generated: {summary[:200]}")
        return summary
