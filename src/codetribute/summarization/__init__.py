"""LLM summarization of work logs.

Any server implementing the OpenAI chat completions API works: Groq (the
default), OpenAI, Ollama via /v1, LM Studio or vLLM.
"""

from codetribute.summarization.client import (
    ChatCompletionClient,
    create_chat_client_from_config,
)
from codetribute.summarization.summarizer import Summarizer, build_prompt

__all__ = [
    "ChatCompletionClient",
    "Summarizer",
    "build_prompt",
    "create_chat_client_from_config",
]
