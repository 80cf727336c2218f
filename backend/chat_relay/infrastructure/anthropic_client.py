"""Anthropic Completion Client: wraps AsyncAnthropic with error mapping.

Invariants:
    - complete() sends the full turn sequence in one Messages API call
    - Returns concatenated text blocks, or None when the response carries no text
    - All SDK failures mapped to CompletionAPIError (core/errors.py)
    - No retry loop here: the SDK's own max_retries is the only retrying layer

Design Decisions:
    - Wrapper over raw client: isolates SDK error types from the orchestrator (ADR: single responsibility)
    - One long-lived instance per process, created in the FastAPI lifespan
"""

import logging
from collections.abc import Sequence

import anthropic
from anthropic import (
    APIError,
    APIConnectionError,
    APIStatusError,
    RateLimitError,
    APITimeoutError,
)

from chat_relay.core.domain_types import ChatTurn
from chat_relay.core.errors import CompletionAPIError, ErrorContext

logger = logging.getLogger(__name__)


class AnthropicCompletionClient:
    """Completion capability backed by the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        model: str,
        max_tokens: int = 1024,
        system_prompt: str | None = None,
        max_retries: int = 2,
        timeout_seconds: int = 60,
        client: anthropic.AsyncAnthropic | None = None,
    ):
        self.client = client or anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=max_retries,
        )
        self.model = model
        self.max_tokens = max_tokens
        self.system_prompt = system_prompt

    async def complete(
        self,
        turns: Sequence[ChatTurn],
        context: ErrorContext | None = None,
    ) -> str | None:
        """Run one completion over the turn sequence."""
        kwargs = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [dict(t) for t in turns],
        }
        if self.system_prompt:
            kwargs["system"] = self.system_prompt
        try:
            response = await self.client.messages.create(**kwargs)
        except RateLimitError as e:
            raise CompletionAPIError(
                "Rate limit exceeded", "rate_limit", context=context,
            ) from e
        except APITimeoutError as e:
            raise CompletionAPIError(
                "API timeout", "timeout", context=context,
            ) from e
        except APIConnectionError as e:
            raise CompletionAPIError(
                f"Connection error: {e}", "connection_error", context=context,
            ) from e
        except APIStatusError as e:
            raise CompletionAPIError(
                str(e), f"status_{e.status_code}", context=context,
            ) from e
        except APIError as e:
            raise CompletionAPIError(
                str(e), "client_error", context=context,
            ) from e
        except Exception as e:
            logger.error(
                f"Unexpected Anthropic error: {e}", exc_info=True,
            )
            raise CompletionAPIError(
                str(e), "unknown", context=context,
            ) from e

        self._log_success(response, len(turns))
        return _extract_text(response)

    async def close(self) -> None:
        await self.client.close()

    def _log_success(self, response, turn_count: int) -> None:
        """Log successful API call with token usage."""
        usage = getattr(response, "usage", None)
        logger.info(
            "Anthropic API success",
            extra={
                "history_size": turn_count,
                "input_tokens": getattr(usage, "input_tokens", None),
                "output_tokens": getattr(usage, "output_tokens", None),
            },
        )


def _extract_text(response) -> str | None:
    """Join text blocks; None when there are none."""
    parts = [
        block.text for block in (getattr(response, "content", None) or [])
        if getattr(block, "type", None) == "text" and block.text
    ]
    if not parts:
        return None
    return "".join(parts)
