"""OpenAI implementation of the text generator interface."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from urllib import error, request

from pydantic import ValidationError

from ai_scaffold.llm.base import TextGenerator, TransportError
from ai_scaffold.models.generation import GenerationResult, Prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpenAIAdapter(TextGenerator):
    """Generate artifact code using the OpenAI Chat Completions API."""

    api_key: str
    model: str
    base_url: str = "https://api.openai.com/v1"
    timeout_seconds: int = 60

    def generate(self, prompt: Prompt) -> GenerationResult:
        if not self.api_key.strip():
            raise TransportError("OpenAI API key is not configured.", status=401)

        body = {
            "model": self.model,
            "max_completion_tokens": prompt.max_output_tokens,
            "messages": [{"role": "user", "content": prompt.text}],
        }

        endpoint = self.base_url.rstrip("/") + "/chat/completions"
        req = request.Request(
            endpoint,
            method="POST",
            data=json.dumps(body).encode("utf-8"),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )

        logger.debug(
            "POST %s model=%s max_completion_tokens=%d",
            endpoint,
            self.model,
            prompt.max_output_tokens,
        )
        try:
            with request.urlopen(req, timeout=self.timeout_seconds) as response:
                payload = json.loads(response.read().decode("utf-8"))
        except error.HTTPError as exc:
            details = exc.read().decode("utf-8", errors="replace")
            raise TransportError(
                f"OpenAI request failed with HTTP {exc.code}: {details}",
                status=exc.code,
            ) from exc
        except error.URLError as exc:
            raise TransportError(f"OpenAI request failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise TransportError("OpenAI request timed out.") from exc
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise TransportError("OpenAI response was not valid JSON.") from exc

        if not isinstance(payload, dict):
            raise TransportError("OpenAI response has invalid format.")

        content, finish_reason = self._extract_message_content(payload)
        try:
            result = GenerationResult(
                content=content,
                model=payload.get("model") if isinstance(payload.get("model"), str) else None,
                finish_reason=finish_reason,
            )
        except ValidationError as exc:
            raise TransportError(f"OpenAI response violated output contract: {exc}") from exc

        if result.truncated:
            logger.warning(
                "Generated content hit the %d token limit and may be incomplete.",
                prompt.max_output_tokens,
            )
        return result

    @staticmethod
    def _extract_message_content(payload: dict[str, object]) -> tuple[str, str | None]:
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            raise TransportError("OpenAI response is missing choices.")

        first = choices[0]
        if not isinstance(first, dict):
            raise TransportError("OpenAI response has invalid choice format.")

        message = first.get("message")
        if not isinstance(message, dict):
            raise TransportError("OpenAI response is missing message content.")

        content = message.get("content")
        if not isinstance(content, str) or not content.strip():
            raise TransportError("OpenAI message content is empty.")

        finish_reason = first.get("finish_reason")
        return content, finish_reason if isinstance(finish_reason, str) else None
