import logging
from typing import Optional

import httpx

from app.core.config import settings
from app.core.errors import UpstreamError


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an assistant that creates quiz questions."


def build_quiz_prompt(topic: str, num_questions: int) -> str:
    return (
        f'Generate {num_questions} quiz questions on the topic "{topic}".\n'
        "IMPORTANT: All questions must be strictly multiple choice only. "
        "Do not generate any short answer questions.\n"
        "Each question must include:\n"
        '- "question_text"\n'
        '- "options" (an array of at least 4 choices)\n'
        '- "correct_answer" (one of the options)\n'
        '- "points" (this will be overridden by the provided configuration)\n'
        'Do not include any "question_type" field or markdown formatting.'
    )


class LLMClient:
    """Thin client for an OpenAI-compatible chat completions endpoint."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 model: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        self.api_key = api_key if api_key is not None else settings.LLM_API_KEY
        self.base_url = base_url or settings.LLM_BASE_URL
        self.model = model or settings.LLM_MODEL
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS
        self.transport = transport

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        if not self.api_key:
            raise UpstreamError("generative backend is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": settings.LLM_TEMPERATURE,
            "max_tokens": settings.LLM_MAX_TOKENS,
            "top_p": settings.LLM_TOP_P,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
                response = client.post("/chat/completions", json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Generative backend answered %s", exc.response.status_code)
            raise UpstreamError(f"generative backend returned {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Generative backend unreachable: %s", exc)
            raise UpstreamError("generative backend unreachable") from exc
        except ValueError as exc:
            raise UpstreamError("generative backend returned malformed JSON") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not content:
            logger.error("No content returned by the generative backend")
            raise UpstreamError("no ai output returned")
        return content


def get_llm_client() -> LLMClient:
    return LLMClient()
