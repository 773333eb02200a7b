"""
LLM Service — the Groq chat model behind the intake assistant.

  - get_llm()          → shared ChatGroq client built from settings
  - structured_call()  → one prompt in, one validated Pydantic model out
"""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Type, TypeVar

from langchain_core.exceptions import OutputParserException
from pydantic import BaseModel

from fukuro_quote.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


@lru_cache()
def get_llm():
    """
    Build the ChatGroq client once per process.
    Network retries and the request timeout are left to the client.
    """
    settings = get_settings()
    if not settings.groq_api_key:
        raise ValueError("GROQ_API_KEY is not set in environment / .env file")

    from langchain_groq import ChatGroq

    llm = ChatGroq(
        api_key=settings.groq_api_key,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout=settings.llm_timeout_seconds,
        max_retries=settings.llm_max_retries,
    )
    logger.info(f"[LLM] Groq client ready: {settings.llm_model}")
    return llm


def structured_call(prompt: str, output_model: Type[T]) -> T:
    """
    Run *prompt* and parse the reply into *output_model*.

    The raw message is requested alongside the parsed value so token usage
    can be logged; a reply that cannot be parsed re-raises the parser's
    own error (OutputParserException or ValidationError).
    """
    runnable = get_llm().with_structured_output(output_model, include_raw=True)

    t0 = time.perf_counter()
    reply = runnable.invoke(prompt)
    elapsed = time.perf_counter() - t0

    meta = getattr(reply.get("raw"), "response_metadata", {}) or {}
    logger.info(
        f"[LLM] {output_model.__name__} in {elapsed:.2f}s | "
        f"prompt={len(prompt)} chars | tokens={meta.get('token_usage', {})}"
    )

    if reply.get("parsing_error") is not None:
        raise reply["parsing_error"]
    parsed = reply.get("parsed")
    if parsed is None:
        raise OutputParserException(f"Model returned no {output_model.__name__}")
    logger.debug(f"[LLM] Parsed: {parsed!r}")
    return parsed
