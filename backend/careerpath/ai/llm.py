"""LLM provider configuration."""

from functools import lru_cache

from langchain_openai import ChatOpenAI

from careerpath.core.config import get_settings
from careerpath.core.logging import get_logger

logger = get_logger(__name__)


def _build_llm(temperature: float, max_tokens: int) -> ChatOpenAI:
    settings = get_settings()

    kwargs: dict = {
        "model": settings.OPENAI_MODEL,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    if settings.OPENAI_API_KEY:
        kwargs["api_key"] = settings.OPENAI_API_KEY
    if settings.OPENAI_API_BASE_URL:
        kwargs["base_url"] = settings.OPENAI_API_BASE_URL

    logger.info("Initializing LLM", model=settings.OPENAI_MODEL, temperature=temperature)
    return ChatOpenAI(**kwargs)


@lru_cache
def get_steps_llm() -> ChatOpenAI:
    """LLM used to draft roadmap steps."""
    settings = get_settings()
    return _build_llm(settings.AI_STEPS_TEMPERATURE, settings.AI_STEPS_MAX_TOKENS)


@lru_cache
def get_helper_llm() -> ChatOpenAI:
    """Lower-temperature LLM for answering questions about a roadmap."""
    settings = get_settings()
    return _build_llm(settings.AI_HELPER_TEMPERATURE, settings.AI_HELPER_MAX_TOKENS)
