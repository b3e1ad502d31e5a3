"""
LLM Service - Unified interface for the chat model providers.

This service is STATELESS. Its only job is to send one prompt (plus optional
system instructions) to a model and hand back the text.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_ollama import ChatOllama
from pydantic import SecretStr

from app.core.config import settings


logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """
    Structured response from LLM.
    """
    content: str
    model: str
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    @property
    def has_token_info(self) -> bool:
        """Check if token usage info is available."""
        return self.total_tokens is not None


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    ANTHROPIC = "anthropic"
    OLLAMA = "ollama"
    GROQ = "groq"


class LLMService:
    """Stateless service for interacting with the supported LLM providers."""
    def __init__(
            self,
            provider: Optional[LLMProvider] = None,
            model: Optional[str] = None,
            temperature: Optional[float] = None,
            api_key: Optional[SecretStr | str] = None,
            base_url: Optional[str] = None
    ):
        self.provider = LLMProvider(provider or settings.LLM_PROVIDER)
        self.model = model or self._get_default_model(self.provider)
        self.temperature = temperature if temperature is not None else settings.LLM_TEMPERATURE
        self.api_key = api_key or self._get_default_api_key(self.provider)
        self.base_url = base_url or self._get_default_base_url(self.provider)

        self.llm = self._initialize_provider()
        logger.info(
            f"LLMService initialized: provider={self.provider.value}, "
            f"model={self.model}, temperature={self.temperature}"
        )

    def _get_default_model(self, provider: LLMProvider) -> str:
        defaults = {
            LLMProvider.ANTHROPIC: settings.ANTHROPIC_MODEL,
            LLMProvider.OLLAMA: settings.OLLAMA_MODEL,
            LLMProvider.GROQ: settings.GROQ_MODEL,
        }
        return defaults.get(provider, "")

    def _get_default_api_key(self, provider: LLMProvider) -> Optional[str]:
        defaults = {
            LLMProvider.ANTHROPIC: settings.ANTHROPIC_API_KEY,
            LLMProvider.GROQ: settings.GROQ_API_KEY,
        }
        return defaults.get(provider)

    def _get_default_base_url(self, provider: LLMProvider) -> Optional[str]:
        defaults = {
            LLMProvider.OLLAMA: settings.OLLAMA_BASE_URL,
        }
        return defaults.get(provider)

    def _initialize_provider(self):
        if self.provider == LLMProvider.ANTHROPIC:
            if not self.api_key:
                raise ValueError("Anthropic requires an API key (set ANTHROPIC_API_KEY)")

            from langchain_anthropic import ChatAnthropic

            return ChatAnthropic(
                model=self.model,
                api_key=self.api_key,
                temperature=self.temperature,
                max_tokens=settings.LLM_MAX_TOKENS,
                timeout=settings.LLM_TIMEOUT,
            )

        elif self.provider == LLMProvider.OLLAMA:
            return ChatOllama(
                model=self.model,
                base_url=self.base_url,
                temperature=self.temperature,
                num_predict=settings.LLM_MAX_TOKENS,
            )

        elif self.provider == LLMProvider.GROQ:
            if not self.api_key:
                raise ValueError("Groq requires an API key (set GROQ_API_KEY)")

            from langchain_groq import ChatGroq

            return ChatGroq(
                model=self.model,
                api_key=self.api_key,
                temperature=self.temperature,
                max_tokens=settings.LLM_MAX_TOKENS,
            )

        else:
            raise ValueError(f"Unsupported provider: {self.provider}")

    def generate(
            self,
            prompt: str,
            system_prompt: Optional[str] = None,
            temperature: Optional[float] = None,
    ) -> LLMResponse:
        """
        Generate a response from the LLM for a single prompt.

        Args:
            prompt: The user turn.
            system_prompt: System instructions (optional, sent first).
            temperature: Override default temperature.

        Returns:
            LLMResponse with the generated text.
        """
        try:
            lc_messages = [HumanMessage(content=prompt)]
            if system_prompt:
                lc_messages.insert(0, SystemMessage(content=system_prompt))

            llm = self.llm
            if temperature is not None:
                llm = self.llm.bind(temperature=temperature)

            logger.debug(f"Generating response for a {len(prompt)} char prompt...")
            response = llm.invoke(lc_messages)
            content = response.content if isinstance(response.content, str) else _join_content_blocks(response.content)

            usage = getattr(response, "usage_metadata", None) or {}
            result = LLMResponse(
                content=content,
                model=self.model,
                prompt_tokens=usage.get("input_tokens"),
                completion_tokens=usage.get("output_tokens"),
                total_tokens=usage.get("total_tokens")
            )
            logger.debug(f"Response generated: {len(content)} chars")
            return result

        except Exception as e:
            logger.error(f"LLM generation failed: {e}")
            raise

    def validate_connection(self) -> bool:
        """
        Test if the LLM is accessible and responsive.
        """
        try:
            logger.debug("Validating LLM connection...")
            test_messages = [
                SystemMessage(content="Respond with only the word 'Hi'"),
                HumanMessage(content="Hello")
            ]
            response = self.llm.invoke(test_messages)

            is_valid = bool(response.content)
            if is_valid:
                logger.info("LLM connection validation successful.")
            else:
                logger.warning("LLM validation failed: received empty or invalid response.")
            return is_valid

        except Exception as e:
            logger.error(f"LLM validation failed with exception: {e}", exc_info=True)
            return False


def _join_content_blocks(blocks) -> str:
    """Anthropic may answer with a list of content blocks instead of a string."""
    parts = []
    for block in blocks:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


# ==================== Module-level instance ====================

_llm_service_instance: Optional[LLMService] = None

def get_llm_service(
        provider: Optional[LLMProvider] = None,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
) -> LLMService:
    """
    Get a configured instance of the LLM service.
    Explicit overrides always create a new instance; the configured default
    is cached as a singleton.
    """
    global _llm_service_instance

    if provider or model or api_key:
        logger.info(f"Creating new LLMService instance for provider={provider or settings.LLM_PROVIDER}")
        return LLMService(provider=provider, model=model, api_key=api_key)

    if _llm_service_instance is None:
        logger.info("Creating singleton LLMService instance for default provider.")
        _llm_service_instance = LLMService()

    return _llm_service_instance
