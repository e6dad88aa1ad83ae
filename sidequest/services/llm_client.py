"""
Unified LLM Client using LiteLLM

Provides async multi-provider completions for quest generation.
Supports OpenAI, Gemini, and Anthropic through a unified interface.

Usage:
    from sidequest.services.llm_client import complete_text, parse_json_response

    text = await complete_text(
        provider="openai",
        prompt="Create a themed travel quest...",
        system_prompt="You are a creative travel expert...",
    )
    data = parse_json_response(text)
"""

import json
import os
import re
from typing import Any, Dict, List, Optional

import litellm
from litellm import acompletion

# Suppress LiteLLM's verbose logging
litellm.suppress_debug_info = True

# Drop unsupported params for models with restrictions (e.g. fixed temperature)
litellm.drop_params = True


# ============================================================================
# Model Configuration
# ============================================================================

SUPPORTED_MODELS: Dict[str, str] = {
    "openai": "gpt-3.5-turbo",
    "gemini": "gemini/gemini-2.5-flash",
    "anthropic": "claude-sonnet-4-5",
}

# Environment variable names for API keys
API_KEY_ENV_VARS: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


# ============================================================================
# Provider Availability
# ============================================================================

def get_available_providers() -> List[str]:
    """
    Get list of providers with valid API keys configured.

    Returns:
        List of provider names (e.g., ["openai", "gemini"])
    """
    available = []
    for provider, env_var in API_KEY_ENV_VARS.items():
        if os.getenv(env_var):
            available.append(provider)
    return available


def is_provider_available(provider: str) -> bool:
    """Check if a specific provider has an API key configured."""
    env_var = API_KEY_ENV_VARS.get(provider)
    return bool(env_var and os.getenv(env_var))


def get_model_for_provider(provider: str) -> str:
    """
    Get the model identifier for a provider.

    Raises:
        ValueError: If provider is not supported
    """
    model = SUPPORTED_MODELS.get(provider)
    if not model:
        raise ValueError(f"Unsupported provider: {provider}. "
                         f"Supported: {list(SUPPORTED_MODELS.keys())}")
    return model


# ============================================================================
# JSON Parsing
# ============================================================================

def parse_json_response(content: str) -> Dict[str, Any]:
    """
    Parse JSON from LLM response, handling various formats.

    LLMs may return JSON in different formats:
    - Direct JSON object
    - JSON wrapped in markdown code blocks
    - JSON with surrounding text

    Raises:
        ValueError: If no valid JSON object found
    """
    content = (content or "").strip()

    # Try direct JSON parse
    try:
        parsed = json.loads(content)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        pass

    # Try extracting from markdown code block
    match = re.search(r'```(?:json)?\s*(\{[\s\S]*?\})\s*```', content)
    if match:
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError:
            pass

    # Try finding any JSON object
    match = re.search(r'\{[\s\S]*\}', content)
    if match:
        try:
            return json.loads(match.group())
        except json.JSONDecodeError:
            pass

    raise ValueError(f"Could not parse JSON from response: {content[:200]}...")


# ============================================================================
# LLM API Calls
# ============================================================================

async def complete_text(
    provider: str,
    prompt: str,
    system_prompt: Optional[str] = None,
    temperature: float = 0.8,
    max_tokens: int = 500,
    timeout: float = 30.0,
) -> str:
    """
    Call LLM provider and return the raw message content.

    Raises:
        ValueError: If provider is not supported or has no API key
        Exception: If the LLM API call fails
    """
    model = get_model_for_provider(provider)

    if not is_provider_available(provider):
        raise ValueError(f"No API key configured for {provider}. "
                         f"Set {API_KEY_ENV_VARS[provider]} environment variable.")

    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": prompt})

    response = await acompletion(
        model=model,
        messages=messages,
        temperature=temperature,
        max_tokens=max_tokens,
        response_format={"type": "json_object"},
        timeout=timeout,
    )

    content = response.choices[0].message.content
    if not content:
        raise ValueError(f"No response content from {provider}")
    return content


__all__ = [
    "complete_text",
    "get_available_providers",
    "is_provider_available",
    "get_model_for_provider",
    "parse_json_response",
    "SUPPORTED_MODELS",
    "API_KEY_ENV_VARS",
]
