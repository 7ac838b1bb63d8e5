"""
Generation backend configuration for the Fairy Tale Book Generator.

Uses Gemini through the google-genai SDK. Sampling is fixed and the
extended-reasoning ("thinking") budget is zero to keep latency bounded.
"""

from google import genai
from google.genai.types import GenerateContentConfig, ThinkingConfig

# Generation backend constants
MODEL_CONSTANTS = {
    "default_model": "gemini-2.5-flash-lite",
    "temperature": 0.9,
    "thinking_budget": 0,  # Disable extended reasoning
}


def get_genai_client(api_key: str) -> genai.Client:
    """
    Get a Gemini client for the given credential.

    A fresh client is built per call; the credential comes from process
    configuration, not from the environment at call time.
    """
    if not api_key:
        raise ValueError("Gemini API key is empty")

    return genai.Client(api_key=api_key)


def get_default_model() -> str:
    """Get the default text model ID."""
    return MODEL_CONSTANTS["default_model"]


def get_generation_config() -> GenerateContentConfig:
    """Get the config for book generation calls."""
    return GenerateContentConfig(
        temperature=MODEL_CONSTANTS["temperature"],
        thinking_config=ThinkingConfig(thinking_budget=MODEL_CONSTANTS["thinking_budget"]),
    )
