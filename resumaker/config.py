import os

from dotenv import load_dotenv

load_dotenv()

# Provider configurations. Every entry speaks the OpenAI chat-completions API.
DEFAULT_PROVIDER = os.getenv("RESUMAKER_PROVIDER", "deepseek")

PROVIDERS = {
    "deepseek": {
        "base_url": os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com/v1"),
        "env_key": "DEEPSEEK_API_KEY",
        "default_model": "deepseek-chat",
    },
    "openai": {
        "base_url": "https://api.openai.com/v1",
        "env_key": "OPENAI_API_KEY",
        "default_model": "gpt-4o-mini",
    },
    "groq": {
        "base_url": "https://api.groq.com/openai/v1",
        "env_key": "GROQ_API_KEY",
        "default_model": "llama-3.3-70b-versatile",
    },
}

TEMPERATURE = 0.7
REQUEST_TIMEOUT = float(os.getenv("RESUMAKER_TIMEOUT", "30"))

RESUMAKER_HOME = os.getenv(
    "RESUMAKER_HOME", os.path.join(os.path.expanduser("~"), ".resumaker")
)


def get_provider(name: str) -> dict:
    """Look up a provider config, falling back to the default provider."""
    return PROVIDERS.get(name, PROVIDERS[DEFAULT_PROVIDER])
