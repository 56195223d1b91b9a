import logging

import openai
from openai import OpenAI

from .config import DEFAULT_PROVIDER, REQUEST_TIMEOUT, TEMPERATURE, get_provider
from .errors import ResponseFormatError, TransportError

logger = logging.getLogger(__name__)


class CompletionClient:
    """Sends one prompt to an OpenAI-compatible chat-completions endpoint.

    The response contract is fixed to ``{choices: [{message: {content}}]}``.
    A single round trip is made per call: no retries, no streaming.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        model: str | None = None,
        temperature: float = TEMPERATURE,
        timeout: float = REQUEST_TIMEOUT,
        provider: str = DEFAULT_PROVIDER,
    ):
        config = get_provider(provider)
        self.api_key = api_key
        self.base_url = base_url or config["base_url"]
        self.model = model or config["default_model"]
        self.temperature = temperature
        self.timeout = timeout
        self._client = None

    @property
    def client(self):
        """Lazy-initialize the OpenAI client so it's only created when needed."""
        if self._client is None:
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    @client.setter
    def client(self, value):
        """Allow injecting a mock client for testing."""
        self._client = value

    def complete(self, prompt: str) -> str:
        """Return the text of the first choice for ``prompt``."""
        logger.info("Requesting completion from %s (%s, %d chars)", self.base_url, self.model, len(prompt))
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        except openai.APIStatusError as e:
            logger.warning("Completion endpoint returned %s", e.status_code)
            raise TransportError(e.status_code, e.response.reason_phrase) from e
        except openai.APIConnectionError as e:
            # APITimeoutError is a subclass, so timeouts land here too
            logger.warning("Completion endpoint unreachable: %s", e)
            raise TransportError(None, str(e)) from e
        except openai.APIResponseValidationError as e:
            raise ResponseFormatError("response body does not match the chat completion schema") from e
        except ValueError as e:
            # json.JSONDecodeError from a 2xx body that claims to be JSON
            logger.warning("Completion endpoint returned a malformed body: %s", e)
            raise ResponseFormatError("response body is not valid JSON") from e

        return self._extract_content(response)

    @staticmethod
    def _extract_content(response) -> str:
        choices = getattr(response, "choices", None)
        if not choices:
            raise ResponseFormatError("response has no choices")

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content:
            raise ResponseFormatError("choices[0].message.content is missing")

        return content
