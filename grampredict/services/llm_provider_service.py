import asyncio
import logging
from typing import Dict, List, Optional

import requests
from ollama import Client

from grampredict.core.config import settings
from grampredict.core.errors import UpstreamError

logger = logging.getLogger(__name__)

class LLMProviderService:
    def __init__(
        self,
        provider: Optional[str] = None,
        gateway_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initializes the LLMProviderService.
        
        Two providers are supported: "gateway", an OpenAI-compatible chat
        completions endpoint reached with a bearer key, and "ollama", a
        self-hosted Ollama server. Anything not passed in is read from
        application settings.
        """
        self.provider = (provider or settings.LLM_PROVIDER).lower()
        self.gateway_url = (gateway_url or settings.AI_GATEWAY_URL).rstrip("/")
        self.api_key = settings.AI_GATEWAY_API_KEY if api_key is None else api_key
        self.model_name = model_name or settings.LLM_MODEL
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS
        self.client = Client(host=settings.OLLAMA_HOST, timeout=self.timeout) if self.provider == "ollama" else None
        logger.info("LLMProviderService initialized with provider=%s model=%s", self.provider, self.model_name)

    def _gateway_chat(self, messages: List[Dict[str, str]], temperature: float) -> str:
        """Calls the chat completions endpoint and returns the first choice's text.

        Raises:
            UpstreamError: For a missing key, connection failure, timeout,
                           non-success status or an unexpected envelope.
        """
        if not self.api_key:
            raise UpstreamError("AI_GATEWAY_API_KEY not configured")

        payload = {
            "model": self.model_name,
            "messages": messages,
            "temperature": temperature,
        }
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        try:
            resp = requests.post(f"{self.gateway_url}/chat/completions", json=payload, headers=headers, timeout=self.timeout)
        except requests.Timeout:
            raise UpstreamError(f"AI gateway timed out after {self.timeout:g}s")
        except requests.RequestException as e:
            raise UpstreamError(f"AI gateway unreachable: {e}")

        if resp.status_code == 429:
            raise UpstreamError("AI gateway rate limit exceeded, try again shortly")
        if not resp.ok:
            logger.error("AI gateway returned HTTP %s: %s", resp.status_code, resp.text[:200])
            raise UpstreamError(f"AI gateway error (HTTP {resp.status_code})")

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            raise UpstreamError("AI gateway returned an unexpected response")
        if not isinstance(content, str):
            raise UpstreamError("AI gateway returned no message content")
        return content

    def _ollama_chat(self, messages: List[Dict[str, str]], temperature: float) -> str:
        try:
            response = self.client.chat(model=self.model_name, messages=messages, options={"temperature": temperature})
        except Exception as e:
            raise UpstreamError(f"Ollama error ({self.model_name}): {e}")
        content = response.message.content if response.message else None
        if not isinstance(content, str):
            raise UpstreamError("Ollama returned no message content")
        return content

    async def complete(self, messages: List[Dict[str, str]], temperature: float = 0.7) -> str:
        """Sends one chat request and returns the raw text of the reply.

        The blocking HTTP call runs in the default executor so it does not
        stall the event loop. There is no retry.

        Args:
            messages (List[Dict[str, str]]): Chat messages with "role" and "content".
            temperature (float): Sampling temperature.

        Returns:
            str: The model's reply, unmodified.

        Raises:
            UpstreamError: If the provider could not produce a reply.
        """
        if self.provider == "gateway":
            call = self._gateway_chat
        elif self.provider == "ollama":
            call = self._ollama_chat
        else:
            raise UpstreamError(f"Unknown LLM provider '{self.provider}'")

        logger.debug("LLM call with provider=%s model=%s", self.provider, self.model_name)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: call(messages, temperature))

llm_service = LLMProviderService()
