"""Ollama LLM provider via LiteLLM."""
from __future__ import annotations

import json
import logging
import urllib.request

from party_rpg.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


class OllamaProvider(LLMProvider):
    def __init__(self, model: str = "mistral", base_url: str = "http://localhost:11434",
                 num_ctx: int = 4096):
        self._model = model
        self.base_url = base_url
        self._litellm_model = f"ollama/{model}"
        self._num_ctx = num_ctx

    @classmethod
    def from_config(cls, config: dict) -> OllamaProvider:
        llm_cfg = config.get("llm", {})
        return cls(
            model=llm_cfg.get("model", "mistral"),
            base_url=llm_cfg.get("base_url", "http://localhost:11434"),
            num_ctx=llm_cfg.get("num_ctx", 4096),
        )

    def generate(self, prompt: str, system_prompt: str | None = None,
                 temperature: float = 0.8, max_tokens: int = 256) -> str:
        import litellm

        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        response = litellm.completion(
            model=self._litellm_model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            api_base=self.base_url,
            num_ctx=self._num_ctx,
        )
        return response.choices[0].message.content or ""

    def is_available(self) -> bool:
        try:
            req = urllib.request.Request(f"{self.base_url}/api/tags")
            with urllib.request.urlopen(req, timeout=5) as resp:
                data = json.loads(resp.read())
                models = [m.get("name", "").split(":")[0] for m in data.get("models", [])]
                return self._model in models
        except Exception as e:
            logger.debug(f"Ollama availability check failed: {e}")
            return False

    @property
    def model_name(self) -> str:
        return self._model
