# src/neural/workers_ai.py — v1
"""Hosted inference adapter (Cloudflare Workers AI REST API).

Calls the ``bge-reranker`` family through the account REST endpoint, or
through an AI Gateway when a gateway id is configured. One attempt only,
bounded by ``timeout_s``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from smartrerank.neural.base_reranker import BaseNeuralReranker, NeuralRerankError

logger = logging.getLogger(__name__)

_API_BASE = "https://api.cloudflare.com/client/v4"
_GATEWAY_BASE = "https://gateway.ai.cloudflare.com/v1"


class WorkersAIReranker(BaseNeuralReranker):
    """Neural reranking via the Workers AI REST API."""

    def __init__(
        self,
        account_id: str,
        api_token: str,
        model: str = "@cf/baai/bge-reranker-base",
        gateway_id: str = "",
        timeout_s: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._account_id = account_id
        self._api_token = api_token
        self._model_name = model
        self._gateway_id = gateway_id
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    @property
    def endpoint(self) -> str:
        if self._gateway_id:
            return f"{_GATEWAY_BASE}/{self._account_id}/{self._gateway_id}/workers-ai/{self._model_name}"
        return f"{_API_BASE}/accounts/{self._account_id}/ai/run/{self._model_name}"

    async def run(
        self,
        query: str,
        contexts: list[dict[str, str]],
        top_k: int | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"query": query, "contexts": contexts}
        if top_k:
            payload["top_k"] = top_k

        try:
            resp = await self._client.post(
                self.endpoint,
                json=payload,
                headers={"Authorization": f"Bearer {self._api_token}"},
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise NeuralRerankError(f"Workers AI request failed: {e}") from e
        except ValueError as e:
            raise NeuralRerankError(f"Workers AI returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise NeuralRerankError("Workers AI returned a non-object body")
        if data.get("success") is False:
            raise NeuralRerankError(f"Workers AI reported errors: {data.get('errors')}")
        # REST envelope wraps the model output in "result"
        result = data.get("result", data)
        if not isinstance(result, dict):
            raise NeuralRerankError("Workers AI result is not an object")
        return result

    @property
    def provider_name(self) -> str:
        return "workers_ai"

    @property
    def model_name(self) -> str:
        return self._model_name

    async def aclose(self) -> None:
        await self._client.aclose()
