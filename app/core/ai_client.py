# app/core/ai_client.py
# 外部文字生成服務 (OpenAI 相容 chat completions) 的精簡客戶端
import logging
from typing import Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """文字生成服務呼叫失敗 (連線錯誤、非 2xx 狀態、或回應不是 JSON)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AIClient:
    """
    呼叫 chat completions 端點：一段 system 指令 + 一段 user 訊息，回傳單一文字結果。

    媒合邏輯只依賴 generate_text()，測試時可直接替換成固定回傳的 stub。
    """

    def __init__(
        self,
        api_url: str = settings.AI_GATEWAY_URL,
        api_key: str = settings.AI_API_KEY,
        model: str = settings.AI_MODEL,
        timeout: float = settings.AI_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._transport = transport

    def _build_payload(
        self,
        system_prompt: str,
        user_message: str,
        temperature: Optional[float],
        max_tokens: Optional[int],
    ) -> dict:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        return payload

    async def generate_text(
        self,
        system_prompt: str,
        user_message: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """送出一次 completion 請求，回傳 choices[0].message.content"""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = self._build_payload(system_prompt, user_message, temperature, max_tokens)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise AIServiceError(f"AI request failed: {e}") from e

        if response.status_code < 200 or response.status_code >= 300:
            logger.error(f"AI API error: {response.status_code} {response.text[:200]}")
            raise AIServiceError(f"AI API error: {response.status_code}", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise AIServiceError("AI response is not valid JSON") from e

        # 沒有 completion 內容時回傳空字串，由呼叫端決定備用內容
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("AI response has no completion content")
            return ""

        # 只接受文字內容 (例如 content parts 陣列、數字都視為沒有內容)
        if not isinstance(content, str):
            if content is not None:
                logger.warning(f"AI response content is not text: {type(content).__name__}")
            return ""

        return content


# FastAPI Dependency：測試時以 app.dependency_overrides 替換
def get_ai_client() -> AIClient:
    return AIClient()
