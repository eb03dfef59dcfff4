from __future__ import annotations

import asyncio
import hmac
import json
import logging
import random
from typing import Awaitable, Callable

import httpx

from ordercore.application.ports.order_submission import OrderSubmissionPort
from ordercore.application.utils.failure_messages import categorize_exception, categorize_status
from ordercore.domain.entities.order_submission import FailureCategory, OrderSubmission, SubmissionResult


def sign_body(body: bytes, secret: str) -> str:
    return "sha256=" + hmac.new(secret.encode("utf-8"), body, "sha256").hexdigest()


class WebhookOrderSubmitter(OrderSubmissionPort):
    def __init__(
        self,
        url: str,
        secret: str | None = None,
        timeout: float = 10.0,
        max_attempts: int = 3,
        backoff_initial: float = 1.0,
        backoff_max: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if not url:
            raise ValueError("ORDER_WEBHOOK_URL is required for webhook submissions")
        self._url = url
        self._secret = secret
        self._timeout = timeout
        self._max_attempts = max(1, max_attempts)
        self._backoff_initial = backoff_initial
        self._backoff_max = backoff_max
        self._transport = transport
        self._sleep = sleep
        self._logger = logging.getLogger(__name__)

    def _delay(self, attempt: int) -> float:
        """Exponential backoff with full jitter, capped at backoff_max."""
        ceiling = min(self._backoff_max, self._backoff_initial * (2 ** (attempt - 1)))
        return random.uniform(0, ceiling)

    def _headers(self, submission: OrderSubmission, body: bytes) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": "ordercore/1.0",
            "X-Session-ID": submission.session_id,
        }
        if self._secret:
            headers["X-Signature-256"] = sign_body(body, self._secret)
        return headers

    async def submit(self, submission: OrderSubmission) -> SubmissionResult:
        body = json.dumps(submission.to_payload(), ensure_ascii=False).encode("utf-8")
        headers = self._headers(submission, body)

        category = FailureCategory.server
        status_code: int | None = None
        error = ""
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            for attempt in range(1, self._max_attempts + 1):
                try:
                    resp = await client.post(self._url, content=body, headers=headers)
                    status_code = resp.status_code
                    if 200 <= resp.status_code < 300:
                        try:
                            data = resp.json()
                        except ValueError:
                            data = None
                        self._logger.info(
                            "Order submitted",
                            extra={"session_id": submission.session_id, "attempt": attempt, "status": resp.status_code},
                        )
                        return SubmissionResult(
                            success=True,
                            attempts=attempt,
                            status_code=resp.status_code,
                            response=data if isinstance(data, dict) else None,
                        )
                    category = categorize_status(resp.status_code)
                    error = f"HTTP {resp.status_code}"
                except httpx.HTTPError as e:
                    status_code = None
                    category = categorize_exception(e)
                    error = f"{type(e).__name__}: {e}"

                self._logger.warning(
                    "Order submission attempt failed",
                    extra={
                        "session_id": submission.session_id,
                        "attempt": attempt,
                        "status": status_code,
                        "category": category.value,
                        "reason": error,
                    },
                )
                if attempt < self._max_attempts:
                    await self._sleep(self._delay(attempt))

        self._logger.error(
            "Order submission failed",
            extra={"session_id": submission.session_id, "attempt": self._max_attempts, "category": category.value},
        )
        return SubmissionResult(
            success=False,
            attempts=self._max_attempts,
            status_code=status_code,
            category=category,
            error=f"Failed after {self._max_attempts} attempts: {error}",
        )
