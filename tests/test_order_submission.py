"""
Tests for order submission: payload shape, webhook retries and failure categories.
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone

import httpx

from ordercore.application.use_cases.submit_order import build_order_submission
from ordercore.application.utils.failure_messages import categorize_exception, categorize_status, failure_message
from ordercore.domain.entities.add_on import BUNDLE, CHILD_PHOTO, FAST_DELIVERY, FOUR_K
from ordercore.domain.entities.attribution import AttributionSnapshot
from ordercore.domain.entities.order_submission import FailureCategory
from ordercore.domain.entities.selection import Child, Contact, Selection
from ordercore.infrastructure.submission.webhook_client import WebhookOrderSubmitter, sign_body

WEBHOOK_URL = "https://automation.example.com/webhook/orders"


def _selection(**kwargs) -> Selection:
    defaults = dict(
        recipient_count=2,
        add_on_ids=frozenset({FOUR_K, FAST_DELIVERY}),
        photo_count=1,
        contact=Contact(name="Ana", email="ana@example.com", phone="(11) 98765-4321", tax_id="123.456.789-09"),
        region="pt",
        children=(Child(name="Leo", photo_url="https://cdn.example.com/leo.jpg"), Child(name="Bia")),
        photo_urls=("https://cdn.example.com/leo.jpg",),
        message="Feliz Natal!",
    )
    defaults.update(kwargs)
    return Selection(**defaults)


def _submission(**kwargs):
    return build_order_submission(
        _selection(**kwargs),
        AttributionSnapshot(entries=(("utm_source", "facebook"), ("gclid", "abc"))),
        "session-1",
        now=datetime(2026, 12, 1, 12, 0, tzinfo=timezone.utc),
    )


async def _no_sleep(_: float) -> None:
    return None


def test_submission_payload_shape():
    payload = _submission().to_payload()

    assert payload["contact"] == {
        "name": "Ana",
        "email": "ana@example.com",
        "phone": "11987654321",
        "tax_id": "12345678909",
    }
    assert payload["personalization"]["children"][1] == {"name": "Bia", "photo_url": None}
    assert payload["personalization"]["add_on_ids"] == [FOUR_K, FAST_DELIVERY]
    assert payload["attribution"]["utm_source"] == "facebook"
    assert payload["attribution"]["utm_campaign"] is None
    assert payload["attribution"]["session_id"] == "session-1"
    assert payload["metadata"]["timestamp"] == "2026-12-01T12:00:00+00:00"
    assert payload["metadata"]["include_photos"] is True
    assert payload["metadata"]["priority"] == 1


def test_priority_only_for_fast_delivery_or_bundle():
    assert _submission(add_on_ids=frozenset({CHILD_PHOTO})).metadata["priority"] is None
    assert _submission(add_on_ids=frozenset({BUNDLE})).metadata["priority"] == 1


def test_webhook_posts_signed_payload():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"order_id": "A-1"})

    submitter = WebhookOrderSubmitter(
        WEBHOOK_URL,
        secret="s3cret",
        transport=httpx.MockTransport(handler),
        sleep=_no_sleep,
    )
    result = asyncio.run(submitter.submit(_submission()))

    assert result.success is True
    assert result.attempts == 1
    assert result.response == {"order_id": "A-1"}
    request = seen[0]
    assert request.headers["X-Session-ID"] == "session-1"
    assert request.headers["X-Signature-256"] == sign_body(request.content, "s3cret")
    assert json.loads(request.content)["contact"]["name"] == "Ana"


def test_webhook_retries_then_succeeds():
    statuses = iter([500, 503, 200])
    delays = []

    async def record_sleep(delay: float) -> None:
        delays.append(delay)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(next(statuses), json={})

    submitter = WebhookOrderSubmitter(
        WEBHOOK_URL,
        max_attempts=3,
        backoff_initial=1.0,
        backoff_max=8.0,
        transport=httpx.MockTransport(handler),
        sleep=record_sleep,
    )
    result = asyncio.run(submitter.submit(_submission()))

    assert result.success is True
    assert result.attempts == 3
    assert len(delays) == 2
    assert 0 <= delays[0] <= 1.0
    assert 0 <= delays[1] <= 2.0


def test_webhook_not_found_is_categorized():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(404)

    submitter = WebhookOrderSubmitter(WEBHOOK_URL, max_attempts=2, transport=httpx.MockTransport(handler), sleep=_no_sleep)
    result = asyncio.run(submitter.submit(_submission()))

    assert result.success is False
    assert result.category == FailureCategory.not_found
    assert result.status_code == 404
    assert len(calls) == 2


def test_webhook_connection_error_is_network_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    submitter = WebhookOrderSubmitter(WEBHOOK_URL, max_attempts=1, transport=httpx.MockTransport(handler), sleep=_no_sleep)
    result = asyncio.run(submitter.submit(_submission()))

    assert result.success is False
    assert result.category == FailureCategory.network
    assert result.status_code is None


def test_failure_categories_and_messages():
    request = httpx.Request("POST", WEBHOOK_URL)

    assert categorize_status(404) == FailureCategory.not_found
    assert categorize_status(502) == FailureCategory.server
    assert categorize_exception(httpx.ReadTimeout("slow", request=request)) == FailureCategory.timeout
    assert categorize_exception(asyncio.TimeoutError()) == FailureCategory.timeout
    assert categorize_exception(httpx.ConnectError("down", request=request)) == FailureCategory.network
    assert categorize_exception(RuntimeError("other")) == FailureCategory.server
    assert "conectar" in failure_message(FailureCategory.network, "pt-br")
    assert failure_message(FailureCategory.timeout, "fr") == failure_message(FailureCategory.timeout, "en")


def test_webhook_redirect_is_not_a_submitted_order():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(302, headers={"Location": "https://automation.example.com/login"})

    submitter = WebhookOrderSubmitter(WEBHOOK_URL, max_attempts=3, transport=httpx.MockTransport(handler), sleep=_no_sleep)
    result = asyncio.run(submitter.submit(_submission()))

    assert result.success is False
    assert result.category == FailureCategory.server
    assert result.status_code == 302
    assert result.attempts == 3
    assert len(calls) == 3
