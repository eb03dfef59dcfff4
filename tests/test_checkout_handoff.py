"""
Tests for the checkout hand-off: submit, navigate, then clear.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest

from ordercore.application.exceptions import EndpointConfigurationError, InvalidSelectionError
from ordercore.application.ports.order_submission import OrderSubmissionPort
from ordercore.application.use_cases.attribution_store import AttributionStore
from ordercore.application.use_cases.checkout_handoff import CheckoutHandoffUseCase
from ordercore.application.use_cases.selection_store import SelectionStore
from ordercore.domain.entities.add_on import FAST_DELIVERY, FOUR_K
from ordercore.domain.entities.endpoint import EndpointId
from ordercore.domain.entities.order_submission import FailureCategory, OrderSubmission, SubmissionResult
from ordercore.domain.entities.region import CARTPANDA, LASTLINK
from ordercore.infrastructure.catalog.endpoint_catalog_store import EndpointCatalogStore
from ordercore.infrastructure.navigation.recording_navigator import RecordingNavigator
from ordercore.infrastructure.store.memory_store import MemorySessionRecordStore
from ordercore.infrastructure.submission.mock_submitter import MockOrderSubmitter

BASE_URLS = {LASTLINK: "https://pay.lastlink.test", CARTPANDA: "https://cartpanda.test"}
CONTACT = {"name": "Ana", "email": "ana@example.com", "phone": "11987654321"}


class FailingSubmitter(OrderSubmissionPort):
    def __init__(self, category: FailureCategory) -> None:
        self.category = category

    async def submit(self, submission: OrderSubmission) -> SubmissionResult:
        return SubmissionResult(success=False, attempts=3, category=self.category, error="boom")


class SlowSubmitter(OrderSubmissionPort):
    async def submit(self, submission: OrderSubmission) -> SubmissionResult:
        await asyncio.sleep(5)
        return SubmissionResult(success=True)


def _handoff(submitter, records=None, catalog=None, submit_timeout=45.0):
    records = records or MemorySessionRecordStore()
    store = SelectionStore(records, "session-1")
    attribution = AttributionStore(records, "session-1")
    navigator = RecordingNavigator()
    use_case = CheckoutHandoffUseCase(
        store=store,
        attribution=attribution,
        catalog=catalog or EndpointCatalogStore(),
        submitter=submitter,
        navigator=navigator,
        base_urls=BASE_URLS,
        submit_timeout=submit_timeout,
        now=lambda: datetime(2026, 12, 1, tzinfo=timezone.utc),
    )
    return use_case, store, attribution, navigator


def test_successful_handoff_navigates_and_clears():
    submitter = MockOrderSubmitter()
    use_case, store, attribution, navigator = _handoff(submitter)
    attribution.capture({"utm_source": "facebook"})
    store.save(recipient_count=2, add_on_ids=[FOUR_K, FAST_DELIVERY], contact=CONTACT)

    result = asyncio.run(use_case.execute())

    assert result.success is True
    assert result.mapping.resolved_endpoint_id == EndpointId.with_4k_and_fast_delivery
    assert result.pricing.total == Decimal("83.99")
    assert navigator.last_url == result.url
    assert httpx.URL(result.url).params["utm_source"] == "facebook"
    assert submitter.submitted[0].metadata["priority"] == 1
    # Cleared after navigation, attribution kept.
    assert store.get_selection().recipient_count == 1
    assert attribution.get().get("utm_source") == "facebook"


def test_failed_submission_keeps_session():
    use_case, store, _, navigator = _handoff(FailingSubmitter(FailureCategory.not_found))
    store.save(recipient_count=3, contact=CONTACT, region="en")

    result = asyncio.run(use_case.execute())

    assert result.success is False
    assert result.category == FailureCategory.not_found
    assert result.message == "The order service could not be found. Please try again later."
    assert navigator.last_url is None
    assert store.get_selection().recipient_count == 3


def test_submission_timeout_is_reported():
    use_case, store, _, navigator = _handoff(SlowSubmitter(), submit_timeout=0.01)
    store.save(contact=CONTACT)

    result = asyncio.run(use_case.execute())

    assert result.success is False
    assert result.category == FailureCategory.timeout
    assert navigator.last_url is None


def test_missing_endpoint_fails_before_submission():
    submitter = MockOrderSubmitter()
    use_case, store, _, navigator = _handoff(submitter, catalog=EndpointCatalogStore(products={}))
    store.save(contact=CONTACT)

    with pytest.raises(EndpointConfigurationError):
        asyncio.run(use_case.execute())
    assert submitter.submitted == []
    assert navigator.last_url is None


def test_incomplete_contact_is_rejected():
    submitter = MockOrderSubmitter()
    use_case, store, _, _ = _handoff(submitter)
    store.save(contact={"name": "Ana"})

    with pytest.raises(InvalidSelectionError):
        asyncio.run(use_case.execute())
    assert submitter.submitted == []
