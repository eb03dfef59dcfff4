from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping

from ordercore.application.exceptions import InvalidSelectionError
from ordercore.application.ports.endpoint_catalog import EndpointCatalogPort
from ordercore.application.ports.navigator import NavigatorPort
from ordercore.application.ports.order_submission import OrderSubmissionPort
from ordercore.application.use_cases.attribution_store import AttributionStore
from ordercore.application.use_cases.build_checkout_url import map_checkout
from ordercore.application.use_cases.route_region import route_region
from ordercore.application.use_cases.selection_store import SelectionStore
from ordercore.application.use_cases.submit_order import build_order_submission
from ordercore.application.utils.selection_rules import checkout_problems
from ordercore.application.utils.failure_messages import categorize_exception, failure_message
from ordercore.domain.entities.endpoint import EndpointMapping
from ordercore.domain.entities.order_submission import FailureCategory
from ordercore.domain.entities.pricing import PriceBreakdown
from ordercore.domain.entities.region import RegionRoute


@dataclass(frozen=True)
class HandoffResult:
    success: bool
    url: str | None = None
    route: RegionRoute | None = None
    mapping: EndpointMapping | None = None
    pricing: PriceBreakdown | None = None
    category: FailureCategory | None = None
    message: str | None = None


class CheckoutHandoffUseCase:
    def __init__(
        self,
        store: SelectionStore,
        attribution: AttributionStore,
        catalog: EndpointCatalogPort,
        submitter: OrderSubmissionPort,
        navigator: NavigatorPort,
        base_urls: Mapping[str, str] | None = None,
        submit_timeout: float = 45.0,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._attribution = attribution
        self._catalog = catalog
        self._submitter = submitter
        self._navigator = navigator
        self._base_urls = base_urls
        self._submit_timeout = submit_timeout
        self._now = now
        self._logger = logging.getLogger(__name__)

    async def execute(self) -> HandoffResult:
        """Submit the order, send the customer to checkout, then clear the session.

        The URL is resolved before anything leaves the process, so a missing
        endpoint raises EndpointConfigurationError without side effects. The
        session is cleared once navigation is issued; the provider never
        confirms back.
        """
        session_id = self._store.session_id
        # Store backends do blocking file I/O; keep it off the event loop.
        selection = await asyncio.to_thread(self._store.get_selection)
        problems = checkout_problems(selection)
        if problems:
            raise InvalidSelectionError("; ".join(problems))
        pricing = await asyncio.to_thread(self._store.get_current_pricing)
        snapshot = await asyncio.to_thread(self._attribution.get)
        route = route_region(selection.region, self._base_urls)

        mapping, url = map_checkout(selection, route, self._catalog, snapshot.as_dict())

        submission = build_order_submission(
            selection,
            snapshot,
            session_id,
            now=self._now() if self._now else None,
        )
        try:
            result = await asyncio.wait_for(self._submitter.submit(submission), timeout=self._submit_timeout)
        except asyncio.TimeoutError as e:
            category = categorize_exception(e)
            self._logger.warning("Order submission timed out", extra={"session_id": session_id, "category": category.value})
            return HandoffResult(
                success=False,
                route=route,
                mapping=mapping,
                pricing=pricing,
                category=category,
                message=failure_message(category, selection.region),
            )

        if not result.success:
            category = result.category or FailureCategory.server
            return HandoffResult(
                success=False,
                route=route,
                mapping=mapping,
                pricing=pricing,
                category=category,
                message=failure_message(category, selection.region),
            )

        self._navigator.navigate(url)
        await asyncio.to_thread(self._store.clear)
        self._logger.info(
            "Checkout hand-off complete",
            extra={
                "session_id": session_id,
                "provider": route.provider,
                "endpoint_id": mapping.resolved_endpoint_id.value,
            },
        )
        return HandoffResult(success=True, url=url, route=route, mapping=mapping, pricing=pricing)
