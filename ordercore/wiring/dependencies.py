from functools import lru_cache
import logging
import threading

from ordercore.core.config import settings
from ordercore.application.ports.endpoint_catalog import EndpointCatalogPort
from ordercore.application.ports.navigator import NavigatorPort
from ordercore.application.ports.order_submission import OrderSubmissionPort
from ordercore.application.ports.session_record_store import SessionRecordStorePort
from ordercore.application.use_cases.attribution_store import AttributionStore
from ordercore.application.use_cases.checkout_handoff import CheckoutHandoffUseCase
from ordercore.application.use_cases.route_region import default_base_urls
from ordercore.application.use_cases.selection_store import SelectionStore
from ordercore.application.utils.change_notifier import ChangeNotifier
from ordercore.infrastructure.catalog.endpoint_catalog_store import EndpointCatalogStore
from ordercore.infrastructure.navigation.recording_navigator import RecordingNavigator
from ordercore.infrastructure.store.json_store import JsonSessionRecordStore
from ordercore.infrastructure.store.memory_store import MemorySessionRecordStore
from ordercore.infrastructure.submission.mock_submitter import MockOrderSubmitter
from ordercore.infrastructure.submission.webhook_client import WebhookOrderSubmitter


_record_store: SessionRecordStorePort | None = None
_notifiers: dict[str, ChangeNotifier] = {}
_notifiers_lock = threading.Lock()


def get_record_store() -> SessionRecordStorePort:
    global _record_store
    if _record_store is None:
        if settings.STORE_PROVIDER.lower() == "json":
            _record_store = JsonSessionRecordStore(data_dir=settings.STORE_DATA_DIR)
        else:
            _record_store = MemorySessionRecordStore()
    return _record_store


def get_notifier(session_id: str) -> ChangeNotifier:
    with _notifiers_lock:
        if session_id not in _notifiers:
            _notifiers[session_id] = ChangeNotifier()
        return _notifiers[session_id]


def release_notifier(session_id: str) -> None:
    """Drop the notifier of a cleared session."""
    with _notifiers_lock:
        _notifiers.pop(session_id, None)


def get_selection_store(session_id: str) -> SelectionStore:
    return SelectionStore(
        records=get_record_store(),
        session_id=session_id,
        notifier=get_notifier(session_id),
        default_region=settings.DEFAULT_LOCALE,
        accepted_photo_schemes=settings.ACCEPTED_PHOTO_SCHEMES,
    )


def get_attribution_store(session_id: str) -> AttributionStore:
    return AttributionStore(records=get_record_store(), session_id=session_id)


@lru_cache
def get_endpoint_catalog() -> EndpointCatalogPort:
    return EndpointCatalogStore()


@lru_cache
def get_order_submitter() -> OrderSubmissionPort:
    logger = logging.getLogger(__name__)
    if not settings.ORDER_WEBHOOK_URL:
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using MockOrderSubmitter (webhook url missing, ENV=dev/local)")
            return MockOrderSubmitter()
        raise ValueError("ORDER_WEBHOOK_URL is required to submit orders.")

    logger.info("Using WebhookOrderSubmitter")
    return WebhookOrderSubmitter(
        url=settings.ORDER_WEBHOOK_URL,
        secret=settings.ORDER_WEBHOOK_SECRET,
        timeout=settings.ORDER_WEBHOOK_TIMEOUT_SECONDS,
        max_attempts=settings.ORDER_WEBHOOK_MAX_ATTEMPTS,
        backoff_initial=settings.ORDER_WEBHOOK_BACKOFF_INITIAL,
        backoff_max=settings.ORDER_WEBHOOK_BACKOFF_MAX,
    )


def get_checkout_handoff_use_case(session_id: str, navigator: NavigatorPort | None = None) -> CheckoutHandoffUseCase:
    return CheckoutHandoffUseCase(
        store=get_selection_store(session_id),
        attribution=get_attribution_store(session_id),
        catalog=get_endpoint_catalog(),
        submitter=get_order_submitter(),
        navigator=navigator or RecordingNavigator(),
        base_urls=default_base_urls(),
        submit_timeout=settings.ORDER_WEBHOOK_TOTAL_TIMEOUT_SECONDS,
    )
