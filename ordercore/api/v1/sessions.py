import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from ordercore.api.v1.schemas import (
    AttributionRequestSchema, AttributionResponseSchema,
    CheckoutResponseSchema, ChildSchema, ContactSchema,
    LineItemSchema, PricingResponseSchema,
    SelectionSchema, SelectionUpdateSchema, StepSchema,
)
from ordercore.application.exceptions import EndpointConfigurationError, InvalidSelectionError
from ordercore.application.use_cases.attribution_store import AttributionStore
from ordercore.application.use_cases.compute_price import pricing_summary
from ordercore.application.use_cases.selection_store import SelectionStore
from ordercore.domain.entities.pricing import PriceBreakdown
from ordercore.domain.entities.selection import Selection
from ordercore.wiring.dependencies import (
    get_attribution_store,
    get_checkout_handoff_use_case,
    get_selection_store,
    release_notifier,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _pricing_response(breakdown: PriceBreakdown) -> PricingResponseSchema:
    return PricingResponseSchema(
        provider=breakdown.provider,
        currency=breakdown.currency,
        items=[
            LineItemSchema(
                id=item.id,
                label=item.label,
                unit_price=item.unit_price,
                original_price=item.original_price,
                quantity=item.quantity,
                amount=item.amount,
            )
            for item in breakdown.items
        ],
        base_price=breakdown.base_price,
        add_on_total=breakdown.add_on_total,
        photo_total=breakdown.photo_total,
        bundle_discount=breakdown.bundle_discount,
        subtotal=breakdown.subtotal,
        total=breakdown.total,
        summary=pricing_summary(breakdown),
    )


def _selection_response(selection: Selection) -> SelectionSchema:
    contact = selection.contact
    return SelectionSchema(
        recipient_count=selection.recipient_count,
        add_on_ids=sorted(selection.add_on_ids),
        photo_count=selection.photo_count,
        contact=ContactSchema(name=contact.name, email=contact.email, phone=contact.phone, tax_id=contact.tax_id),
        region=selection.region,
        children=[ChildSchema(name=c.name, photo_url=c.photo_url) for c in selection.children],
        photo_urls=list(selection.photo_urls),
        message=selection.message,
    )


@router.get("/sessions/{session_id}/selection", response_model=SelectionSchema)
def get_selection(store: SelectionStore = Depends(get_selection_store)):
    return _selection_response(store.get_selection())


@router.patch("/sessions/{session_id}/selection", response_model=PricingResponseSchema)
def update_selection(
    req: SelectionUpdateSchema,
    store: SelectionStore = Depends(get_selection_store),
):
    delta = req.model_dump(exclude_unset=True, exclude={"toggle_add_on"})
    try:
        if req.toggle_add_on:
            breakdown = store.toggle(req.toggle_add_on, delta)
        else:
            breakdown = store.save(delta)
    except InvalidSelectionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _pricing_response(breakdown)


@router.get("/sessions/{session_id}/pricing", response_model=PricingResponseSchema)
def get_pricing(store: SelectionStore = Depends(get_selection_store)):
    return _pricing_response(store.get_current_pricing())


@router.put("/sessions/{session_id}/step")
def save_step(req: StepSchema, store: SelectionStore = Depends(get_selection_store)) -> dict[str, int]:
    store.save_current_step(req.step)
    return {"step": store.get_current_step()}


@router.post("/sessions/{session_id}/attribution", response_model=AttributionResponseSchema)
def capture_attribution(
    req: AttributionRequestSchema,
    attribution: AttributionStore = Depends(get_attribution_store),
):
    snapshot = attribution.capture(req.params)
    return AttributionResponseSchema(params=snapshot.as_dict(), captured_at=snapshot.captured_at)


@router.delete("/sessions/{session_id}", status_code=204)
def clear_session(store: SelectionStore = Depends(get_selection_store)) -> Response:
    store.clear()
    release_notifier(store.session_id)
    return Response(status_code=204)


@router.post("/sessions/{session_id}/checkout", response_model=CheckoutResponseSchema)
async def checkout(session_id: str):
    try:
        use_case = get_checkout_handoff_use_case(session_id)
    except ValueError as e:
        logger.error(
            "Order submission is not configured",
            extra={"session_id": session_id, "reason": str(e)},
        )
        raise HTTPException(status_code=500, detail="Order submission is not configured")

    try:
        result = await use_case.execute()
    except InvalidSelectionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EndpointConfigurationError as e:
        logger.error(
            "Checkout endpoint misconfigured",
            extra={"session_id": session_id, "provider": e.provider, "endpoint_id": e.endpoint_id},
        )
        raise HTTPException(status_code=500, detail="Checkout is not configured for this selection")

    if not result.success:
        raise HTTPException(
            status_code=502,
            detail={"category": result.category.value if result.category else None, "message": result.message},
        )

    release_notifier(session_id)

    return CheckoutResponseSchema(
        url=result.url,
        provider=result.route.provider,
        endpoint_id=result.mapping.resolved_endpoint_id.value,
        total=result.pricing.total,
        currency=result.pricing.currency,
    )
