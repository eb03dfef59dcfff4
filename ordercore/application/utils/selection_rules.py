from __future__ import annotations

from dataclasses import asdict, replace
from typing import Any, Iterable, Mapping

from ordercore.application.exceptions import InvalidSelectionError
from ordercore.application.utils.contact_format import digits_only, is_valid_email
from ordercore.domain.entities.add_on import ADD_ON_CATALOG, BUNDLE, MAX_RECIPIENTS
from ordercore.domain.entities.selection import Child, Contact, Selection

SELECTION_FIELDS = frozenset(
    {
        "recipient_count",
        "add_on_ids",
        "photo_count",
        "contact",
        "region",
        "children",
        "photo_urls",
        "message",
    }
)


def normalize_add_ons(add_on_ids: Iterable[str]) -> frozenset[str]:
    """Bundle and individual add-ons are mutually exclusive; the bundle wins."""
    ids = frozenset(str(i).strip() for i in add_on_ids if i)
    unknown = ids - set(ADD_ON_CATALOG)
    if unknown:
        raise InvalidSelectionError(f"Unknown add-on ids: {', '.join(sorted(unknown))}")
    if BUNDLE in ids:
        return frozenset({BUNDLE})
    return ids


def toggle_add_on(current: Iterable[str], add_on_id: str) -> frozenset[str]:
    """Flip one add-on the way the order-bump step does.

    Picking the bundle drops every individual add-on; picking an individual
    add-on drops the bundle.
    """
    ids = set(current)
    if add_on_id not in ADD_ON_CATALOG:
        raise InvalidSelectionError(f"Unknown add-on id: {add_on_id}")
    if add_on_id in ids:
        ids.discard(add_on_id)
        return frozenset(ids)
    if add_on_id == BUNDLE:
        return frozenset({BUNDLE})
    ids.discard(BUNDLE)
    ids.add(add_on_id)
    return frozenset(ids)


def validate_photo_urls(urls: Iterable[str], accepted_schemes: Iterable[str]) -> tuple[str, ...]:
    schemes = tuple(accepted_schemes)
    cleaned: list[str] = []
    for url in urls:
        value = str(url).strip()
        if not value:
            continue
        if not value.startswith(schemes):
            raise InvalidSelectionError(f"Photo URL must start with one of {', '.join(schemes)}")
        cleaned.append(value)
    return tuple(cleaned)


def _coerce_contact(current: Contact, value: Any) -> Contact:
    if value is None:
        return current
    if isinstance(value, Contact):
        return value
    if isinstance(value, Mapping):
        merged = {**asdict(current), **{k: v for k, v in value.items() if k in Contact.__dataclass_fields__ and v is not None}}
        return Contact(**merged)
    raise InvalidSelectionError("contact must be a mapping")


def _coerce_children(value: Any) -> tuple[Child, ...]:
    children: list[Child] = []
    for entry in value or ():
        if isinstance(entry, Child):
            children.append(entry)
        elif isinstance(entry, Mapping):
            children.append(Child(name=str(entry.get("name") or "").strip(), photo_url=entry.get("photo_url")))
        else:
            children.append(Child(name=str(entry).strip()))
    if len(children) > MAX_RECIPIENTS:
        raise InvalidSelectionError(f"At most {MAX_RECIPIENTS} children are allowed")
    return tuple(children)


def apply_delta(
    current: Selection,
    delta: Mapping[str, Any],
    accepted_photo_schemes: Iterable[str] = ("https://",),
    updated_at: float | None = None,
) -> Selection:
    """Merge a partial update onto a selection and return a valid Selection.

    Out-of-range counts are clamped, illegal add-on mixes are corrected.
    Unknown fields and fields sent as None are ignored.
    """
    changes: dict[str, Any] = {}
    for key, value in delta.items():
        if key not in SELECTION_FIELDS or value is None:
            continue
        if key == "recipient_count":
            changes[key] = min(max(int(value or 1), 1), MAX_RECIPIENTS)
        elif key == "add_on_ids":
            changes[key] = normalize_add_ons(value or ())
        elif key == "photo_count":
            changes[key] = max(int(value or 0), 0)
        elif key == "contact":
            changes[key] = _coerce_contact(current.contact, value)
        elif key == "children":
            changes[key] = _coerce_children(value)
        elif key == "photo_urls":
            changes[key] = validate_photo_urls(value or (), accepted_photo_schemes)
            if delta.get("photo_count") is None:
                changes["photo_count"] = len(changes[key])
        elif key == "region":
            changes[key] = str(value or current.region).strip().lower()
        elif key == "message":
            changes[key] = str(value or "")

    for child in changes.get("children", ()):
        if child.photo_url:
            validate_photo_urls([child.photo_url], accepted_photo_schemes)

    if updated_at is not None:
        changes["updated_at"] = updated_at
    return replace(current, **changes)


def checkout_problems(selection: Selection) -> list[str]:
    """What still blocks the hand-off. Empty when the selection can go to checkout."""
    problems: list[str] = []
    contact = selection.contact
    if not (contact.name or "").strip():
        problems.append("contact.name is required")
    if not is_valid_email(contact.email):
        problems.append("contact.email is invalid")
    if not digits_only(contact.phone):
        problems.append("contact.phone is required")
    if len(selection.children) > MAX_RECIPIENTS:
        problems.append(f"at most {MAX_RECIPIENTS} children are allowed")
    return problems
