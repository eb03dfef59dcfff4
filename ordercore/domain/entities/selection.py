from __future__ import annotations

from dataclasses import dataclass

from ordercore.domain.entities.add_on import BUNDLE


@dataclass(frozen=True)
class Contact:
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    tax_id: str | None = None  # CPF/CNPJ for Brazilian checkouts


@dataclass(frozen=True)
class Child:
    name: str
    photo_url: str | None = None


@dataclass(frozen=True)
class Selection:
    recipient_count: int = 1  # 1..3
    add_on_ids: frozenset[str] = frozenset()  # {"combo-addons"} or a subset of the individual ids
    photo_count: int = 0
    contact: Contact = Contact()
    region: str = "pt"
    children: tuple[Child, ...] = ()
    photo_urls: tuple[str, ...] = ()
    message: str = ""
    updated_at: float | None = None

    @property
    def has_bundle(self) -> bool:
        return BUNDLE in self.add_on_ids
