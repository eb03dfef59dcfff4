from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FailureCategory(str, Enum):
    network = "network"
    timeout = "timeout"
    not_found = "not_found"
    server = "server"


@dataclass(frozen=True)
class OrderSubmission:
    session_id: str
    contact: dict[str, str | None]
    children: list[dict[str, str | None]]
    message: str
    add_on_ids: list[str]
    attribution: dict[str, Any]
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {
            "contact": dict(self.contact),
            "personalization": {
                "children": [dict(c) for c in self.children],
                "message": self.message,
                "add_on_ids": list(self.add_on_ids),
            },
            "attribution": {**self.attribution, "session_id": self.session_id},
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class SubmissionResult:
    success: bool
    attempts: int = 1
    status_code: int | None = None
    category: FailureCategory | None = None
    response: dict[str, Any] | None = None
    error: str | None = None
