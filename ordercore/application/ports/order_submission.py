from __future__ import annotations

from abc import ABC, abstractmethod

from ordercore.domain.entities.order_submission import OrderSubmission, SubmissionResult


class OrderSubmissionPort(ABC):
    @abstractmethod
    async def submit(self, submission: OrderSubmission) -> SubmissionResult:
        """Deliver the order record. Retries, if any, happen inside the adapter."""
        raise NotImplementedError
