from __future__ import annotations

import logging

from ordercore.application.ports.order_submission import OrderSubmissionPort
from ordercore.domain.entities.order_submission import OrderSubmission, SubmissionResult


class MockOrderSubmitter(OrderSubmissionPort):
    def __init__(self) -> None:
        self.submitted: list[OrderSubmission] = []
        self._logger = logging.getLogger(__name__)

    async def submit(self, submission: OrderSubmission) -> SubmissionResult:
        self.submitted.append(submission)
        self._logger.info(
            "Mock order submission",
            extra={"session_id": submission.session_id, "reason": ",".join(submission.add_on_ids)},
        )
        return SubmissionResult(success=True, status_code=200)
