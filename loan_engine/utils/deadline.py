"""Wall-clock deadline shared by the steps of one workflow invocation"""

import time
from loan_engine.domain.exceptions import WorkflowTimeoutError


class Deadline:
    """Monotonic deadline checked between workflow steps"""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        self.expires_at = time.monotonic() + timeout_seconds

    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def check(self, step: str) -> None:
        """Raise WorkflowTimeoutError if the deadline has passed"""
        if self.expired():
            raise WorkflowTimeoutError(
                f"workflow exceeded {self.timeout_seconds}s deadline at step '{step}'"
            )
