"""Sweep operation model.

Represents a complete sweep run with its counters and execution context.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class OperationStatus(Enum):
    """Operation execution status with state transitions."""

    PLANNED = "planned"
    EXECUTING = "executing"
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class SweepOperation:
    """Sweep operation entity (run statistics).

    Counters only move forward through the ``record_*`` methods. Failure
    counts are derived as eligible minus deleted and never stored.

    State transitions:
        planned → executing → completed (every eligible item deleted)
        planned → executing → partial (some deletions failed)
        planned → executing → failed (no eligible item could be deleted)

    Attributes:
        operation_id: Unique identifier for the operation
        subscription_id: Azure subscription ID
        subscription_name: Verified subscription display name
        ttl_days: Retention threshold in days
        status: Current execution status
        total_resources: Resources listed at sweep start
        eligible_resources: Resources older than TTL and not exempt
        deleted_resources: Resources deleted successfully
        total_groups: Resource groups listed after the resource sweep
        eligible_groups: Resource groups found empty
        deleted_groups: Resource groups deleted successfully
        started_at: When execution started (optional)
        completed_at: When execution completed (optional)
        aborted: Whether the run stopped before both sweeps finished
    """

    operation_id: str
    subscription_id: str
    subscription_name: str
    ttl_days: int
    status: OperationStatus = OperationStatus.PLANNED
    total_resources: int = 0
    eligible_resources: int = 0
    deleted_resources: int = 0
    total_groups: int = 0
    eligible_groups: int = 0
    deleted_groups: int = 0
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    aborted: bool = False

    @property
    def failed_resources(self) -> int:
        return self.eligible_resources - self.deleted_resources

    @property
    def failed_groups(self) -> int:
        return self.eligible_groups - self.deleted_groups

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.started_at is None or self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    def start(self, now: datetime) -> None:
        self.started_at = now
        self.status = OperationStatus.EXECUTING

    def record_resources_seen(self, count: int) -> None:
        if count < 0:
            raise ValueError("Resource count cannot be negative")
        self.total_resources += count

    def record_eligible_resource(self) -> None:
        self.eligible_resources += 1

    def record_deleted_resource(self) -> None:
        if self.deleted_resources >= self.eligible_resources:
            raise ValueError("Cannot delete more resources than were eligible")
        self.deleted_resources += 1

    def record_group_seen(self) -> None:
        self.total_groups += 1

    def record_eligible_group(self) -> None:
        self.eligible_groups += 1

    def record_deleted_group(self) -> None:
        if self.deleted_groups >= self.eligible_groups:
            raise ValueError("Cannot delete more groups than were eligible")
        self.deleted_groups += 1

    def finish(self, now: datetime) -> None:
        """Mark the operation complete and derive its final status."""
        self.completed_at = now

        failed = self.failed_resources + self.failed_groups
        deleted = self.deleted_resources + self.deleted_groups
        if failed == 0:
            self.status = OperationStatus.COMPLETED
        elif deleted > 0:
            self.status = OperationStatus.PARTIAL
        else:
            self.status = OperationStatus.FAILED

    def abort(self, now: datetime) -> None:
        """Mark the operation as stopped before both sweeps completed."""
        self.completed_at = now
        self.status = OperationStatus.FAILED
        self.aborted = True

    def has_failures(self, include_groups: bool = True) -> bool:
        """Whether any eligible deletion failed.

        Args:
            include_groups: Also consider resource group failures

        Returns:
            True if the run should be reported as failed
        """
        if self.failed_resources > 0:
            return True
        return include_groups and self.failed_groups > 0

    def exit_code(self, include_groups: bool = True) -> int:
        return 1 if self.has_failures(include_groups) else 0

    def validate(self) -> bool:
        """Validate operation invariants.

        Validation rules:
            - eligible <= total and deleted <= eligible for resources and groups
            - completed_at must not be before started_at

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.ttl_days < 0:
            raise ValueError("TTL cannot be negative")

        if not (0 <= self.deleted_resources <= self.eligible_resources <= self.total_resources):
            raise ValueError("Resource counts are inconsistent")

        if not (0 <= self.deleted_groups <= self.eligible_groups <= self.total_groups):
            raise ValueError("Resource group counts are inconsistent")

        if self.completed_at and self.started_at:
            if self.completed_at < self.started_at:
                raise ValueError("Completion time before start time")

        return True
