"""Deletion record model.

Individual resource or resource group decision with outcome and metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class DeletionStatus(Enum):
    """Individual deletion outcome."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class TargetKind(Enum):
    """What a record refers to."""

    RESOURCE = "resource"
    GROUP = "group"


@dataclass
class DeletionRecord:
    """Deletion record entity.

    One record is produced for every resource and resource group processed
    during a sweep, including skipped ones.

    Validation rules:
        - status=succeeded: no error_kind or skip_reason
        - status=failed: requires error_kind
        - status=skipped: requires skip_reason

    Attributes:
        record_id: Unique identifier for this record
        operation_id: Parent operation identifier
        target_id: Resource ID or resource group name
        target_kind: resource or group
        timestamp: When the decision was made
        status: Outcome (succeeded, failed, skipped)
        resource_type: Provider resource type (resources only)
        age_days: Age at sweep time, None if creation time unknown
        skip_reason: Why the target was left alone (optional)
        error_kind: "provider" or "opaque" if failed (optional)
        status_code: HTTP status code of a provider error (optional)
        error_code: Provider error code (optional)
        error_message: Human-readable error if failed (optional)
    """

    record_id: str
    operation_id: str
    target_id: str
    target_kind: TargetKind
    timestamp: datetime
    status: DeletionStatus
    resource_type: Optional[str] = None
    age_days: Optional[int] = None
    skip_reason: Optional[str] = None
    error_kind: Optional[str] = None
    status_code: Optional[int] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def validate(self) -> bool:
        """Validate record invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.status == DeletionStatus.FAILED:
            if not self.error_kind:
                raise ValueError("Failed status requires error_kind")
        elif self.status == DeletionStatus.SKIPPED:
            if not self.skip_reason:
                raise ValueError("Skipped status requires skip_reason")
        elif self.status == DeletionStatus.SUCCEEDED:
            if self.error_kind or self.skip_reason:
                raise ValueError("Succeeded status cannot have error or skip reason")

        return True

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "operation_id": self.operation_id,
            "target_id": self.target_id,
            "target_kind": self.target_kind.value,
            "resource_type": self.resource_type,
            "timestamp": self.timestamp.isoformat(),
            "status": self.status.value,
            "age_days": self.age_days,
            "skip_reason": self.skip_reason,
            "error_kind": self.error_kind,
            "status_code": self.status_code,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }
