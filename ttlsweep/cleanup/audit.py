"""Audit storage for sweep operations.

Stores and retrieves sweep audit logs in YAML format.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import yaml

from ttlsweep.models.deletion_record import DeletionRecord
from ttlsweep.models.sweep_operation import SweepOperation


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class AuditStorage:
    """Audit log storage and retrieval.

    Stores sweep audit logs as YAML files organized by year/month.

    Storage structure:
        <storage_dir>/
            2026/
                10/
                    operation-op_123.yaml

    Attributes:
        storage_dir: Base directory for audit logs
    """

    def __init__(self, storage_dir: Optional[str] = None) -> None:
        """Initialize audit storage.

        Args:
            storage_dir: Base directory for audit logs (default: ~/.ttlsweep/audit-logs)
        """
        if storage_dir is None:
            storage_dir = str(Path.home() / ".ttlsweep" / "audit-logs")

        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def log_operation(self, operation: SweepOperation, records: list[DeletionRecord]) -> Path:
        """Write the operation and all of its records to a YAML file.

        Overwrites an existing log with the same operation ID.

        Args:
            operation: Completed sweep operation
            records: Deletion records for this operation

        Returns:
            Path of the written audit file
        """
        stamp = operation.started_at or datetime.now(timezone.utc)
        year_month_dir = self.storage_dir / str(stamp.year) / f"{stamp.month:02d}"
        year_month_dir.mkdir(parents=True, exist_ok=True)

        audit_data = {
            "metadata": {
                "version": "1.0",
                "log_type": "subscription_sweep",
                "created_at": datetime.now(timezone.utc).isoformat(),
            },
            "operation": {
                "operation_id": operation.operation_id,
                "subscription_id": operation.subscription_id,
                "subscription_name": operation.subscription_name,
                "ttl_days": operation.ttl_days,
                "status": operation.status.value,
                "total_resources": operation.total_resources,
                "eligible_resources": operation.eligible_resources,
                "deleted_resources": operation.deleted_resources,
                "failed_resources": operation.failed_resources,
                "total_groups": operation.total_groups,
                "eligible_groups": operation.eligible_groups,
                "deleted_groups": operation.deleted_groups,
                "failed_groups": operation.failed_groups,
                "started_at": _iso(operation.started_at),
                "completed_at": _iso(operation.completed_at),
                "duration_seconds": operation.duration_seconds,
                "aborted": operation.aborted,
            },
            "records": [record.to_dict() for record in records],
        }

        audit_file = year_month_dir / f"operation-{operation.operation_id}.yaml"
        with open(audit_file, "w") as f:
            yaml.safe_dump(audit_data, f, default_flow_style=False, sort_keys=False)

        return audit_file

    def get_operation(self, operation_id: str) -> Optional[dict]:
        """Retrieve operation audit log by ID.

        Args:
            operation_id: Operation ID to retrieve

        Returns:
            Audit log dictionary if found, None otherwise
        """
        for audit_file in self.storage_dir.glob(f"*/*/operation-{operation_id}.yaml"):
            with open(audit_file, "r") as f:
                return yaml.safe_load(f)

        return None
