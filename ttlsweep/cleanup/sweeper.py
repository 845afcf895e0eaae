"""Resource and resource group sweeps.

Each item gets exactly one deletion attempt. A failed attempt is recorded and
the sweep moves on to the next item.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from ttlsweep.cleanup.age import Clock, age_in_days, as_utc, utc_now
from ttlsweep.cleanup.safety import ExemptionMatcher
from ttlsweep.errors import DeletionError, ProviderError
from ttlsweep.models.deletion_record import DeletionRecord, DeletionStatus, TargetKind
from ttlsweep.models.resource import CloudResource
from ttlsweep.models.sweep_operation import SweepOperation

logger = logging.getLogger(__name__)

RecordObserver = Callable[[DeletionRecord], None]


def newest_first(resources: Iterable[CloudResource]) -> list[CloudResource]:
    """Order resources by creation time, newest first.

    Later resources tend to depend on earlier ones (a VM on its network), so
    deleting newest first avoids most "resource in use" conflicts. Resources
    without a creation time go last.
    """
    resources = list(resources)
    dated = [r for r in resources if r.created_at is not None]
    undated = [r for r in resources if r.created_at is None]
    dated.sort(key=lambda r: as_utc(r.created_at), reverse=True)
    return dated + undated


class _RecordingSweep:
    """Shared record bookkeeping for both sweeps."""

    def __init__(self, observer: Optional[RecordObserver] = None, clock: Clock = utc_now) -> None:
        self.observer = observer
        self.clock = clock
        self.records: list[DeletionRecord] = []

    def _emit(
        self,
        operation: SweepOperation,
        target_id: str,
        kind: TargetKind,
        status: DeletionStatus,
        **extra: Any,
    ) -> DeletionRecord:
        record = DeletionRecord(
            record_id=f"rec_{uuid.uuid4()}",
            operation_id=operation.operation_id,
            target_id=target_id,
            target_kind=kind,
            timestamp=self.clock(),
            status=status,
            **extra,
        )
        self.records.append(record)

        if self.observer is not None:
            try:
                self.observer(record)
            except Exception:
                logger.exception(f"Record observer failed for {target_id}")

        return record

    @staticmethod
    def _error_fields(error: DeletionError) -> dict:
        if isinstance(error, ProviderError):
            logger.debug(
                f"Failed. HTTP status code: {error.status_code}, error code: {error.error_code}, "
                f"error message: {error.message}"
            )
            return {
                "error_kind": error.kind,
                "status_code": error.status_code,
                "error_code": error.error_code,
                "error_message": error.message,
            }

        logger.debug(f"Failed. {error.describe()}")
        return {"error_kind": error.kind, "error_message": error.describe()}


class ResourceSweeper(_RecordingSweep):
    """Deletes resources older than the retention threshold.

    Attributes:
        client: Listing and deletion service
        ttl_days: Retention threshold, resources must be strictly older
        matcher: Exemption prefix matcher
    """

    def __init__(
        self,
        client: Any,
        ttl_days: int,
        matcher: ExemptionMatcher,
        observer: Optional[RecordObserver] = None,
        clock: Clock = utc_now,
    ) -> None:
        super().__init__(observer=observer, clock=clock)
        self.client = client
        self.ttl_days = ttl_days
        self.matcher = matcher

    def sweep(self, resources: Iterable[CloudResource], operation: SweepOperation, now: datetime) -> None:
        """Process every resource once, newest first.

        Args:
            resources: All resources in the subscription
            operation: Operation whose counters are updated
            now: Reference time for age calculation
        """
        ordered = newest_first(list(resources))
        operation.record_resources_seen(len(ordered))

        for resource in ordered:
            self._process(resource, operation, now)

    def _process(self, resource: CloudResource, operation: SweepOperation, now: datetime) -> None:
        logger.debug(f"Processing {resource.resource_id}")

        if resource.created_at is None:
            age = None
            effective_age = 0
        else:
            age = effective_age = age_in_days(resource.created_at, now)

        if effective_age <= self.ttl_days:
            reason = (
                "creation time unknown"
                if age is None
                else f"created {age} day(s) ago, within {self.ttl_days} day(s) TTL"
            )
            self._emit(
                operation,
                resource.resource_id,
                TargetKind.RESOURCE,
                DeletionStatus.SKIPPED,
                resource_type=resource.resource_type,
                age_days=age,
                skip_reason=reason,
            )
            return

        is_exempt, reason = self.matcher.is_exempt(resource.resource_id)
        if is_exempt:
            self._emit(
                operation,
                resource.resource_id,
                TargetKind.RESOURCE,
                DeletionStatus.SKIPPED,
                resource_type=resource.resource_type,
                age_days=age,
                skip_reason=reason,
            )
            return

        operation.record_eligible_resource()
        logger.info(f"Created {age} day(s) ago, deleting {resource.resource_id}...")

        try:
            self.client.delete_resource(resource.resource_type, resource.resource_id)
        except DeletionError as e:
            self._emit(
                operation,
                resource.resource_id,
                TargetKind.RESOURCE,
                DeletionStatus.FAILED,
                resource_type=resource.resource_type,
                age_days=age,
                **self._error_fields(e),
            )
            return

        operation.record_deleted_resource()
        logger.info(f"Deleted {resource.resource_id}")
        self._emit(
            operation,
            resource.resource_id,
            TargetKind.RESOURCE,
            DeletionStatus.SUCCEEDED,
            resource_type=resource.resource_type,
            age_days=age,
        )


class GroupSweeper(_RecordingSweep):
    """Deletes resource groups that hold no resources."""

    def __init__(self, client: Any, observer: Optional[RecordObserver] = None, clock: Clock = utc_now) -> None:
        super().__init__(observer=observer, clock=clock)
        self.client = client

    def sweep(self, operation: SweepOperation) -> None:
        """List resource groups and delete the empty ones.

        Args:
            operation: Operation whose counters are updated
        """
        for group in self.client.list_resource_groups():
            operation.record_group_seen()
            self._process(group.name, operation)

    def _process(self, name: str, operation: SweepOperation) -> None:
        logger.debug(f"Processing resource group: {name}")

        try:
            member_count = len(self.client.list_resources_in_group(name))
        except DeletionError as e:
            fields = self._error_fields(e)
            self._emit(
                operation,
                name,
                TargetKind.GROUP,
                DeletionStatus.SKIPPED,
                skip_reason=f"could not list resources: {fields['error_message']}",
            )
            return

        if member_count:
            self._emit(
                operation,
                name,
                TargetKind.GROUP,
                DeletionStatus.SKIPPED,
                skip_reason=f"{member_count} resources in this group",
            )
            return

        operation.record_eligible_group()
        logger.info(f"No resources in this group, deleting {name}...")

        try:
            self.client.delete_resource_group(name)
        except DeletionError as e:
            self._emit(operation, name, TargetKind.GROUP, DeletionStatus.FAILED, **self._error_fields(e))
            return

        operation.record_deleted_group()
        logger.info(f"Deleted resource group {name}")
        self._emit(operation, name, TargetKind.GROUP, DeletionStatus.SUCCEEDED)
