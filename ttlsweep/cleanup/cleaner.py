"""Subscription cleaner.

Main orchestrator for a sweep run: verify the subscription, delete expired
resources, reclaim empty resource groups, and produce the run statistics.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from ttlsweep.cleanup.age import Clock, utc_now
from ttlsweep.cleanup.safety import ExemptionMatcher
from ttlsweep.cleanup.sweeper import GroupSweeper, RecordObserver, ResourceSweeper
from ttlsweep.errors import ConfigurationError, IdentityMismatchError, SweepAbortedError
from ttlsweep.models.deletion_record import DeletionRecord
from ttlsweep.models.sweep_operation import SweepOperation

logger = logging.getLogger(__name__)


class SubscriptionCleaner:
    """Sweep orchestrator.

    Runs the linear sequence identity check → resource sweep → resource group
    sweep. Fatal errors propagate to the caller; per-item deletion failures
    are absorbed by the sweeps and only show up in the counters and records.

    Attributes:
        client: Listing and deletion service scoped to one subscription
        matcher: Exemption prefix matcher
        clock: Source of the current time
        observer: Callback receiving every deletion record as it is produced
        records: Deletion records of the last run
    """

    def __init__(
        self,
        client: Any,
        matcher: ExemptionMatcher,
        clock: Clock = utc_now,
        observer: Optional[RecordObserver] = None,
    ) -> None:
        """Initialize subscription cleaner.

        Args:
            client: AzureResourceClient (or compatible) instance
            matcher: Exemption matcher with the protected prefixes
            clock: Clock used for ages and run duration
            observer: Per-record callback for live reporting (optional)
        """
        self.client = client
        self.matcher = matcher
        self.clock = clock
        self.observer = observer
        self.records: list[DeletionRecord] = []

    def verify_identity(self, expected_name: str) -> str:
        """Ensure the subscription is the one the caller meant to sweep.

        Args:
            expected_name: Expected subscription display name

        Returns:
            Verified display name

        Raises:
            IdentityMismatchError: If the display name differs
            SubscriptionNotFoundError: If the subscription does not exist
        """
        actual = self.client.get_subscription_name()
        if actual != expected_name:
            raise IdentityMismatchError(expected=expected_name, actual=actual)
        return actual

    def run(self, expected_name: str, ttl_days: int) -> SweepOperation:
        """Execute a full sweep.

        Args:
            expected_name: Expected subscription display name
            ttl_days: Delete resources created more than this many days ago

        Returns:
            Completed SweepOperation with the run statistics

        Raises:
            ConfigurationError: If ttl_days is negative or not an integer
            IdentityMismatchError: If the subscription name does not match
            SweepAbortedError: If listing fails after the sweep has started
        """
        if isinstance(ttl_days, bool) or not isinstance(ttl_days, int) or ttl_days < 0:
            raise ConfigurationError(f"TTL must be a non-negative integer, got {ttl_days!r}")

        subscription_name = self.verify_identity(expected_name)

        operation = SweepOperation(
            operation_id=f"op_{uuid.uuid4()}",
            subscription_id=self.client.subscription_id,
            subscription_name=subscription_name,
            ttl_days=ttl_days,
        )
        now = self.clock()
        operation.start(now)
        logger.info(
            f"Start cleaning resources in subscription: {subscription_name} ({operation.subscription_id}), "
            f"delete resources created over {ttl_days} days."
        )

        resource_sweeper = ResourceSweeper(
            client=self.client,
            ttl_days=ttl_days,
            matcher=self.matcher,
            observer=self.observer,
            clock=self.clock,
        )
        group_sweeper = GroupSweeper(client=self.client, observer=self.observer, clock=self.clock)

        try:
            resource_sweeper.sweep(self.client.list_resources(), operation, now)
            group_sweeper.sweep(operation)
        except Exception as e:
            operation.abort(self.clock())
            logger.error(f"Cleanup aborted after {operation.deleted_resources} resource deletion(s): {e}")
            raise SweepAbortedError(operation, e) from e
        finally:
            self.records = resource_sweeper.records + group_sweeper.records

        operation.finish(self.clock())

        logger.info(
            f"Cleanup completed in {operation.duration_seconds} seconds with status {operation.status.value}"
        )
        return operation
