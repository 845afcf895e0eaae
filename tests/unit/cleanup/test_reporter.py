"""Tests for SweepReporter output."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console

from ttlsweep.cleanup.reporter import SweepReporter
from ttlsweep.models.deletion_record import DeletionRecord, DeletionStatus, TargetKind
from ttlsweep.models.sweep_operation import SweepOperation


def make_console() -> Console:
    return Console(record=True, width=160, color_system=None)


def make_record(**kwargs) -> DeletionRecord:
    defaults = {
        "record_id": "rec_1",
        "operation_id": "op_1",
        "target_id": "/subscriptions/s/resourceGroups/rg/providers/a/b/c",
        "target_kind": TargetKind.RESOURCE,
        "timestamp": datetime(2026, 10, 19),
        "status": DeletionStatus.SUCCEEDED,
    }
    defaults.update(kwargs)
    return DeletionRecord(**defaults)


class TestSweepReporter:
    """Test suite for SweepReporter class."""

    def test_skipped_record(self) -> None:
        console = make_console()
        SweepReporter(console).display_record(
            make_record(status=DeletionStatus.SKIPPED, skip_reason="created 3 day(s) ago, within 30 day(s) TTL")
        )

        text = console.export_text()
        assert "Processing /subscriptions/s/resourceGroups/rg/providers/a/b/c" in text
        assert "created 3 day(s) ago, within 30 day(s) TTL, skip." in text

    def test_provider_failure_record(self) -> None:
        console = make_console()
        SweepReporter(console).display_record(
            make_record(
                status=DeletionStatus.FAILED,
                error_kind="provider",
                status_code=409,
                error_code="Conflict",
                error_message="Resource is in use",
            )
        )

        text = console.export_text()
        assert "Failed. HTTP status code: 409, error code: Conflict" in text
        assert "Resource is in use" in text

    def test_opaque_failure_and_group_record(self) -> None:
        console = make_console()
        SweepReporter(console).display_record(
            make_record(
                target_id="rg1",
                target_kind=TargetKind.GROUP,
                status=DeletionStatus.FAILED,
                error_kind="opaque",
                error_message="socket closed",
            )
        )

        text = console.export_text()
        assert "Processing resource group: rg1" in text
        assert "Failed. socket closed" in text

    def test_summary_shows_derived_failures(self) -> None:
        operation = SweepOperation(
            operation_id="op_1",
            subscription_id="s",
            subscription_name="Prod",
            ttl_days=30,
            total_resources=10,
            eligible_resources=4,
            deleted_resources=3,
            total_groups=5,
            eligible_groups=2,
            deleted_groups=2,
            started_at=datetime(2026, 10, 19, 12, 0, 0),
            completed_at=datetime(2026, 10, 19, 12, 0, 42),
        )
        console = make_console()

        SweepReporter(console).display_summary(operation)

        text = console.export_text()
        assert "Cleanup completed in 42.0 seconds" in text
        resources_line = next(line for line in text.splitlines() if "Resources" in line)
        assert resources_line.replace("│", " ").split()[-4:] == ["10", "4", "3", "1"]
        groups_line = next(line for line in text.splitlines() if "Resource groups" in line)
        assert groups_line.replace("│", " ").split()[-4:] == ["5", "2", "2", "0"]

    def test_summary_of_aborted_run(self) -> None:
        operation = SweepOperation(
            operation_id="op_2",
            subscription_id="s",
            subscription_name="Prod",
            ttl_days=30,
            total_resources=1,
            eligible_resources=1,
            deleted_resources=1,
        )
        operation.start(datetime(2026, 10, 19, 12, 0, 0))
        operation.abort(datetime(2026, 10, 19, 12, 0, 7))
        console = make_console()

        SweepReporter(console).display_summary(operation)

        text = console.export_text()
        assert "Cleanup aborted after 7.0 seconds" in text
        assert "Summary" in text
