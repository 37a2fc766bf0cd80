"""Tests for batch reporting."""
import io

import pytest
from rich.console import Console

from awscontactman.contacts.exceptions import (
    AccountAccessDeniedError,
    GetAlternateContactError,
    TooManyRequestsError,
)
from awscontactman.contacts.models import (
    BatchMode,
    BatchResult,
    Cancelled,
    CellResult,
    ContactRecord,
    Failure,
    PartialSuccess,
    Success,
)
from awscontactman.contacts.reporting import ReportGenerator


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def reporter(output):
    return ReportGenerator(Console(file=output, width=160, color_system=None))


class TestReportGenerator:
    """Test ReportGenerator output."""

    def test_contact_table(self, reporter, output):
        contact = ContactRecord("ops@example.com", "Ops Team", "+15550100200", "SRE")
        result = BatchResult(
            mode=BatchMode.LIST,
            total_cells=2,
            cells=[
                CellResult("111111111111", "Operations", "success", contact=contact),
                CellResult("111111111111", "Security", "not_found"),
            ],
        )

        reporter.print_contact_table(result)

        text = output.getvalue()
        assert "Alternate Contacts" in text
        assert "ops@example.com" in text
        assert "Null" in text

    def test_summary_counts(self, reporter, output):
        result = BatchResult(
            mode=BatchMode.UPDATE,
            total_cells=4,
            cells=[CellResult("111111111111", t, "success") for t in ("Billing", "Operations", "Security")]
            + [CellResult("222222222222", "Billing", "access_denied")],
            errors=[AccountAccessDeniedError("222222222222", "Billing")],
        )

        reporter.print_summary(result)

        text = output.getvalue()
        assert "Update Summary" in text
        assert "3/4 contacts" in text

    def test_aborted_summary(self, reporter, output):
        result = BatchResult(
            mode=BatchMode.LIST,
            total_cells=6,
            cells=[CellResult("111111111111", "Billing", "error")],
            errors=[TooManyRequestsError("111111111111", "Billing")],
            aborted=True,
        )

        reporter.print_summary(result)

        assert "after 1 of 6 cells" in output.getvalue()

    def test_partial_success_lists_errors(self, reporter, output):
        errors = (
            AccountAccessDeniedError("111111111111", "Billing"),
            GetAlternateContactError("222222222222", "Security", "boom"),
        )

        reporter.print_outcome(PartialSuccess(errors=errors), 1.5)

        text = output.getvalue()
        assert "Completed with 2 errors in 1.5000 seconds" in text
        assert "1. Access denied to account 111111111111" in text
        assert "2. Failed to get alternate contact for account 222222222222" in text

    def test_failure_prints_cause_chain(self, reporter, output):
        error = GetAlternateContactError("111111111111", "Billing", "boom")
        error.__cause__ = RuntimeError("socket closed")

        reporter.print_outcome(Failure(error=error))

        text = output.getvalue()
        assert "Failed" in text
        assert "Caused by: socket closed" in text

    def test_success_and_cancelled(self, reporter, output):
        reporter.print_outcome(Success(), 0.25)
        reporter.print_outcome(Cancelled())

        text = output.getvalue()
        assert "Completed successfully in 0.2500 seconds" in text
        assert "Operation cancelled by user" in text
