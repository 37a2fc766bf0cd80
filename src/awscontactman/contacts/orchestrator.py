"""Batch processing of alternate contact operations.

This module drives the account x contact type cross product for a batch
run, invoking one Account API call per cell through the retry executor and
folding per-cell results into a single outcome.

Cells are processed strictly in order: accounts in the outer loop, contact
types in the inner loop, both in input order. Throttling that persists after
retries aborts the whole batch at the failing cell; every other per-cell
error is recorded and processing continues.

Classes:
    BatchOrchestrator: Runs List, Update and Delete batches
"""

import logging
import time
from typing import Callable, Dict, Optional, Sequence, Type

from rich.console import Console

from .classifier import ErrorKind
from .exceptions import (
    AccountAccessDeniedError,
    AccountError,
    DeleteAlternateContactError,
    GetAlternateContactError,
    PutAlternateContactError,
    TooManyRequestsError,
    UnknownContactTypeError,
)
from .models import (
    BatchMode,
    BatchResult,
    Cancelled,
    CellResult,
    ContactRecord,
    ContactType,
    Failure,
    aggregate_outcome,
)
from .retry import RetryExecutor, RetryPolicy
from .validator import normalize_contact_types, parse_contact_type

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[BatchMode, int], bool]

OPERATION_NAMES: Dict[BatchMode, str] = {
    BatchMode.LIST: "get_alternate_contact",
    BatchMode.UPDATE: "put_alternate_contact",
    BatchMode.DELETE: "delete_alternate_contact",
}

OPERATION_ERRORS: Dict[BatchMode, Type[AccountError]] = {
    BatchMode.LIST: GetAlternateContactError,
    BatchMode.UPDATE: PutAlternateContactError,
    BatchMode.DELETE: DeleteAlternateContactError,
}

PROGRESS_VERBS: Dict[BatchMode, str] = {
    BatchMode.LIST: "Getting",
    BatchMode.UPDATE: "Updating",
    BatchMode.DELETE: "Deleting",
}


class BatchOrchestrator:
    """Runs an alternate contact operation over every (account, contact type) cell."""

    def __init__(
        self,
        account_client,
        executor: Optional[RetryExecutor] = None,
        console: Optional[Console] = None,
    ):
        """Initialize the orchestrator.

        Args:
            account_client: AccountClientWrapper (or anything with the same methods)
            executor: Retry executor shared by every cell of a run
            console: Rich console for progress output
        """
        self.account_client = account_client
        self.executor = executor or RetryExecutor()
        self.console = console or Console()

    async def run_batch(
        self,
        mode: BatchMode,
        accounts: Sequence[str],
        contact_types: Sequence[str],
        record: Optional[ContactRecord] = None,
        confirm: Optional[ConfirmCallback] = None,
    ) -> BatchResult:
        """Run a batch.

        Args:
            mode: Operation to apply to each cell
            accounts: Validated account IDs, in processing order
            contact_types: Contact type names, in processing order; case
                variants collapse to one display name and unknown names are
                recorded as errors and never sent to the API
            record: Contact applied to every cell (required for UPDATE)
            confirm: Optional pre-flight callback; returning False cancels the
                run before any remote call

        Returns:
            BatchResult with per-cell results and the aggregated outcome

        Raises:
            ValueError: If UPDATE is requested without a record
        """
        if mode == BatchMode.UPDATE and record is None:
            raise ValueError("An update batch requires a contact record")

        contact_types = normalize_contact_types(contact_types)
        result = BatchResult(mode=mode, total_cells=len(accounts) * len(contact_types))

        if confirm is not None and not confirm(mode, result.total_cells):
            result.outcome = Cancelled()
            return result

        start_time = time.monotonic()
        try:
            for account_id in accounts:
                for type_name in contact_types:
                    cell = await self._process_cell(mode, account_id, type_name, record)
                    result.cells.append(cell)

                    if cell.error is None:
                        continue
                    result.errors.append(cell.error)
                    if isinstance(cell.error, TooManyRequestsError):
                        result.aborted = True
                        result.outcome = Failure(error=cell.error)
                        return result

            result.outcome = aggregate_outcome(result.errors, result.success_count)
            return result
        finally:
            result.duration = time.monotonic() - start_time
            self._log_summary(result)

    async def _process_cell(
        self,
        mode: BatchMode,
        account_id: str,
        type_name: str,
        record: Optional[ContactRecord],
    ) -> CellResult:
        """Process a single cell, turning every failure into a CellResult."""
        self.console.print(
            f"{PROGRESS_VERBS[mode]} [cyan]{type_name}[/cyan] alternate contact "
            f"for [yellow]{account_id}[/yellow]..."
        )

        try:
            contact_type = parse_contact_type(type_name)
        except UnknownContactTypeError as e:
            logger.error(str(e))
            self.console.print(f"  [red]✗[/red] {e}")
            return CellResult(account_id, type_name, "skipped", error=e)

        type_name = contact_type.display_name

        operation = self._build_operation(mode, account_id, contact_type, record)
        try:
            response = await self.executor.execute(OPERATION_NAMES[mode], operation)
        except Exception as e:
            return self._handle_failure(mode, account_id, type_name, e)

        if mode == BatchMode.LIST:
            if response is None:
                return CellResult(account_id, type_name, "not_found")
            return CellResult(account_id, type_name, "success", contact=ContactRecord.from_api(response))

        self.console.print(
            f"  [green]✓[/green] {'Updated' if mode == BatchMode.UPDATE else 'Deleted'} successfully"
        )
        return CellResult(account_id, type_name, "success")

    def _build_operation(
        self,
        mode: BatchMode,
        account_id: str,
        contact_type: ContactType,
        record: Optional[ContactRecord],
    ) -> Callable[[], object]:
        if mode == BatchMode.LIST:
            return lambda: self.account_client.get_alternate_contact(account_id, contact_type.value)
        if mode == BatchMode.UPDATE:
            contact = record.to_api()
            return lambda: self.account_client.put_alternate_contact(
                account_id, contact_type.value, contact
            )
        return lambda: self.account_client.delete_alternate_contact(account_id, contact_type.value)

    def _handle_failure(
        self, mode: BatchMode, account_id: str, type_name: str, error: Exception
    ) -> CellResult:
        """Reclassify a remote failure for one cell."""
        classification = self.executor.classifier.classify(error)

        if classification.kind == ErrorKind.NOT_FOUND and mode != BatchMode.UPDATE:
            if mode == BatchMode.DELETE:
                self.console.print("  [yellow]~[/yellow] Contact not found (already deleted)")
            return CellResult(account_id, type_name, "not_found")

        if classification.kind == ErrorKind.ACCESS_DENIED:
            cell_error = AccountAccessDeniedError(account_id, type_name)
            status = "access_denied"
        elif classification.kind == ErrorKind.THROTTLED:
            cell_error = TooManyRequestsError(account_id, type_name)
            status = "error"
        else:
            cell_error = OPERATION_ERRORS[mode](account_id, type_name, classification.message)
            status = "error"
        cell_error.__cause__ = error

        logger.error(str(cell_error))
        self.console.print(f"  [red]✗[/red] Failed: {cell_error}")
        return CellResult(account_id, type_name, status, error=cell_error)

    def _log_summary(self, result: BatchResult) -> None:
        logger.info(
            f"{result.mode.value} batch finished: {result.success_count}/{result.total_cells} "
            f"cells succeeded, {len(result.errors)} errors"
            + (" (aborted)" if result.aborted else "")
        )


async def run_batch(
    account_client,
    mode: BatchMode,
    accounts: Sequence[str],
    contact_types: Sequence[str],
    record: Optional[ContactRecord] = None,
    policy: Optional[RetryPolicy] = None,
    confirm: Optional[ConfirmCallback] = None,
    console: Optional[Console] = None,
) -> BatchResult:
    """Run a batch with a fresh orchestrator.

    See ``BatchOrchestrator.run_batch`` for the arguments.
    """
    orchestrator = BatchOrchestrator(account_client, RetryExecutor(policy), console=console)
    return await orchestrator.run_batch(mode, accounts, contact_types, record, confirm)
