"""Data models for alternate contact batch operations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from .exceptions import ContactManagerError


class ContactType(str, Enum):
    """Alternate contact types supported by the AWS Account API."""

    BILLING = "BILLING"
    OPERATIONS = "OPERATIONS"
    SECURITY = "SECURITY"

    @property
    def display_name(self) -> str:
        """Title-cased name used in reports and exported JSON."""
        return self.value.title()


class BatchMode(str, Enum):
    """Operation applied to every cell of a batch."""

    LIST = "list"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ContactRecord:
    """An alternate contact as stored by the AWS Account API."""

    email_address: str
    name: str
    phone_number: str
    title: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ContactRecord":
        """Build a record from an ``AlternateContact`` response dictionary."""
        return cls(
            email_address=data.get("EmailAddress", ""),
            name=data.get("Name", ""),
            phone_number=data.get("PhoneNumber", ""),
            title=data.get("Title", ""),
        )

    def to_api(self) -> Dict[str, str]:
        """Render the record with the Account API field names."""
        return {
            "EmailAddress": self.email_address,
            "Name": self.name,
            "PhoneNumber": self.phone_number,
            "Title": self.title,
        }


# Operation outcomes


@dataclass(frozen=True)
class Success:
    """Every cell of the batch succeeded."""

    exit_code = 0

    def __str__(self) -> str:
        return "Operation completed successfully"


@dataclass(frozen=True)
class PartialSuccess:
    """At least one cell succeeded and at least one failed."""

    errors: Tuple[ContactManagerError, ...]
    exit_code = 0

    def __str__(self) -> str:
        return f"Operation completed with {len(self.errors)} errors"


@dataclass(frozen=True)
class Failure:
    """The batch failed as a whole."""

    error: ContactManagerError
    exit_code = 1

    def __str__(self) -> str:
        return f"Operation failed: {self.error}"


@dataclass(frozen=True)
class Cancelled:
    """The user declined to proceed."""

    exit_code = 0

    def __str__(self) -> str:
        return "Operation cancelled by user"


OperationOutcome = Union[Success, PartialSuccess, Failure, Cancelled]


def aggregate_outcome(errors: List[ContactManagerError], success_count: int) -> OperationOutcome:
    """Fold per-cell results into a single outcome.

    Args:
        errors: Errors accumulated in visitation order
        success_count: Number of cells that succeeded

    Returns:
        Success when nothing failed, PartialSuccess when something succeeded,
        otherwise Failure carrying the first error
    """
    if not errors:
        return Success()
    if success_count > 0:
        return PartialSuccess(errors=tuple(errors))
    return Failure(error=errors[0])


CellStatus = Literal["success", "not_found", "access_denied", "error", "skipped"]


@dataclass
class CellResult:
    """Result of processing one (account, contact type) cell."""

    account_id: str
    contact_type: str
    status: CellStatus
    contact: Optional[ContactRecord] = None
    error: Optional[ContactManagerError] = None

    def is_successful(self) -> bool:
        """Check whether the cell counts towards the success total."""
        return self.status in ("success", "not_found")

    def to_json_value(self) -> Union[Dict[str, str], str]:
        """Value stored in the List result map for this cell."""
        if self.contact is not None:
            return self.contact.to_api()
        if self.status == "not_found":
            return "Null"
        if self.status == "access_denied":
            return "AccessDenied"
        return "Error"


@dataclass
class BatchResult:
    """Aggregated result of a batch run."""

    mode: BatchMode
    total_cells: int
    cells: List[CellResult] = field(default_factory=list)
    errors: List[ContactManagerError] = field(default_factory=list)
    outcome: OperationOutcome = field(default_factory=Success)
    aborted: bool = False
    duration: float = 0.0

    @property
    def success_count(self) -> int:
        """Number of cells that counted as successful."""
        return sum(1 for cell in self.cells if cell.is_successful())

    @property
    def visited_cells(self) -> int:
        return len(self.cells)

    def to_contact_map(self) -> Dict[str, Dict[str, Any]]:
        """Render List results as ``{account: {ContactType: value}}``.

        Skipped cells (unknown contact types) are left out, matching the
        fact that they were never queried.
        """
        result: Dict[str, Dict[str, Any]] = {}
        for cell in self.cells:
            type_map = result.setdefault(cell.account_id, {})
            if cell.status == "skipped":
                continue
            type_map[cell.contact_type] = cell.to_json_value()
        return result
