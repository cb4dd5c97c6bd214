"""
Business logic for the library: books, issues, returns and fines.

Each collection has its own CRUD service (``books``, ``issues``,
``returns`` and ``fines``).  ``LibraryService`` wraps them and adds the
operations that touch more than one collection:

``create_issue``
    Stores the issue and marks the book as ``issued``.
``create_return``
    Stores the return, marks the book ``available`` again and closes
    the matching issue.
``renew_issue`` / ``mark_overdue_issues``
    Due date bookkeeping for issues.
``pay_fine`` / ``waive_fine``
    Settle a pending fine.

References between the collections are plain ids.  When an issue or
return points at a book that does not exist the record is still stored;
the missing book is only logged.  The steps of a coordinated operation
are not atomic: if a later step fails, earlier ones stay applied.
"""

import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationFailedError
from ..core.latency import Latency
from ..core.repository import RecordRepository
from ..schemas.library import (
    DEFAULT_LOAN_DAYS,
    BookRead,
    FineRead,
    IssueCreate,
    IssueRead,
    ReturnCreate,
    ReturnRead,
)
from ..schemas.stats import LibraryStats
from .base import CRUDService, Payload, parse_payload


# Issue statuses of a book that is still out on loan.
ON_LOAN = ("active", "overdue")

# Fields matched by ``LibraryService.search`` per collection.
SEARCH_FIELDS: Dict[str, Sequence[str]] = {
    "books": ("title", "author", "isbn", "category"),
    "issues": ("book_title", "student_name"),
    "returns": ("book_title", "student_name"),
    "fines": ("student_name", "book_title", "reason"),
}


def match_issue(issues: List[IssueRead], book_id: str, issue_id: Optional[str] = None) -> Optional[IssueRead]:
    """Pick the issue a return closes.

    The issue named by ``issue_id`` wins when it is still on loan.
    Otherwise the first issue in store order for ``book_id`` that is on
    loan is used.
    """
    on_loan = [issue for issue in issues if issue.status in ON_LOAN]
    if issue_id is not None:
        for issue in on_loan:
            if issue.id == issue_id:
                return issue
    for issue in on_loan:
        if issue.book_id == book_id:
            return issue
    return None


def summarize_library(
    books: List[BookRead],
    issues: List[IssueRead],
    returns: List[ReturnRead],
    fines: List[FineRead],
) -> LibraryStats:
    pending = [fine for fine in fines if fine.status == "pending"]
    return LibraryStats(
        total_books=len(books),
        available_books=sum(1 for book in books if book.status == "available"),
        issued_books=sum(1 for book in books if book.status == "issued"),
        active_issues=sum(1 for issue in issues if issue.status == "active"),
        overdue_issues=sum(1 for issue in issues if issue.status == "overdue"),
        total_returns=len(returns),
        pending_fines=len(pending),
        outstanding_fine_amount=round(sum(fine.amount for fine in pending), 2),
    )


class LibraryService:
    """Сервис библиотеки: книги, выдачи, возвраты и штрафы.

    Parameters
    ----------
    books, issues, returns, fines: RecordRepository
        Data sources of the four collections.
    latency: Latency, optional
        Simulated latency shared by all collections.
    late_fee_per_day: float
        Fee used to derive ``fine_amount`` of a return that does not
        state one.
    """

    def __init__(
        self,
        books: RecordRepository,
        issues: RecordRepository,
        returns: RecordRepository,
        fines: RecordRepository,
        latency: Optional[Latency] = None,
        late_fee_per_day: float = 0.0,
    ) -> None:
        self.latency = latency or Latency(0)
        self.books: CRUDService[BookRead] = CRUDService(books, self.latency)
        self.issues: CRUDService[IssueRead] = CRUDService(issues, self.latency)
        self.returns: CRUDService[ReturnRead] = CRUDService(returns, self.latency)
        self.fines: CRUDService[FineRead] = CRUDService(fines, self.latency)
        self.late_fee_per_day = late_fee_per_day

    def collection(self, name: str) -> CRUDService:
        """Return the CRUD service for ``books``, ``issues``, ``returns`` or ``fines``."""
        if name not in SEARCH_FIELDS:
            raise ValidationFailedError(f"collection: unknown library collection {name!r}")
        return getattr(self, name)

    async def _set_book_status(self, book_id: str, status: str) -> None:
        logger = logging.getLogger(__name__)
        repository = self.books.repository
        if await repository.get_record(book_id) is None:
            logger.warning("Book %s not found; status %r not applied", book_id, status)
            return
        await repository.update_record(book_id, {"status": status})
        logger.info("Book %s is now %s", book_id, status)

    # ------------------------------------------------------------------
    # Coordinated operations
    # ------------------------------------------------------------------
    async def create_issue(self, payload: Payload) -> IssueRead:
        """Issue a book to a student.

        The referenced book's status becomes ``issued``.  A missing book
        does not prevent the issue from being stored.
        """
        data = parse_payload(IssueCreate, payload)
        if not data.book_title:
            book = await self.books.repository.get_record(data.book_id)
            if book is not None:
                data = data.model_copy(update={"book_title": book.get("title", "")})
        issue = await self.issues.create(data)
        await self._set_book_status(issue.book_id, "issued")
        return issue

    async def create_return(self, payload: Payload) -> ReturnRead:
        """Record a returned book.

        The book becomes ``available`` again and the matching issue is
        marked ``returned`` (see :func:`match_issue`).  When the payload
        leaves them out, ``due_date`` is taken from the issue,
        ``days_late`` is computed from the due date and ``fine_amount``
        is ``days_late`` times the configured late fee.
        """
        logger = logging.getLogger(__name__)
        data = parse_payload(ReturnCreate, payload)
        issues = await self.issues.snapshot()
        issue = match_issue(issues, data.book_id, data.issue_id)

        changes: Dict[str, object] = {}
        due_date = data.due_date
        if issue is not None:
            changes["issue_id"] = issue.id
            if due_date is None:
                due_date = issue.due_date
                changes["due_date"] = due_date
            if not data.book_title:
                changes["book_title"] = issue.book_title
            if not data.student_name:
                changes["student_name"] = issue.student_name
        days_late = data.days_late
        if days_late is None:
            days_late = max((data.return_date - due_date).days, 0) if due_date else 0
            changes["days_late"] = days_late
        if data.fine_amount is None:
            changes["fine_amount"] = round(days_late * self.late_fee_per_day, 2)

        record = await self.returns.create(data.model_copy(update=changes))
        await self._set_book_status(record.book_id, "available")
        if issue is None:
            logger.warning("No open issue found for book %s; nothing to close", record.book_id)
        else:
            await self.issues.repository.update_record(issue.id, {"status": "returned"})
            logger.info("Issue %s closed by return %s", issue.id, record.id)
        return record

    async def renew_issue(self, issue_id: str, days: int = DEFAULT_LOAN_DAYS) -> IssueRead:
        """Extend the due date of an issue by ``days``.

        Raises
        ------
        NotFoundError
            If the issue does not exist.
        ValidationFailedError
            If the issue was returned or has no renewals left.
        """
        logger = logging.getLogger(__name__)
        if days <= 0:
            raise ValidationFailedError("days: must be greater than 0")
        await self.latency.wait("update")
        record = await self.issues.repository.get_record(str(issue_id))
        if record is None:
            raise NotFoundError("Issue", str(issue_id))
        issue = self.issues.to_read(record)
        if issue.status == "returned":
            raise ValidationFailedError(f"Issue {issue.id} has already been returned")
        if issue.renewal_count >= issue.max_renewals:
            raise ValidationFailedError(
                f"Issue {issue.id} reached the maximum of {issue.max_renewals} renewals"
            )
        changes = {
            "due_date": (issue.due_date + timedelta(days=days)).isoformat(),
            "renewal_count": issue.renewal_count + 1,
            "status": "active",
        }
        updated = await self.issues.repository.update_record(issue.id, changes)
        logger.info("Renewed issue %s until %s", issue.id, changes["due_date"])
        return self.issues.to_read(updated)

    async def mark_overdue_issues(self, today: Optional[date] = None) -> List[IssueRead]:
        """Flag active issues whose due date has passed; return the flagged issues."""
        logger = logging.getLogger(__name__)
        today = today or date.today()
        await self.latency.wait("update")
        flagged: List[IssueRead] = []
        for record in await self.issues.repository.list_records():
            issue = self.issues.to_read(record)
            if issue.status == "active" and issue.due_date < today:
                updated = await self.issues.repository.update_record(issue.id, {"status": "overdue"})
                flagged.append(self.issues.to_read(updated))
        if flagged:
            logger.info("Marked %d issues overdue", len(flagged))
        return flagged

    async def _settle_fine(self, fine_id: str, changes: Dict[str, object]) -> FineRead:
        await self.latency.wait("update")
        record = await self.fines.repository.get_record(str(fine_id))
        if record is None:
            raise NotFoundError("Fine", str(fine_id))
        fine = self.fines.to_read(record)
        if fine.status != "pending":
            raise ValidationFailedError(f"Fine {fine.id} is already {fine.status}")
        updated = await self.fines.repository.update_record(fine.id, changes)
        logging.getLogger(__name__).info("Fine %s is now %s", fine.id, changes["status"])
        return self.fines.to_read(updated)

    async def pay_fine(
        self, fine_id: str, payment_method: str = "cash", payment_date: Optional[date] = None
    ) -> FineRead:
        return await self._settle_fine(
            fine_id,
            {
                "status": "paid",
                "payment_method": payment_method,
                "payment_date": (payment_date or date.today()).isoformat(),
            },
        )

    async def waive_fine(self, fine_id: str, notes: Optional[str] = None) -> FineRead:
        changes: Dict[str, object] = {"status": "waived"}
        if notes is not None:
            changes["notes"] = notes
        return await self._settle_fine(fine_id, changes)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    async def search(self, collection: str, query: str) -> list:
        """Case‑insensitive substring search over the text fields of a collection."""
        service = self.collection(collection)
        await self.latency.wait("query")
        needle = query.strip().lower()
        fields = SEARCH_FIELDS[collection]
        return [
            item
            for item in await service.snapshot()
            if any(needle in str(getattr(item, field) or "").lower() for field in fields)
        ]

    async def get_stats(self) -> LibraryStats:
        await self.latency.wait("stats")
        return summarize_library(
            await self.books.snapshot(),
            await self.issues.snapshot(),
            await self.returns.snapshot(),
            await self.fines.snapshot(),
        )
