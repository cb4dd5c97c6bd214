"""
Library endpoints for API v1.

Each of the four collections (books, issues, returns, fines) gets the
same CRUD routes under ``/library/<collection>/``; ``?q=`` on the list
route searches the collection's text fields.  Creating an issue or a
return goes through the coordinated operations of ``LibraryService``,
which also update the book's status and close the matching issue.

Additional routes:

* ``POST /library/issues/{id}/renew`` – extend the due date;
* ``POST /library/issues/mark-overdue`` – flag issues past their due date;
* ``POST /library/fines/{id}/pay`` and ``/waive`` – settle a fine;
* ``GET /library/stats`` – library summary.
"""

from typing import Any, Awaitable, Callable, List, Optional, Type

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from campus_admin_api.app.api.dependencies import get_library_service
from campus_admin_api.app.core.exceptions import NotFoundError
from campus_admin_api.app.schemas.library import (
    BookCreate,
    BookRead,
    BookUpdate,
    FineCreate,
    FinePayment,
    FineRead,
    FineUpdate,
    FineWaiver,
    IssueCreate,
    IssueRead,
    IssueRenewal,
    IssueUpdate,
    ReturnCreate,
    ReturnRead,
    ReturnUpdate,
)
from campus_admin_api.app.schemas.stats import LibraryStats
from campus_admin_api.app.services.library_service import LibraryService


router = APIRouter()

CreateHandler = Callable[[LibraryService, Any], Awaitable[Any]]


@router.get("/stats", response_model=LibraryStats)
async def library_stats(library: LibraryService = Depends(get_library_service)) -> LibraryStats:
    return await library.get_stats()


@router.post("/issues/mark-overdue", response_model=List[IssueRead])
async def mark_overdue_issues(library: LibraryService = Depends(get_library_service)) -> List[IssueRead]:
    """Flag every active issue whose due date has passed; returns the flagged issues."""
    return await library.mark_overdue_issues()


@router.post("/issues/{issue_id}/renew", response_model=IssueRead)
async def renew_issue(
    issue_id: str,
    renewal: Optional[IssueRenewal] = None,
    library: LibraryService = Depends(get_library_service),
) -> IssueRead:
    """Extend the due date of an issue.

    Answers 422 when the issue was already returned or has used all of
    its renewals.
    """
    try:
        renewal = renewal or IssueRenewal()
        return await library.renew_issue(issue_id, renewal.days)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/fines/{fine_id}/pay", response_model=FineRead)
async def pay_fine(
    fine_id: str,
    payment: Optional[FinePayment] = None,
    library: LibraryService = Depends(get_library_service),
) -> FineRead:
    try:
        payment = payment or FinePayment()
        return await library.pay_fine(fine_id, payment.payment_method, payment.payment_date)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/fines/{fine_id}/waive", response_model=FineRead)
async def waive_fine(
    fine_id: str,
    waiver: Optional[FineWaiver] = None,
    library: LibraryService = Depends(get_library_service),
) -> FineRead:
    try:
        return await library.waive_fine(fine_id, waiver.notes if waiver else None)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


def add_collection_routes(
    collection: str,
    read_model: Type[BaseModel],
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    create: Optional[CreateHandler] = None,
) -> None:
    """Register list/create/get/update/delete routes for one collection."""
    label = collection[:-1].capitalize()

    @router.get(f"/{collection}/", response_model=List[read_model], name=f"list_{collection}")
    async def list_records(
        q: Optional[str] = Query(None, description="Substring of any text field"),
        library: LibraryService = Depends(get_library_service),
    ):
        if q:
            return await library.search(collection, q)
        return await library.collection(collection).list_all()

    @router.post(
        f"/{collection}/",
        response_model=read_model,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{collection}",
    )
    async def create_record(
        payload: create_model,
        library: LibraryService = Depends(get_library_service),
    ):
        if create is not None:
            return await create(library, payload)
        return await library.collection(collection).create(payload)

    @router.get(f"/{collection}/{{record_id}}", response_model=read_model, name=f"get_{collection}")
    async def get_record(record_id: str, library: LibraryService = Depends(get_library_service)):
        record = await library.collection(collection).get_by_id(record_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} {record_id} not found")
        return record

    @router.put(f"/{collection}/{{record_id}}", response_model=read_model, name=f"update_{collection}")
    async def update_record(
        record_id: str,
        updates: update_model,
        library: LibraryService = Depends(get_library_service),
    ):
        try:
            return await library.collection(collection).update(record_id, updates)
        except NotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    @router.delete(
        f"/{collection}/{{record_id}}",
        status_code=status.HTTP_204_NO_CONTENT,
        name=f"delete_{collection}",
    )
    async def delete_record(record_id: str, library: LibraryService = Depends(get_library_service)) -> None:
        try:
            await library.collection(collection).delete(record_id)
        except NotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


add_collection_routes("books", BookRead, BookCreate, BookUpdate)
add_collection_routes(
    "issues", IssueRead, IssueCreate, IssueUpdate, create=lambda library, payload: library.create_issue(payload)
)
add_collection_routes(
    "returns", ReturnRead, ReturnCreate, ReturnUpdate, create=lambda library, payload: library.create_return(payload)
)
add_collection_routes("fines", FineRead, FineCreate, FineUpdate)
