"""
Shared building blocks for the entity schemas.

``PayloadModel`` is the base of every request and response model.  It
accepts both the canonical snake_case field names and their camelCase
spellings (``bookId``, ``enrollmentCount`` …) on input, which is the one
place where the field name aliasing of older clients is normalised.
Output always uses the snake_case names.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, List

from pydantic import AfterValidator, AliasGenerator, BaseModel, BeforeValidator, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel


def _as_record_id(value: Any) -> Any:
    # The record API hands out integer ids; the stores use strings.
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    return value


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


RecordId = Annotated[str, BeforeValidator(_as_record_id)]
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class PayloadModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=to_camel),
        populate_by_name=True,
        from_attributes=True,
    )


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_validation_errors(exc: ValidationError) -> List[str]:
    """Render pydantic errors as ``"<field>: <message>"`` strings."""
    messages: List[str] = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "payload"
        messages.append(f"{field}: {error['msg']}")
    return messages
