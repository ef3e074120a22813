"""
Shared building blocks for the schema modules.

``CamelModel`` maps snake_case attributes to the camelCase JSON keys
used by the admin UI.  ``PartialUpdate`` is the base for PATCH bodies:
only keys present in the request are merged onto the stored record.
Datetimes are kept as naive local time so that "today" and "this
month" are local calendar windows.
"""

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, ClassVar, Dict, FrozenSet, Optional

from pydantic import BaseModel, BeforeValidator, AfterValidator, ConfigDict
from pydantic.alias_generators import to_camel

CENTS = Decimal("0.01")

DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PartialUpdate(CamelModel):
    """Base class for partial update payloads."""

    # Fields that may be omitted but never cleared with an explicit null.
    required_fields: ClassVar[FrozenSet[str]] = frozenset()

    def changes(self) -> Dict[str, Any]:
        """Return the fields supplied by the caller, keyed by attribute name."""
        data = self.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in data.items()
            if value is not None or key not in self.required_fields
        }


def parse_money(value: Any) -> Decimal:
    """Parse a monetary value, treating missing or empty input as zero."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    text = str(value).strip()
    if not text:
        return Decimal("0")
    try:
        return Decimal(text)
    except InvalidOperation:
        return Decimal("0")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _date_only_to_midnight(value: Any) -> Any:
    # The admin UI posts plain ``yyyy-MM-dd`` dates for scheduling.
    if isinstance(value, str) and DATE_ONLY.fullmatch(value):
        return f"{value}T00:00:00"
    return value


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


OptionalMoney = Annotated[Optional[Decimal], BeforeValidator(_blank_to_none)]
LocalDateTime = Annotated[
    datetime,
    BeforeValidator(_date_only_to_midnight),
    AfterValidator(to_local_naive),
]
