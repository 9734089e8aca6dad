"""Report export configuration: columns, accessors, summary and date range"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union


@dataclass(frozen=True)
class FieldAccessor:
    """Reads a named field from a row (mapping key or attribute)"""

    name: str


@dataclass(frozen=True)
class ComputedAccessor:
    """Derives a cell from the whole row. Errors raised by `fn` propagate."""

    fn: Callable[[Any], Any]


Accessor = Union[FieldAccessor, ComputedAccessor]


@dataclass(frozen=True)
class Column:
    header: str
    accessor: Accessor
    align: Optional[str] = None  # "left" | "center" | "right"


@dataclass(frozen=True)
class SummaryItem:
    label: str
    value: Union[str, int, float, Decimal]


@dataclass(frozen=True)
class DateRange:
    start: str
    end: str

    @property
    def label(self) -> str:
        return f"Period: {self.start} to {self.end}"


@dataclass(frozen=True)
class ExportOptions:
    title: str
    filename: str
    columns: Sequence[Column]
    data: Sequence[Any]
    summary: Sequence[SummaryItem] = field(default_factory=tuple)
    date_range: Optional[DateRange] = None

    @property
    def headers(self) -> List[str]:
        return [col.header for col in self.columns]


def field_value(row: Any, name: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def resolve_value(column: Column, row: Any) -> Any:
    """Raw cell value for `row`; None when a field is missing"""
    accessor = column.accessor
    if isinstance(accessor, FieldAccessor):
        return field_value(row, accessor.name)
    if isinstance(accessor, ComputedAccessor):
        return accessor.fn(row)
    raise TypeError(f"Unsupported column accessor: {accessor!r}")


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def resolve_cell(column: Column, row: Any) -> str:
    """Cell text for `row`; missing values render as an empty string"""
    return to_text(resolve_value(column, row))


def resolve_row(columns: Sequence[Column], row: Any) -> List[str]:
    return [resolve_cell(col, row) for col in columns]


def spreadsheet_value(value: Any) -> Any:
    """Keep numbers and dates typed for spreadsheets, stringify the rest"""
    if isinstance(value, bool):
        return to_text(value)
    if isinstance(value, datetime) and value.tzinfo is not None:
        # Spreadsheet cells carry no timezone
        return value.replace(tzinfo=None)
    if isinstance(value, (int, float, Decimal, date)):
        return value
    return to_text(value)
