from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, computed_field

SortOrder = Literal["asc", "desc"]


class DateRange(BaseModel):
    field: str = "created_at"
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class FilterSpec(BaseModel):
    search_fields: Tuple[str, ...] = ()
    search: Optional[str] = None
    # Values are already coerced; None means the parameter was not supplied.
    equals: Dict[str, Any] = Field(default_factory=dict)
    date_range: Optional[DateRange] = None


class PageRequest(BaseModel):
    page: int = 1
    page_size: int = 10
    sort_field: str = "created_at"
    sort_order: SortOrder = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PageResult(BaseModel):
    items: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = Field(default=10, serialization_alias="pageSize")

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        if self.total <= 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size


class GroupCount(BaseModel):
    key: Any = None
    count: int = 0


class FlagCount(BaseModel):
    true: int = 0
    false: int = 0


class Stats(BaseModel):
    total: int = 0
    flags: Dict[str, FlagCount] = Field(default_factory=dict)
    groups: Dict[str, List[GroupCount]] = Field(default_factory=dict)
    sums: Dict[str, float] = Field(default_factory=dict)
    averages: Dict[str, float] = Field(default_factory=dict)


class DailyCount(BaseModel):
    date: str
    count: int = 0
    sum: float = 0.0


class ExportSpec(BaseModel):
    entity: str
    fields: Tuple[str, ...]
    filename_label: str = "All-Time"
