"""Outcome of a write that spans a base record and its sub-records."""

from enum import Enum
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

RecordT = TypeVar("RecordT")


class CompositeStatus(str, Enum):
    FULLY_CONSISTENT = "fully_consistent"
    BASE_ONLY = "base_only"


class CompositeWriteResult(BaseModel, Generic[RecordT]):
    """
    ``status`` is ``base_only`` when the base record was saved but one or more
    sub-records (named in ``failed_dependents``) were not.
    """
    record: RecordT
    status: CompositeStatus = CompositeStatus.FULLY_CONSISTENT
    failed_dependents: List[str] = Field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return self.status == CompositeStatus.FULLY_CONSISTENT
