"""Scholarship schemas: the base record plus its one-to-one sub-records."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .event import RecordId


def _first_or_none(value: Any) -> Any:
    # Embedded one-to-one relations come back as a list unless the FK is unique
    if isinstance(value, list):
        return value[0] if value else None
    return value


class EligibilityFields(BaseModel):
    criteria: Optional[str] = None
    education_level: Optional[str] = None
    nationality: Optional[str] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None

    model_config = ConfigDict(extra="allow")

class BenefitsFields(BaseModel):
    amount: Optional[float] = None
    currency: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(extra="allow")

class ScholarshipEligibility(EligibilityFields):
    id: Optional[RecordId] = None
    scholarship_id: Optional[RecordId] = None
    updated_at: Optional[datetime] = None

class ScholarshipBenefits(BenefitsFields):
    id: Optional[RecordId] = None
    scholarship_id: Optional[RecordId] = None
    updated_at: Optional[datetime] = None


class ScholarshipFields(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    link: Optional[str] = None

    model_config = ConfigDict(extra="allow")

class ScholarshipCreate(ScholarshipFields):
    """Base fields plus optional sub-record payloads, as submitted by the form."""
    title: str = Field(..., min_length=1)
    eligibility: Optional[EligibilityFields] = None
    benefits: Optional[BenefitsFields] = None

class ScholarshipUpdate(ScholarshipFields):
    eligibility: Optional[EligibilityFields] = None
    benefits: Optional[BenefitsFields] = None

class Scholarship(ScholarshipFields):
    """Scholarship with its embedded eligibility and benefits, when present."""
    id: RecordId
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    eligibility: Optional[ScholarshipEligibility] = None
    benefits: Optional[ScholarshipBenefits] = None

    @model_validator(mode="before")
    @classmethod
    def unpack_embedded(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "scholarship_eligibility" in data:
            data["eligibility"] = _first_or_none(data.pop("scholarship_eligibility"))
        if "scholarship_benefits" in data:
            data["benefits"] = _first_or_none(data.pop("scholarship_benefits"))
        return data

