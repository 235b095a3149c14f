"""
Link-click analytics schemas.

Rows of the two aggregated views are inputs; everything else is derived on
every load and never stored.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClicksByPlatform(BaseModel):
    """Row of ``link_clicks_by_platform``: clicks per (platform, category)."""
    platform: str
    item_type: str
    clicks: int = 0

    model_config = ConfigDict(extra="ignore")

class ClicksByItem(BaseModel):
    """Row of ``link_clicks_by_item``: clicks per (category, item, platform, URL)."""
    item_type: str
    item_id: str
    platform: str
    destination_url: Optional[str] = None
    clicks: int = 0

    model_config = ConfigDict(extra="ignore")

    @field_validator("item_id", mode="before")
    @classmethod
    def stringify_item_id(cls, v: Any) -> Any:
        # Items are keyed by id across int and uuid tables
        return str(v) if v is not None else v

class ItemName(BaseModel):
    id: str
    name: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        return str(v)


class PlatformTotal(BaseModel):
    platform: str
    label: str
    clicks: int
    percent_of_total: Optional[int] = Field(
        None, description="Share of all clicks; absent when there are no clicks yet"
    )

class CategoryTotal(BaseModel):
    item_type: str
    label: str
    clicks: int

class ItemClickGroup(BaseModel):
    """Clicks for one tracked item, broken down per platform."""
    item_type: str
    item_id: str
    destination_url: Optional[str] = None
    destination_host: Optional[str] = None
    item_name: Optional[str] = None
    platforms: Dict[str, int] = Field(default_factory=dict)
    total: int = 0

class PlatformColumn(BaseModel):
    platform: str
    label: str

class LinkTrackingSummary(BaseModel):
    total_clicks: int
    platform_totals: List[PlatformTotal]
    category_totals: List[CategoryTotal]
    platforms: List[PlatformColumn]
    items: List[ItemClickGroup]
    category_filter: Optional[str] = None
    platform_filter: Optional[str] = None
