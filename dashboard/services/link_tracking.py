"""
Click aggregation for the link-tracking page.

The hosted store exposes two grouped views of ``link_clicks``; this module
folds them into the totals, per-item breakdown and column set the page
renders. The pure functions do no I/O; ``LinkTrackingService`` loads the
inputs.
"""

import asyncio
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from urllib.parse import urlparse

from dashboard.logging_config import get_logger
from dashboard.schemas.link_tracking import (
    CategoryTotal,
    ClicksByItem,
    ClicksByPlatform,
    ItemClickGroup,
    LinkTrackingSummary,
    PlatformColumn,
    PlatformTotal,
)
from dashboard.store.gateway import RecordStoreGateway

logger = get_logger("services.link_tracking")

PLATFORM_LABELS = {
    "whatsapp": "WhatsApp",
    "linkedin": "LinkedIn",
    "newsletter": "Newsletter",
    "telegram": "Telegram",
}

CATEGORY_LABELS = {
    "event": ("Event", "Events"),
    "hackathon": ("Hackathon", "Hackathons"),
    "scholarship": ("Scholarship", "Scholarships"),
}

# Category -> (collection, label column) used to put names next to item ids
CATEGORY_SOURCES = {
    "event": ("events", "name"),
    "hackathon": ("hackathons", "name"),
    "scholarship": ("scholarships", "title"),
}

ALL = "all"


def platform_label(platform: str) -> str:
    """Display label of a platform; unseen tags show as-is."""
    return PLATFORM_LABELS.get(platform, platform)


def category_label(category: str, plural: bool = False) -> str:
    labels = CATEGORY_LABELS.get(category)
    if labels is None:
        return category
    return labels[1] if plural else labels[0]


def percent_of_total(clicks: int, total: int) -> Optional[int]:
    """
    Whole-number share of ``total``, rounded half up.

    Returns None when there are no clicks at all so nothing is displayed.
    """
    if not total:
        return None
    return math.floor(clicks / total * 100 + 0.5)


def destination_host(url: Optional[str]) -> Optional[str]:
    if not url:
        return url
    host = urlparse(url).hostname
    return host or url


def _sorted_totals(totals: Dict[str, int]) -> List[Tuple[str, int]]:
    # Count descending, key name as a deterministic tie-break
    return sorted(totals.items(), key=lambda item: (-item[1], item[0]))


def platform_totals(rows: Iterable[ClicksByPlatform], total_clicks: int = 0) -> List[PlatformTotal]:
    totals: Dict[str, int] = {}
    for row in rows:
        totals[row.platform] = totals.get(row.platform, 0) + row.clicks
    return [
        PlatformTotal(
            platform=platform,
            label=platform_label(platform),
            clicks=clicks,
            percent_of_total=percent_of_total(clicks, total_clicks),
        )
        for platform, clicks in _sorted_totals(totals)
    ]


def category_totals(rows: Iterable[ClicksByPlatform]) -> List[CategoryTotal]:
    totals: Dict[str, int] = {}
    for row in rows:
        totals[row.item_type] = totals.get(row.item_type, 0) + row.clicks
    return [
        CategoryTotal(item_type=item_type, label=category_label(item_type, plural=True), clicks=clicks)
        for item_type, clicks in _sorted_totals(totals)
    ]


def group_items(rows: Iterable[ClicksByItem]) -> List[ItemClickGroup]:
    """
    Group item-level rows by (category, item id).

    Each group accumulates a per-platform click map and a running total. The
    first destination URL seen for an item is kept. Groups are returned by
    total, largest first.
    """
    groups: Dict[Tuple[str, str], ItemClickGroup] = {}
    for row in rows:
        key = (row.item_type, row.item_id)
        group = groups.get(key)
        if group is None:
            group = ItemClickGroup(
                item_type=row.item_type,
                item_id=row.item_id,
                destination_url=row.destination_url,
                destination_host=destination_host(row.destination_url),
            )
            groups[key] = group
        group.platforms[row.platform] = group.platforms.get(row.platform, 0) + row.clicks
        group.total += row.clicks

    return sorted(groups.values(), key=lambda g: (-g.total, g.item_type, g.item_id))


def filter_groups(
    groups: Sequence[ItemClickGroup],
    category: Optional[str] = None,
    platform: Optional[str] = None,
) -> List[ItemClickGroup]:
    """Restrict to one category and/or to items with clicks from one platform."""
    items = list(groups)
    if category and category != ALL:
        items = [g for g in items if g.item_type == category]
    if platform and platform != ALL:
        items = [g for g in items if g.platforms.get(platform)]
    return items


def platform_universe(rows: Iterable[ClicksByItem]) -> List[str]:
    """Every platform present in the item rows, one column each."""
    return sorted({row.platform for row in rows})


def build_summary(
    by_platform: Sequence[ClicksByPlatform],
    by_item: Sequence[ClicksByItem],
    total_clicks: int,
    category: Optional[str] = None,
    platform: Optional[str] = None,
    item_names: Optional[Dict[Tuple[str, str], str]] = None,
) -> LinkTrackingSummary:
    items = filter_groups(group_items(by_item), category=category, platform=platform)
    if item_names:
        for item in items:
            item.item_name = item_names.get((item.item_type, item.item_id))

    return LinkTrackingSummary(
        total_clicks=total_clicks,
        platform_totals=platform_totals(by_platform, total_clicks),
        category_totals=category_totals(by_platform),
        platforms=[
            PlatformColumn(platform=p, label=platform_label(p)) for p in platform_universe(by_item)
        ],
        items=items,
        category_filter=category if category != ALL else None,
        platform_filter=platform if platform != ALL else None,
    )


class LinkTrackingService:
    """Loads the click views and builds the summary."""

    def __init__(self, gateway: RecordStoreGateway):
        self.gateway = gateway

    async def fetch_clicks_by_platform(self) -> List[ClicksByPlatform]:
        return await self._fetch_view("link_clicks_by_platform", ClicksByPlatform)

    async def fetch_clicks_by_item(self) -> List[ClicksByItem]:
        return await self._fetch_view("link_clicks_by_item", ClicksByItem)

    async def fetch_total_clicks(self) -> int:
        return await self.gateway.count("link_clicks", raise_errors=True)

    async def _fetch_view(self, view: str, model):
        return await self.gateway.list_view(view, model=model)

    async def fetch_item_names(self) -> Dict[Tuple[str, str], str]:
        categories = list(CATEGORY_SOURCES.items())
        results = await asyncio.gather(
            *(self.gateway.list_names(collection, column) for _, (collection, column) in categories)
        )
        names: Dict[Tuple[str, str], str] = {}
        for (category, _), rows in zip(categories, results):
            for row in rows:
                if row.name:
                    names[(category, row.id)] = row.name
        return names

    async def load_summary(
        self,
        category: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> LinkTrackingSummary:
        by_platform, by_item, total, names = await asyncio.gather(
            self.fetch_clicks_by_platform(),
            self.fetch_clicks_by_item(),
            self.fetch_total_clicks(),
            self.fetch_item_names(),
        )
        logger.info(
            f"Loaded link tracking data: {total} clicks, {len(by_item)} item rows"
        )
        return build_summary(by_platform, by_item, total, category, platform, names)
