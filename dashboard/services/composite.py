"""
Composite writes: a base record plus one-to-one dependent sub-records.

The base write decides the outcome. On create, dependents are best effort and
any that fail are reported in the result instead of failing the request; on
update every step is awaited directly and errors propagate.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel

from dashboard.exceptions import StoreError
from dashboard.schemas.composite import CompositeStatus, CompositeWriteResult
from dashboard.schemas.scholarship import Scholarship
from dashboard.store.gateway import RecordStoreGateway

logger = logging.getLogger(__name__)


class CompositeWriteCoordinator:
    """Keeps a base entity and its dependent sub-records in step."""

    def __init__(
        self,
        gateway: RecordStoreGateway,
        base_collection: str,
        dependents: Mapping[str, str],
        foreign_key: str,
        model: Optional[Type[BaseModel]] = None,
    ):
        """
        Args:
            gateway: Gateway every write goes through
            base_collection: Table of the base entity
            dependents: Payload name -> dependent table, e.g. ``{"benefits": "scholarship_benefits"}``
            foreign_key: Column on each dependent table holding the base id
            model: Optional schema the base record is returned as
        """
        self.gateway = gateway
        self.base_collection = base_collection
        self.dependents = dict(dependents)
        self.foreign_key = foreign_key
        self.model = model

    def _record(self, row: Dict[str, Any]) -> Any:
        return self.model.model_validate(row) if self.model else row

    def _present(self, payloads: Mapping[str, Optional[Dict[str, Any]]]):
        for name, collection in self.dependents.items():
            payload = payloads.get(name)
            if payload:
                yield name, collection, payload

    async def create(
        self,
        base_fields: Dict[str, Any],
        dependents: Mapping[str, Optional[Dict[str, Any]]],
    ) -> CompositeWriteResult:
        # The base id is needed to tag every dependent, so it goes first
        created = await self.gateway.create(self.base_collection, base_fields)
        base_id = created["id"]
        result = CompositeWriteResult(record=self._record(created))

        for name, collection, payload in self._present(dependents):
            try:
                await self.gateway.create(collection, {**payload, self.foreign_key: base_id})
            except StoreError as e:
                logger.error(
                    f"Error creating {name} for {self.base_collection} {base_id}: {str(e)}"
                )
                result.failed_dependents.append(name)

        if result.failed_dependents:
            result.status = CompositeStatus.BASE_ONLY
        return result

    async def update(
        self,
        base_id: Any,
        base_fields: Dict[str, Any],
        dependents: Mapping[str, Optional[Dict[str, Any]]],
    ) -> CompositeWriteResult:
        """
        Update the base record, then upsert each supplied dependent by probe.

        The probe and the following write are two round trips; two editors
        racing on the same record resolve as last writer wins remotely.
        """
        updated = await self.gateway.update(self.base_collection, base_id, base_fields)

        for name, collection, payload in self._present(dependents):
            existing = await self.gateway.find_one(collection, **{self.foreign_key: base_id})
            if existing:
                await self.gateway.update(collection, existing["id"], payload)
            else:
                await self.gateway.create(collection, {**payload, self.foreign_key: base_id})

        return CompositeWriteResult(record=self._record(updated))


SCHOLARSHIP_DEPENDENTS = {
    "eligibility": "scholarship_eligibility",
    "benefits": "scholarship_benefits",
}
SCHOLARSHIP_SELECT = "*, scholarship_eligibility(*), scholarship_benefits(*)"


class ScholarshipService:
    """Scholarships and their eligibility/benefits sub-records."""

    collection = "scholarships"

    def __init__(self, gateway: RecordStoreGateway):
        self.gateway = gateway
        self.coordinator = CompositeWriteCoordinator(
            gateway,
            self.collection,
            SCHOLARSHIP_DEPENDENTS,
            foreign_key="scholarship_id",
            model=Scholarship,
        )

    @staticmethod
    def _split(payload: Dict[str, Any]):
        base = {k: v for k, v in payload.items() if k not in SCHOLARSHIP_DEPENDENTS}
        dependents = {k: payload.get(k) for k in SCHOLARSHIP_DEPENDENTS}
        return base, dependents

    async def list(self) -> List[Scholarship]:
        return await self.gateway.list(self.collection, columns=SCHOLARSHIP_SELECT, model=Scholarship)

    async def create(self, payload: Dict[str, Any]) -> CompositeWriteResult:
        base, dependents = self._split(payload)
        return await self.coordinator.create(base, dependents)

    async def update(self, scholarship_id: Any, payload: Dict[str, Any]) -> CompositeWriteResult:
        base, dependents = self._split(payload)
        return await self.coordinator.update(scholarship_id, base, dependents)

    async def delete(self, scholarship_id: Any) -> None:
        await self.gateway.delete(self.collection, scholarship_id)
