from fastapi import APIRouter, Depends, HTTPException
from typing import List

from dashboard.api.deps import get_gateway, get_inflight_guard, http_error
from dashboard.exceptions import StoreError
from dashboard.logging_config import get_logger
from dashboard.schemas.composite import CompositeWriteResult
from dashboard.schemas.scholarship import Scholarship, ScholarshipCreate, ScholarshipUpdate
from dashboard.services.composite import ScholarshipService
from dashboard.services.inflight import InFlightGuard
from dashboard.store.gateway import RecordStoreGateway

router = APIRouter()
logger = get_logger("api.scholarships")


def get_scholarship_service(gateway: RecordStoreGateway = Depends(get_gateway)) -> ScholarshipService:
    return ScholarshipService(gateway)


@router.get("/", response_model=List[Scholarship])
async def read_scholarships(service: ScholarshipService = Depends(get_scholarship_service)):
    """
    List scholarships with their eligibility and benefits.
    """
    try:
        return await service.list()
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error retrieving scholarships: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/", response_model=CompositeWriteResult[Scholarship], status_code=201)
async def create_new_scholarship(
    scholarship: ScholarshipCreate,
    service: ScholarshipService = Depends(get_scholarship_service),
):
    """
    Create a scholarship and any eligibility/benefits sent with it.

    The scholarship is created even if a sub-record fails; the response then
    has status ``base_only`` and lists the failed parts.
    """
    try:
        result = await service.create(scholarship.model_dump(mode="json", exclude_none=True))
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error creating scholarship: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
    if not result.is_consistent:
        logger.warning(
            f"Scholarship {result.record.id} saved without: {', '.join(result.failed_dependents)}"
        )
    return result


@router.put("/{scholarship_id}", response_model=CompositeWriteResult[Scholarship])
async def update_scholarship_details(
    scholarship_id: str,
    scholarship: ScholarshipUpdate,
    service: ScholarshipService = Depends(get_scholarship_service),
    guard: InFlightGuard = Depends(get_inflight_guard),
):
    """
    Update a scholarship; supplied sub-records are updated or created.
    """
    try:
        async with guard.hold("scholarships", scholarship_id):
            result = await service.update(
                scholarship_id, scholarship.model_dump(mode="json", exclude_unset=True)
            )
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error updating scholarship {scholarship_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
    return result


@router.delete("/{scholarship_id}", status_code=204)
async def delete_scholarship_by_id(
    scholarship_id: str,
    service: ScholarshipService = Depends(get_scholarship_service),
    guard: InFlightGuard = Depends(get_inflight_guard),
):
    try:
        async with guard.hold("scholarships", scholarship_id):
            await service.delete(scholarship_id)
    except StoreError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error deleting scholarship {scholarship_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
