from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
import logging

from ..application.ports.appointments_repo import AppointmentsRepository
from ..application.services.appointments_service import AppointmentsService
from ..application.services.date_range_aggregator import DateRangeAggregator, ServiceDateSource
from ..config import settings
from ..constants import ERROR_MESSAGES
from ..exceptions import BadRequestError, create_success_response
from ..schemas.appointments.appointment import AppointmentCreate, AppointmentDelete, AppointmentEdit, AppointmentItems
from ..schemas.common.common import ErrorResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tenants/{tenant_id}/appointments",
    tags=["Appointments"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def get_record_store(request: Request) -> AppointmentsRepository:
    return request.app.state.record_store


def get_appointments_service(store: AppointmentsRepository = Depends(get_record_store)) -> AppointmentsService:
    return AppointmentsService(repo=store)


@router.post("", status_code=201, response_model=MessageResponse)
def create_appointment(
    tenant_id: str,
    appointment_data: AppointmentCreate,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        result = appt_service.create(tenant_id, appointment_data)
        logger.info(f"CreateAppointment succeeded for tenant {tenant_id}")
        return create_success_response("Appointment created", result)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"CreateAppointment failed: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("", response_model=MessageResponse)
def edit_appointment(
    tenant_id: str,
    appointment_data: AppointmentEdit,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        record = appt_service.edit(tenant_id, appointment_data)
        return create_success_response("Appointment updated", {"Attributes": record.to_item()})
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"EditAppointment failed: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("", response_model=MessageResponse)
def delete_appointment(
    tenant_id: str,
    appointment_data: AppointmentDelete,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        result = appt_service.delete(tenant_id, appointment_data)
        return create_success_response("Appointment deleted", result)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"DeleteAppointment failed: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("", response_model=MessageResponse)
async def list_appointments_for_range(
    tenant_id: str,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    """Appointments across an inclusive date window, ordered by start time."""
    if not startDate or not endDate:
        raise BadRequestError(ERROR_MESSAGES["MISSING_REQUIRED_FIELDS"])
    try:
        aggregator = DateRangeAggregator(source=ServiceDateSource(appt_service), max_range_days=settings.MAX_RANGE_DAYS)
        records = await aggregator.get_appointments_for_date_range(tenant_id, startDate, endDate)
        records.sort(key=lambda r: r.start_time or "")
        items = [r.to_item() for r in records]
        return create_success_response(
            "Successfully retrieved appointment details",
            AppointmentItems(Items=items, Count=len(items)).model_dump(),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Retrieving appointments for {startDate}..{endDate} failed: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{date}", response_model=MessageResponse)
def get_appointments_by_date(
    tenant_id: str,
    date: str,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        records = appt_service.get_by_date(tenant_id, date)
        items = [r.to_item() for r in records]
        return create_success_response(
            "Successfully retrieved appointment details",
            AppointmentItems(Items=items, Count=len(items)).model_dump(),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Retrieving appointment details failed: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
