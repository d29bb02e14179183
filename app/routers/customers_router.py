from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
import logging

from ..application.services.appointments_service import AppointmentsService
from ..application.services.customers_service import CustomersService
from ..application.services.date_range_aggregator import DateRangeAggregator, ServiceDateSource
from ..config import settings
from ..exceptions import create_success_response
from ..schemas.common.common import ErrorResponse, MessageResponse
from ..schemas.customers.customer import CustomerResponse, CustomerRosterResponse
from .appointments_router import get_appointments_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tenants/{tenant_id}/customers",
    tags=["Customers"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def get_customers_service(appt_service: AppointmentsService = Depends(get_appointments_service)) -> CustomersService:
    return CustomersService(
        aggregator=DateRangeAggregator(source=ServiceDateSource(appt_service), max_range_days=settings.MAX_RANGE_DAYS),
        lookback_days=settings.CUSTOMER_LOOKBACK_DAYS,
        lookahead_days=settings.CUSTOMER_LOOKAHEAD_DAYS,
    )


@router.get("", response_model=MessageResponse)
async def get_customers(
    tenant_id: str,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    search: Optional[str] = None,
    customers_service: CustomersService = Depends(get_customers_service),
):
    """Customer roster derived from the appointments in a date window.

    Without dates the window runs from 90 days ago to 30 days ahead.
    """
    try:
        roster = await customers_service.get_roster(tenant_id, startDate, endDate, search)
        customers = [CustomerResponse(**c.to_dict()) for c in roster.customers]
        data = CustomerRosterResponse(
            Customers=customers,
            Count=len(customers),
            startDate=roster.start_date,
            endDate=roster.end_date,
        )
        return create_success_response("Successfully derived customer roster", data.model_dump())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Deriving customers for tenant {tenant_id} failed: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
