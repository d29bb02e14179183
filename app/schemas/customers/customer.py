# app/schemas/customers/customer.py
from pydantic import BaseModel, Field
from typing import List

class CustomerResponse(BaseModel):
    customerEmail: str
    customerName: str
    phone: str
    appointmentCount: int = Field(ge=1)
    lastAppointment: str

class CustomerRosterResponse(BaseModel):
    Customers: List[CustomerResponse]
    Count: int
    startDate: str
    endDate: str
