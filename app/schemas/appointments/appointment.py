# app/schemas/appointments/appointment.py
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional

# Presence and format are checked by the service so that every violation
# maps to one of the enumerable caller-input messages. Unknown fields are rejected here.

class AppointmentBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

class AppointmentCreate(AppointmentBase):
    customerEmail: Optional[str] = None
    customerName: Optional[str] = None
    phone: Optional[str] = None
    startTime: Optional[str] = None  # YYYY-MM-DDTHH:MM:SS
    endTime: Optional[str] = None  # YYYY-MM-DDTHH:MM:SS
    status: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None

class AppointmentEdit(AppointmentBase):
    customerEmail: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None

class AppointmentDelete(AppointmentBase):
    customerEmail: Optional[str] = None
    startTime: Optional[str] = None

class AppointmentItems(BaseModel):
    Items: List[Dict[str, Any]]
    Count: int
