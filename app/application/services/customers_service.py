from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ...constants import DATE_FORMAT
from ..ports.appointments_repo import AppointmentRecord
from .date_range_aggregator import DateRangeAggregator


@dataclass
class CustomerRosterEntry:
    customer_email: str
    customer_name: str
    phone: str
    appointment_count: int
    last_appointment: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "customerEmail": self.customer_email,
            "customerName": self.customer_name,
            "phone": self.phone,
            "appointmentCount": self.appointment_count,
            "lastAppointment": self.last_appointment,
        }


@dataclass
class CustomerRoster:
    customers: List[CustomerRosterEntry]
    start_date: str
    end_date: str


def derive_customers(appointments: Iterable[AppointmentRecord]) -> List[CustomerRosterEntry]:
    """Reduce appointments to one entry per customer email, most recently active first.

    Name and phone come from the first appointment seen for an email. Records
    without an email (partial records left by an update) are ignored.
    """
    by_email: Dict[str, CustomerRosterEntry] = {}
    for appt in appointments:
        if not appt.customer_email:
            continue
        start_time = appt.start_time or ""
        existing = by_email.get(appt.customer_email)
        if existing is None:
            by_email[appt.customer_email] = CustomerRosterEntry(
                customer_email=appt.customer_email,
                customer_name=appt.customer_name or "",
                phone=appt.phone or "",
                appointment_count=1,
                last_appointment=start_time,
            )
            continue
        existing.appointment_count += 1
        # timestamps share one zero-padded format, so string order is time order
        if start_time > existing.last_appointment:
            existing.last_appointment = start_time
    return sorted(by_email.values(), key=lambda c: c.last_appointment, reverse=True)


def filter_customers(customers: List[CustomerRosterEntry], search: Optional[str]) -> List[CustomerRosterEntry]:
    q = (search or "").strip().lower()
    if not q:
        return customers
    return [
        c for c in customers
        if q in c.customer_name.lower() or q in c.customer_email.lower() or q in c.phone.lower()
    ]


def default_roster_window(today: date, lookback_days: int, lookahead_days: int) -> Tuple[str, str]:
    start = today - timedelta(days=lookback_days)
    end = today + timedelta(days=lookahead_days)
    return start.strftime(DATE_FORMAT), end.strftime(DATE_FORMAT)


@dataclass
class CustomersService:
    aggregator: DateRangeAggregator
    lookback_days: int = 90
    lookahead_days: int = 30

    async def get_roster(
        self,
        tenant_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        search: Optional[str] = None,
        today: Optional[date] = None,
    ) -> CustomerRoster:
        default_start, default_end = default_roster_window(today or date.today(), self.lookback_days, self.lookahead_days)
        start_date = start_date or default_start
        end_date = end_date or default_end
        appointments = await self.aggregator.get_appointments_for_date_range(tenant_id, start_date, end_date)
        customers = filter_customers(derive_customers(appointments), search)
        return CustomerRoster(customers=customers, start_date=start_date, end_date=end_date)
