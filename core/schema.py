# core/schema.py

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

ON_TIME = 'On-Time'
DELAYED = 'Delayed'
CANCELLED = 'Cancelled'
FLIGHT_STATUSES = (ON_TIME, DELAYED, CANCELLED)

RISK_LEVELS = ('Low', 'Medium', 'High')

ALL = 'All'


def format_timestamp(value: datetime) -> str:
    """Formats a datetime as an ISO string in UTC with a trailing 'Z'."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_timestamp(value: str) -> datetime:
    """Parses an ISO string (with or without 'Z') into an aware UTC datetime."""
    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class FlightRecord:
    id: str
    flight_number: str
    airline: str
    departure_airport: str
    arrival_airport: str
    departure_time: datetime
    arrival_time: datetime
    status: str
    delay_minutes: int
    aircraft_type: str
    ticket_price: float
    passenger_count: int
    predicted_risk: str

    def __post_init__(self):
        if self.departure_airport == self.arrival_airport:
            raise ValueError(f"Flight {self.id}: departure and arrival airport are both '{self.departure_airport}'")
        if self.arrival_time <= self.departure_time:
            raise ValueError(f"Flight {self.id}: arrival must be after departure")
        if self.status not in FLIGHT_STATUSES:
            raise ValueError(f"Flight {self.id}: unknown status '{self.status}'")
        if self.predicted_risk not in RISK_LEVELS:
            raise ValueError(f"Flight {self.id}: unknown risk level '{self.predicted_risk}'")

        # Only delayed flights carry a delay; cancelled flights never do.
        if self.status == DELAYED and self.delay_minutes <= 0:
            raise ValueError(f"Flight {self.id}: delayed flights need a positive delay")
        if self.status != DELAYED and self.delay_minutes != 0:
            raise ValueError(f"Flight {self.id}: {self.status} flights cannot have a delay")

        if self.ticket_price <= 0:
            raise ValueError(f"Flight {self.id}: ticket price must be positive")
        if self.passenger_count <= 0:
            raise ValueError(f"Flight {self.id}: passenger count must be positive")

    def to_dict(self) -> dict:
        """Returns the record in its persisted (camelCase) layout."""
        return {
            'id': self.id,
            'flightNumber': self.flight_number,
            'airline': self.airline,
            'departureAirport': self.departure_airport,
            'arrivalAirport': self.arrival_airport,
            'departureTime': format_timestamp(self.departure_time),
            'arrivalTime': format_timestamp(self.arrival_time),
            'status': self.status,
            'delayMinutes': self.delay_minutes,
            'aircraftType': self.aircraft_type,
            'ticketPrice': self.ticket_price,
            'passengerCount': self.passenger_count,
            'predictedRisk': self.predicted_risk,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'FlightRecord':
        """
        Builds a record from its persisted layout.

        Raises:
            KeyError: if a field is missing.
            ValueError: if a field is malformed or an invariant is violated.
        """
        return cls(
            id=str(data['id']),
            flight_number=str(data['flightNumber']),
            airline=str(data['airline']),
            departure_airport=str(data['departureAirport']),
            arrival_airport=str(data['arrivalAirport']),
            departure_time=parse_timestamp(data['departureTime']),
            arrival_time=parse_timestamp(data['arrivalTime']),
            status=data['status'],
            delay_minutes=int(data['delayMinutes']),
            aircraft_type=str(data['aircraftType']),
            ticket_price=data['ticketPrice'],
            passenger_count=int(data['passengerCount']),
            predicted_risk=data['predictedRisk'],
        )


@dataclass(frozen=True)
class FilterSpec:
    search_term: str = ''
    status: str = ALL
    airline: str = ALL


@dataclass(frozen=True)
class AggregateStats:
    total_flights: int
    total_delays: int
    total_cancellations: int
    on_time_performance: int
    most_active_airport: str
    most_delayed_airline: str


@dataclass(frozen=True)
class ChartPoint:
    name: str
    value: int
    color: Optional[str] = None
