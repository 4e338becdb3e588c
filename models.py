from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    donor = "donor"
    recipient = "recipient"


class DonationStatus(str, Enum):
    available = "available"
    claimed = "claimed"
    completed = "completed"


class RequestStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str
    phone: str
    address: str
    role: Role
    created_at: datetime = Field(default_factory=utcnow)


class Donation(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    donor_id: int = Field(foreign_key="user.id", index=True)
    # copied from the donor when the listing is created, never refreshed
    donor_name: str

    title: str
    description: str
    food_type: str
    quantity: str
    expiry_date: date
    location: str
    contact_info: str
    status: DonationStatus = Field(default=DonationStatus.available, index=True)
    created_at: datetime = Field(default_factory=utcnow)


class Request(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    donation_id: int = Field(foreign_key="donation.id", index=True)
    recipient_id: int = Field(foreign_key="user.id", index=True)

    # snapshots taken at creation time
    donation_title: str
    recipient_name: str
    recipient_email: str
    recipient_phone: str

    reason: str
    status: RequestStatus = RequestStatus.pending  # pending | accepted | rejected
    donor_response: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
