from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from models import DonationStatus, RequestStatus, Role


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Identity(CamelModel):
    """Decoded bearer token payload: {"userId": ..., "email": ...}."""

    user_id: int
    email: str


class UserCreate(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    phone: str
    address: str
    role: Role


class LoginData(CamelModel):
    email: EmailStr
    password: str


class UserRead(CamelModel):
    id: int
    name: str
    email: str
    role: Role


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserRead


class MessageResponse(CamelModel):
    message: str


class DonationCreate(CamelModel):
    title: str = Field(min_length=1)
    description: str
    food_type: str
    quantity: str
    expiry_date: date
    location: str
    contact_info: str


class DonationRead(CamelModel):
    id: int
    title: str
    description: str
    food_type: str
    quantity: str
    expiry_date: date
    location: str
    contact_info: str
    donor_id: int
    donor_name: str
    status: DonationStatus
    created_at: datetime


class DonationResponse(CamelModel):
    message: str
    donation: DonationRead


class DonationStatusUpdate(CamelModel):
    status: str


class RequestCreate(CamelModel):
    donation_id: int
    reason: str


class RequestRead(CamelModel):
    id: int
    donation_id: int
    donation_title: str
    recipient_id: int
    recipient_name: str
    recipient_email: str
    recipient_phone: str
    reason: str
    status: RequestStatus
    donor_response: Optional[str] = None
    created_at: datetime


class RequestResponse(CamelModel):
    message: str
    request: RequestRead


class RequestStatusUpdate(CamelModel):
    status: str
    donor_response: Optional[str] = None


DonationList = List[DonationRead]
RequestList = List[RequestRead]
