from typing import Optional

from fastapi import APIRouter, Query, status

from db import SessionDep
from schemas import (
    DonationCreate,
    DonationList,
    DonationRead,
    DonationResponse,
    DonationStatusUpdate,
    MessageResponse,
)
from services import donations as donation_service
from .auth import IdentityDep

router = APIRouter(tags=["donations"])


@router.post(
    "/donations",
    response_model=DonationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_donation(
    donation_in: DonationCreate,
    session: SessionDep,
    identity: IdentityDep,
):
    donation = donation_service.create_donation(session, identity, donation_in)
    return {"message": "Donation created successfully", "donation": donation}


@router.get("/donations", response_model=DonationList)
def list_donations(
    session: SessionDep,
    search: Optional[str] = None,
    food_type: Optional[str] = Query(default=None, alias="foodType"),
):
    """
    List available donations, newest first, optionally filtered by a
    search term and food type.
    """
    return donation_service.list_available_donations(
        session, search=search, food_type=food_type
    )


@router.get("/donations/{donation_id}", response_model=DonationRead)
def get_donation(donation_id: int, session: SessionDep):
    """
    Get a single donation by ID.
    """
    return donation_service.get_donation(session, donation_id)


@router.get("/my-donations", response_model=DonationList)
def list_my_donations(session: SessionDep, identity: IdentityDep):
    return donation_service.list_own_donations(session, identity)


@router.patch("/donations/{donation_id}", response_model=DonationResponse)
def update_donation_status(
    donation_id: int,
    update: DonationStatusUpdate,
    session: SessionDep,
    identity: IdentityDep,
):
    donation = donation_service.set_status(
        session, identity, donation_id, update.status
    )
    return {"message": "Donation updated successfully", "donation": donation}


@router.delete("/donations/{donation_id}", response_model=MessageResponse)
def delete_donation(
    donation_id: int,
    session: SessionDep,
    identity: IdentityDep,
):
    donation_service.remove(session, identity, donation_id)
    return {"message": "Donation deleted successfully"}
