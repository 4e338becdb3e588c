"""
Donation lifecycle: listing, browsing, status changes and removal.

Statuses move available -> claimed -> completed in the UI, but any of the
three values may be set by the owning donor; no ordering is enforced here.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, or_, select

from errors import DonationNotFound, InvalidStatus
from models import Donation, DonationStatus, Request
from schemas import DonationCreate, Identity
from services.auth import current_user

logger = logging.getLogger(__name__)


def _newest_first(query):
    return query.order_by(col(Donation.created_at).desc(), col(Donation.id).desc())


def create_donation(
    session: Session, identity: Identity, donation_in: DonationCreate
) -> Donation:
    """
    Create a listing owned by the caller, with the donor's name copied
    onto it. Role is not checked here; the client only offers this to donors.
    """
    donor = current_user(session, identity)

    donation = Donation(
        **donation_in.model_dump(),
        donor_id=donor.id,
        donor_name=donor.name,
        status=DonationStatus.available,
    )

    session.add(donation)
    session.commit()
    session.refresh(donation)

    logger.info("Donor %s created donation %s", donor.id, donation.id)
    return donation


def list_available_donations(
    session: Session,
    search: Optional[str] = None,
    food_type: Optional[str] = None,
) -> List[Donation]:
    """
    List available donations, newest first, optionally filtered by a
    free-text search and an exact food type.

    Returns an empty list instead of raising when the database can't be
    reached, so the browse page keeps rendering during an outage.
    """
    query = select(Donation).where(Donation.status == DonationStatus.available)

    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(
            or_(
                col(Donation.title).ilike(pattern),
                col(Donation.description).ilike(pattern),
                col(Donation.location).ilike(pattern),
                col(Donation.food_type).ilike(pattern),
            )
        )

    if food_type:
        query = query.where(Donation.food_type == food_type)

    try:
        return list(session.exec(_newest_first(query)).all())
    except SQLAlchemyError:
        logger.exception("Error loading donations")
        return []


def list_own_donations(session: Session, identity: Identity) -> List[Donation]:
    query = select(Donation).where(Donation.donor_id == identity.user_id)
    return list(session.exec(_newest_first(query)).all())


def get_donation(session: Session, donation_id: int) -> Donation:
    donation = session.get(Donation, donation_id)
    if donation is None:
        raise DonationNotFound()
    return donation


def parse_status(value: str) -> DonationStatus:
    try:
        return DonationStatus(value)
    except ValueError:
        raise InvalidStatus(
            "Status must be one of: available, claimed, completed"
        )


def set_status(
    session: Session, identity: Identity, donation_id: int, status: str
) -> Donation:
    """
    Set a donation's status. Only the owning donor may do this; anyone
    else gets the same not-found error as for an unknown id.
    """
    new_status = parse_status(status)

    donation = session.get(Donation, donation_id)
    if donation is None or donation.donor_id != identity.user_id:
        raise DonationNotFound()

    donation.status = new_status
    session.add(donation)
    session.commit()
    session.refresh(donation)

    logger.info("Donation %s marked %s", donation.id, new_status.value)
    return donation


def remove(session: Session, identity: Identity, donation_id: int) -> None:
    """
    Delete a donation owned by the caller, together with the requests made
    against it. Missing and not-owned both raise DonationNotFound.
    """
    donation = session.exec(
        select(Donation).where(
            Donation.id == donation_id,
            Donation.donor_id == identity.user_id,
        )
    ).first()

    if donation is None:
        raise DonationNotFound()

    old_requests = session.exec(
        select(Request).where(Request.donation_id == donation_id)
    ).all()
    for req in old_requests:
        session.delete(req)
    # requests reference the donation, so they have to go first
    session.flush()

    session.delete(donation)
    session.commit()

    logger.info("Donor %s deleted donation %s", identity.user_id, donation_id)
