"""
Request lifecycle: recipients claim available donations, donors decide.

A request starts pending and ends accepted or rejected; once decided it
cannot be changed again. Accepting a request also claims its donation,
and both rows are committed together.
"""

import logging
from typing import List, Optional

from sqlmodel import Session, col, select

from errors import (
    DonationNotFound,
    DonationUnavailable,
    Forbidden,
    InvalidStatus,
    RequestAlreadyResolved,
    RequestNotFound,
    RoleForbidden,
)
from models import Donation, DonationStatus, Request, RequestStatus, Role
from schemas import Identity, RequestCreate
from services.auth import current_user

logger = logging.getLogger(__name__)


def _newest_first(query):
    return query.order_by(col(Request.created_at).desc(), col(Request.id).desc())


def create_request(
    session: Session, identity: Identity, request_in: RequestCreate
) -> Request:
    recipient = current_user(session, identity)

    if recipient.role != Role.recipient:
        raise RoleForbidden()

    donation = session.get(Donation, request_in.donation_id)
    if donation is None:
        raise DonationNotFound()

    if donation.status != DonationStatus.available:
        raise DonationUnavailable()

    new_request = Request(
        donation_id=donation.id,
        donation_title=donation.title,
        recipient_id=recipient.id,
        recipient_name=recipient.name,
        recipient_email=recipient.email,
        recipient_phone=recipient.phone,
        reason=request_in.reason,
        status=RequestStatus.pending,
    )

    session.add(new_request)
    session.commit()
    session.refresh(new_request)

    logger.info(
        "Recipient %s requested donation %s", recipient.id, donation.id
    )
    return new_request


def list_own_requests(session: Session, identity: Identity) -> List[Request]:
    """
    Donors see requests made against any of their donations; recipients
    see the requests they made.
    """
    user = current_user(session, identity)

    if user.role == Role.donor:
        donation_ids = session.exec(
            select(Donation.id).where(Donation.donor_id == user.id)
        ).all()
        if not donation_ids:
            return []
        query = select(Request).where(col(Request.donation_id).in_(donation_ids))
    else:
        query = select(Request).where(Request.recipient_id == user.id)

    return list(session.exec(_newest_first(query)).all())


def parse_decision(value: str) -> RequestStatus:
    if value not in (RequestStatus.accepted.value, RequestStatus.rejected.value):
        raise InvalidStatus("Status must be accepted or rejected")
    return RequestStatus(value)


def respond(
    session: Session,
    identity: Identity,
    request_id: int,
    status: str,
    donor_response: Optional[str] = None,
) -> Request:
    """
    Accept or reject a pending request on one of the caller's donations.

    Accepting also marks the donation claimed. Nothing stops a donor from
    accepting a second pending request for a donation that is already
    claimed.
    """
    decision = parse_decision(status)

    db_request = session.get(Request, request_id)
    if db_request is None:
        raise RequestNotFound()

    donation = session.get(Donation, db_request.donation_id)
    if donation is None or donation.donor_id != identity.user_id:
        logger.warning(
            "User %s may not update request %s", identity.user_id, request_id
        )
        raise Forbidden()

    if db_request.status != RequestStatus.pending:
        raise RequestAlreadyResolved()

    db_request.status = decision
    if donor_response:
        db_request.donor_response = donor_response
    session.add(db_request)

    if decision == RequestStatus.accepted:
        donation.status = DonationStatus.claimed
        session.add(donation)

    try:
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(db_request)
    logger.info(
        "Request %s %s by donor %s", request_id, decision.value, identity.user_id
    )
    return db_request
