from fastapi import APIRouter, status

from db import SessionDep
from schemas import RequestCreate, RequestList, RequestResponse, RequestStatusUpdate
from services import requests as request_service
from .auth import IdentityDep

router = APIRouter(tags=["requests"])


@router.post(
    "/requests",
    response_model=RequestResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_request(
    request_in: RequestCreate,
    session: SessionDep,
    identity: IdentityDep,
):
    new_request = request_service.create_request(session, identity, request_in)
    return {"message": "Food request sent successfully", "request": new_request}


@router.get("/my-requests", response_model=RequestList)
def list_my_requests(session: SessionDep, identity: IdentityDep):
    """
    Donors get requests for their donations, recipients get their own.
    """
    return request_service.list_own_requests(session, identity)


@router.patch("/requests/{request_id}", response_model=RequestResponse)
def update_request_status(
    request_id: int,
    update: RequestStatusUpdate,
    session: SessionDep,
    identity: IdentityDep,
):
    db_request = request_service.respond(
        session,
        identity,
        request_id,
        update.status,
        donor_response=update.donor_response,
    )
    return {"message": "Request updated successfully", "request": db_request}
