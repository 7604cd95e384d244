# skin_in/api/router_contacts.py
"""
Contact Router
==============
POST /contacts         - store a contact form submission
GET  /contacts/export  - CSV export, HTTP Basic admin credentials required

Credentials are checked on the server with a constant-time comparison.
The service must sit behind TLS since Basic credentials are only encoded.
"""

import secrets

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import ValidationError

from skin_in.api.dependencies import get_contact_store, get_settings
from skin_in.api.schemas import ContactRequest, ContactResponse, ErrorResponse
from skin_in.config import Settings
from skin_in.contacts import CSV_FILENAME, ContactStore, contacts_to_csv
from skin_in.utils.exception import ExportError
from skin_in.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/contacts", tags=["Contacts"])

security = HTTPBasic()


def require_admin(
    credentials: HTTPBasicCredentials = Depends(security),
    settings: Settings = Depends(get_settings),
) -> str:
    """Validate admin credentials; returns the username."""
    if not settings.admin_password:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Contact export is disabled: no admin password configured"
        )

    username_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"), settings.admin_username.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"), settings.admin_password.encode("utf-8")
    )
    if not (username_ok and password_ok):
        logger.warning("Rejected contact export: invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


@router.post(
    "",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
    summary="Submit the contact form"
)
async def submit_contact(
    payload: ContactRequest,
    store: ContactStore = Depends(get_contact_store),
):
    try:
        submission = store.add(payload.name, payload.email, payload.message)
    except ValidationError:
        raise HTTPException(status_code=422, detail="Please fill in all fields")
    return ContactResponse(**submission.model_dump())


@router.get(
    "/export",
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Download contact submissions as CSV"
)
async def export_contacts(
    _admin: str = Depends(require_admin),
    store: ContactStore = Depends(get_contact_store),
):
    try:
        csv_text = contacts_to_csv(store.all())
    except ExportError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info(f"Exported {len(store)} contact submissions")
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )
