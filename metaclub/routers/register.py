import json
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, UploadFile
from sqlmodel import Session

from ..database import get_session
from ..dependencies import get_notifier, get_upload_store
from ..exceptions import MetaclubError, RegistrationValidationError
from ..services.notifier import TicketNotifier
from ..services.registration import register_team
from ..services.storage import StoredFile, UploadStore
from ..services.validation import validate_registration

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _parse_members(raw: Optional[str]):
    """Members arrive as a JSON string inside the multipart form."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise RegistrationValidationError("Invalid members JSON")


@router.post("/register")
async def register(
    background_tasks: BackgroundTasks,
    team_name: Optional[str] = Form(default=None, alias="teamName"),
    team_type: Optional[str] = Form(default=None, alias="type"),
    members: Optional[str] = Form(default=None),
    event_id: Optional[str] = Form(default=None, alias="eventId"),
    transaction_id: Optional[str] = Form(default=None, alias="transactionId"),
    screenshot: Optional[UploadFile] = File(default=None),
    db: Session = Depends(get_session),
    store: UploadStore = Depends(get_upload_store),
    notifier: TicketNotifier = Depends(get_notifier)
):
    """Register a team, its members and their payment proof."""
    logger.info("Received registration request for team %r (%s)", team_name, team_type)

    stored: Optional[StoredFile] = None
    if screenshot is not None and screenshot.filename:
        stored = store.save(screenshot.file, screenshot.filename)

    try:
        member_list = _parse_members(members)

        validation_error = validate_registration(team_type, member_list)
        if validation_error:
            raise RegistrationValidationError(validation_error)

        if not transaction_id or stored is None:
            raise RegistrationValidationError("Payment details missing")

        result = register_team(
            db,
            team_type=team_type,
            members=member_list,
            transaction_id=transaction_id,
            screenshot_path=stored.url,
            team_name=team_name,
            event_id=event_id
        )
    except MetaclubError as e:
        logger.warning("Registration rejected: %s", e.message)
        store.delete(stored)
        raise

    # Confirmation emails go out after the response; failures are only logged
    background_tasks.add_task(notifier.notify_team, result.team_name, member_list, result.event_id)

    return {
        "status": "success",
        "message": "Registration successful",
        "teamId": result.team_id,
        "ticketIds": result.ticket_ids,
        "totalAmount": result.total_amount
    }


@router.get("/members")
async def get_members():
    """Public member listing. Registrations are only exposed to admins."""
    return {"status": "success", "data": []}
