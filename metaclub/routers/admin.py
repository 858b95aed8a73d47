import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from sqlmodel import Session

from .. import config
from ..auth import check_admin_password, create_admin_token
from ..database import get_session
from ..dependencies import require_admin
from ..exceptions import AuthenticationError, RegistrationValidationError
from ..models import TEAM_SIZES
from ..services import admin as admin_service
from ..services.export import EXPORT_FILENAME, XLSX_MEDIA_TYPE, build_registrations_workbook

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin")


class LoginRequest(BaseModel):
    """Schema for the admin login form."""
    password: Optional[str] = None


class TeamUpdate(BaseModel):
    """Schema for editing a team."""
    name: Optional[str] = None
    type: str
    total_amount: float
    transaction_id: Optional[str] = None


@router.post("/login")
async def login(payload: LoginRequest, response: Response):
    """Exchange the admin password for a session cookie."""
    if not check_admin_password(payload.password):
        logger.warning("Failed admin login attempt")
        raise AuthenticationError("Invalid password")

    max_age = config.ADMIN_TOKEN_EXPIRE_MINUTES * 60
    response.set_cookie(
        key=config.ADMIN_COOKIE_NAME,
        value=create_admin_token(),
        httponly=True,
        max_age=max_age,
        samesite="lax"
    )
    logger.info("Admin logged in")
    return {"status": "success"}


@router.post("/logout")
async def logout(response: Response):
    """Clear the session cookie. The token itself stays valid until it expires."""
    response.delete_cookie(key=config.ADMIN_COOKIE_NAME)
    return {"status": "success"}


@router.get("/check-auth")
async def check_auth(admin: Dict[str, Any] = Depends(require_admin)):
    return {"status": "success", "authenticated": True}


@router.get("/registrations")
async def get_registrations(
    q: Optional[str] = None,
    admin: Dict[str, Any] = Depends(require_admin),
    db: Session = Depends(get_session)
):
    """All participants joined with their team, most recent first."""
    rows = admin_service.list_registrations(db, search=q)
    return {"status": "success", "data": rows}


@router.get("/teams")
async def get_teams(
    q: Optional[str] = None,
    admin: Dict[str, Any] = Depends(require_admin),
    db: Session = Depends(get_session)
):
    teams = admin_service.list_teams(db, search=q)
    logger.info("Fetched %d teams", len(teams))
    return {"status": "success", "data": [team.model_dump() for team in teams]}


@router.put("/teams/{team_id}")
async def update_team(
    team_id: int,
    changes: TeamUpdate,
    admin: Dict[str, Any] = Depends(require_admin),
    db: Session = Depends(get_session)
):
    if changes.type not in TEAM_SIZES:
        raise RegistrationValidationError("Invalid team type")

    admin_service.update_team(
        db,
        team_id,
        name=changes.name,
        team_type=changes.type,
        total_amount=changes.total_amount,
        transaction_id=changes.transaction_id
    )
    return {"status": "success", "message": "Team updated successfully"}


@router.delete("/teams/{team_id}")
async def delete_team(
    team_id: int,
    admin: Dict[str, Any] = Depends(require_admin),
    db: Session = Depends(get_session)
):
    admin_service.delete_team(db, team_id)
    return {"status": "success", "message": "Team deleted successfully"}


@router.get("/export")
async def export_registrations(
    admin: Dict[str, Any] = Depends(require_admin),
    db: Session = Depends(get_session)
):
    """Download all registrations as a spreadsheet."""
    rows = admin_service.list_registrations(db)
    content = build_registrations_workbook(rows)
    logger.info("Exported %d registration rows", len(rows))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"}
    )
