from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from shortlyx.api.v1.dependencies import get_current_user, get_log_service
from shortlyx.db.models.logs import LogType
from shortlyx.db.models.users import User
from shortlyx.features.logs.schemas import LogClearOut, LogListOut, LogOut
from shortlyx.features.logs.services import REPORT_FILENAME, LogService

router = APIRouter(
    prefix="/logs",
    tags=["logs"],
    responses={404: {"description": "Not Found"}},
)

@router.get(
    "",
    summary="Journal d'activité",
    description="Plus récents d'abord par défaut ; `type` filtre sur un type d'activité.",
    response_model=LogListOut,
)
def list_logs(
    log_type: Optional[LogType] = Query(None, alias="type", description="Type d'activité", examples=["login"]),
    newest_first: bool = Query(True, description="Ordre antichronologique"),
    _user: User = Depends(get_current_user),
    svc: LogService = Depends(get_log_service),
):
    if log_type is not None:
        entries = list(svc.list_by_type(log_type))
        if newest_first:
            entries.reverse()
    elif newest_first:
        entries = svc.list_recent()
    else:
        entries = svc.list_all()
    items = [LogOut.model_validate(e) for e in entries]
    return LogListOut(items=items, total=len(items))

@router.get(
    "/export",
    summary="Télécharger le rapport d'activité (texte)",
    response_class=PlainTextResponse,
)
def export_logs(
    _user: User = Depends(get_current_user),
    svc: LogService = Depends(get_log_service),
):
    return PlainTextResponse(
        svc.export_report(),
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )

@router.delete(
    "",
    summary="Vider le journal",
    response_model=LogClearOut,
)
def clear_logs(
    _user: User = Depends(get_current_user),
    svc: LogService = Depends(get_log_service),
):
    return LogClearOut(deleted=svc.clear())
