import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse

from shortlyx.api.v1.dependencies import (
    get_current_user_ctx,
    get_media_ingestion_service,
    get_playback_resolver,
    get_video_service,
)
from shortlyx.core.context import UserCtx
from shortlyx.features.media.playback import PlaybackResolver
from shortlyx.features.media.services import MediaIngestionService
from shortlyx.features.videos.schemas import CommentIn, LikeIn, VideoListOut, VideoOut
from shortlyx.features.videos.services import VideoService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/videos",
    tags=["videos"],
    responses={404: {"description": "Not Found"}},
)


def _list_out(videos) -> VideoListOut:
    items = [VideoOut.from_model(v) for v in videos]
    return VideoListOut(items=items, total=len(items))

# -----------------------------
# Upload
# -----------------------------
@router.post(
    "/upload",
    summary="Uploader une vidéo (hébergeur média ou stockage local → SQLite)",
    description=(
        "Reçoit un fichier vidéo + légende + tags séparés par des virgules. "
        "Le média est envoyé à l'hébergeur (ou stocké localement) avant l'enregistrement des métadonnées."
    ),
    status_code=status.HTTP_201_CREATED,
    response_model=VideoOut,
    responses={
        400: {"description": "Fichier ou légende invalide"},
        502: {"description": "Échec de l'hébergeur média"},
    },
)
async def upload_video(
    file: UploadFile = File(...),
    caption: str = Form(...),
    tags: Optional[str] = Form(None),
    user: UserCtx = Depends(get_current_user_ctx),
    ingest_svc: MediaIngestionService = Depends(get_media_ingestion_service),
    video_svc: VideoService = Depends(get_video_service),
):
    # Légende vérifiée avant tout transfert
    caption = VideoService.require_caption(caption)
    data = await file.read()

    def on_progress(pct: float) -> None:
        logger.debug("Upload %s: %.0f%%", file.filename, pct)

    media = await run_in_threadpool(
        ingest_svc.ingest,
        data,
        on_progress,
        filename=file.filename or "upload",
        content_type=file.content_type,
    )
    video = await run_in_threadpool(video_svc.create, user, media, caption=caption, tags=tags)
    return VideoOut.from_model(video)

# -----------------------------
# Lectures
# -----------------------------
@router.get(
    "",
    summary="Lister toutes les vidéos (ordre d'upload)",
    response_model=VideoListOut,
)
def list_videos(
    _user: UserCtx = Depends(get_current_user_ctx),
    svc: VideoService = Depends(get_video_service),
):
    return _list_out(svc.list_all())

@router.get(
    "/feed",
    summary="Fil principal (plus récentes d'abord)",
    response_model=VideoListOut,
)
def feed(
    _user: UserCtx = Depends(get_current_user_ctx),
    svc: VideoService = Depends(get_video_service),
):
    return _list_out(svc.feed())

@router.get(
    "/search",
    summary="Rechercher par légende, auteur ou tag (sous-chaîne, insensible à la casse)",
    response_model=VideoListOut,
)
def search_videos(
    q: str = Query("", description="Texte recherché dans la légende, le nom de l'auteur et les tags", examples=["travel"]),
    _user: UserCtx = Depends(get_current_user_ctx),
    svc: VideoService = Depends(get_video_service),
):
    return _list_out(svc.search(q))

@router.get(
    "/{video_id}",
    summary="Détail d'une vidéo",
    response_model=VideoOut,
)
def get_video(
    video_id: str,
    _user: UserCtx = Depends(get_current_user_ctx),
    svc: VideoService = Depends(get_video_service),
):
    return VideoOut.from_model(svc.get(video_id))

@router.get(
    "/{video_id}/stream",
    summary="Lire le média (octets locaux ou redirection vers l'hébergeur)",
    responses={
        200: {"description": "Octets de la vidéo (stockage local)"},
        307: {"description": "Redirection vers l'URL distante"},
        404: {"description": "Vidéo introuvable ou indisponible"},
    },
)
def stream_video(
    video_id: str,
    svc: VideoService = Depends(get_video_service),
    resolver: PlaybackResolver = Depends(get_playback_resolver),
):
    video = svc.get(video_id)
    with resolver.open(video) as handle:
        if not handle.is_local:
            return RedirectResponse(handle.url)
        return Response(content=handle.read(), media_type=handle.content_type or "video/mp4")

@router.get(
    "/{video_id}/related",
    summary="Autres vidéos à regarder ensuite",
    response_model=VideoListOut,
)
def related_videos(
    video_id: str,
    _user: UserCtx = Depends(get_current_user_ctx),
    svc: VideoService = Depends(get_video_service),
):
    return _list_out(svc.related(video_id))

# -----------------------------
# Interactions
# -----------------------------
@router.post(
    "/{video_id}/view",
    summary="Compter une vue",
    response_model=VideoOut,
)
def record_view(
    video_id: str,
    _user: UserCtx = Depends(get_current_user_ctx),
    svc: VideoService = Depends(get_video_service),
):
    return VideoOut.from_model(svc.record_view(video_id))

@router.post(
    "/{video_id}/like",
    summary="Liker / retirer un like",
    description="`currently_liked` est l'état du bouton côté client : true retire un like, false en ajoute un.",
    response_model=VideoOut,
)
def toggle_like(
    video_id: str,
    payload: LikeIn,
    user: UserCtx = Depends(get_current_user_ctx),
    svc: VideoService = Depends(get_video_service),
):
    video = svc.toggle_like(video_id, currently_liked=payload.currently_liked, user=user)
    return VideoOut.from_model(video)

@router.post(
    "/{video_id}/comments",
    summary="Commenter une vidéo",
    status_code=status.HTTP_201_CREATED,
    response_model=VideoOut,
)
def post_comment(
    video_id: str,
    payload: CommentIn,
    user: UserCtx = Depends(get_current_user_ctx),
    svc: VideoService = Depends(get_video_service),
):
    return VideoOut.from_model(svc.post_comment(video_id, user, payload.text))

# -----------------------------
# Suppression
# -----------------------------
@router.delete(
    "/{video_id}",
    summary="Supprimer une vidéo (blob local + ligne DB)",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        204: {"description": "Supprimée"},
        401: {"description": "Non authentifié"},
        403: {"description": "Interdit"},
        404: {"description": "Introuvable"},
    },
)
def delete_video(
    video_id: str,
    user: UserCtx = Depends(get_current_user_ctx),
    svc: VideoService = Depends(get_video_service),
):
    svc.delete(video_id, user)
    return None
