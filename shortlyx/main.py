"""
➡️ But : assembler toutes les pièces du puzzle.

create_app() crée l’instance FastAPI et configure :

CORS (autorisations de qui peut appeler ces API)

titre, version, tags

schéma OpenAPI personnalisé

traduction des erreurs métier (ShortlyXError) en JSON

Inclut les routers (ex : /api/v1/videos).

Ouvre le Store SQLite au démarrage et le ferme à l'arrêt (@app.on_event).

🔹 Avantages :

Centralise la configuration du serveur HTTP.

Point unique d’exécution : uvicorn shortlyx.main:app --reload.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shortlyx.core.config import settings
from shortlyx.core.exceptions import ShortlyXError
from shortlyx.core.logging_config import setup_logging
from shortlyx.core.openapi import custom_openapi
from shortlyx.db.session import Store

from shortlyx.api.v1.routers import authentication, videos, users, logs, analytics
from shortlyx.api.v1.routers import settings as settings_router

import uvicorn

logger = logging.getLogger(__name__)


def create_app(store: Optional[Store] = None) -> FastAPI:
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        openapi_tags=[
            {"name": "auth", "description": "Inscription, connexion et session unique"},
            {"name": "videos", "description": "Upload, fil, recherche, likes, commentaires"},
            {"name": "users", "description": "Profils"},
            {"name": "logs", "description": "Journal d'activité et export"},
            {"name": "analytics", "description": "Statistiques et revenus simulés"},
            {"name": "settings", "description": "Préférences d'affichage"},
        ],
    )
    app.state.store = store or Store(settings.DATABASE_URL)

    # CORS (ajustez selon vos besoins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    @app.exception_handler(ShortlyXError)
    async def shortlyx_error_handler(request: Request, exc: ShortlyXError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # Routers
    app.include_router(authentication.router, prefix="/api/v1")
    app.include_router(videos.router, prefix="/api/v1")
    app.include_router(users.router, prefix="/api/v1")
    app.include_router(logs.router, prefix="/api/v1")
    app.include_router(analytics.router, prefix="/api/v1")
    app.include_router(settings_router.router, prefix="/api/v1")

    # Génération du schéma OpenAPI custom
    app.openapi = lambda: custom_openapi(app)

    # Démarrage / arrêt
    @app.on_event("startup")
    def on_startup():
        app.state.store.init()
        logger.info(
            "%s started (media mode: %s)",
            settings.APP_NAME,
            "remote" if settings.MEDIA_REMOTE_ENABLED else "local",
        )

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.store.close()

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("shortlyx.main:app", host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
