"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter une description détaillée (modes média, session, format d'erreur),

centraliser la personnalisation du Swagger.
"""

from fastapi.openapi.utils import get_openapi


def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API ShortlyX : vidéos courtes (FastAPI + SQLite).\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- Authentification : `Authorization: Bearer <token>` (obtenu via `/auth/sign-in`).\n"
            "- Une seule session active : une nouvelle connexion invalide le token précédent.\n"
            "- Erreurs : `{\"error_code\", \"message\", \"details\"}`.\n"
            "- Média : hébergeur distant si configuré, sinon stockage local (`local://<id>`).\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
