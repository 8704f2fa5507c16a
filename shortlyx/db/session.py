"""
➡️ But : Configurer la base SQLite et gérer les sessions de base de données.

Store : objet construit explicitement (pas de handle global), avec un cycle de vie clair :
  - init()    : crée les tables et index s'ils n'existent pas (idempotent, une seule version de schéma)
  - session() : ouvre une session SQLModel
  - close()   : libère l'engine

get_session() : dépendance FastAPI qui ouvre une session sur le Store de l'app, la fournit aux routes, puis la ferme proprement.

🔹 Avantages :

Un seul endroit pour gérer les connexions DB.

Injectable (tests : un Store par test sur un fichier temporaire).
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import Request
from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.engine import Engine

# Import all models for creating all tables
from shortlyx.db.models.users import User
from shortlyx.db.models.videos import Video
from shortlyx.db.models.video_blobs import VideoBlob
from shortlyx.db.models.logs import Log
from shortlyx.db.models.settings import UserSettings
from shortlyx.db.models.session import SessionRecord

logger = logging.getLogger(__name__)

COLLECTIONS = (
    User.__tablename__,
    Video.__tablename__,
    VideoBlob.__tablename__,
    Log.__tablename__,
    UserSettings.__tablename__,
    SessionRecord.__tablename__,
)


def _build_engine(url: str, *, echo: bool = False) -> Engine:
    assert url, "DATABASE_URL must be set"

    connect_args: Dict[str, Any] = {}
    if url.startswith("sqlite:"):
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False

    return create_engine(url, echo=echo, connect_args=connect_args)


class Store:
    """Base locale embarquée : six collections + index secondaires."""

    def __init__(self, url: str, *, echo: bool = False):
        self.url = url
        self._echo = echo
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Store not initialised, call init() first")
        return self._engine

    def init(self) -> "Store":
        """
        Crée les tables si elles n'existent pas. Sans effet sur une base existante
        (pas de logique de migration).
        """
        if self._engine is None:
            self._engine = _build_engine(self.url, echo=self._echo)
        SQLModel.metadata.create_all(self._engine)
        logger.debug("Store ready at %s (%s)", self.url, ", ".join(COLLECTIONS))
        return self

    @contextmanager
    def session(self) -> Iterator[Session]:
        # Les objets restent lisibles après commit (réponses construites après plusieurs écritures)
        with Session(self.engine, expire_on_commit=False) as session:
            yield session

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> "Store":
        return self.init()

    def __exit__(self, *exc_info) -> None:
        self.close()


def get_session(request: Request):
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    store: Store = request.app.state.store
    with store.session() as session:
        yield session
