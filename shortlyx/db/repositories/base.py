import logging
import re
from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import literal_column
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, Session, select, func, delete

from shortlyx.core.exceptions import ConstraintViolation, StorageFailure

# Type générique pour le modèle (User, Video, Log, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)

logger = logging.getLogger(__name__)

# "UNIQUE constraint failed: users.username" -> "username"
_UNIQUE_RE = re.compile(r"(?:UNIQUE|PRIMARY KEY) constraint failed: \w+\.(\w+)")


def _violated_field(exc: IntegrityError) -> Optional[str]:
    match = _UNIQUE_RE.search(str(exc.orig))
    return match.group(1) if match else None


class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards sur une collection.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : add, get, list par index, save, delete, clear.
    👉 Traduit les erreurs SQLAlchemy : IntegrityError -> ConstraintViolation,
       le reste -> StorageFailure (détail dans les logs).
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par sa clé primaire, ou None."""
        return self.session.get(self.model, id_)

    def list_by_index(self, column: Any, value: Any = None, *, descending: bool = False) -> Sequence[ModelT]:
        """
        Lecture par index secondaire : filtre optionnel sur la colonne indexée,
        résultat trié par la valeur d'index (rowid en départage, donc ordre d'insertion).
        """
        statement = select(self.model)
        if value is not None:
            statement = statement.where(column == value)
        if descending:
            statement = statement.order_by(column.desc(), literal_column("rowid").desc())
        else:
            statement = statement.order_by(column, literal_column("rowid"))
        return self.session.exec(statement).all()

    def count(self) -> int:
        """Retourne le nombre total d’enregistrements."""
        return self.session.exec(select(func.count()).select_from(self.model)).one()

    # ---------- CREATE ----------

    def create(self, **fields) -> ModelT:
        """Crée et insère un nouvel enregistrement (échoue si la clé existe déjà)."""
        return self.add(self.model(**fields))

    def add(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        self._commit("insert")
        self.session.refresh(entity)
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, **changes) -> ModelT:
        """Met à jour un enregistrement existant (écrase par clé primaire)."""
        for key, value in changes.items():
            setattr(entity, key, value)
        return self.save(entity)

    def save(self, entity: ModelT) -> ModelT:
        entity = self.session.merge(entity)
        self._commit("update")
        self.session.refresh(entity)
        return entity

    # ---------- DELETE ----------

    def delete(self, entity: ModelT) -> None:
        self.session.delete(entity)
        self._commit("delete")

    def delete_by_id(self, id_: Any) -> bool:
        """Supprime par clé primaire. Retourne False si rien à supprimer."""
        entity = self.get(id_)
        if entity is None:
            return False
        self.delete(entity)
        return True

    def clear(self) -> int:
        """Vide la collection. Retourne le nombre de lignes supprimées."""
        result = self.session.exec(delete(self.model))
        self._commit("clear")
        return result.rowcount or 0

    # ---------- Helpers ----------

    def _commit(self, operation: str) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            field = _violated_field(e)
            raise ConstraintViolation(
                f"{self.model.__name__} {field or 'record'} already exists", field=field
            ) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Storage error during %s on %s", operation, self.model.__name__)
            raise StorageFailure(f"{self.model.__name__}.{operation}") from e
