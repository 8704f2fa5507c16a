"""
➡️ But : Encapsuler toutes les opérations de base de données.

UserRepository : accès à la collection `users` (+ index username / email).

Ne contient aucune logique métier, juste de la persistance.

🔹 Avantages :

Réutilisable (les services n’ont pas à savoir comment la DB fonctionne).

Testable indépendamment (mock du repo sans base réelle).
"""

from __future__ import annotations

from typing import Optional
from sqlmodel import select

from shortlyx.db.repositories.base import BaseRepository
from shortlyx.db.models.users import User

class UserRepository(BaseRepository[User]):
    """
    Repository pour la table users.
    Hérite du CRUD générique de BaseRepository.
    Contient uniquement les requêtes spécifiques à User.
    """
    model = User

    def get_by_username(self, username: str) -> Optional[User]:
        """Retourne un utilisateur par son nom d'utilisateur."""
        return self.session.exec(
            select(self.model).where(self.model.username == username)
        ).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(
            select(self.model).where(self.model.email == email)
        ).first()
