from typing import Callable, Optional

from pydantic import BaseModel

# Progression en pourcentage (0 -> 100)
ProgressCallback = Callable[[float], None]


class IngestResult(BaseModel):
    """Réponse uniforme des deux modes (hébergeur distant ou fallback local)."""

    media_uri: str
    thumbnail_uri: str
    public_id: str
    format: Optional[str] = None
    duration_seconds: float = 0.0
    width: int = 0
    height: int = 0
    size_bytes: int = 0

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"
