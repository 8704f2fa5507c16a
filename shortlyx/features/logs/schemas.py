from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from shortlyx.db.models.logs import LogType


class LogOut(BaseModel):
    id: str
    type: LogType
    message: str
    timestamp: datetime
    metadata: Optional[Dict[str, Any]] = Field(default=None, validation_alias="meta")

    model_config = {"from_attributes": True}


class LogListOut(BaseModel):
    items: List[LogOut]
    total: int


class LogClearOut(BaseModel):
    deleted: int
