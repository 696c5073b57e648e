from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.enums import ConnectionStatus
from app.schemas.common import CamelModel
from app.schemas.recruiter import RecruiterOut
from app.schemas.worker import WorkerOut


class ConnectionRequestCreate(CamelModel):
    """``recruiterId`` and ``workerId`` are profile ids, not user ids."""

    recruiter_id: int
    worker_id: int
    message: Optional[str] = Field(default=None, max_length=2000)


class ConnectionStatusUpdate(CamelModel):
    status: ConnectionStatus
    admin_notes: Optional[str] = Field(default=None, max_length=2000)


class ConnectionRequestOut(CamelModel):
    id: int
    recruiter_id: int
    worker_id: int
    status: ConnectionStatus
    message: Optional[str] = None
    admin_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    recruiter: RecruiterOut
    worker: WorkerOut
