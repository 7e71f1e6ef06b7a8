from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Task:
    title: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    is_completed: bool = False
    id: int | None = None
