from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    user_id: str                    # stable id: account id or guest id
    display_name: str
    kind: str = "human"             # "human" | "AI"
    persona_id: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)

    @property
    def is_ai(self) -> bool:
        return self.kind == "AI"
