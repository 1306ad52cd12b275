from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class VaultEntry(BaseModel):
    """A vault item as the client sees it, password in the clear."""
    title: str = Field(min_length=1)
    username: Optional[str] = None
    password: str = Field(min_length=1)
    website: Optional[str] = None
    notes: Optional[str] = None
    category_id: Optional[int] = None
    is_favorite: bool = False


class AuditEntry(BaseModel):
    item_id: int
    title: str
    # None when the stored ciphertext could not be decrypted
    password: Optional[str] = None
    updated_at: datetime
