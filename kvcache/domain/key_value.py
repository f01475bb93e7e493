"""
Key-Value Record Domain Model

Defines the cache record and its persisted (wire) shape:

    {"_id": ..., "key": ..., "value": ..., "createdAt": ..., "expireAt": ...}
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kvcache.common.time import ensure_utc


class KeyValueModel(BaseModel):
    """
    Key-Value Record

    `created_at` / `expire_at` set to None mean "not supplied"; the
    expiration policy fills them in on the defaulted create path.
    """

    id: Optional[str] = Field(None, alias="_id", description="Store-assigned ID")
    key: str = Field(..., description="Lookup key (not unique)")
    value: Any = Field(None, description="JSON-representable payload")
    created_at: Optional[datetime] = Field(
        None, alias="createdAt", description="Creation Time (UTC)"
    )
    expire_at: Optional[datetime] = Field(
        None, alias="expireAt", description="Expiration Time (UTC)"
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("created_at", "expire_at")
    @classmethod
    def _normalize_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)

    def to_document(self) -> dict[str, Any]:
        """Dump to the wire shape, omitting an unassigned `_id`"""
        document = self.model_dump(by_alias=True)
        if document["_id"] is None:
            del document["_id"]
        return document
