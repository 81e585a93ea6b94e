from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict

# Store-assigned keys: bigint identity columns or string keys such as UUIDs
RecordId = Union[int, str]

class TimeStampedModel(BaseModel):
    """Base model with the store-assigned timestamp"""
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
