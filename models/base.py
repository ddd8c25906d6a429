"""
Base model classes.
"""

from pydantic import BaseModel, ConfigDict


class RecordModel(BaseModel):
    """
    Base for records handed out by a repository.

    Records are immutable once read; every read builds fresh instances.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",  # Ignore unknown fields in persisted documents
    )
