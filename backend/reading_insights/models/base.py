"""
Base Models for Reading Club API Payloads

The reading club API speaks camelCase JSON while Python code uses snake_case
attributes. These bases wire up the aliasing once so every model accepts
either spelling and dumps back to camelCase with by_alias=True.

Usage:
    # Inbound API payloads (server may send more fields than we use)
    class Record(ApiModel):
        book_isbn: str  # accepts "bookIsbn" or "book_isbn"

    # Computed results (immutable once built)
    class Result(ResultModel):
        total_records: int

Architecture:
    API JSON → ApiModel (extra="ignore") → insights computation
    insights computation → ResultModel (frozen) → caller / summary endpoint
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base model for payloads received from the reading club API.

    Features:
        - alias_generator=to_camel: Reads camelCase keys from the server
        - populate_by_name=True: Also accepts snake_case keys (tests, fixtures)
        - extra="ignore": Silently ignores fields the engine does not need
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ResultModel(BaseModel):
    """
    Base model for values produced by the insights engine.

    Frozen so a result handed to a caller cannot be mutated behind its back.
    Dumps with camelCase keys when by_alias=True.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
