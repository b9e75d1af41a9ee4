"""POS Pydantic schemas (request/response DTO)."""


from datetime import datetime

from pydantic import Field

from campus_coffee.domain.enums import CampusType, PosType
from campus_coffee.schemas.common import CamelModel

# Postal codes are stored in a signed 32-bit INTEGER column
MAX_POSTAL_CODE = 2**31 - 1

class PosDto(CamelModel):
    """A Point of Sale as seen by API clients.

    ``id`` is absent for records that have not been persisted yet.
    ``created_at`` / ``updated_at`` are assigned by the database; values
    sent by clients are ignored.
    """

    id: int | None = None
    name: str = Field(min_length=1, max_length=255)
    description: str
    type: PosType
    campus: CampusType
    street: str = Field(min_length=1, max_length=255)
    house_number: str = Field(min_length=1, max_length=50)
    postal_code: int = Field(ge=0, le=MAX_POSTAL_CODE)
    city: str = Field(min_length=1, max_length=100)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_columns(self) -> dict:
        """Field values that are written to the ``pos`` table."""
        return self.model_dump(exclude={"id", "created_at", "updated_at"})
