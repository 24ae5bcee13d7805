"""Wire models for the REST API. Birth dates travel as YYYY-MM-DD strings."""

import logging

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from contactbook.application.dto import ApiError, OperationResult, Success, bad_request
from contactbook.domain import Contact, Email
from contactbook.infrastructure.dates import format_contract_date, parse_contract_date

logger = logging.getLogger(__name__)

CONVERSION_FAILED_MESSAGE = "Converting the ContactContract to a Contact failed."


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmailContract(_CamelModel):
    id: int = 0
    is_primary: bool = False
    address: str


class ContactContract(_CamelModel):
    id: int = 0
    name: str
    birth_date: str | None = None
    emails: list[EmailContract] = Field(default_factory=list)

    def to_contact(self) -> Contact:
        """Raises ValueError on a malformed birth date or a blank name."""
        return Contact(
            id=self.id,
            name=self.name,
            birth_date=parse_contract_date(self.birth_date),
            emails=tuple(
                Email(id=e.id, is_primary=e.is_primary, address=e.address)
                for e in self.emails
            ),
        )

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactContract":
        return cls(
            id=contact.id,
            name=contact.name,
            birth_date=format_contract_date(contact.birth_date),
            emails=[
                EmailContract(id=e.id, is_primary=e.is_primary, address=e.address)
                for e in contact.emails
            ],
        )


class ApiErrorBody(_CamelModel):
    friendly_error_message: str
    return_status_code: int

    @classmethod
    def from_error(cls, error: ApiError) -> "ApiErrorBody":
        return cls(
            friendly_error_message=error.message,
            return_status_code=int(error.status),
        )


def contract_to_contact(contract: ContactContract) -> OperationResult[Contact]:
    """Convert an inbound contract, turning conversion failures into a bad request."""
    try:
        return Success(contract.to_contact())
    except ValueError as e:
        logger.warning("Contact contract conversion failed: %s", e)
        return bad_request(CONVERSION_FAILED_MESSAGE)
