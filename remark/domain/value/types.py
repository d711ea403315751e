"""Domain value objects for comment trees."""

import re

from pydantic import field_validator

from remark.domain.value.common import RootValueObject

# Basic shape only: something@domain.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class EmailAddress(RootValueObject[str]):
    """Commenter email address.

    Trimmed, at most 255 characters, and shaped like local@domain.tld.
    """

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate the basic email format."""
        v = v.strip()
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Email must be 1-255 characters")
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Email must look like name@example.com")
        return v
