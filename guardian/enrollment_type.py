"""
Enrollment methods supported by the Guardian service.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class TOTP(BaseModel):
    """Enroll an authenticator app that generates time-based codes."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["totp"] = "totp"


class SMS(BaseModel):
    """Enroll a phone number that receives codes by SMS."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["sms"] = "sms"
    phone_number: str


EnrollmentType = Annotated[Union[TOTP, SMS], Field(discriminator="kind")]
