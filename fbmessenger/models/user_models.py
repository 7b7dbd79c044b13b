"""Pydantic model for the user profile lookup."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserProfile(BaseModel):
    """Public profile fields returned by the User Profile API.

    See https://developers.facebook.com/docs/messenger-platform/user-profile
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_pic: Optional[str] = None
    locale: Optional[str] = None
    # Offset from UTC in hours; some zones are fractional
    timezone: Optional[int | float] = None
    gender: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
