from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field


class VerificationSummary(BaseModel):
    total_attempts: int = Field(ge=0)
    total_converted: int = Field(ge=0)
    total_unconverted: int = Field(ge=0)
    conversion_rate_percentage: str


@dataclass(frozen=True)
class Credentials:
    app_identifier: str
    account_sid: str
    auth_token: str

    def __repr__(self) -> str:
        return f"Credentials(app_identifier={self.app_identifier!r}, account_sid={self.account_sid!r}, auth_token='***')"
