import ipaddress
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MaintenanceSettings(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    allowed_paths: list[str] = Field(default_factory=list)
    allowed_ips: list[str] = Field(default_factory=list)
    reason: str | None = None

    @field_validator("allowed_paths", "allowed_ips", mode="before")
    @classmethod
    def parse_missing_list(cls, value):
        return [] if value is None else value

    @field_validator("reason", mode="before")
    @classmethod
    def parse_reason(cls, value):
        if value is None or value is False or value == "":
            return None
        if isinstance(value, (bool, int, float)):
            return str(value)
        return value

    @field_validator("allowed_paths")
    @classmethod
    def check_patterns(cls, value: list[str]) -> list[str]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"invalid allowed_paths entry {pattern!r}: {exc}") from exc
        return value

    @field_validator("allowed_ips")
    @classmethod
    def check_networks(cls, value: list[str]) -> list[str]:
        for entry in value:
            try:
                ipaddress.ip_network(entry, strict=False)
            except ValueError as exc:
                raise ValueError(f"invalid allowed_ips entry {entry!r}") from exc
        return value


class HealthResponse(BaseModel):
    status: str
    maintenance: bool


class ErrorResponse(BaseModel):
    code: str
    message: str
    request_id: str
