"""Identity of the process reporting errors."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from apperrors.config.config import Settings, settings
from apperrors.config.errors import ErrorNames

from .validation import check_not_blank, check_port

__all__ = ["ServiceDetails"]


class ServiceDetails(BaseModel):
    """Host name, IP address and port stamped on every new error record.

    One instance is created at startup and passed explicitly to the store,
    the reporter and the health check.
    """

    model_config = ConfigDict(frozen=True)

    host_name: str = Field(description="Host name of the reporting process.")

    ip_address: str = Field(description="IP address of the reporting process.")

    application_port: int = Field(description="Port the reporting process serves.")

    @field_validator("host_name")
    @classmethod
    def _check_host_name(cls, value: str) -> str:
        return check_not_blank(value, ErrorNames.BLANK_HOST_NAME_ERROR)

    @field_validator("ip_address")
    @classmethod
    def _check_ip_address(cls, value: str) -> str:
        return check_not_blank(value, ErrorNames.BLANK_IP_ADDRESS_ERROR)

    @field_validator("application_port")
    @classmethod
    def _check_port(cls, value: int) -> int:
        return check_port(value)

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "ServiceDetails":
        """Build the identity from the configured host, address and port."""
        return cls(
            host_name=config.host_name,
            ip_address=config.ip_address,
            application_port=config.port,
        )

    def __str__(self) -> str:
        return f"{self.host_name} ({self.ip_address}:{self.application_port})"
