"""Pydantic models for DSM API payloads."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Secret(BaseModel):
    """A secret record as returned by the DSM application endpoint.

    The credential sub-records are kept loosely typed: their field values are
    checked by the normalizer, which rejects anything that is not a string.
    A null sub-record is read as empty.
    """

    model_config = ConfigDict(extra="ignore")

    secret_id: str | int | None = None
    secret_name: str | None = None
    identity: str | None = None
    version: str | int | None = None
    expiration_date: str | None = None
    engine: str | None = None
    cloud_credentials: list[dict[str, Any]] = Field(default_factory=list)
    pam_credentials: list[dict[str, Any]] = Field(default_factory=list)
    ephemeral_credentials: list[dict[str, Any]] = Field(default_factory=list)
    key_values: dict[str, Any] = Field(default_factory=dict)

    @field_validator(
        "cloud_credentials", "pam_credentials", "ephemeral_credentials", mode="before"
    )
    @classmethod
    def empty_list_for_null(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("key_values", mode="before")
    @classmethod
    def empty_dict_for_null(cls, value: Any) -> Any:
        return {} if value is None else value


class ApplicationData(BaseModel):
    """Body of a successful application read."""

    model_config = ConfigDict(extra="ignore")

    secrets: list[Secret] = Field(default_factory=list)

    @field_validator("secrets", mode="before")
    @classmethod
    def empty_secrets_for_null(cls, value: Any) -> Any:
        return [] if value is None else value


@dataclass(frozen=True)
class InjectionResult:
    """Outcome of one plugin run."""

    tool: str
    path: str
    variables: dict[str, str] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.variables)
