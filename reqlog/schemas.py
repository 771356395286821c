"""Configuration model for the request logger.

``LoggerOptions`` is frozen: it is built once by the integrator and shared
read-only by every request the logger handles.
"""

from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MESSAGE = "Request received"


class LoggerOptions(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    message: str = Field(default=DEFAULT_MESSAGE, description="Message attached to every record")
    custom_fields: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Extra fields merged into every record",
    )
    remote_address_headers: Tuple[str, ...] = Field(
        default=(),
        description="Headers checked in order for the client address, e.g. X-Real-IP",
    )
    ignored_paths: FrozenSet[str] = Field(
        default_factory=frozenset, description="Request URIs never logged (exact match)"
    )
    sink: Optional[Any] = Field(
        default=None, description="Destination for records; a StructlogSink when unset"
    )

    @field_validator("message")
    @classmethod
    def default_when_empty(cls, v: str) -> str:
        return v or DEFAULT_MESSAGE

    @field_validator("custom_fields")
    @classmethod
    def read_only_fields(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        # Own copy, read-only.
        return MappingProxyType(dict(v))

    @field_validator("sink")
    @classmethod
    def must_have_emit(cls, v: Any) -> Any:
        if v is not None and not callable(getattr(v, "emit", None)):
            raise ValueError("sink must provide an emit(message, fields) method")
        return v
