"""
Annotation data models.

Represents the typed configuration decoded from Service annotations.
All payload models use Pydantic for decoding and validation.
Unknown JSON fields are ignored, matching how the controller has always
read these annotations; wrong value types are rejected. A JSON null,
for a whole document or an optional field, decodes to the defaults.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Dict, Generic, Optional, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .errors import AnnotationError


T = TypeVar("T")

_DECIMAL = re.compile(r"[+-]?[0-9]+")


def _parse_port(value: Any) -> Any:
    """Port keys given as text must be plain decimal integers."""
    if isinstance(value, str):
        if not _DECIMAL.fullmatch(value):
            raise ValueError(f"port {value!r} is not a decimal integer")
        return int(value)
    return value


# NEG port keys arrive as quoted JSON strings holding an int32 port.
PortNumber = Annotated[int, BeforeValidator(_parse_port), Field(ge=0, le=2**31 - 1)]


class AppProtocol(str, Enum):
    """Application protocol spoken by a Service port."""
    
    HTTP = "HTTP"
    HTTPS = "HTTPS"
    HTTP2 = "HTTP2"  # Experimental, gated by FeatureGates.http2


class AnnotationDocument(BaseModel):
    """Base for JSON annotation payloads; a null document decodes to defaults."""
    
    @model_validator(mode="before")
    @classmethod
    def null_document(cls, data: Any) -> Any:
        return {} if data is None else data


class NegAttributes(AnnotationDocument):
    """
    Per-port NEG options.
    
    Currently carries no fields. Kept as a model so options can be added
    without changing the exposed_ports shape.
    """
    
    model_config = ConfigDict(extra="ignore", frozen=True)


class NegAnnotation(AnnotationDocument):
    """
    Decoded NEG annotation.
    
    ingress: use NEGs as Ingress backends
    exposed_ports: standalone NEGs to create, keyed by service port
    """
    
    model_config = ConfigDict(extra="ignore", frozen=True)
    
    ingress: StrictBool = False
    exposed_ports: Dict[PortNumber, NegAttributes] = Field(default_factory=dict)
    
    @field_validator("ingress", "exposed_ports", mode="before")
    @classmethod
    def null_as_default(cls, v: Any, info: ValidationInfo) -> Any:
        """An explicit null leaves the field at its default."""
        if v is None:
            return False if info.field_name == "ingress" else {}
        return v
    
    def neg_enabled(self) -> bool:
        """NEG is in use for Ingress or for any exposed port."""
        return self.ingress or len(self.exposed_ports) > 0
    
    def neg_enabled_for_ingress(self) -> bool:
        return self.ingress
    
    def neg_exposed(self) -> bool:
        return len(self.exposed_ports) > 0


class BackendConfigs(AnnotationDocument):
    """
    BackendConfig references for a Service.
    
    default applies to every port without an entry in ports.
    Empty string means no default.
    """
    
    model_config = ConfigDict(extra="ignore")
    
    default: StrictStr = ""
    ports: Dict[str, StrictStr] = Field(default_factory=dict)
    
    @field_validator("default", "ports", mode="before")
    @classmethod
    def null_as_default(cls, v: Any, info: ValidationInfo) -> Any:
        """An explicit null leaves the field at its default."""
        if v is None:
            return "" if info.field_name == "default" else {}
        return v
    
    def is_empty(self) -> bool:
        """True when neither a default nor any port reference is set."""
        return self.default == "" and len(self.ports) == 0


class ResolutionState(str, Enum):
    """Outcome of resolving one annotation."""
    
    ABSENT = "absent"    # Key not present
    INVALID = "invalid"  # Present but malformed or rejected
    EMPTY = "empty"      # Decoded, but nothing usable in it
    VALUE = "value"      # Decoded and validated


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """
    Tagged result of a resolver call.
    
    Absence, invalid content and empty content are distinct states so
    callers never have to infer them from None/error combinations.
    Absence may or may not carry an error depending on the annotation:
    a missing NEG annotation simply means the feature is off, a missing
    backend-config annotation is reported as an error.
    """
    
    state: ResolutionState
    key: Optional[str] = None
    value: Optional[T] = None
    error: Optional[AnnotationError] = None
    
    @property
    def found(self) -> bool:
        """The annotation key was present on the resource."""
        return self.state != ResolutionState.ABSENT
    
    @property
    def ok(self) -> bool:
        return self.error is None
    
    def unwrap(self) -> Optional[T]:
        """
        Return the resolved value.
        
        Raises:
            AnnotationError: The error carried by this resolution
        """
        if self.error is not None:
            raise self.error
        return self.value
