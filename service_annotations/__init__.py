"""
Service annotation resolution for the load-balancer controller.

Decodes the JSON documents carried in Service annotations into typed,
validated configuration:
- NEG enablement and exposed ports
- Per-port application protocols (HTTP, HTTPS, gated HTTP2)
- BackendConfig references (default and per-port)

Resolution is read-only and side-effect free. Problems are returned as
Resolution values carrying an AnnotationError, never raised, so the
caller decides how to surface them (see events.collect_events).

Usage:
    from service_annotations import FeatureGates, from_service
    
    view = from_service(service, FeatureGates.from_environ())
    protocols = view.application_protocols().unwrap()
"""

from .errors import (
    ErrorKind,
    AnnotationError,
    NEGAnnotationInvalidError,
    ApplicationProtocolsInvalidError,
    UnknownAppProtocolError,
    AppProtocolNotEnabledError,
    BackendConfigAnnotationMissingError,
    BackendConfigInvalidJSONError,
    BackendConfigNoneFoundError,
)
from .features import FeatureGates
from .keys import (
    NEG_KEY,
    SERVICE_APP_PROTOCOLS_KEY,
    GOOGLE_APP_PROTOCOLS_KEY,
    APP_PROTOCOLS_KEYS,
    BACKEND_CONFIG_KEY,
)
from .models import (
    AppProtocol,
    NegAttributes,
    NegAnnotation,
    BackendConfigs,
    Resolution,
    ResolutionState,
)
from .view import AnnotationView, from_service
from .events import AnnotationEvent, event_for, events_for, collect_events
from .report import AnnotationReport, NegSummary, inspect_annotations

__all__ = [
    # Errors
    "ErrorKind",
    "AnnotationError",
    "NEGAnnotationInvalidError",
    "ApplicationProtocolsInvalidError",
    "UnknownAppProtocolError",
    "AppProtocolNotEnabledError",
    "BackendConfigAnnotationMissingError",
    "BackendConfigInvalidJSONError",
    "BackendConfigNoneFoundError",
    # Configuration
    "FeatureGates",
    # Keys
    "NEG_KEY",
    "SERVICE_APP_PROTOCOLS_KEY",
    "GOOGLE_APP_PROTOCOLS_KEY",
    "APP_PROTOCOLS_KEYS",
    "BACKEND_CONFIG_KEY",
    # Models
    "AppProtocol",
    "NegAttributes",
    "NegAnnotation",
    "BackendConfigs",
    "Resolution",
    "ResolutionState",
    # View
    "AnnotationView",
    "from_service",
    # Reporting
    "AnnotationEvent",
    "event_for",
    "events_for",
    "collect_events",
    "AnnotationReport",
    "NegSummary",
    "inspect_annotations",
]
