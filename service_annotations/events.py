"""
Warning events for rejected annotations.

The reconciler records these on the owning Service so a bad annotation
is visible to the user instead of failing silently. Absent annotations
never produce an event.
"""

from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from .errors import ErrorKind
from .models import Resolution
from .view import AnnotationView


EVENT_TYPE_WARNING = "Warning"

_REASONS = {
    ErrorKind.MALFORMED_PAYLOAD: "InvalidAnnotation",
    ErrorKind.INVALID_ENUM_VALUE: "UnsupportedAnnotationValue",
    ErrorKind.NO_USABLE_FIELD: "EmptyAnnotation",
}


class AnnotationEvent(BaseModel):
    """A Kubernetes-style event describing one rejected annotation."""
    
    model_config = ConfigDict(extra="forbid", frozen=True)
    
    type: str = EVENT_TYPE_WARNING
    reason: str
    key: str
    message: str


def event_for(resolution: Resolution) -> Optional[AnnotationEvent]:
    """
    Build the event for a resolution, if it warrants one.
    
    Returns:
        None for successful resolutions and for missing annotations
    """
    error = resolution.error
    if error is None or error.kind == ErrorKind.NOT_FOUND:
        return None
    
    return AnnotationEvent(
        reason=_REASONS[error.kind],
        key=error.key,
        message=str(error),
    )


def events_for(resolutions: Iterable[Resolution]) -> List[AnnotationEvent]:
    """Events for the given resolutions, in order, skipping those without one."""
    events = []
    for resolution in resolutions:
        event = event_for(resolution)
        if event is not None:
            events.append(event)
    return events


def collect_events(view: AnnotationView) -> List[AnnotationEvent]:
    """Events for every recognized annotation on the view, NEG first."""
    return events_for((
        view.neg_annotation(),
        view.application_protocols(),
        view.backend_configs(),
    ))
