"""
Aggregated annotation report.

Resolves every recognized annotation on a view and collects the results
into one serializable model. Used by the CLI and the diagnostics API.
Annotation problems end up in `events`; building a report never raises
for annotation content.
"""

import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .events import AnnotationEvent, events_for
from .models import AppProtocol, BackendConfigs, NegAnnotation
from .view import AnnotationView


logger = logging.getLogger(__name__)


class NegSummary(BaseModel):
    """NEG annotation with its derived predicates."""
    
    model_config = ConfigDict(extra="forbid")
    
    ingress: bool
    exposed_ports: List[int]  # Sorted ascending
    enabled: bool
    exposed: bool
    
    @classmethod
    def from_annotation(cls, neg: NegAnnotation) -> "NegSummary":
        return cls(
            ingress=neg.neg_enabled_for_ingress(),
            exposed_ports=sorted(neg.exposed_ports),
            enabled=neg.neg_enabled(),
            exposed=neg.neg_exposed(),
        )


class AnnotationReport(BaseModel):
    """
    Resolved configuration of one Service.
    
    neg is None when the NEG annotation is absent or invalid.
    backend_configs is None when the annotation is absent, invalid or empty.
    app_protocols is empty when absent or invalid.
    """
    
    model_config = ConfigDict(extra="forbid")
    
    neg: Optional[NegSummary] = None
    app_protocols: Dict[str, AppProtocol] = Field(default_factory=dict)
    backend_configs: Optional[BackendConfigs] = None
    events: List[AnnotationEvent] = Field(default_factory=list)
    
    @property
    def clean(self) -> bool:
        """No annotation was rejected."""
        return not self.events


def inspect_annotations(view: AnnotationView) -> AnnotationReport:
    """
    Resolve all recognized annotations on a view.
    
    Args:
        view: Annotation view, carrying the feature gates to apply
        
    Returns:
        AnnotationReport with resolved values and one event per rejection
    """
    neg = view.neg_annotation()
    protocols = view.application_protocols()
    configs = view.backend_configs()
    
    events = events_for((neg, protocols, configs))
    for event in events:
        logger.info("%s: %s", event.reason, event.message)
    
    return AnnotationReport(
        neg=NegSummary.from_annotation(neg.value) if neg.value is not None else None,
        app_protocols=protocols.value if protocols.ok else {},
        backend_configs=configs.value if configs.ok else None,
        events=events,
    )
