"""
Read-only view over a Service's annotations.

One AnnotationView is built per resource inspection from a snapshot of
the annotation map. The view never changes after construction and never
touches the source resource.

Usage:
    from service_annotations import FeatureGates, from_service
    
    view = from_service(service, FeatureGates.from_environ())
    neg = view.neg_annotation()
    if neg.found and neg.ok and neg.value.neg_enabled():
        ...
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional

from .features import FeatureGates
from .keys import BACKEND_CONFIG_KEY, NEG_KEY
from .models import AppProtocol, BackendConfigs, NegAnnotation, Resolution
from .resolvers import resolve_app_protocols, resolve_backend_configs, resolve_neg


class AnnotationView(Mapping):
    """
    Immutable annotation map with typed lookups.
    
    Behaves as a read-only Mapping[str, str]. Resolver methods decode the
    recognized annotations on demand; nothing is cached.
    """
    
    def __init__(
        self,
        annotations: Optional[Mapping] = None,
        features: Optional[FeatureGates] = None,
    ):
        """
        Args:
            annotations: Annotation map to snapshot; None means no annotations
            features: Gate snapshot used by resolvers, all gates off by default
            
        Raises:
            TypeError: If annotations is not a mapping, or any key or value
                is not a string
        """
        if annotations is not None and not isinstance(annotations, Mapping):
            raise TypeError(
                f"Annotations must be a mapping, got {type(annotations).__name__}"
            )
        
        snapshot: Dict[str, str] = dict(annotations or {})
        for key, value in snapshot.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError(
                    f"Annotation {key!r} must map a string to a string, "
                    f"got {type(value).__name__}"
                )
        
        self._annotations = MappingProxyType(snapshot)
        self._features = features if features is not None else FeatureGates()
    
    @property
    def features(self) -> FeatureGates:
        return self._features
    
    def __getitem__(self, key: str) -> str:
        return self._annotations[key]
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._annotations)
    
    def __len__(self) -> int:
        return len(self._annotations)
    
    def __repr__(self) -> str:
        return f"AnnotationView({dict(self._annotations)!r}, features={self._features!r})"
    
    def neg_annotation(self) -> Resolution[NegAnnotation]:
        """Resolve the NEG annotation; absence means NEG is off."""
        return resolve_neg(self._annotations.get(NEG_KEY))
    
    def application_protocols(
        self, features: Optional[FeatureGates] = None
    ) -> Resolution[Dict[str, AppProtocol]]:
        """
        Resolve per-port application protocols.
        
        Args:
            features: Gate snapshot for this call only, defaults to the view's
        """
        if features is None:
            features = self._features
        return resolve_app_protocols(self._annotations, features)
    
    def backend_configs(self) -> Resolution[BackendConfigs]:
        """Resolve BackendConfig references; absence is an error."""
        return resolve_backend_configs(self._annotations.get(BACKEND_CONFIG_KEY))


def from_service(service: Any, features: Optional[FeatureGates] = None) -> AnnotationView:
    """
    Build a view from a Service.
    
    Accepts either a manifest mapping ({"metadata": {"annotations": ...}})
    or an object exposing .metadata.annotations, such as a Kubernetes
    client V1Service. Missing metadata or annotations give an empty view.
    
    Args:
        service: Service manifest or object
        features: Gate snapshot for the view
        
    Returns:
        AnnotationView over a copy of the service's annotations
    """
    if isinstance(service, Mapping):
        metadata = service.get("metadata") or {}
        annotations = metadata.get("annotations") if isinstance(metadata, Mapping) else None
    else:
        metadata = getattr(service, "metadata", None)
        annotations = getattr(metadata, "annotations", None)
    
    return AnnotationView(annotations, features)
