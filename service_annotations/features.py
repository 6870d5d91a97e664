"""
Feature gates consulted during annotation validation.

Gates are an immutable snapshot. Build one at process start with
FeatureGates.from_environ() (or directly in tests) and pass it to the
AnnotationView; nothing in this package changes a gate after creation.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


ENV_FEATURE_HTTP2 = "SERVICE_ANNOTATIONS_FEATURE_HTTP2"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class FeatureGates:
    """
    Experimental capabilities accepted by the resolvers.
    
    http2: accept HTTP2 as a port application protocol.
    """
    
    http2: bool = False
    
    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "FeatureGates":
        """
        Load gates from environment variables.
        
        Args:
            environ: Mapping to read instead of os.environ
            
        Returns:
            FeatureGates snapshot; unset or unrecognized values mean off
        """
        if environ is None:
            environ = os.environ
        return cls(http2=_env_flag(environ, ENV_FEATURE_HTTP2))
