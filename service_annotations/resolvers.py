"""
Annotation resolvers.

Each resolver turns raw annotation text into a Resolution. Resolvers are
pure: the result depends only on the raw values and the feature gates
passed in, and annotation problems are returned, never raised.
"""

import logging
from typing import Dict, Mapping, Optional, Sequence

from pydantic import StrictStr, TypeAdapter, ValidationError

from .errors import (
    AppProtocolNotEnabledError,
    ApplicationProtocolsInvalidError,
    BackendConfigAnnotationMissingError,
    BackendConfigInvalidJSONError,
    BackendConfigNoneFoundError,
    NEGAnnotationInvalidError,
    UnknownAppProtocolError,
)
from .features import FeatureGates
from .keys import APP_PROTOCOLS_KEYS, BACKEND_CONFIG_KEY, NEG_KEY
from .models import (
    AppProtocol,
    BackendConfigs,
    NegAnnotation,
    Resolution,
    ResolutionState,
)


logger = logging.getLogger(__name__)

_PROTOCOL_MAP = TypeAdapter(Optional[Dict[str, StrictStr]])


def _describe(exc: ValidationError) -> str:
    """First validation error as 'location: message'."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if location:
        return f"{location}: {first['msg']}"
    return first["msg"]


def resolve_neg(raw: Optional[str], key: str = NEG_KEY) -> Resolution[NegAnnotation]:
    """
    Decode the NEG annotation.
    
    Args:
        raw: Annotation value, None when the key is absent
        key: Annotation key, used in error messages
        
    Returns:
        ABSENT without error when raw is None,
        INVALID with NEGAnnotationInvalidError when decoding fails,
        VALUE with the NegAnnotation otherwise
    """
    if raw is None:
        return Resolution(ResolutionState.ABSENT, key=key)
    
    try:
        neg = NegAnnotation.model_validate_json(raw)
    except ValidationError as e:
        detail = _describe(e)
        logger.debug("Rejected %s annotation: %s", key, detail)
        return Resolution(
            ResolutionState.INVALID,
            key=key,
            error=NEGAnnotationInvalidError(key, detail),
        )
    
    return Resolution(ResolutionState.VALUE, key=key, value=neg)


def resolve_app_protocols(
    annotations: Mapping[str, str],
    features: FeatureGates,
    keys: Sequence[str] = APP_PROTOCOLS_KEYS,
) -> Resolution[Dict[str, AppProtocol]]:
    """
    Decode the per-port application protocol annotation.
    
    The first key of `keys` present in `annotations` is used and the
    rest are ignored, even when they are also present.
    
    Args:
        annotations: Raw annotation map
        features: Gate snapshot; HTTP2 is rejected unless features.http2
        keys: Candidate keys in precedence order
        
    Returns:
        ABSENT with an empty mapping when no key is present,
        INVALID when the payload is malformed or any protocol is rejected,
        VALUE with a fresh port -> AppProtocol mapping otherwise
    """
    key = next((k for k in keys if k in annotations), None)
    if key is None:
        return Resolution(ResolutionState.ABSENT, value={})
    
    logger.debug("Reading application protocols from %s", key)
    
    try:
        decoded = _PROTOCOL_MAP.validate_json(annotations[key]) or {}
    except ValidationError as e:
        detail = _describe(e)
        logger.debug("Rejected %s annotation: %s", key, detail)
        return Resolution(
            ResolutionState.INVALID,
            key=key,
            error=ApplicationProtocolsInvalidError(key, detail),
        )
    
    protocols: Dict[str, AppProtocol] = {}
    for port, name in decoded.items():
        try:
            protocol = AppProtocol(name)
        except ValueError:
            return Resolution(
                ResolutionState.INVALID,
                key=key,
                error=UnknownAppProtocolError(key, name),
            )
        
        if protocol is AppProtocol.HTTP2 and not features.http2:
            return Resolution(
                ResolutionState.INVALID,
                key=key,
                error=AppProtocolNotEnabledError(key, port),
            )
        
        protocols[port] = protocol
    
    return Resolution(ResolutionState.VALUE, key=key, value=protocols)


def resolve_backend_configs(
    raw: Optional[str], key: str = BACKEND_CONFIG_KEY
) -> Resolution[BackendConfigs]:
    """
    Decode the backend-config annotation.
    
    Unknown fields are ignored, so a misspelled field name decodes to an
    empty result and is reported as BackendConfigNoneFoundError.
    
    Args:
        raw: Annotation value, None when the key is absent
        key: Annotation key, used in error messages
        
    Returns:
        ABSENT with BackendConfigAnnotationMissingError,
        INVALID with BackendConfigInvalidJSONError,
        EMPTY with BackendConfigNoneFoundError,
        or VALUE with a freshly decoded BackendConfigs
    """
    if raw is None:
        return Resolution(
            ResolutionState.ABSENT,
            key=key,
            error=BackendConfigAnnotationMissingError(key),
        )
    
    try:
        configs = BackendConfigs.model_validate_json(raw)
    except ValidationError as e:
        detail = _describe(e)
        logger.debug("Rejected %s annotation: %s", key, detail)
        return Resolution(
            ResolutionState.INVALID,
            key=key,
            error=BackendConfigInvalidJSONError(key, detail),
        )
    
    if configs.is_empty():
        return Resolution(
            ResolutionState.EMPTY,
            key=key,
            error=BackendConfigNoneFoundError(key),
        )
    
    return Resolution(ResolutionState.VALUE, key=key, value=configs)
