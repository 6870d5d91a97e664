"""
Tests for AnnotationView and from_service

Validates:
- Snapshot semantics (source map changes do not leak in)
- Read-only Mapping behaviour
- Non-string values rejected
- from_service with manifests, client objects and missing metadata
"""

from types import SimpleNamespace

import pytest

from .features import FeatureGates
from .keys import NEG_KEY, SERVICE_APP_PROTOCOLS_KEY
from .view import AnnotationView, from_service


class TestAnnotationView:
    """Test view construction and mapping access."""
    
    def test_snapshot_is_isolated_from_source(self):
        source = {NEG_KEY: '{"ingress":true}'}
        view = AnnotationView(source)
        
        source[NEG_KEY] = "foo"
        source["extra"] = "value"
        
        assert view[NEG_KEY] == '{"ingress":true}'
        assert "extra" not in view
        assert view.neg_annotation().ok
    
    def test_mapping_access(self):
        view = AnnotationView({"a": "1", "b": "2"})
        
        assert len(view) == 2
        assert sorted(view) == ["a", "b"]
        assert view.get("a") == "1"
        assert view.get("missing") is None
        assert dict(view) == {"a": "1", "b": "2"}
    
    def test_view_is_read_only(self):
        view = AnnotationView({"a": "1"})
        
        with pytest.raises(TypeError):
            view["a"] = "2"  # type: ignore
        
        with pytest.raises(TypeError):
            view._annotations["a"] = "2"  # type: ignore
    
    def test_none_annotations(self):
        view = AnnotationView(None)
        
        assert len(view) == 0
        assert view.neg_annotation().found is False
    
    @pytest.mark.parametrize("annotations", [
        {NEG_KEY: {"ingress": True}},
        {NEG_KEY: None},
        {1: "value"},
    ])
    def test_non_string_entries_rejected(self, annotations):
        with pytest.raises(TypeError):
            AnnotationView(annotations)
    
    @pytest.mark.parametrize("annotations", [
        [["ab", "cd"]],
        "abc",
        [],
    ])
    def test_non_mapping_rejected(self, annotations):
        with pytest.raises(TypeError, match="must be a mapping"):
            AnnotationView(annotations)
    
    def test_manifest_with_non_mapping_annotations(self):
        with pytest.raises(TypeError):
            from_service({"metadata": {"annotations": "abc"}})
    
    def test_default_features_all_off(self):
        assert AnnotationView({}).features == FeatureGates(http2=False)
    
    def test_features_held_by_view(self):
        view = AnnotationView({SERVICE_APP_PROTOCOLS_KEY: '{"443": "HTTP2"}'}, FeatureGates(http2=True))
        
        assert view.features.http2 is True
        assert view.application_protocols().ok


class TestFromService:
    """Test building views from Service representations."""
    
    def test_manifest_mapping(self):
        manifest = {
            "apiVersion": "v1",
            "kind": "Service",
            "metadata": {
                "name": "web",
                "annotations": {NEG_KEY: '{"ingress":true}'},
            },
        }
        
        view = from_service(manifest)
        
        assert view.neg_annotation().value.neg_enabled_for_ingress()
    
    def test_client_object(self):
        service = SimpleNamespace(
            metadata=SimpleNamespace(annotations={NEG_KEY: '{"exposed_ports":{"80":{}}}'}),
        )
        
        view = from_service(service, FeatureGates(http2=True))
        
        assert view.neg_annotation().value.neg_exposed()
        assert view.features.http2 is True
    
    @pytest.mark.parametrize("service", [
        {},
        {"metadata": None},
        {"metadata": {"name": "web"}},
        {"metadata": {"annotations": None}},
        SimpleNamespace(),
        SimpleNamespace(metadata=None),
        SimpleNamespace(metadata=SimpleNamespace(annotations=None)),
    ])
    def test_missing_annotations_give_empty_view(self, service):
        view = from_service(service)
        
        assert len(view) == 0
        assert view.neg_annotation().found is False
        assert view.application_protocols().value == {}
