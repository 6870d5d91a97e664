"""
Tests for the service annotations CLI

Validates:
- Report printed as JSON
- Exit codes: 0 clean, 1 rejected annotation, 4 unreadable manifest
- HTTP2 gate from environment and flags
"""

import io
import json

import pytest

from .cli import EXIT_OK, EXIT_REJECTED, EXIT_SYSTEM_ERROR, main
from .features import ENV_FEATURE_HTTP2
from .keys import NEG_KEY, SERVICE_APP_PROTOCOLS_KEY


def _manifest(annotations):
    return {
        "apiVersion": "v1",
        "kind": "Service",
        "metadata": {"name": "web", "annotations": annotations},
    }


@pytest.fixture
def write_manifest(tmp_path):
    def _write(annotations):
        path = tmp_path / "service.json"
        path.write_text(json.dumps(_manifest(annotations)), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture(autouse=True)
def clear_gate_env(monkeypatch):
    monkeypatch.delenv(ENV_FEATURE_HTTP2, raising=False)


def test_clean_manifest(write_manifest, capsys):
    path = write_manifest({NEG_KEY: '{"ingress":true}'})
    
    code = main([path])
    
    assert code == EXIT_OK
    report = json.loads(capsys.readouterr().out)
    assert report["neg"]["ingress"] is True
    assert report["events"] == []


def test_rejected_annotation_exits_one(write_manifest, capsys):
    path = write_manifest({NEG_KEY: "foo"})
    
    code = main([path])
    
    assert code == EXIT_REJECTED
    report = json.loads(capsys.readouterr().out)
    assert report["events"][0]["reason"] == "InvalidAnnotation"


def test_http2_flag(write_manifest, capsys):
    path = write_manifest({SERVICE_APP_PROTOCOLS_KEY: '{"443": "HTTP2"}'})
    
    assert main([path]) == EXIT_REJECTED
    assert main([path, "--http2"]) == EXIT_OK


def test_http2_from_environment(write_manifest, monkeypatch):
    path = write_manifest({SERVICE_APP_PROTOCOLS_KEY: '{"443": "HTTP2"}'})
    monkeypatch.setenv(ENV_FEATURE_HTTP2, "true")
    
    assert main([path]) == EXIT_OK
    assert main([path, "--no-http2"]) == EXIT_REJECTED


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(_manifest({NEG_KEY: '{"exposed_ports":{"80":{}}}'}))))
    
    assert main(["-"]) == EXIT_OK
    assert json.loads(capsys.readouterr().out)["neg"]["exposed_ports"] == [80]


def test_missing_file(tmp_path, capsys):
    code = main([str(tmp_path / "missing.json")])
    
    assert code == EXIT_SYSTEM_ERROR
    assert "Cannot read manifest" in capsys.readouterr().err


def test_manifest_not_json(tmp_path, capsys):
    path = tmp_path / "service.yaml"
    path.write_text("metadata:\n  name: web\n", encoding="utf-8")
    
    assert main([str(path)]) == EXIT_SYSTEM_ERROR
    assert "not valid JSON" in capsys.readouterr().err


def test_non_string_annotation_value(write_manifest, capsys):
    path = write_manifest({NEG_KEY: {"ingress": True}})
    
    assert main([path]) == EXIT_SYSTEM_ERROR
    assert "must map a string to a string" in capsys.readouterr().err


def test_annotations_not_a_mapping(tmp_path, capsys):
    path = tmp_path / "service.json"
    path.write_text(json.dumps({"metadata": {"annotations": "abc"}}), encoding="utf-8")
    
    assert main([str(path)]) == EXIT_SYSTEM_ERROR
    assert "must be a mapping" in capsys.readouterr().err
