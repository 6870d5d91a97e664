"""
Service annotations CLI.

Resolves the annotations of a Service manifest and prints the report as
JSON. Intended for operators checking what the controller will read from
a Service before applying it.

Exit Codes:
===========
- 0: All recognized annotations resolved cleanly
- 1: At least one annotation was rejected (see "events")
- 4: Manifest unreadable or not JSON
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from .features import ENV_FEATURE_HTTP2, FeatureGates
from .report import inspect_annotations
from .view import from_service


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_SYSTEM_ERROR = 4


class ManifestError(Exception):
    """Raised when the Service manifest cannot be loaded."""
    pass


def _load_manifest(source: str) -> Any:
    """
    Load a JSON Service manifest.
    
    Args:
        source: File path, or "-" for stdin
        
    Raises:
        ManifestError: If the file cannot be read or is not JSON
    """
    try:
        if source == "-":
            text = sys.stdin.read()
        else:
            text = Path(source).read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {source}: {e}") from e
    
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Manifest {source} is not valid JSON: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="service-annotations",
        description="Resolve load-balancer annotations of a Service manifest.",
    )
    parser.add_argument(
        "manifest",
        help="Path to a JSON Service manifest, or - to read stdin",
    )
    parser.add_argument(
        "--http2",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=f"Accept HTTP2 app protocols (default: ${ENV_FEATURE_HTTP2})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log resolver decisions to stderr",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    
    features = FeatureGates.from_environ()
    if args.http2 is not None:
        features = FeatureGates(http2=args.http2)
    
    try:
        manifest = _load_manifest(args.manifest)
        view = from_service(manifest, features)
    except (ManifestError, TypeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_SYSTEM_ERROR
    
    report = inspect_annotations(view)
    print(report.model_dump_json(indent=2))
    
    if not report.clean:
        logger.debug("%d annotation(s) rejected", len(report.events))
        return EXIT_REJECTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
