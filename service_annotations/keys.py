"""
Recognized Service annotation keys.

Values under these keys are JSON documents. The keys themselves are
fixed by the load-balancer controller and must not be renamed.
"""

from typing import Tuple


# NEG enablement: {"ingress": true, "exposed_ports": {"80": {}}}
NEG_KEY = "cloud.google.com/neg"

# Per-port application protocol: {"80": "HTTP", "443": "HTTPS"}
SERVICE_APP_PROTOCOLS_KEY = "service.alpha.kubernetes.io/app-protocols"
GOOGLE_APP_PROTOCOLS_KEY = "cloud.google.com/app-protocols"

# Candidate keys for application protocols, first present key wins.
APP_PROTOCOLS_KEYS: Tuple[str, ...] = (
    SERVICE_APP_PROTOCOLS_KEY,
    GOOGLE_APP_PROTOCOLS_KEY,
)

# Backend config references: {"default": "cfg", "ports": {"http": "cfg-http"}}
BACKEND_CONFIG_KEY = "beta.cloud.google.com/backend-config"
