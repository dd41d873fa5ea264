"""Content-Security-Policy helpers.

Every response gets the static policy. Routes that render an inline script
generate a nonce through ``csp_nonce`` and get a nonce-bearing policy instead;
``CSPMiddleware`` picks the right one after the handler ran.
"""

from __future__ import annotations

import base64
import secrets

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

CSP_HEADER = "Content-Security-Policy"
STATIC_POLICY = "default-src 'self'; script-src 'self'; object-src 'none';"
NONCE_BYTES = 16


def generate_nonce() -> str:
    """16 random bytes, standard base64."""
    return base64.b64encode(secrets.token_bytes(NONCE_BYTES)).decode("ascii")


def nonce_policy(nonce: str) -> str:
    return f"script-src 'self' 'nonce-{nonce}';"


def csp_nonce(request: Request) -> str:
    """FastAPI dependency: one nonce per request, remembered on request.state."""
    nonce = getattr(request.state, "csp_nonce", None)
    if nonce is None:
        nonce = generate_nonce()
        request.state.csp_nonce = nonce
    return nonce


class CSPMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        resp = await call_next(request)
        nonce = getattr(request.state, "csp_nonce", None)
        resp.headers[CSP_HEADER] = nonce_policy(nonce) if nonce else STATIC_POLICY
        return resp
