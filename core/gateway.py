# =============================================================================
# core/gateway.py  -  Upstream Gateway (validated args -> one Replicate call)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   1. build_request(): fill in defaults and wrap the eight fields in the
#      {"input": {...}} body Replicate expects
#   2. ReplicateGateway.execute(): send exactly ONE blocking POST to the
#      model's predictions endpoint and normalize the outcome
#
# SYNCHRONOUS BY DESIGN:
#   The request carries "Prefer: wait", so Replicate holds the connection
#   until the prediction finishes.  There is no polling path.  If the job
#   outlives our client timeout, httpx raises a timeout error, which is an
#   httpx.HTTPError and therefore surfaces as an UpstreamError.
#
# ERROR MAPPING:
#   httpx.HTTPError (transport failure OR non-2xx status)
#       -> UpstreamError(detail from the JSON body, else the error's text)
#   anything else
#       -> propagates unchanged (it's a bug here, not an upstream problem)
# =============================================================================

import json
import logging
from typing import Any, Mapping, Optional

import httpx

from core.config import ReplicateConfig
from core.errors import UpstreamError
from core.models import DEFAULT_ARGUMENTS, FIELD_ORDER

logger = logging.getLogger(__name__)


def build_request(args: Mapping[str, Any]) -> dict[str, Any]:
    """Resolve defaults and build the upstream request body.

    A field that is absent (or None) gets its documented default.  Keys
    follow the schema declaration order.
    """
    resolved: dict[str, Any] = {}
    for name in FIELD_ORDER:
        value = args.get(name)
        if value is None:
            value = DEFAULT_ARGUMENTS.get(name)
        resolved[name] = value
    return {"input": resolved}


def format_result(body: Any) -> str:
    """Serialize the upstream response verbatim for the text content block."""
    return json.dumps(body, indent=2)


def _error_detail(error: httpx.HTTPError) -> str:
    """Best-effort message for a failed upstream call (never empty)."""
    if isinstance(error, httpx.HTTPStatusError):
        try:
            payload = error.response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("detail"):
            return str(payload["detail"])
    return str(error) or type(error).__name__


class ReplicateGateway:
    """Sends prediction requests to Replicate for one fixed model.

    The httpx client is built once from the config and only read afterwards,
    so a single gateway can serve concurrent tool calls.  Pass ``client`` to
    substitute a preconfigured or fake client.
    """

    def __init__(self, config: ReplicateConfig, client: Optional[httpx.Client] = None):
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=config.base_url,
            headers=config.headers,
            timeout=config.timeout_seconds,
        )

    def execute(self, request: Mapping[str, Any]) -> Any:
        """POST the request and return the parsed JSON body as-is.

        Raises:
            UpstreamError: the call failed in transport or returned non-2xx.
        """
        try:
            response = self._client.post(self.config.predictions_path, json=dict(request))
            response.raise_for_status()
        except httpx.HTTPError as e:
            detail = _error_detail(e)
            logger.warning("Replicate request failed: %s", detail)
            raise UpstreamError(detail) from e

        logger.debug("Replicate responded %s", response.status_code)
        return response.json()

    def generate(self, arguments: Mapping[str, Any]) -> Any:
        """Shortcut for execute(build_request(arguments))."""
        return self.execute(build_request(arguments))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ReplicateGateway":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
