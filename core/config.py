# =============================================================================
# core/config.py  -  Upstream client configuration
# =============================================================================
#
# The Replicate credential, base URL, model and timeout are read ONCE at
# startup into a frozen ReplicateConfig and handed to the gateway.  Nothing
# in core/ reads os.environ after that, so tests can build a config by hand.
#
# ENVIRONMENT VARIABLES:
#   REPLICATE_API_TOKEN        (required)  bearer token
#   REPLICATE_API_BASE_URL     (optional)  default https://api.replicate.com/v1
#   REPLICATE_MODEL            (optional)  default black-forest-labs/flux-schnell
#   REPLICATE_TIMEOUT_SECONDS  (optional)  default 60
#
# Entry points call dotenv's load_dotenv() first, so a .env file works too.
# =============================================================================

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from core.errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.replicate.com/v1"
DEFAULT_MODEL = "black-forest-labs/flux-schnell"

# With "Prefer: wait" Replicate holds the connection for up to 60s.
DEFAULT_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True)
class ReplicateConfig:
    """Read-only settings for the Replicate predictions endpoint."""

    api_token: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def predictions_path(self) -> str:
        return f"/models/{self.model}/predictions"

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
            "Prefer": "wait",
        }


def load_config(environ: Optional[Mapping[str, str]] = None) -> ReplicateConfig:
    """Build a ReplicateConfig from the environment.

    Raises:
        ConfigurationError: REPLICATE_API_TOKEN is missing or blank, or the
            timeout is not a positive number.
    """
    env = os.environ if environ is None else environ

    token = env.get("REPLICATE_API_TOKEN", "").strip()
    if not token:
        raise ConfigurationError("REPLICATE_API_TOKEN environment variable is required")

    raw_timeout = env.get("REPLICATE_TIMEOUT_SECONDS", "").strip()
    timeout = DEFAULT_TIMEOUT_SECONDS
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigurationError(
                f"REPLICATE_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}"
            ) from e
        if timeout <= 0:
            raise ConfigurationError("REPLICATE_TIMEOUT_SECONDS must be positive")

    return ReplicateConfig(
        api_token=token,
        base_url=env.get("REPLICATE_API_BASE_URL", "").strip().rstrip("/") or DEFAULT_BASE_URL,
        model=env.get("REPLICATE_MODEL", "").strip() or DEFAULT_MODEL,
        timeout_seconds=timeout,
    )
