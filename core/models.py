# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the image tool)
# =============================================================================
#
# Everything here is call-scoped.  A ToolCallRequest comes in, gets decoded
# into a GenerateImageArgs record, and is turned into an upstream request
# body.  Nothing survives past a single tool call.
#
# TWO KINDS OF MODEL:
#   - ToolCallRequest is a plain dataclass: it's just the envelope the
#     protocol hands us (tool name + untyped argument bag).
#   - GenerateImageArgs is a pydantic model in STRICT mode with
#     extra="forbid".  It is the closed, typed view of the argument bag,
#     so a bad call fails while decoding instead of somewhere downstream.
#
# DEFAULTS:
#   An omitted field is None on the record, but an explicit null from the
#   caller is rejected: "unset" means leaving the key out.  The defaults live
#   in DEFAULT_ARGUMENTS and are applied by the gateway (core/gateway.py),
#   not here.  Validation returns the caller's bag untouched.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, field_validator


TOOL_NAME = "generate_image"

# --- Enumerations (literal values accepted on the wire) ---
Megapixels = Literal["1", "0.25"]
AspectRatio = Literal["1:1", "4:3", "16:9"]
OutputFormat = Literal["webp", "png", "jpeg"]

# JSON numbers: ints stay ints, floats stay floats, bools are rejected.
Number = Union[StrictInt, StrictFloat]


# -----------------------------------------------------------------------------
# Field order matters only for determinism: the upstream payload and the
# declared schema both follow this order.
# -----------------------------------------------------------------------------
DEFAULT_ARGUMENTS: dict[str, Any] = {
    "go_fast": True,
    "megapixels": "1",
    "num_outputs": 1,
    "aspect_ratio": "1:1",
    "output_format": "webp",
    "output_quality": 80,
    "num_inference_steps": 4,
}

FIELD_ORDER: tuple[str, ...] = ("prompt", *DEFAULT_ARGUMENTS)

# Declared for clients, forwarded as-is; the inference API owns these limits.
NUMERIC_BOUNDS: dict[str, tuple[int, int]] = {
    "num_outputs": (1, 4),
    "output_quality": (1, 100),
    "num_inference_steps": (4, 4),
}


@dataclass
class ToolCallRequest:
    """An inbound tool call: which tool, and its raw argument bag."""

    name: str
    arguments: Optional[Mapping[str, Any]] = field(default=None)


class GenerateImageArgs(BaseModel):
    """Validated arguments for the generate_image tool.

    Only types and enum membership are checked.  Numeric ranges are
    documented in NUMERIC_BOUNDS but left to the upstream service.
    """

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    prompt: str = Field(min_length=1)
    go_fast: Optional[StrictBool] = None
    megapixels: Optional[Megapixels] = None
    num_outputs: Optional[Number] = None
    aspect_ratio: Optional[AspectRatio] = None
    output_format: Optional[OutputFormat] = None
    output_quality: Optional[Number] = None
    num_inference_steps: Optional[Number] = None

    @field_validator(*DEFAULT_ARGUMENTS, mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("null is not allowed, omit the field instead")
        return value
