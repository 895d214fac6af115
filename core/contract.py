# =============================================================================
# core/contract.py  -  The Tool Contract (what we offer, what we accept)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   1. Declares the one tool this server exposes (list_tools)
#   2. Gates incoming calls before any network I/O happens (validate)
#
# VALIDATION POLICY:
#   - The tool name must be "generate_image".
#   - The argument bag is decoded into GenerateImageArgs (strict, closed).
#   - Numeric bounds are DECLARED in the schema but NOT enforced here.
#     Replicate is the source of truth for them.
#   - On success the caller's bag is returned unchanged.  Defaults are
#     applied later, at the gateway boundary.
# =============================================================================

import copy
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from core.errors import InvalidArguments, UnknownTool
from core.models import (
    NUMERIC_BOUNDS,
    TOOL_NAME,
    GenerateImageArgs,
    ToolCallRequest,
)

TOOL_DESCRIPTION = "Generate an image using the Flux Schnell model"

PARAMETER_DESCRIPTIONS: dict[str, str] = {
    "prompt": "Text prompt describing the desired image",
    "go_fast": "Enable fast mode",
    "megapixels": "Image resolution in megapixels",
    "num_outputs": "Number of images to generate",
    "aspect_ratio": "Image aspect ratio",
    "output_format": "Output image format",
    "output_quality": "Output image quality",
    "num_inference_steps": "Number of inference steps",
}


def _number(name: str) -> dict[str, Any]:
    minimum, maximum = NUMERIC_BOUNDS[name]
    return {
        "type": "number",
        "minimum": minimum,
        "maximum": maximum,
        "description": PARAMETER_DESCRIPTIONS[name],
    }


def _enum(name: str, values: list[str]) -> dict[str, Any]:
    return {
        "type": "string",
        "enum": values,
        "description": PARAMETER_DESCRIPTIONS[name],
    }


_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "prompt": {"type": "string", "description": PARAMETER_DESCRIPTIONS["prompt"]},
        "go_fast": {"type": "boolean", "description": PARAMETER_DESCRIPTIONS["go_fast"]},
        "megapixels": _enum("megapixels", ["1", "0.25"]),
        "num_outputs": _number("num_outputs"),
        "aspect_ratio": _enum("aspect_ratio", ["1:1", "4:3", "16:9"]),
        "output_format": _enum("output_format", ["webp", "png", "jpeg"]),
        "output_quality": _number("output_quality"),
        "num_inference_steps": _number("num_inference_steps"),
    },
    "required": ["prompt"],
    "additionalProperties": False,
}


def list_tools() -> list[dict[str, Any]]:
    """Return the static tool descriptors (a fresh copy on every call)."""
    return [
        {
            "name": TOOL_NAME,
            "description": TOOL_DESCRIPTION,
            "inputSchema": copy.deepcopy(_INPUT_SCHEMA),
        }
    ]


def _describe(error: ValidationError) -> str:
    """Squash a pydantic error list into one line, e.g. "aspect_ratio: ..."."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def decode(arguments: Optional[Mapping[str, Any]]) -> GenerateImageArgs:
    """Parse an untyped argument bag into the closed GenerateImageArgs record.

    Raises:
        InvalidArguments: on a missing/empty prompt, a wrong type, an enum
            value outside its set, or an unknown key.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise InvalidArguments("arguments must be an object")
    try:
        return GenerateImageArgs.model_validate(dict(arguments))
    except ValidationError as e:
        raise InvalidArguments(_describe(e)) from e


def validate(call: ToolCallRequest) -> dict[str, Any]:
    """Check a tool call against the contract and return its raw arguments.

    Raises:
        UnknownTool: the call names a tool other than generate_image.
        InvalidArguments: the argument bag does not decode.
    """
    if call.name != TOOL_NAME:
        raise UnknownTool(call.name)

    decode(call.arguments)
    return dict(call.arguments or {})
