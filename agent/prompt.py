# =============================================================================
# agent/prompt.py  -  System prompt for the image agent
# =============================================================================
#
# The prompt teaches the LLM the tool's knobs in plain language so it can
# map requests like "a wide banner, as a PNG" onto aspect_ratio="16:9" and
# output_format="png" without guessing values the server would reject.
# =============================================================================

from core.contract import list_tools
from core.models import DEFAULT_ARGUMENTS, NUMERIC_BOUNDS


def _options_summary() -> str:
    """One line per optional parameter: allowed values and default."""
    schema = list_tools()[0]["inputSchema"]["properties"]
    lines = []
    for name, default in DEFAULT_ARGUMENTS.items():
        spec = schema[name]
        if "enum" in spec:
            allowed = ", ".join(repr(v) for v in spec["enum"])
        elif name in NUMERIC_BOUNDS:
            low, high = NUMERIC_BOUNDS[name]
            allowed = f"{low}-{high}" if low != high else str(low)
        else:
            allowed = spec["type"]
        lines.append(f"  • {name}: {allowed} (default {default!r})  {spec['description']}")
    return "\n".join(lines)


def get_image_agent_prompt() -> str:
    """Build the system prompt, listing the tool's options from the contract."""
    return f"""You are a helpful image-generation assistant. You create images for the
user by calling the generate_image tool, which runs the Flux Schnell model.

═══════════════════════════════════════════════════════════════════════
HOW TO USE generate_image
═══════════════════════════════════════════════════════════════════════
  1. Turn the user's request into a concrete, visual prompt: subject,
     setting, style, lighting, composition.
  2. Only set an option when the user asks for something it controls.
     Otherwise leave it out and the default is used.
  3. Use ONLY these values:
{_options_summary()}

═══════════════════════════════════════════════════════════════════════
PRESENTING RESULTS
═══════════════════════════════════════════════════════════════════════
The tool returns a Replicate prediction as JSON. The image URLs are in
its "output" list. Show each URL on its own line and restate the prompt
you used. If "status" is not "succeeded", say the image is not ready yet.

If the tool returns an error, explain it in one sentence and suggest a
fix (for example a different aspect ratio). Do NOT retry the same call
unchanged.
"""
