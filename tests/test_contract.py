"""
tests/test_contract.py

Tool declaration and argument validation.
"""

import pytest

from core.contract import decode, list_tools, validate
from core.errors import InvalidArguments, UnknownTool
from core.models import ToolCallRequest
from mcp.types import INVALID_PARAMS, METHOD_NOT_FOUND


def _call(**arguments):
    return ToolCallRequest(name="generate_image", arguments=arguments)


# ─────────────────────────────────────────────────────
# list_tools
# ─────────────────────────────────────────────────────


class TestListTools:
    def test_single_generate_image_tool(self):
        tools = list_tools()
        assert len(tools) == 1
        assert tools[0]["name"] == "generate_image"
        assert tools[0]["description"] == "Generate an image using the Flux Schnell model"

    def test_schema_is_closed_with_prompt_required(self):
        schema = list_tools()[0]["inputSchema"]
        assert schema["type"] == "object"
        assert schema["required"] == ["prompt"]
        assert schema["additionalProperties"] is False
        assert list(schema["properties"]) == [
            "prompt",
            "go_fast",
            "megapixels",
            "num_outputs",
            "aspect_ratio",
            "output_format",
            "output_quality",
            "num_inference_steps",
        ]

    def test_enums_and_bounds_declared(self):
        props = list_tools()[0]["inputSchema"]["properties"]
        assert props["megapixels"]["enum"] == ["1", "0.25"]
        assert props["aspect_ratio"]["enum"] == ["1:1", "4:3", "16:9"]
        assert props["output_format"]["enum"] == ["webp", "png", "jpeg"]
        assert (props["num_outputs"]["minimum"], props["num_outputs"]["maximum"]) == (1, 4)
        assert (props["output_quality"]["minimum"], props["output_quality"]["maximum"]) == (1, 100)
        assert (props["num_inference_steps"]["minimum"], props["num_inference_steps"]["maximum"]) == (4, 4)
        assert props["go_fast"]["type"] == "boolean"

    def test_returned_descriptor_is_a_copy(self):
        first = list_tools()
        first[0]["inputSchema"]["properties"]["aspect_ratio"]["enum"].append("21:9")
        first[0]["inputSchema"]["required"].append("go_fast")

        second = list_tools()
        assert second[0]["inputSchema"]["properties"]["aspect_ratio"]["enum"] == ["1:1", "4:3", "16:9"]
        assert second[0]["inputSchema"]["required"] == ["prompt"]


# ─────────────────────────────────────────────────────
# validate: tool name
# ─────────────────────────────────────────────────────


class TestUnknownTool:
    @pytest.mark.parametrize("name", ["", "generate", "Generate_Image", "upscale_image"])
    def test_other_names_rejected(self, name):
        with pytest.raises(UnknownTool) as exc:
            validate(ToolCallRequest(name=name, arguments={"prompt": "x"}))
        assert exc.value.code == METHOD_NOT_FOUND
        assert str(exc.value) == f"Unknown tool: {name}"

    def test_name_checked_before_arguments(self):
        with pytest.raises(UnknownTool):
            validate(ToolCallRequest(name="nope", arguments={"aspect_ratio": "21:9"}))


# ─────────────────────────────────────────────────────
# validate: arguments
# ─────────────────────────────────────────────────────


class TestValidArguments:
    def test_prompt_only(self):
        assert validate(_call(prompt="a lighthouse at dusk")) == {"prompt": "a lighthouse at dusk"}

    def test_returns_bag_unchanged_without_defaults(self):
        args = {"prompt": "x", "aspect_ratio": "16:9", "output_format": "png"}
        assert validate(ToolCallRequest(name="generate_image", arguments=args)) == args

    def test_all_fields(self):
        args = {
            "prompt": "x",
            "go_fast": False,
            "megapixels": "0.25",
            "num_outputs": 2,
            "aspect_ratio": "4:3",
            "output_format": "jpeg",
            "output_quality": 95.5,
            "num_inference_steps": 4,
        }
        assert validate(ToolCallRequest(name="generate_image", arguments=args)) == args

    def test_numeric_bounds_not_enforced(self):
        args = {"prompt": "x", "num_outputs": 10, "output_quality": 0, "num_inference_steps": 50}
        assert validate(ToolCallRequest(name="generate_image", arguments=args)) == args

    def test_omitted_optional_is_none(self):
        assert decode({"prompt": "x"}).go_fast is None


class TestInvalidArguments:
    @pytest.mark.parametrize(
        "arguments",
        [
            {},
            {"go_fast": True},
            {"prompt": 42},
            {"prompt": None},
            {"prompt": ""},
            {"prompt": ["a", "b"]},
        ],
    )
    def test_bad_or_missing_prompt(self, arguments):
        with pytest.raises(InvalidArguments) as exc:
            validate(ToolCallRequest(name="generate_image", arguments=arguments))
        assert exc.value.code == INVALID_PARAMS
        assert "prompt" in str(exc.value)

    def test_missing_argument_bag(self):
        with pytest.raises(InvalidArguments):
            validate(ToolCallRequest(name="generate_image", arguments=None))

    def test_non_mapping_bag(self):
        with pytest.raises(InvalidArguments, match="must be an object"):
            validate(ToolCallRequest(name="generate_image", arguments=["prompt"]))

    @pytest.mark.parametrize(
        "field, value",
        [
            ("aspect_ratio", "21:9"),
            ("megapixels", "2"),
            ("megapixels", 1),
            ("output_format", "gif"),
            ("output_format", "PNG"),
        ],
    )
    def test_enum_outside_declared_set(self, field, value):
        with pytest.raises(InvalidArguments) as exc:
            validate(_call(prompt="x", **{field: value}))
        assert field in str(exc.value)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("go_fast", "true"),
            ("go_fast", 1),
            ("num_outputs", "2"),
            ("num_outputs", True),
            ("output_quality", "80"),
            ("num_inference_steps", [4]),
        ],
    )
    def test_wrong_types_not_coerced(self, field, value):
        with pytest.raises(InvalidArguments) as exc:
            validate(_call(prompt="x", **{field: value}))
        assert field in str(exc.value)

    @pytest.mark.parametrize("field", ["go_fast", "megapixels", "num_outputs", "output_quality"])
    def test_explicit_null_rejected(self, field):
        with pytest.raises(InvalidArguments) as exc:
            validate(_call(prompt="x", **{field: None}))
        assert field in str(exc.value)

    def test_unknown_key_rejected(self):
        with pytest.raises(InvalidArguments, match="seed"):
            validate(_call(prompt="x", seed=7))

    def test_message_prefix(self):
        with pytest.raises(InvalidArguments) as exc:
            validate(_call(prompt="x", aspect_ratio="21:9"))
        assert str(exc.value).startswith("Invalid parameters for generate_image")


def test_error_data_carries_protocol_code():
    data = UnknownTool("nope").to_error_data()
    assert data.code == METHOD_NOT_FOUND
    assert data.message == "Unknown tool: nope"
