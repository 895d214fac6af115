import pytest

from core.config import ReplicateConfig
from core.gateway import ReplicateGateway

TEST_TOKEN = "r8_test_token"
PREDICTIONS_URL = "https://api.replicate.com/v1/models/black-forest-labs/flux-schnell/predictions"

FULL_DEFAULTS = {
    "go_fast": True,
    "megapixels": "1",
    "num_outputs": 1,
    "aspect_ratio": "1:1",
    "output_format": "webp",
    "output_quality": 80,
    "num_inference_steps": 4,
}


@pytest.fixture
def config():
    return ReplicateConfig(api_token=TEST_TOKEN)


@pytest.fixture
def gateway(config):
    with ReplicateGateway(config) as gw:
        yield gw
