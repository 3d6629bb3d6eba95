import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import mathtext_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from mathtext_toolkit.formatter.config import FormatterConfig  # noqa: E402


# Common test fixtures
@pytest.fixture
def strict_config() -> FormatterConfig:
    """Strict configuration: leaked sentinels raise instead of being stripped."""
    return FormatterConfig.strict()


@pytest.fixture
def sample_payload() -> dict:
    """A small upstream solution payload."""
    return {
        "problem": "Solve 2x + 5 = 15 for *x*.",
        "steps": [
            {
                "title": "Subtract 5 from both sides",
                "equation": "2*x* + 5 = 15\n2*x* = 10",
                "summary": "We move the constant to the right side.",
            },
            {
                "title": "Divide both sides by 2",
                "equation": "*x* = {10/2}\n*x* = 5",
            },
        ],
        "finalAnswer": "*x* = 5",
    }
