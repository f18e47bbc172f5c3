import pytest

from envali import InMemoryContentSource, ValidationEngine


@pytest.fixture
def engine() -> ValidationEngine:
    """Engine with no external content."""
    return ValidationEngine(content_source=InMemoryContentSource())
