from __future__ import annotations

import pytest

from build_manipulator.coordinates import ArtifactRef
from build_manipulator.errors import ConfigurationError


def test_parse_minimal_coordinate_uses_jar_type() -> None:
    ref = ArtifactRef.parse("org.example:scripts:1.0")

    assert ref == ArtifactRef(group_id="org.example", artifact_id="scripts", version="1.0")
    assert ref.type == "jar"
    assert ref.classifier is None
    assert ref.as_project_version() == "org.example:scripts:1.0"


def test_parse_type_and_classifier() -> None:
    ref = ArtifactRef.parse("org.example:scripts:1.0:py:manipulation")

    assert ref.type == "py"
    assert ref.classifier == "manipulation"
    assert str(ref) == "org.example:scripts:1.0:py:manipulation"
    assert ref.repository_path() == "org/example/scripts/1.0/scripts-1.0-manipulation.py"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "org.example:scripts",
        "not:a:valid::coordinate:::",
        "org.example::1.0",
        "a:b:c:d:e:f",
    ],
)
def test_parse_rejects_malformed_coordinates(text: str) -> None:
    with pytest.raises(ConfigurationError):
        ArtifactRef.parse(text)
