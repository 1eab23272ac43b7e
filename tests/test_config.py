from __future__ import annotations

from pathlib import Path

import pytest

from build_manipulator.config import (
    ENV_SCRIPTS,
    MAVEN_CENTRAL,
    ManipulatorConfig,
    load_config,
    resolve_config,
)
from build_manipulator.errors import ConfigurationError


def test_defaults() -> None:
    config = load_config(None)

    assert config.scripts is None
    assert config.enabled is True
    assert config.local_repository == Path.home() / ".m2" / "repository"
    assert config.remote_repositories == [MAVEN_CENTRAL]
    assert config.log_level == "INFO"


def test_load_yaml(tmp_path: Path) -> None:
    path = tmp_path / "manipulator.yaml"
    path.write_text(
        "scripts: org.example:scripts:1.0\n"
        "local_repository: /srv/m2\n"
        "remote_repositories:\n"
        "  - https://repo.example.com/maven\n"
        "log_level: debug\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.scripts == "org.example:scripts:1.0"
    assert config.local_repository == Path("/srv/m2")
    assert config.remote_repositories == ["https://repo.example.com/maven"]
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    "content",
    [
        "scripts: [unclosed\n",
        "- just\n- a list\n",
        "unknown_setting: true\n",
        "log_level: loud\n",
    ],
)
def test_invalid_files_raise_configuration_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "manipulator.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(tmp_path / "absent.yaml")


def test_precedence_file_then_properties_then_environment(tmp_path: Path) -> None:
    path = tmp_path / "manipulator.yaml"
    path.write_text("scripts: from-file:scripts:1.0\nlocal_repository: /from/file\n", encoding="utf-8")

    from_properties = resolve_config(
        path,
        {"manipulationScripts": "from-props:scripts:1.0", "remoteRepositories": "https://a, https://b"},
        environ={},
    )
    from_env = resolve_config(
        path,
        {"manipulationScripts": "from-props:scripts:1.0"},
        environ={ENV_SCRIPTS: "from-env:scripts:1.0"},
    )

    assert from_properties.scripts == "from-props:scripts:1.0"
    assert from_properties.local_repository == Path("/from/file")
    assert from_properties.remote_repositories == ["https://a", "https://b"]
    assert from_env.scripts == "from-env:scripts:1.0"


def test_disable_property() -> None:
    config = ManipulatorConfig().with_properties({"manipulation.disable": "true"})

    assert config.enabled is False
    with pytest.raises(ConfigurationError):
        ManipulatorConfig().with_properties({"manipulation.disable": "perhaps"})
