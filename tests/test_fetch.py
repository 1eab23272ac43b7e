from __future__ import annotations

from pathlib import Path

import pytest
from requests import HTTPError

from build_manipulator.coordinates import ArtifactRef
from build_manipulator.scripts.fetch import HttpFetcher, LocalRepositoryResolver
from build_manipulator.scripts.references import ScriptReferenceResolver
from tests.helpers import FakeResponse, FakeSession


def test_file_url_maps_to_local_path(tmp_path: Path) -> None:
    script = tmp_path / "align.py"
    script.write_text("pass\n", encoding="utf-8")

    fetched = HttpFetcher(tmp_path / "cache").fetch(script.as_uri())

    assert fetched == script


def test_missing_file_url_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        HttpFetcher(tmp_path / "cache").fetch((tmp_path / "missing.py").as_uri())


def test_http_url_downloads_into_cache(tmp_path: Path) -> None:
    url = "https://scripts.example.com/manipulation/align.py"
    session = FakeSession({url: FakeResponse(content=b"print('hi')\n")})
    fetcher = HttpFetcher(tmp_path / "cache", session=session, timeout=5)  # type: ignore[arg-type]

    fetched = fetcher.fetch(url)

    assert fetched.name == "align.py"
    assert fetched.is_relative_to(tmp_path / "cache")
    assert fetched.read_bytes() == b"print('hi')\n"
    assert session.calls == [{"url": url, "timeout": 5}]


def test_http_error_propagates(tmp_path: Path) -> None:
    session = FakeSession({})
    fetcher = HttpFetcher(tmp_path / "cache", session=session)  # type: ignore[arg-type]

    with pytest.raises(HTTPError):
        fetcher.fetch("https://scripts.example.com/missing.py")


def test_local_repository_hit_skips_remote(tmp_path: Path) -> None:
    ref = ArtifactRef.parse("org.example:scripts:1.0:py")
    local = tmp_path / "repo" / ref.repository_path()
    local.parent.mkdir(parents=True)
    local.write_text("pass\n", encoding="utf-8")
    session = FakeSession({})
    resolver = LocalRepositoryResolver(tmp_path / "repo", ["https://repo.example.com"], session=session)  # type: ignore[arg-type]

    assert resolver.resolve_raw_file(ref) == local
    assert session.calls == []


def test_remote_repositories_tried_in_order(tmp_path: Path) -> None:
    ref = ArtifactRef.parse("org.example:scripts:1.0:py")
    second = f"https://second.example.com/maven/{ref.repository_path()}"
    session = FakeSession({second: FakeResponse(content=b"pass\n")})
    resolver = LocalRepositoryResolver(
        tmp_path / "repo",
        ["https://first.example.com", "https://second.example.com/maven/"],
        session=session,  # type: ignore[arg-type]
    )

    resolved = resolver.resolve_raw_file(ref)

    assert resolved == tmp_path / "repo" / ref.repository_path()
    assert resolved.read_bytes() == b"pass\n"
    assert [call["url"] for call in session.calls] == [
        f"https://first.example.com/{ref.repository_path()}",
        second,
    ]


def test_unresolvable_artifact_raises_file_not_found(tmp_path: Path) -> None:
    resolver = LocalRepositoryResolver(tmp_path / "repo", [], session=FakeSession({}))  # type: ignore[arg-type]

    with pytest.raises(FileNotFoundError):
        resolver.resolve_raw_file(ArtifactRef.parse("org.example:missing:1.0"))


def test_default_collaborators_resolve_mixed_list(tmp_path: Path) -> None:
    script = tmp_path / "first.py"
    script.write_text("pass\n", encoding="utf-8")
    ref = ArtifactRef.parse("org.example:second:1.0:py")
    local = tmp_path / "repo" / ref.repository_path()
    local.parent.mkdir(parents=True)
    local.write_text("pass\n", encoding="utf-8")

    resolver = ScriptReferenceResolver(
        HttpFetcher(tmp_path / "cache"),
        LocalRepositoryResolver(tmp_path / "repo", []),
    )
    resolved = resolver.resolve(f"{script.as_uri()},org.example:second:1.0:py")

    assert [item.path for item in resolved] == [script, local]
