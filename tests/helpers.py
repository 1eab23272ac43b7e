from __future__ import annotations

from pathlib import Path
from typing import List

from requests import HTTPError

from build_manipulator.coordinates import ArtifactRef


class FakeFetcher:
    def __init__(self, root: Path) -> None:
        self.root = root
        self.calls: List[str] = []

    def fetch(self, url: str) -> Path:
        self.calls.append(url)
        return self.root / Path(url).name


class FakeArtifactResolver:
    def __init__(self, root: Path) -> None:
        self.root = root
        self.calls: List[ArtifactRef] = []

    def resolve_raw_file(self, ref: ArtifactRef) -> Path:
        self.calls.append(ref)
        return self.root / ref.filename()


class FakeResponse:
    def __init__(self, status_code: int = 200, content: bytes = b"") -> None:
        self.status_code = status_code
        self.content = content
        self.reason = "OK" if status_code < 400 else "Error"

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise HTTPError(f"{self.status_code} {self.reason}")


class FakeSession:
    def __init__(self, responses: dict[str, FakeResponse]) -> None:
        self.responses = responses
        self.calls: list[dict[str, object]] = []

    def get(self, url: str, timeout: int) -> FakeResponse:
        self.calls.append({"url": url, "timeout": timeout})
        return self.responses.get(url, FakeResponse(status_code=404))
