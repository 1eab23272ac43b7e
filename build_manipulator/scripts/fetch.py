"""Default collaborators used to fetch script files."""

from __future__ import annotations

import hashlib
import logging
import tempfile
from pathlib import Path
from typing import Optional, Sequence
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

import requests
from requests import Session

from ..coordinates import ArtifactRef

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def default_cache_dir() -> Path:
    return Path(tempfile.gettempdir()) / "build-manipulator" / "scripts"


def _write_bytes(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


class HttpFetcher:
    """Fetch ``file:`` and ``http(s):`` URLs to local paths.

    ``file:`` URLs are mapped onto the filesystem directly. Remote URLs are
    downloaded into ``cache_dir``, one sub-directory per URL so that scripts
    sharing a file name do not overwrite each other.
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        *,
        session: Optional[Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self.cache_dir = Path(cache_dir) if cache_dir else default_cache_dir()
        self.session = session
        self.timeout = timeout

    def fetch(self, url: str) -> Path:
        parsed = urlparse(url)
        if parsed.scheme == "file":
            path = Path(url2pathname(unquote(parsed.path)))
            if not path.is_file():
                raise FileNotFoundError(f"Script file not found: {path}")
            return path

        request_session = self.session or requests.Session()
        response = request_session.get(url, timeout=self.timeout)
        response.raise_for_status()

        digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:16]
        filename = Path(parsed.path).name or "script.py"
        target = self.cache_dir / digest / filename
        _write_bytes(target, response.content)
        logger.debug("Downloaded %s to %s", url, target)
        return target


class LocalRepositoryResolver:
    """Resolve artifacts from a Maven-layout repository on disk.

    Missing artifacts are downloaded from ``remote_repositories`` in order and
    stored in the local repository.
    """

    def __init__(
        self,
        local_repository: Path,
        remote_repositories: Sequence[str] = (),
        *,
        session: Optional[Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self.local_repository = Path(local_repository).expanduser()
        self.remote_repositories = list(remote_repositories)
        self.session = session
        self.timeout = timeout

    def resolve_raw_file(self, ref: ArtifactRef) -> Path:
        relative = ref.repository_path()
        local = self.local_repository / relative
        if local.is_file():
            logger.debug("Found %s in local repository at %s", ref, local)
            return local

        request_session = self.session or requests.Session()
        for remote in self.remote_repositories:
            url = f"{remote.rstrip('/')}/{relative}"
            logger.debug("Downloading %s from %s", ref, url)
            response = request_session.get(url, timeout=self.timeout)
            if response.status_code == 404:
                continue
            response.raise_for_status()
            _write_bytes(local, response.content)
            return local

        searched = [str(self.local_repository), *self.remote_repositories]
        raise FileNotFoundError(f"Artifact {ref} not found (searched: {', '.join(searched)})")


__all__ = ["HttpFetcher", "LocalRepositoryResolver", "default_cache_dir"]
