"""Release lookup and self-update through the published install script."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

_TAG_MARKER = '"tag_name":"'
_TIMEOUT_SECONDS = 30


class UpdateError(Exception):
    """The latest release could not be looked up or installed."""


@dataclass
class UpdateInfo:
    """The installed and latest versions and whether they match."""

    current: str
    latest: str
    updated: bool

    def to_json(self) -> str:
        """Render the info as a single-line JSON object."""
        updated = "true" if self.updated else "false"
        return f'{{"current":"{self.current}","latest":"{self.latest}","updated":{updated}}}'


def extract_tag(body: str) -> str:
    """Return the value of the first "tag_name" field in a release body, or ''."""
    start = body.find(_TAG_MARKER)
    if start == -1:
        return ""
    start += len(_TAG_MARKER)
    end = body.find('"', start)
    if end == -1:
        return ""
    return body[start:end]


def _open(url: str) -> BinaryIO:
    try:
        response = urllib.request.urlopen(url, timeout=_TIMEOUT_SECONDS)
    except urllib.error.HTTPError as error:
        raise UpdateError(f"status={error.code}") from error
    except (urllib.error.URLError, OSError, ValueError) as error:
        raise UpdateError(str(error)) from error
    status = getattr(response, "status", None)
    if status is not None and status != 200:
        response.close()
        raise UpdateError(f"status={status}")
    return response


def fetch_latest_version(url: str) -> str:
    """Fetch a release description and return its tag without a leading 'v'."""
    with _open(url) as response:
        try:
            body = response.read().decode("utf-8", errors="replace")
        except OSError as error:
            raise UpdateError(str(error)) from error
    return extract_tag(body).removeprefix("v")


def needs_update(current: str, latest: str, force: bool) -> bool:
    """Return True when forced or when the versions differ, ignoring a leading 'v'."""
    return force or current.removeprefix("v") != latest.removeprefix("v")


def _download(url: str, destination: Path) -> None:
    with _open(url) as response, destination.open("wb") as target:
        try:
            shutil.copyfileobj(response, target)
        except OSError as error:
            raise UpdateError(str(error)) from error


def perform_update(script_url: str, version: str) -> None:
    """Download the install script and run it with bash for the given version."""
    try:
        directory = tempfile.mkdtemp(prefix="gitloom-update")
    except OSError as error:
        raise UpdateError(f"falha ao criar dir temp: {error}") from error

    try:
        script = Path(directory) / "install.sh"
        try:
            _download(script_url, script)
        except (UpdateError, OSError) as error:
            raise UpdateError(f"falha ao baixar script: {error}") from error

        try:
            os.chmod(script, 0o755)
        except OSError as error:
            raise UpdateError(f"falha ao definir permissao: {error}") from error

        try:
            subprocess.run(["bash", str(script), "-v", version, "-f"], check=True)
        except (subprocess.CalledProcessError, OSError) as error:
            raise UpdateError(str(error)) from error
    finally:
        shutil.rmtree(directory, ignore_errors=True)