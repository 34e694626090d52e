import hashlib
import os
import subprocess
import tempfile
from typing import Optional

import requests

from .common import download_dir, download_session, eprint, filehash, hash_command, hasher_kind
from .common.http import download_binary_file
from .errors import HashingError


class DownloadHasher:
    """Streams the artifact through the session and returns its sha256 hex digest."""

    def __init__(self, sess, scratch_dir: Optional[str] = None):
        self.sess = sess
        self.scratch_dir = scratch_dir

    def __call__(self, url: str) -> str:
        eprint("Hashing", url)
        with tempfile.TemporaryDirectory(dir=self.scratch_dir) as tmp:
            path = os.path.join(tmp, "artifact")
            try:
                download_binary_file(self.sess, path, url)
                return filehash(path, hashlib.sha256)
            except (requests.RequestException, OSError) as e:
                raise HashingError(f"Failed to download and hash {url}", url=url) from e


class CommandHasher:
    """
    Runs an external prefetch command with the url appended and takes the last
    line it prints as the digest, e.g. `nix-prefetch-url --type sha256 <url>`.
    """

    def __init__(self, command: list[str]):
        self.command = command

    def __call__(self, url: str) -> str:
        eprint("Hashing", url, "with", self.command[0])
        try:
            result = subprocess.run(
                [*self.command, url],
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise HashingError(f"Hash command {self.command[0]} is not available", url=url) from e
        except subprocess.CalledProcessError as e:
            raise HashingError(
                f"Hash command exited with status {e.returncode}: {e.stderr.strip()}",
                url=url,
            ) from e

        lines = result.stdout.strip().splitlines()
        if len(lines) == 0:
            raise HashingError("Hash command did not print a digest", url=url)
        return lines[-1].strip()


def hasher_from_env():
    kind = hasher_kind()
    if kind == "download":
        return DownloadHasher(download_session(), download_dir())
    if kind == "command":
        return CommandHasher(hash_command())
    raise HashingError(f"Unknown hasher '{kind}', expected 'download' or 'command'")
