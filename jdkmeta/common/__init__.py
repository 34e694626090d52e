import os
import sys
import shlex

import requests
from cachecontrol import CacheControl  # type: ignore
from cachecontrol.cache import DictCache  # type: ignore

DEFAULT_PLATFORM = "x86_64-unknown-linux-gnu"
DEFAULT_HASH_COMMAND = "nix-prefetch-url --type sha256"
USER_AGENT = "jdkmeta/1.0"


def eprint(*args, **kwargs):
    print(*args, file=sys.stderr, **kwargs)


def platform_id():
    if "JDKMETA_PLATFORM" in os.environ:
        return os.environ["JDKMETA_PLATFORM"]
    return DEFAULT_PLATFORM


def hasher_kind():
    if "JDKMETA_HASHER" in os.environ:
        return os.environ["JDKMETA_HASHER"]
    return "download"


def hash_command() -> list[str]:
    if "JDKMETA_HASH_COMMAND" in os.environ:
        return shlex.split(os.environ["JDKMETA_HASH_COMMAND"])
    return shlex.split(DEFAULT_HASH_COMMAND)


def download_dir():
    return os.environ.get("JDKMETA_DOWNLOAD_DIR")


def default_session():
    # in-memory only, responses never outlive the run
    sess = CacheControl(requests.Session(), cache=DictCache())

    sess.headers.update({"User-Agent": USER_AGENT})

    return sess


def download_session():
    # artifacts are hundreds of MB, never cache their bodies
    sess = requests.Session()

    sess.headers.update({"User-Agent": USER_AGENT})

    return sess


def filehash(filename, hashtype, blocksize=65536):
    hashtype = hashtype()
    with open(filename, "rb") as f:
        for block in iter(lambda: f.read(blocksize), b""):
            hashtype.update(block)
    return hashtype.hexdigest()


def format_error_chain(exc: BaseException) -> str:
    """
    Renders an exception and every exception it was raised from, outermost first:

        Error: Failed to get version 21 (latest) from the temurin archive
        Caused by: temurin endpoint did not return any valid releases
            Failed Request: https://api.adoptium.net/v3/assets/feature_releases/21/ea?...
    """
    lines = []
    current: BaseException | None = exc
    prefix = "Error"
    while current is not None:
        lines.append(f"{prefix}: {current}")
        url = getattr(current, "url", None)
        if url:
            lines.append(f"    Failed Request: {url}")
        prefix = "Caused by"
        current = current.__cause__
    return "\n".join(lines)
