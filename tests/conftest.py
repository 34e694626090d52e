import pytest
import requests


class FakeResponse:
    def __init__(self, status_code=200, body=None, content=b""):
        self.status_code = status_code
        self._body = body
        self._content = content
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.closed = True

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self._content), chunk_size):
            yield self._content[i:i + chunk_size]


class FakeSession:
    """
    Answers GETs from a route table keyed by url without its query string.
    A route is a FakeResponse or a callable taking the full url.
    Unknown urls answer 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requested = []

    def get(self, url, **kwargs):
        self.requested.append(url)
        route = self.routes.get(url, self.routes.get(url.split("?")[0]))
        if route is None:
            return FakeResponse(404)
        if callable(route):
            return route(url)
        return route

    def requested_paths(self):
        return [url.split("?")[0] for url in self.requested]


def make_binary(
    link,
    architecture="x64",
    os="linux",
    image_type="jdk",
    heap_size="normal",
    jvm_impl="hotspot",
):
    return {
        "os": os,
        "architecture": architecture,
        "image_type": image_type,
        "heap_size": heap_size,
        "jvm_impl": jvm_impl,
        "project": "jdk",
        "package": {
            "name": link.rsplit("/", 1)[-1],
            "link": link,
            "size": 1024,
        },
    }


def make_version(major, minor=0, security=0, build=1, openjdk_version=None):
    if openjdk_version is None:
        openjdk_version = f"{major}.{minor}.{security}+{build}"
    return {
        "major": major,
        "minor": minor,
        "security": security,
        "build": build,
        "semver": f"{major}.{minor}.{security}+{build}",
        "openjdk_version": openjdk_version,
    }


def make_release(
    major,
    minor=0,
    security=0,
    build=1,
    openjdk_version=None,
    release_type="ga",
    jvm_impl="hotspot",
    binaries=None,
):
    version = make_version(major, minor, security, build, openjdk_version)
    if binaries is None:
        link = f"https://github.com/adoptium/jdk/releases/download/jdk-{version['openjdk_version']}.tar.gz"
        binaries = [make_binary(link, jvm_impl=jvm_impl)]
    return {
        "id": f"release-{version['openjdk_version']}",
        "release_name": f"jdk-{version['openjdk_version']}",
        "release_type": release_type,
        "vendor": "eclipse",
        "version_data": version,
        "binaries": binaries,
    }


def make_available(available, lts, most_recent_feature_version, most_recent_feature_release):
    return {
        "available_releases": available,
        "available_lts_releases": lts,
        "most_recent_feature_release": most_recent_feature_release,
        "most_recent_feature_version": most_recent_feature_version,
        "tip_version": most_recent_feature_version + 1,
    }


def feature_url(api_base, feature, release_type="ga"):
    return f"{api_base}/v3/assets/feature_releases/{feature}/{release_type}"


def available_url(api_base):
    return f"{api_base}/v3/info/available_releases"


def link_of(release):
    return release["binaries"][0]["package"]["link"]


@pytest.fixture
def fake_session():
    def factory(routes=None):
        return FakeSession(routes)

    return factory


@pytest.fixture
def fake_hasher():
    hashed = []

    def hasher(url):
        hashed.append(url)
        return f"sha256-of-{url.rsplit('/', 1)[-1]}"

    hasher.hashed = hashed
    return hasher


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in [
        "JDKMETA_PLATFORM",
        "JDKMETA_HASHER",
        "JDKMETA_HASH_COMMAND",
        "JDKMETA_DOWNLOAD_DIR",
    ]:
        monkeypatch.delenv(name, raising=False)
