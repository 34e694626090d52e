from datetime import datetime
from functools import total_ordering
from typing import Any, Iterator, Optional
from urllib.parse import quote, urlencode, urlparse, urlunparse

from pydantic import ConfigDict, Field, RootModel

from . import APIQuery, MetaBase
from .enum import StrEnum
from ..common.java import (
    API_AVAILABLE_RELEASES,
    API_FEATURE_RELEASES,
    API_RELEASE_VERSIONS,
    API_VERSION_ASSETS,
    PAGE_SIZE,
)


class AdoptiumJvmImpl(StrEnum):
    Hotspot = "hotspot"
    OpenJ9 = "openj9"


class AdoptiumArchitecture(StrEnum):
    X64 = "x64"
    X86 = "x86"
    X32 = "x32"
    Ppc64 = "ppc64"
    Ppc64le = "ppc64le"
    S390x = "s390x"
    Aarch64 = "aarch64"
    Arm = "arm"
    Sparcv9 = "sparcv9"
    Riscv64 = "riscv64"


class AdoptiumReleaseType(StrEnum):
    GeneralAvailability = "ga"
    EarlyAccess = "ea"


class AdoptiumImageType(StrEnum):
    Jdk = "jdk"
    Jre = "jre"
    Testimage = "testimage"
    Debugimage = "debugimage"
    Staticlibs = "staticlibs"
    Sources = "sources"
    Sbom = "sbom"


class AdoptiumHeapSize(StrEnum):
    Normal = "normal"
    Large = "large"


class AdoptiumProject(StrEnum):
    Jdk = "jdk"
    Valhalla = "valhalla"
    Metropolis = "metropolis"
    Jfr = "jfr"
    Shenandoah = "shenandoah"


class AdoptiumOs(StrEnum):
    Linux = "linux"
    Windows = "windows"
    Mac = "mac"
    Solaris = "solaris"
    Aix = "aix"
    AlpineLinux = "alpine-linux"


def qualifier_tail(qualifier: str) -> str:
    # "17.0.1+9-beta" -> "beta", "17.0.1+9-" -> ""
    return qualifier.split("-")[-1]


@total_ordering
class JavaVersionKey(MetaBase):
    """
    The part of an upstream version that releases are ranked by.

    Ordered by major, minor, security and build, then by the last
    hyphen-separated segment of the qualifier (the raw openjdk version
    string), so that two builds published against the same numbers still
    rank deterministically. The full qualifier is the final tie-break, which
    keeps the order total: keys are only equal when every field is.
    """

    model_config = ConfigDict(frozen=True)

    major: int
    minor: int = 0
    security: int = 0
    build: int = 0
    qualifier: str = ""

    def to_tuple(self):
        return (
            self.major,
            self.minor,
            self.security,
            self.build,
            qualifier_tail(self.qualifier),
            self.qualifier,
        )

    def __eq__(self, other: Any):
        if not isinstance(other, JavaVersionKey):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    def __lt__(self, other: "JavaVersionKey"):
        return self.to_tuple() < other.to_tuple()

    def __hash__(self):
        return hash(self.to_tuple())

    def __str__(self):
        return f"{self.major}.{self.minor}.{self.security}+{self.build}"


def compare_versions(a: JavaVersionKey, b: JavaVersionKey) -> int:
    return (a > b) - (a < b)


class AdoptiumAvailableReleases(MetaBase):
    available_releases: list[int]
    available_lts_releases: list[int]
    most_recent_lts: Optional[int] = None
    most_recent_feature_release: int
    most_recent_feature_version: int
    tip_version: Optional[int] = None


class AdoptiumFile(MetaBase):
    name: str
    link: str
    size: Optional[int] = None


class AdoptiumPackage(AdoptiumFile):
    checksum: Optional[str] = None
    checksum_link: Optional[str] = None
    signature_link: Optional[str] = None
    metadata_link: Optional[str] = None
    # we intentionally omit download_count


class AdoptiumBinary(MetaBase):
    os: str
    architecture: AdoptiumArchitecture
    image_type: AdoptiumImageType
    jvm_impl: AdoptiumJvmImpl
    heap_size: AdoptiumHeapSize
    package: Optional[AdoptiumPackage] = None
    installer: Optional[AdoptiumPackage] = None
    project: Optional[AdoptiumProject] = None
    scm_ref: Optional[str] = None
    updated_at: Optional[datetime] = None
    # we intentionally omit download_count


class AdoptiumVersion(MetaBase):
    major: Optional[int] = None
    minor: Optional[int] = None
    security: Optional[int] = None
    patch: Optional[int] = None
    pre: Optional[str] = None
    adopt_build_number: Optional[int] = None
    semver: str
    openjdk_version: str
    build: Optional[int] = None
    optional: Optional[str] = None

    def key(self) -> JavaVersionKey:
        return JavaVersionKey(
            major=self.major if self.major is not None else 0,
            minor=self.minor if self.minor is not None else 0,
            security=self.security if self.security is not None else 0,
            build=self.build if self.build is not None else 0,
            qualifier=self.openjdk_version,
        )

    def to_slug(self):
        return f"1.{self.major}.{self.minor}"

    def to_java_version(self):
        return str(self.key())


class AdoptiumRelease(MetaBase):
    release_id: Optional[str] = Field(None, alias="id")
    release_link: Optional[str] = None
    release_name: Optional[str] = None
    timestamp: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    binaries: list[AdoptiumBinary]
    release_type: AdoptiumReleaseType
    vendor: Optional[str] = None
    version_data: AdoptiumVersion
    source: Optional[AdoptiumFile] = None
    release_notes: Optional[AdoptiumFile] = None
    # we intentionally omit download_count

    def key(self) -> JavaVersionKey:
        return self.version_data.key()


class AdoptiumReleases(RootModel[list[AdoptiumRelease]]):
    def __iter__(self) -> Iterator[AdoptiumRelease]:  # type: ignore[override]
        return iter(self.root)

    def __getitem__(self, item: int) -> AdoptiumRelease:
        return self.root[item]

    def __len__(self):
        return len(self.root)


class AdoptiumReleaseVersions(MetaBase):
    versions: list[AdoptiumVersion]


class AdoptiumFeatureReleasesQuery(APIQuery):
    """
    Query for `/v3/assets/feature_releases`. Doubles as the platform filter a
    resolved release's binaries are checked against.
    """

    architecture: Optional[AdoptiumArchitecture] = AdoptiumArchitecture.X64
    heap_size: Optional[AdoptiumHeapSize] = AdoptiumHeapSize.Normal
    image_type: Optional[AdoptiumImageType] = AdoptiumImageType.Jdk
    jvm_impl: Optional[AdoptiumJvmImpl] = None
    os: Optional[AdoptiumOs] = AdoptiumOs.Linux
    page_size: int = PAGE_SIZE
    project: Optional[AdoptiumProject] = AdoptiumProject.Jdk

    def matches(self, binary: AdoptiumBinary) -> bool:
        for key in ["architecture", "heap_size", "image_type", "jvm_impl", "os"]:
            wanted = getattr(self, key)
            if wanted is not None and str(getattr(binary, key)) != str(wanted):
                return False
        return True


class AdoptiumReleaseVersionsQuery(APIQuery):
    architecture: Optional[AdoptiumArchitecture] = AdoptiumArchitecture.X64
    image_type: Optional[AdoptiumImageType] = AdoptiumImageType.Jdk
    os: Optional[AdoptiumOs] = AdoptiumOs.Linux
    page: int = 0
    page_size: int = PAGE_SIZE
    project: Optional[AdoptiumProject] = AdoptiumProject.Jdk


def available_releases_url(api_base: str, jvm_impl: Optional[AdoptiumJvmImpl] = None):
    url = API_AVAILABLE_RELEASES.format(api_base=api_base)
    if jvm_impl is not None:
        url = f"{url}?{urlencode({'jvm_impl': jvm_impl.value})}"
    return url


def feature_releases_url(
    api_base: str,
    feature: int,
    release_type: AdoptiumReleaseType = AdoptiumReleaseType.GeneralAvailability,
    query: Optional[AdoptiumFeatureReleasesQuery] = None,
):
    if query is None:
        query = AdoptiumFeatureReleasesQuery()
    url = urlparse(
        API_FEATURE_RELEASES.format(
            api_base=api_base,
            feature_version=feature,
            release_type=release_type.value,
        )
    )
    return urlunparse(url._replace(query=query.to_query()))


def release_versions_url(api_base: str, query: AdoptiumReleaseVersionsQuery):
    url = urlparse(API_RELEASE_VERSIONS.format(api_base=api_base))
    return urlunparse(url._replace(query=query.to_query()))


def version_assets_url(api_base: str, version: str, query: AdoptiumReleaseVersionsQuery):
    url = urlparse(API_VERSION_ASSETS.format(api_base=api_base, version=quote(version, safe="")))
    return urlunparse(url._replace(query=query.to_query()))
