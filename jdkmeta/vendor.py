from typing import Optional

from pydantic import ConfigDict, ValidationError

from .common import eprint, format_error_chain
from .common.http import get_json
from .common.java import (
    ADOPTIUM_API_BASE,
    ADOPTOPENJDK_API_BASE,
    SEMERU_VENDOR,
    TEMURIN_VENDOR,
)
from .errors import JdkMetaError, NoCandidatesError, SchemaError, TransportError
from .model import MetaBase
from .model.adoptium import (
    AdoptiumAvailableReleases,
    AdoptiumBinary,
    AdoptiumFeatureReleasesQuery,
    AdoptiumJvmImpl,
    AdoptiumRelease,
    AdoptiumReleases,
    AdoptiumReleaseType,
    available_releases_url,
    feature_releases_url,
)


class Vendor(MetaBase):
    """
    One upstream distribution. Both vendors speak the same adoptium v3 API and
    differ only in where it lives, which JVM they ship and how they treat a
    newest feature version that has no early-access build.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    api_base: str
    jvm_impl: Optional[AdoptiumJvmImpl] = None
    fallback_is_fatal: bool = True
    # summary field the "latest" pointer is read from
    latest_pointer: str = "most_recent_feature_version"

    def query(self) -> AdoptiumFeatureReleasesQuery:
        return AdoptiumFeatureReleasesQuery(jvm_impl=self.jvm_impl)


TEMURIN = Vendor(
    name=TEMURIN_VENDOR,
    api_base=ADOPTIUM_API_BASE,
    fallback_is_fatal=True,
)
SEMERU = Vendor(
    name=SEMERU_VENDOR,
    api_base=ADOPTOPENJDK_API_BASE,
    jvm_impl=AdoptiumJvmImpl.OpenJ9,
    fallback_is_fatal=False,
    latest_pointer="most_recent_feature_release",
)
VENDORS = [TEMURIN, SEMERU]


class ResolvedCandidate(MetaBase):
    feature_version: int
    release_type: AdoptiumReleaseType
    release: AdoptiumRelease
    binary: AdoptiumBinary

    @property
    def link(self) -> str:
        if self.binary.package is None:
            raise SchemaError(
                f"Release {self.release.version_data.openjdk_version} has no package to download",
                feature_version=self.feature_version,
            )
        return self.binary.package.link

    @property
    def early_access(self) -> bool:
        return self.release_type is AdoptiumReleaseType.EarlyAccess


class VendorCatalog(MetaBase):
    vendor: str
    available: AdoptiumAvailableReleases
    releases: dict[int, ResolvedCandidate]


def fetch_available_releases(sess, vendor: Vendor) -> AdoptiumAvailableReleases:
    url = available_releases_url(vendor.api_base, vendor.jvm_impl)
    eprint(f"Getting {vendor.name} available releases:", url)
    data = get_json(
        sess,
        url,
        f"Failed to request available versions from {vendor.name}",
        vendor=vendor.name,
    )
    try:
        return AdoptiumAvailableReleases.model_validate(data)
    except ValidationError as e:
        raise TransportError(
            f"Unexpected available releases document from {vendor.name}",
            vendor=vendor.name,
            url=url,
        ) from e


def fetch_release_page(
    sess,
    vendor: Vendor,
    feature_version: int,
    release_type: AdoptiumReleaseType,
    query: Optional[AdoptiumFeatureReleasesQuery] = None,
) -> list[AdoptiumRelease]:
    if query is None:
        query = vendor.query()
    url = feature_releases_url(vendor.api_base, feature_version, release_type, query)
    eprint(f"Fetching {vendor.name} {release_type} releases for Java {feature_version}:", url)
    data = get_json(
        sess,
        url,
        f"Failed to get release information from {vendor.name}",
        allow_missing=True,
        vendor=vendor.name,
        feature_version=feature_version,
    )
    if data is None:
        return []
    try:
        return list(AdoptiumReleases.model_validate(data))
    except ValidationError as e:
        raise TransportError(
            f"Unexpected release document from {vendor.name}",
            vendor=vendor.name,
            feature_version=feature_version,
            url=url,
        ) from e


def select_binary(
    release: AdoptiumRelease,
    query: AdoptiumFeatureReleasesQuery,
    vendor: Vendor,
    feature_version: int,
    url: Optional[str] = None,
) -> AdoptiumBinary:
    binaries = [binary for binary in release.binaries if query.matches(binary)]
    if len(binaries) != 1:
        raise SchemaError(
            f"Release {release.version_data.openjdk_version} has {len(binaries)} binaries "
            f"matching {query.to_query()}, expected exactly one",
            vendor=vendor.name,
            feature_version=feature_version,
            url=url,
        )
    binary = binaries[0]
    if binary.package is None:
        raise SchemaError(
            f"Release {release.version_data.openjdk_version} has no package to download",
            vendor=vendor.name,
            feature_version=feature_version,
            url=url,
        )
    return binary


def fetch_best(
    sess,
    vendor: Vendor,
    feature_version: int,
    release_type: AdoptiumReleaseType,
) -> ResolvedCandidate:
    query = vendor.query()
    url = feature_releases_url(vendor.api_base, feature_version, release_type, query)
    releases = fetch_release_page(sess, vendor, feature_version, release_type, query)
    if len(releases) == 0:
        raise NoCandidatesError(
            f"{vendor.name} endpoint did not return any valid releases",
            vendor=vendor.name,
            feature_version=feature_version,
            url=url,
        )

    release = max(releases, key=AdoptiumRelease.key)
    binary = select_binary(release, query, vendor, feature_version, url)
    eprint(f"Selected {vendor.name} {release.version_data.openjdk_version} for Java {feature_version}")
    return ResolvedCandidate(
        feature_version=feature_version,
        release_type=release_type,
        release=release,
        binary=binary,
    )


def _in_context(e: JdkMetaError, message: str, vendor: Vendor, feature_version: int):
    return type(e)(message, vendor=vendor.name, feature_version=feature_version)


def build_vendor_catalog(
    sess,
    vendor: Vendor,
    available: Optional[AdoptiumAvailableReleases] = None,
) -> VendorCatalog:
    if available is None:
        available = fetch_available_releases(sess, vendor)

    releases: dict[int, ResolvedCandidate] = {}
    # get the generally available build of every advertised feature version
    for version in available.available_releases:
        try:
            releases[version] = fetch_best(
                sess, vendor, version, AdoptiumReleaseType.GeneralAvailability
            )
        except JdkMetaError as e:
            raise _in_context(
                e, f"Failed to get version {version} from the {vendor.name} archive", vendor, version
            ) from e

    latest = available.most_recent_feature_version
    if latest not in releases:
        # brand new feature version, only an early-access build may exist yet
        try:
            releases[latest] = fetch_best(sess, vendor, latest, AdoptiumReleaseType.EarlyAccess)
        except JdkMetaError as e:
            message = f"Failed to get version {latest} (latest) from the {vendor.name} archive"
            if vendor.fallback_is_fatal:
                raise _in_context(e, message, vendor, latest) from e
            eprint(f"Warning: {message}")
            eprint(format_error_chain(e))

    return VendorCatalog(vendor=vendor.name, available=available, releases=releases)
