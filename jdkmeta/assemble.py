from typing import Callable, Iterable

from .common import eprint
from .errors import HashingError, MissingPointerError
from .model.adoptium import AdoptiumVersion
from .model.catalog import LegacySources, PublishedCatalog, ResolvedRelease, version_slug
from .vendor import ResolvedCandidate, Vendor, VendorCatalog, build_vendor_catalog

Hasher = Callable[[str], str]


def resolve_release(candidate: ResolvedCandidate, hasher: Hasher) -> ResolvedRelease:
    link = candidate.link
    return ResolvedRelease(
        link=link,
        major_version=candidate.feature_version,
        java_version=candidate.release.version_data.openjdk_version,
        early_access=candidate.early_access,
        sha256=hasher(link),
    )


def assemble_published_catalog(
    vendor: Vendor, catalog: VendorCatalog, hasher: Hasher
) -> PublishedCatalog:
    versions: dict[str, ResolvedRelease] = {}
    for feature_version, candidate in catalog.releases.items():
        try:
            versions[version_slug(feature_version)] = resolve_release(candidate, hasher)
        except HashingError as e:
            raise HashingError(
                f"Failed to hash version {feature_version} from the {vendor.name} archive",
                vendor=vendor.name,
                feature_version=feature_version,
            ) from e

    available = catalog.available
    if len(available.available_lts_releases) == 0:
        raise MissingPointerError(
            "'lts' cannot be resolved, no LTS releases are advertised",
            pointer="lts",
            vendor=vendor.name,
        )

    return PublishedCatalog.from_versions(
        versions,
        latest=version_slug(getattr(available, vendor.latest_pointer)),
        stable=version_slug(available.most_recent_feature_release),
        lts=version_slug(max(available.available_lts_releases)),
        vendor=vendor.name,
    )


def assemble_platform(sess, vendors: list[Vendor], hasher: Hasher) -> dict[str, PublishedCatalog]:
    catalogs: dict[str, PublishedCatalog] = {}
    for vendor in vendors:
        eprint(f"Processing {vendor.name} releases")
        catalog = build_vendor_catalog(sess, vendor)
        catalogs[vendor.name] = assemble_published_catalog(vendor, catalog, hasher)
    return catalogs


def merge_by_slug(
    candidates: Iterable[tuple[AdoptiumVersion, str]]
) -> dict[str, tuple[AdoptiumVersion, str]]:
    """
    Collapses (version, url) pairs onto their "1.<major>.<minor>" slug, keeping
    the greatest version seen for each slug.
    """
    slugs: dict[str, tuple[AdoptiumVersion, str]] = {}
    for version, url in candidates:
        slug = version.to_slug()
        held = slugs.get(slug)
        if held is None or version.key() > held[0].key():
            slugs[slug] = (version, url)
    return slugs


def assemble_legacy_sources(merged: dict[str, tuple[AdoptiumVersion, str]]) -> LegacySources:
    sources = LegacySources()
    # ascending, so the greatest release wins when two slugs share a major
    for version, url in sorted(merged.values(), key=lambda item: item[0].key()):
        sources.add_release(version, url)
    return sources
