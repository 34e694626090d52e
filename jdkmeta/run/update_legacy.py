import sys

from pydantic import ValidationError

from jdkmeta.assemble import assemble_legacy_sources, merge_by_slug
from jdkmeta.common import default_session, eprint, format_error_chain, platform_id
from jdkmeta.common.http import get_json
from jdkmeta.errors import JdkMetaError, NoCandidatesError, SchemaError, TransportError
from jdkmeta.model.adoptium import (
    AdoptiumReleases,
    AdoptiumReleaseVersions,
    AdoptiumReleaseVersionsQuery,
    AdoptiumVersion,
    release_versions_url,
    version_assets_url,
)
from jdkmeta.model.catalog import LegacyJavaSources
from jdkmeta.vendor import TEMURIN


def fetch_release_versions_page(sess, page: int, page_size: int) -> list[AdoptiumVersion] | None:
    query = AdoptiumReleaseVersionsQuery(page=page, page_size=page_size)
    api_call = release_versions_url(TEMURIN.api_base, query)
    eprint("Fetching release versions page:", page, api_call)
    data = get_json(
        sess,
        api_call,
        "Failed getting page of versions list",
        allow_missing=True,
        vendor=TEMURIN.name,
    )
    if data is None:
        return None
    try:
        return AdoptiumReleaseVersions.model_validate(data).versions
    except ValidationError as e:
        raise TransportError(
            "Failed deserializing page of versions list", vendor=TEMURIN.name, url=api_call
        ) from e


def fetch_all_release_versions(sess) -> list[AdoptiumVersion]:
    versions: dict[str, AdoptiumVersion] = {}
    page = 0
    page_size = AdoptiumReleaseVersionsQuery().page_size
    while True:
        try:
            current_page = fetch_release_versions_page(sess, page, page_size)
        except JdkMetaError as e:
            if page == 0:
                raise
            eprint(f"Warning: Stopped paging release versions at page {page}")
            eprint(format_error_chain(e))
            break
        if current_page is None:
            if page == 0:
                raise NoCandidatesError("Release versions list is empty", vendor=TEMURIN.name)
            break

        for version in current_page:
            versions[version.openjdk_version] = version

        if len(current_page) < page_size:
            break
        page += 1

    return list(versions.values())


def fetch_version_link(sess, version: AdoptiumVersion) -> str:
    query = AdoptiumReleaseVersionsQuery()
    api_call = version_assets_url(TEMURIN.api_base, version.openjdk_version, query)
    data = get_json(
        sess,
        api_call,
        "Failed requesting version information",
        vendor=TEMURIN.name,
        feature_version=version.major,
    )
    try:
        releases = AdoptiumReleases.model_validate(data)
    except ValidationError as e:
        raise TransportError(
            "Failed to deserialize response for version information",
            vendor=TEMURIN.name,
            feature_version=version.major,
            url=api_call,
        ) from e

    if len(releases) == 0:
        raise NoCandidatesError(
            f"No release provided for {version.openjdk_version}",
            vendor=TEMURIN.name,
            feature_version=version.major,
            url=api_call,
        )
    binaries = releases[0].binaries
    if len(binaries) == 0 or binaries[0].package is None:
        raise SchemaError(
            f"Binary was missing for {version.openjdk_version}",
            vendor=TEMURIN.name,
            feature_version=version.major,
            url=api_call,
        )
    return binaries[0].package.link


def main():
    sess = default_session()

    try:
        versions = fetch_all_release_versions(sess)
    except JdkMetaError as e:
        eprint(format_error_chain(e))
        sys.exit(1)

    candidates = []
    for version in versions:
        try:
            candidates.append((version, fetch_version_link(sess, version)))
        except JdkMetaError as e:
            eprint(f"Skipping {version.openjdk_version}")
            eprint(format_error_chain(e))

    sources = assemble_legacy_sources(merge_by_slug(candidates))
    output = LegacyJavaSources({platform_id(): sources})
    print(output.json())


if __name__ == "__main__":
    main()
