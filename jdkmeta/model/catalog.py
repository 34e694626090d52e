from typing import Optional

from pydantic import ConfigDict, RootModel, model_validator

from . import MetaBase, pretty_json
from .adoptium import AdoptiumVersion
from ..common.java import SLUG_PREFIX
from ..errors import MissingPointerError

POINTERS = ["latest", "stable", "lts"]


def version_slug(feature_version: int):
    return f"{SLUG_PREFIX}{feature_version}"


class ResolvedRelease(MetaBase):
    model_config = ConfigDict(frozen=True)

    link: str
    major_version: int
    java_version: str
    early_access: bool
    sha256: str


class PublishedCatalog(MetaBase):
    """
    One vendor's catalog as the packaging side reads it.

    `latest`, `stable` and `lts` repeat entries of `versions`. Build it with
    `from_versions` so they are looked up from the map instead of being set
    independently; the validator rejects any catalog, parsed ones included,
    whose pointers are not among its versions.
    """

    versions: dict[str, ResolvedRelease]
    latest: ResolvedRelease
    stable: ResolvedRelease
    lts: ResolvedRelease

    @model_validator(mode="after")
    def pointers_must_be_versions(self):
        known = list(self.versions.values())
        for pointer in POINTERS:
            if getattr(self, pointer) not in known:
                raise ValueError(f"'{pointer}' is not one of the catalog versions")
        return self

    @classmethod
    def from_versions(
        cls,
        versions: dict[str, ResolvedRelease],
        latest: str,
        stable: str,
        lts: str,
        vendor: Optional[str] = None,
    ):
        targets = {"latest": latest, "stable": stable, "lts": lts}
        pointers = {}
        for pointer in POINTERS:
            slug = targets[pointer]
            if slug not in versions:
                raise MissingPointerError(
                    f"'{pointer}' points at {slug} which was not resolved",
                    pointer=pointer,
                    vendor=vendor,
                )
            pointers[pointer] = versions[slug]
        return cls(versions=versions, **pointers)


class JavaSources(RootModel[dict[str, dict[str, PublishedCatalog]]]):
    """platform id -> vendor name -> catalog"""

    def json(self) -> str:  # type: ignore[override]
        return pretty_json(self)


class LegacySource(MetaBase):
    major_version: str
    version: str
    url: str


class LegacySources(MetaBase):
    versions: dict[str, LegacySource] = {}

    def add_release(self, release: AdoptiumVersion, url: str):
        self.versions[str(release.major)] = LegacySource(
            major_version=str(release.major),
            version=release.to_java_version(),
            url=url,
        )


class LegacyJavaSources(RootModel[dict[str, LegacySources]]):
    def json(self) -> str:  # type: ignore[override]
        return pretty_json(self)
