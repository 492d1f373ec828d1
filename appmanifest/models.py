"""
App manifest document model.

Mirrors the structure Apple documents for `InstallApplication` / MDM app manifests:

    items[] -> assets[] (kind, md5-size, md5s, url)
            -> metadata (optional; bundle-identifier, bundle-version, kind, subtitle, title, items[])

Each class maps its fields to plist keys by hand in `to_plist` / `from_plist`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

SOFTWARE_PACKAGE_KIND = "software-package"


@dataclass(frozen=True)
class BundleInfo:
    bundle_identifier: str = ""
    bundle_version: str = ""

    def to_plist(self) -> Dict[str, Any]:
        return {
            "bundle-identifier": self.bundle_identifier,
            "bundle-version": self.bundle_version,
        }

    @classmethod
    def from_plist(cls, data: Dict[str, Any]) -> "BundleInfo":
        return cls(
            bundle_identifier=data.get("bundle-identifier", ""),
            bundle_version=data.get("bundle-version", ""),
        )


@dataclass(frozen=True)
class Metadata:
    """
    Optional per-item metadata.

    Apple lists it as required, but clients accept manifests without it, so the builder
    never fills it in. The bundle info keys sit at the same level as `kind`/`title`.
    """

    bundle_info: BundleInfo = field(default_factory=BundleInfo)
    items: List[BundleInfo] = field(default_factory=list)
    kind: str = ""
    subtitle: str = ""
    title: str = ""

    def to_plist(self) -> Dict[str, Any]:
        data = self.bundle_info.to_plist()
        if self.items:
            data["items"] = [b.to_plist() for b in self.items]
        data["kind"] = self.kind
        data["subtitle"] = self.subtitle
        data["title"] = self.title
        return data

    @classmethod
    def from_plist(cls, data: Dict[str, Any]) -> "Metadata":
        return cls(
            bundle_info=BundleInfo.from_plist(data),
            items=[BundleInfo.from_plist(b) for b in data.get("items", [])],
            kind=data.get("kind", ""),
            subtitle=data.get("subtitle", ""),
            title=data.get("title", ""),
        )


@dataclass(frozen=True)
class Asset:
    kind: str
    md5_size: int
    md5s: List[str]
    url: str

    def to_plist(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "md5-size": self.md5_size,
            "md5s": list(self.md5s),
            "url": self.url,
        }

    @classmethod
    def from_plist(cls, data: Dict[str, Any]) -> "Asset":
        return cls(
            kind=data["kind"],
            md5_size=data["md5-size"],
            md5s=list(data["md5s"]),
            url=data["url"],
        )


@dataclass(frozen=True)
class ManifestItem:
    assets: List[Asset]
    metadata: Optional[Metadata] = None

    def to_plist(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"assets": [a.to_plist() for a in self.assets]}
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_plist()
        return data

    @classmethod
    def from_plist(cls, data: Dict[str, Any]) -> "ManifestItem":
        metadata = data.get("metadata")
        return cls(
            assets=[Asset.from_plist(a) for a in data["assets"]],
            metadata=Metadata.from_plist(metadata) if metadata is not None else None,
        )


@dataclass(frozen=True)
class Manifest:
    items: List[ManifestItem]

    def to_plist(self) -> Dict[str, Any]:
        return {"items": [item.to_plist() for item in self.items]}

    @classmethod
    def from_plist(cls, data: Dict[str, Any]) -> "Manifest":
        return cls(items=[ManifestItem.from_plist(item) for item in data["items"]])
