# Purpose: Packing-list and asset-map document models.
# Field order is element order; each field's alias is its XML tag.
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import List

PKL_NAMESPACE = "http://www.smpte-ra.org/schemas/429-8/2007/PKL"
AM_NAMESPACE = "http://www.smpte-ra.org/schemas/429-9/2007/AM"


class _Element(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Asset(_Element):
    id: str = Field(..., alias="Id", description="urn:uuid: identifier shared with the asset map.")
    annotation_text: str = Field("", alias="AnnotationText")
    hash: str = Field(..., alias="Hash", description="Lowercase hex SHA-1 of the file content.")
    size: str = Field(..., alias="Size", description="Byte length as a decimal string.")
    type: str = Field("", alias="Type", description="MIME type from the extension; empty if unknown.")


class AssetList(_Element):
    assets: List[Asset] = Field(default_factory=list, alias="Asset")


class PackingList(_Element):
    id: str = Field(..., alias="Id")
    annotation_text: str = Field("", alias="AnnotationText")
    issue_date: str = Field(..., alias="IssueDate", description="UTC, ISO-8601 with offset.")
    issuer: str = Field(..., alias="Issuer")
    creator: str = Field(..., alias="Creator")
    asset_list: AssetList = Field(default_factory=AssetList, alias="AssetList")

    @property
    def assets(self) -> List[Asset]:
        return self.asset_list.assets


class Chunk(_Element):
    path: str = Field(..., alias="Path", description="File base name, relative to the package folder.")


class ChunkList(_Element):
    chunks: List[Chunk] = Field(default_factory=list, alias="Chunk")


class AMAsset(_Element):
    id: str = Field(..., alias="Id")
    annotation_text: str = Field("", alias="AnnotationText")
    chunk_list: ChunkList = Field(default_factory=ChunkList, alias="ChunkList")


class AMAssetList(_Element):
    assets: List[AMAsset] = Field(default_factory=list, alias="Asset")


class AssetMap(_Element):
    id: str = Field(..., alias="Id")
    annotation_text: str = Field("", alias="AnnotationText")
    creator: str = Field(..., alias="Creator")
    volume_count: str = Field("1", alias="VolumeCount")
    issue_date: str = Field(..., alias="IssueDate")
    issuer: str = Field(..., alias="Issuer")
    asset_list: AMAssetList = Field(default_factory=AMAssetList, alias="AssetList")

    @property
    def assets(self) -> List[AMAsset]:
        return self.asset_list.assets
