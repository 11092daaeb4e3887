# Purpose: Build the AssetMap document (id plus a single whole-file chunk per regular file).
from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from dcp_manifest.config import PackagingConfig
from dcp_manifest.ingest.walker import FailurePolicy, FileEntry, collect
from dcp_manifest.manifest.packing_list import annotation_for, issue_date
from dcp_manifest.manifest.registry import IdentifierRegistry
from dcp_manifest.manifest.schema import AMAsset, AMAssetList, AssetMap, Chunk, ChunkList

log = logging.getLogger("dcp_manifest.asset_map")

VOLUME_COUNT = "1"  # single-volume packages only


def build_asset_map(root: str, registry: IdentifierRegistry, *,
                    entries: Optional[Sequence[FileEntry]] = None,
                    config: Optional[PackagingConfig] = None,
                    policy: Optional[FailurePolicy] = None,
                    annotation: Optional[str] = None,
                    now: Optional[datetime] = None) -> AssetMap:
    cfg = config or PackagingConfig()
    if entries is None:
        exclude = cfg.output_names if cfg.exclude_outputs else ()
        entries = collect(root, policy or cfg.build_policy, exclude=exclude)
    text = annotation if annotation is not None else annotation_for(root)

    assets: List[AMAsset] = []
    for e in entries:
        if not e.is_regular_file:
            continue
        assets.append(AMAsset(
            id=registry.urn(e.base_name),
            annotation_text=text,
            chunk_list=ChunkList(chunks=[Chunk(path=e.base_name)]),
        ))
    log.info("asset map: %d assets from %s", len(assets), root)

    return AssetMap(
        id=registry.package_urn,
        annotation_text=text,
        creator=cfg.creator,
        volume_count=VOLUME_COUNT,
        issue_date=issue_date(now),
        issuer=cfg.issuer,
        asset_list=AMAssetList(assets=assets),
    )
