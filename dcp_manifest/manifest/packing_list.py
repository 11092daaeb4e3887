# Purpose: Build the PackingList document (id, hash, size, MIME type per regular file).
from __future__ import annotations
import logging
import os
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from dcp_manifest.config import PackagingConfig
from dcp_manifest.ingest import hasher
from dcp_manifest.ingest.walker import FailurePolicy, FileEntry, collect
from dcp_manifest.manifest.mime import build_table, type_for
from dcp_manifest.manifest.registry import IdentifierRegistry
from dcp_manifest.manifest.schema import Asset, AssetList, PackingList

log = logging.getLogger("dcp_manifest.packing_list")


def issue_date(now: Optional[datetime] = None) -> str:
    """UTC timestamp to the second with an explicit +00:00 offset."""
    ts = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return ts.replace(microsecond=0).isoformat()


def annotation_for(root: str) -> str:
    return os.path.basename(os.path.normpath(root))


def build_packing_list(root: str, registry: IdentifierRegistry, *,
                       entries: Optional[Sequence[FileEntry]] = None,
                       config: Optional[PackagingConfig] = None,
                       policy: Optional[FailurePolicy] = None,
                       annotation: Optional[str] = None,
                       now: Optional[datetime] = None) -> PackingList:
    """
    One Asset per regular file, in traversal order. When `entries` is not
    given the tree is walked again here under `policy` (the config's
    build_policy by default, which skips and logs unreadable entries).
    """
    cfg = config or PackagingConfig()
    if entries is None:
        exclude = cfg.output_names if cfg.exclude_outputs else ()
        entries = collect(root, policy or cfg.build_policy, exclude=exclude)
    text = annotation if annotation is not None else annotation_for(root)
    mime_table = build_table(cfg.mime_types)

    assets: List[Asset] = []
    for e in entries:
        if not e.is_regular_file:
            continue
        assets.append(Asset(
            id=registry.urn(e.base_name),
            annotation_text=text,
            hash=hasher.digest(e.full_path, strict=cfg.strict_hash),
            size=str(e.size_in_bytes),
            type=type_for(e.base_name, mime_table),
        ))
    log.info("packing list: %d assets from %s", len(assets), root)

    return PackingList(
        id=registry.package_urn,
        annotation_text=text,
        issue_date=issue_date(now),
        issuer=cfg.issuer,
        creator=cfg.creator,
        asset_list=AssetList(assets=assets),
    )
