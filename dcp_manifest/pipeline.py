# Purpose: One packaging run: check folder, enumerate once, assign ids, build and write both manifests.
from __future__ import annotations
import logging
import os
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from dcp_manifest.config import PackagingConfig
from dcp_manifest.errors import DirectoryEmpty, DirectoryNotFound, FilesystemError
from dcp_manifest.ingest import hasher
from dcp_manifest.ingest.walker import FileEntry, collect
from dcp_manifest.manifest import registry as id_registry
from dcp_manifest.manifest import xml_io
from dcp_manifest.manifest.asset_map import build_asset_map
from dcp_manifest.manifest.packing_list import build_packing_list
from dcp_manifest.manifest.schema import AssetMap, PackingList

log = logging.getLogger("dcp_manifest.pipeline")


@dataclass
class RunResult:
    packing_list: PackingList
    asset_map: AssetMap
    packing_list_path: str
    asset_map_path: str

    def summary(self) -> dict:
        return {
            "packing_list": self.packing_list_path,
            "asset_map": self.asset_map_path,
            "package_id": self.packing_list.id,
            "assets": len(self.packing_list.assets),
        }


def check_folder(root: str) -> None:
    """Raise DirectoryNotFound / DirectoryEmpty before anything is written."""
    if not os.path.exists(root):
        raise DirectoryNotFound(root, "directory does not exist")
    if not os.path.isdir(root):
        raise DirectoryNotFound(root, "not a directory")
    try:
        with os.scandir(root) as it:
            has_any = next(it, None) is not None
    except OSError as e:
        raise FilesystemError(root, e.strerror or str(e)) from e
    if not has_any:
        raise DirectoryEmpty(root, "directory is empty")


def run(root: str, config: Optional[PackagingConfig] = None,
        annotation: Optional[str] = None, now: Optional[datetime] = None) -> RunResult:
    """
    The folder is walked once under collect_policy; that ordered list feeds
    the registry and both builders, so the two documents always agree on
    which files exist and in what order. Output files are written into
    `root` itself.
    """
    cfg = config or PackagingConfig()
    check_folder(root)

    exclude = cfg.output_names if cfg.exclude_outputs else ()
    entries = collect(root, cfg.collect_policy, exclude=exclude)
    registry = id_registry.assign(e.base_name for e in entries)
    log.info("assigned %d identifiers under %s (package %s)", len(registry) - 1, root, registry.package_id)

    now = now or datetime.now(timezone.utc)
    pkl = build_packing_list(root, registry, entries=entries, config=cfg, annotation=annotation, now=now)
    am = build_asset_map(root, registry, entries=entries, config=cfg, annotation=annotation, now=now)

    pkl_path = os.path.join(root, cfg.packing_list_name)
    am_path = os.path.join(root, cfg.asset_map_name)
    xml_io.write(pkl, pkl_path, indent=cfg.indent)
    xml_io.write(am, am_path, indent=cfg.indent)
    return RunResult(pkl, am, pkl_path, am_path)


# ---------- verification ----------

@dataclass
class VerifyReport:
    checked: int = 0
    problems: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems


def verify(root: str, config: Optional[PackagingConfig] = None) -> VerifyReport:
    """
    Re-hash every file listed in root's packing list and compare size and
    hash. The asset map is read alongside: its entries must line up with the
    packing list by position and Id, and its chunk path names the file.
    Files sharing a base name are matched in traversal order.
    """
    cfg = config or PackagingConfig()
    pkl = xml_io.parse_packing_list(os.path.join(root, cfg.packing_list_name))
    am = xml_io.parse_asset_map(os.path.join(root, cfg.asset_map_name))

    # same exclusion as run(), so listed files line up with what is on disk
    exclude = cfg.output_names if cfg.exclude_outputs else ()
    top = os.path.normpath(root)
    on_disk: Dict[str, List[FileEntry]] = defaultdict(list)
    for e in collect(root, cfg.build_policy, exclude=exclude):
        on_disk[e.base_name].append(e)
    used: Dict[str, int] = defaultdict(int)

    report = VerifyReport()
    if len(pkl.assets) != len(am.assets):
        report.problems.append(f"packing list has {len(pkl.assets)} assets, asset map has {len(am.assets)}")
    for asset, am_asset in zip(pkl.assets, am.assets):
        report.checked += 1
        if asset.id != am_asset.id:
            report.problems.append(f"{asset.id}: asset map lists {am_asset.id} at the same position")
            continue
        name = am_asset.chunk_list.chunks[0].path if am_asset.chunk_list.chunks else ""
        candidates = on_disk.get(name, [])
        if used[name] >= len(candidates):
            report.problems.append(f"{name or asset.id}: missing")
            continue
        entry = candidates[used[name]]
        used[name] += 1
        if name in cfg.output_names and os.path.dirname(os.path.normpath(entry.full_path)) == top:
            # a previous run's manifest, rewritten since it was hashed
            continue
        if str(entry.size_in_bytes) != asset.size:
            report.problems.append(f"{name}: size {entry.size_in_bytes} != {asset.size}")
            continue
        actual = hasher.digest(entry.full_path, strict=True)
        if actual != asset.hash:
            report.problems.append(f"{name}: hash {actual} != {asset.hash}")
    for p in report.problems:
        log.warning("verify: %s", p)
    log.info("verified %d assets under %s: %d problems", report.checked, root, len(report.problems))
    return report
