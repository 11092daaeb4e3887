# Purpose: Packaging settings (issuer/creator constants, output names, failure policies) from configs/packaging.yaml.
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from dcp_manifest.errors import ManifestError
from dcp_manifest.ingest.walker import FailurePolicy

log = logging.getLogger("dcp_manifest.config")

DEFAULT_CONFIG_PATH = "configs/packaging.yaml"
CONFIG_ENV = "DCP_MANIFEST_CONFIG"


class PackagingConfig(BaseModel):
    issuer: str = "Qube Cinema"
    creator: str = "Qube"
    packing_list_name: str = "Packinglist.xml"
    asset_map_name: str = "assetmap.xml"
    indent: int = Field(4, ge=0)
    collect_policy: FailurePolicy = FailurePolicy.ABORT
    build_policy: FailurePolicy = FailurePolicy.SKIP
    strict_hash: bool = False
    exclude_outputs: bool = Field(True, description="Leave our own output files out of the inventory on re-runs.")
    mime_types: Dict[str, str] = Field(default_factory=dict)

    @property
    def output_names(self) -> tuple:
        return (self.packing_list_name, self.asset_map_name)


def _resolve(path: Optional[str]) -> Optional[Path]:
    if path:
        return Path(path)
    env = os.getenv(CONFIG_ENV)
    if env:
        return Path(env)
    default = Path(DEFAULT_CONFIG_PATH)
    return default if default.exists() else None


def load_config(path: Optional[str] = None) -> PackagingConfig:
    """
    Explicit path, then $DCP_MANIFEST_CONFIG, then configs/packaging.yaml.
    A named file that does not exist falls back to defaults; a file that
    does not parse or validate raises ManifestError.
    """
    p = _resolve(path)
    if p is None or not p.exists():
        if p is not None:
            log.warning("config %s not found; using defaults", p)
        return PackagingConfig()
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        return PackagingConfig.model_validate(data)
    except (yaml.YAMLError, ValidationError) as e:
        raise ManifestError(f"bad config {p}: {e}") from e
