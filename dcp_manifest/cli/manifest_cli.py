# Purpose: CLI entrypoint to write Packinglist.xml + assetmap.xml for a folder, or verify an existing pair.
from __future__ import annotations
import argparse, json, logging, os, sys
from typing import List, Optional

from dcp_manifest.config import load_config
from dcp_manifest.errors import DirectoryEmpty, DirectoryNotFound, ManifestError
from dcp_manifest.pipeline import run, verify

log = logging.getLogger("dcp_manifest.cli")

EXIT_OK = 0
EXIT_BAD_FOLDER = 1
EXIT_FATAL = 2
EXIT_MISMATCH = 3

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def ask_folder() -> str:
    print("Enter Your Folder path: ")
    try:
        return input().strip()
    except EOFError:
        return ""


def run_generate(folder: str, config_path: Optional[str], annotation: Optional[str]) -> int:
    cfg = load_config(config_path)
    try:
        result = run(folder, cfg, annotation=annotation)
    except DirectoryNotFound as e:
        print(f"Directory does not exist: {e.path}", file=sys.stderr)
        return EXIT_BAD_FOLDER
    except DirectoryEmpty as e:
        print(f"Your directory is empty: {e.path}", file=sys.stderr)
        return EXIT_BAD_FOLDER
    print(json.dumps(result.summary(), indent=2))
    return EXIT_OK


def run_verify(folder: str, config_path: Optional[str]) -> int:
    cfg = load_config(config_path)
    if not os.path.isdir(folder):
        print(f"Directory does not exist: {folder}", file=sys.stderr)
        return EXIT_BAD_FOLDER
    report = verify(folder, cfg)
    print(json.dumps({"checked": report.checked, "ok": report.ok, "problems": report.problems}, indent=2))
    return EXIT_OK if report.ok else EXIT_MISMATCH


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="dcp-manifest")
    ap.add_argument("command", choices=["generate", "verify"],
                    help="generate → write packing list + asset map; verify → re-hash against them")
    ap.add_argument("folder", nargs="?", help="package folder (prompted for when omitted)")
    ap.add_argument("--config", default=None, help="YAML settings file (default: configs/packaging.yaml)")
    ap.add_argument("--annotation", default=None, help="AnnotationText (default: folder name)")
    env_level = os.getenv("DCP_MANIFEST_LOG_LEVEL", "INFO").upper()
    ap.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                    default=env_level if env_level in LOG_LEVELS else "INFO")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    folder = args.folder if args.folder is not None else ask_folder()
    try:
        if args.command == "verify":
            return run_verify(folder, args.config)
        return run_generate(folder, args.config, args.annotation)
    except ManifestError as e:
        log.error("fatal: %s", e)
        return EXIT_FATAL


if __name__ == "__main__":
    raise SystemExit(main())
