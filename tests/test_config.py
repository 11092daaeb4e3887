from pathlib import Path

import pytest

from dcp_manifest.config import CONFIG_ENV, PackagingConfig, load_config
from dcp_manifest.errors import ManifestError
from dcp_manifest.ingest.walker import FailurePolicy


def test_defaults():
    cfg = PackagingConfig()
    assert cfg.issuer == "Qube Cinema" and cfg.creator == "Qube"
    assert cfg.output_names == ("Packinglist.xml", "assetmap.xml")
    assert cfg.collect_policy is FailurePolicy.ABORT
    assert cfg.build_policy is FailurePolicy.SKIP
    assert cfg.indent == 4


def test_load_explicit_file(tmp_path):
    p = tmp_path / "packaging.yaml"
    p.write_text('issuer: "Acme Post"\nbuild_policy: abort\nmime_types:\n  ".xyz": text/x-notes\n', encoding="utf-8")
    cfg = load_config(str(p))
    assert cfg.issuer == "Acme Post"
    assert cfg.creator == "Qube"
    assert cfg.build_policy is FailurePolicy.ABORT
    assert cfg.mime_types == {".xyz": "text/x-notes"}


def test_env_var_is_used(tmp_path, monkeypatch):
    p = tmp_path / "env.yaml"
    p.write_text("creator: envcreator\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(p))
    assert load_config().creator == "envcreator"


def test_missing_file_falls_back_to_defaults(tmp_path):
    assert load_config(str(tmp_path / "nope.yaml")) == PackagingConfig()


def test_empty_file_is_defaults(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config(str(p)) == PackagingConfig()


def test_repo_config_matches_defaults():
    cfg = load_config(str(Path(__file__).resolve().parents[1] / "configs" / "packaging.yaml"))
    assert cfg == PackagingConfig()


@pytest.mark.parametrize("body", ["collect_policy: sometimes\n", "indent: -1\n", "issuer: [unclosed\n"])
def test_bad_config_raises(tmp_path, body):
    p = tmp_path / "bad.yaml"
    p.write_text(body, encoding="utf-8")
    with pytest.raises(ManifestError):
        load_config(str(p))
