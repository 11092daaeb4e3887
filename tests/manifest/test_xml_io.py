import xml.etree.ElementTree as ET
import pytest

from dcp_manifest.errors import PackageIOError, SerializationError
from dcp_manifest.manifest import xml_io
from dcp_manifest.pipeline import run
from dcp_manifest.manifest.schema import (
    AM_NAMESPACE, PKL_NAMESPACE, AMAsset, AMAssetList, Asset, AssetList, AssetMap,
    Chunk, ChunkList, PackingList,
)

NS = {"pkl": PKL_NAMESPACE, "am": AM_NAMESPACE}


def _pkl(*assets):
    return PackingList(
        id="urn:uuid:11111111-2222-4333-8444-555555555555",
        annotation_text="FEATURE",
        issue_date="2026-01-02T03:04:05+00:00",
        issuer="Qube Cinema",
        creator="Qube",
        asset_list=AssetList(assets=list(assets)),
    )


def _asset(name="movie.mxf", type_="application/mxf"):
    return Asset(id="urn:uuid:aaaaaaaa-bbbb-4ccc-8ddd-eeeeeeeeeeee", annotation_text="FEATURE",
                 hash="da39a3ee5e6b4b0d3255bfef95601890afd80709", size="1000", type=type_)


def _am():
    return AssetMap(
        id="urn:uuid:11111111-2222-4333-8444-555555555555",
        annotation_text="FEATURE",
        creator="Qube",
        issue_date="2026-01-02T03:04:05+00:00",
        issuer="Qube Cinema",
        asset_list=AMAssetList(assets=[AMAsset(
            id="urn:uuid:aaaaaaaa-bbbb-4ccc-8ddd-eeeeeeeeeeee",
            annotation_text="FEATURE",
            chunk_list=ChunkList(chunks=[Chunk(path="movie.mxf")]),
        )]),
    )


def test_packing_list_layout():
    text = xml_io.to_xml(_pkl(_asset()))
    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<PackingList xmlns="%s">' % PKL_NAMESPACE)
    assert "\n    <Id>urn:uuid:11111111" in text
    assert "\n        <Asset>\n            <Id>" in text

    root = ET.fromstring(text.split("\n", 1)[1])
    assert [c.tag.split("}")[1] for c in root] == ["Id", "AnnotationText", "IssueDate", "Issuer", "Creator", "AssetList"]
    asset = root.find("pkl:AssetList/pkl:Asset", NS)
    assert [c.tag.split("}")[1] for c in asset] == ["Id", "AnnotationText", "Hash", "Size", "Type"]
    assert asset.find("pkl:Size", NS).text == "1000"


def test_asset_map_layout():
    text = xml_io.to_xml(_am())
    root = ET.fromstring(text.split("\n", 1)[1])
    assert root.tag == "{%s}AssetMap" % AM_NAMESPACE
    assert [c.tag.split("}")[1] for c in root] == [
        "Id", "AnnotationText", "Creator", "VolumeCount", "IssueDate", "Issuer", "AssetList"]
    assert root.find("am:VolumeCount", NS).text == "1"
    assert root.find("am:AssetList/am:Asset/am:ChunkList/am:Chunk/am:Path", NS).text == "movie.mxf"


def test_empty_values_use_open_close_tags():
    text = xml_io.to_xml(_pkl(_asset(type_="")))
    assert "<Type></Type>" in text
    assert xml_io.to_xml(_pkl()).count("<AssetList></AssetList>") == 1


def test_text_is_escaped():
    a = Asset(id="urn:uuid:x", annotation_text="R&D <cut>", hash="h", size="1")
    text = xml_io.to_xml(_pkl(a))
    assert "R&amp;D &lt;cut&gt;" in text


def test_round_trip_packing_list(tmp_path):
    doc = _pkl(_asset(), _asset("b.xyz", ""))
    out = tmp_path / "Packinglist.xml"
    xml_io.write(doc, str(out))
    back = xml_io.parse_packing_list(str(out))
    assert back == doc
    assert xml_io.to_xml(back) == out.read_text(encoding="utf-8")


def test_round_trip_asset_map(tmp_path):
    out = tmp_path / "assetmap.xml"
    xml_io.write(_am(), str(out))
    assert xml_io.parse_asset_map(str(out)) == _am()


def test_write_overwrites(tmp_path):
    out = tmp_path / "Packinglist.xml"
    out.write_text("stale content that is longer than nothing" * 100)
    xml_io.write(_pkl(), str(out))
    assert "stale" not in out.read_text(encoding="utf-8")


def test_write_to_missing_directory_is_io_error(tmp_path):
    with pytest.raises(PackageIOError):
        xml_io.write(_pkl(), str(tmp_path / "no" / "such" / "Packinglist.xml"))


def test_control_characters_are_a_serialization_error():
    a = Asset(id="urn:uuid:x", annotation_text="bad\x01name", hash="h", size="1")
    with pytest.raises(SerializationError):
        xml_io.to_xml(_pkl(a))


def test_parse_wrong_root(tmp_path):
    out = tmp_path / "assetmap.xml"
    xml_io.write(_am(), str(out))
    with pytest.raises(SerializationError):
        xml_io.parse_packing_list(str(out))


def test_parse_garbage(tmp_path):
    p = tmp_path / "Packinglist.xml"
    p.write_text("<PackingList><Id>")
    with pytest.raises(SerializationError):
        xml_io.parse_packing_list(str(p))


def test_carriage_return_survives_round_trip(tmp_path):
    a = Asset(id="urn:uuid:x", annotation_text="line1\r\nline2", hash="h", size="1")
    text = xml_io.to_xml(_pkl(a))
    assert "\r" not in text
    assert "line1&#13;\nline2" in text
    out = tmp_path / "Packinglist.xml"
    xml_io.write(_pkl(a), str(out))
    assert xml_io.parse_packing_list(str(out)).assets[0].annotation_text == "line1\r\nline2"


def test_carriage_return_in_file_name(tmp_path):
    root = tmp_path / "pkg"
    root.mkdir()
    (root / "a\rb.mxf").write_bytes(b"cr")
    res = run(str(root))
    back = xml_io.parse_asset_map(res.asset_map_path)
    assert back == res.asset_map
    assert back.assets[0].chunk_list.chunks[0].path == "a\rb.mxf"
