# Purpose: Serialize PackingList/AssetMap documents to indented XML files and read them back.
from __future__ import annotations
import logging
import re
import typing
import xml.etree.ElementTree as ET
from typing import Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from dcp_manifest.errors import PackageIOError, SerializationError
from dcp_manifest.manifest.schema import AM_NAMESPACE, PKL_NAMESPACE, AssetMap, PackingList

log = logging.getLogger("dcp_manifest.xml_io")

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

Document = Union[PackingList, AssetMap]
M = TypeVar("M", bound=BaseModel)

_ROOTS = {
    PackingList: ("PackingList", PKL_NAMESPACE),
    AssetMap: ("AssetMap", AM_NAMESPACE),
}

# Characters XML 1.0 cannot carry, including lone surrogates from undecodable file names.
_ILLEGAL_XML = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _text(value: str, where: str) -> str:
    m = _ILLEGAL_XML.search(value)
    if m:
        raise SerializationError(f"{where}: character {m.group()!r} cannot be written to XML")
    return value


def _fill(parent: ET.Element, model: BaseModel) -> None:
    for name, field in type(model).model_fields.items():
        tag = field.alias or name
        value = getattr(model, name)
        if isinstance(value, list):
            # list fields repeat their tag once per item, with no wrapper of their own
            for item in value:
                _fill(ET.SubElement(parent, tag), item)
        elif isinstance(value, BaseModel):
            _fill(ET.SubElement(parent, tag), value)
        else:
            ET.SubElement(parent, tag).text = _text(str(value), tag)


def to_element(document: Document) -> ET.Element:
    tag, ns = _ROOTS[type(document)]
    root = ET.Element(tag, {"xmlns": ns})
    _fill(root, document)
    return root


def to_xml(document: Document, indent: int = 4) -> str:
    """Declaration line plus the indented document body."""
    root = to_element(document)
    if indent:
        ET.indent(root, space=" " * indent)
    try:
        # empty values are written as <Type></Type>, never <Type />
        body = ET.tostring(root, encoding="unicode", short_empty_elements=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"cannot encode {tag_of(document)}: {e}") from e
    # ElementTree leaves \r in text as-is and parsers normalize it to \n;
    # indentation only ever adds \n, so every \r here came from a value.
    body = body.replace("\r", "&#13;")
    return XML_HEADER + body + "\n"


def tag_of(document: Document) -> str:
    return _ROOTS[type(document)][0]


def write(document: Document, output_path: str, indent: int = 4) -> None:
    """Serialize `document` to `output_path`, replacing any existing file."""
    payload = to_xml(document, indent=indent)
    try:
        with open(output_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(payload)
    except UnicodeEncodeError as e:
        raise SerializationError(f"cannot encode {tag_of(document)}: {e}") from e
    except OSError as e:
        raise PackageIOError(output_path, e.strerror or str(e)) from e
    log.info("wrote %s (%d assets) -> %s", tag_of(document), len(document.assets), output_path)


# ---------- reading back ----------

def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _read(elem: ET.Element, model_cls: Type[M]) -> M:
    children = list(elem)
    data = {}
    for name, field in model_cls.model_fields.items():
        tag = field.alias or name
        matches = [c for c in children if _local(c.tag) == tag]
        ann = field.annotation
        if typing.get_origin(ann) in (list, typing.List):
            item_cls = typing.get_args(ann)[0]
            data[tag] = [_read(c, item_cls) for c in matches]
        elif isinstance(ann, type) and issubclass(ann, BaseModel):
            if matches:
                data[tag] = _read(matches[0], ann)
        elif matches:
            data[tag] = matches[0].text or ""
    return model_cls.model_validate(data)


def parse(path: str, model_cls: Type[M]) -> M:
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise SerializationError(f"{path}: {e}") from e
    except OSError as e:
        raise PackageIOError(path, e.strerror or str(e)) from e
    expected = _ROOTS[model_cls][0]
    if _local(root.tag) != expected:
        raise SerializationError(f"{path}: root element is {_local(root.tag)}, expected {expected}")
    try:
        return _read(root, model_cls)
    except ValidationError as e:
        raise SerializationError(f"{path}: {e}") from e


def parse_packing_list(path: str) -> PackingList:
    return parse(path, PackingList)


def parse_asset_map(path: str) -> AssetMap:
    return parse(path, AssetMap)
