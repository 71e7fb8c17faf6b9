"""
Request Envelope for the CereVoice Cloud REST API.

Every request is a small XML document whose root tag is the operation
name and whose children are the account credentials followed by the
operation's parameters:

    <?xml version="1.0" encoding="UTF-8"?>
    <speakSimple>
        <accountID>my-account</accountID>
        <password>my-password</password>
        <voice>Jess</voice>
        <text>Hello world!</text>
    </speakSimple>

accountID and password are always present. Every other field is written
only when set: non-empty strings, and booleans that are true (written as
"true").
"""
from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import List, Tuple

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


class Operation:
    """Remote operation names, used verbatim as envelope root tags."""
    SPEAK_SIMPLE = "speakSimple"
    SPEAK_EXTENDED = "speakExtended"
    LIST_VOICES = "listVoices"
    UPLOAD_LEXICON = "uploadLexicon"
    LIST_LEXICONS = "listLexicons"
    UPLOAD_ABBREVIATIONS = "uploadAbbreviations"
    LIST_ABBREVIATIONS = "listAbbreviations"
    LIST_AUDIO_FORMATS = "listAudioFormats"
    GET_CREDIT = "getCredit"


# Attribute name -> wire tag, in wire order (after accountID/password)
_OPTIONAL_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("voice", "voice"),
    ("text", "text"),
    ("audio_format", "audioFormat"),
    ("sample_rate", "sampleRate"),
    ("audio_3d", "audio3D"),
    ("metadata", "metadata"),
    ("lexicon_file", "lexiconFile"),
    ("abbreviation_file", "abbreviationFile"),
    ("language", "language"),
    ("accent", "accent"),
)


@dataclass(frozen=True)
class Envelope:
    """
    One request to the CereVoice Cloud API.

    Only the fields relevant to `operation` are normally set; the rest
    keep their zero value and are left out of the XML.
    """
    operation: str
    account_id: str
    password: str
    voice: str = ""
    text: str = ""
    audio_format: str = ""
    sample_rate: str = ""
    audio_3d: bool = False
    metadata: bool = False
    lexicon_file: str = ""
    abbreviation_file: str = ""
    language: str = ""
    accent: str = ""

    def __repr__(self) -> str:
        return f"Envelope(operation={self.operation!r}, account_id={self.account_id!r}, fields={self.present_fields()})"

    def present_fields(self) -> List[str]:
        """Wire tags of the optional fields that will be serialized."""
        return [tag for attr, tag in _OPTIONAL_FIELDS if _is_set(getattr(self, attr))]

    def to_element(self, mask_password: bool = False) -> ET.Element:
        """Build the envelope as an ElementTree element."""
        root = ET.Element(self.operation)
        ET.SubElement(root, "accountID").text = _render(self.account_id)
        ET.SubElement(root, "password").text = "***" if mask_password else _render(self.password)

        for attr, tag in _OPTIONAL_FIELDS:
            value = getattr(self, attr)
            if not _is_set(value):
                continue
            ET.SubElement(root, tag).text = _render(value)
        return root

    def to_xml(self, mask_password: bool = False) -> str:
        """
        Serialize to an XML string with declaration header.

        Children are indented by four spaces.

        Args:
            mask_password: Replace the password with "***" (for logs and
                dry runs; never sent this way).
        """
        root = self.to_element(mask_password=mask_password)
        ET.indent(root, space="    ")
        return XML_HEADER + ET.tostring(root, encoding="unicode")

    def to_bytes(self) -> bytes:
        """UTF-8 encoded request body."""
        return self.to_xml().encode("utf-8")


def _is_set(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return value is not None and value != ""


def _render(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return _INVALID_XML_CHARS.sub("\ufffd", str(value))
