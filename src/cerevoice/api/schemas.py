"""
Operation Inputs, Results and Response Decoding.

This module defines the typed shapes exchanged with CereVoiceClient:
    - *Input dataclasses: per-operation parameters
    - Voice, Lexicon, Abbreviation, Credit: records found inside responses
    - *Result dataclasses: one per operation, returned by the client

Each record field names its XML location in field metadata:
    {"xml": "fileUrl"}                          text of a child element
    {"xml": "voicesList/voice", "item": Voice,
     "many": True}                              repeated nested records
    {"xml": "formatList/format", "many": True}  repeated text elements
    {"xml": "credit", "item": Credit}           single nested record

decode_response() walks those declarations, so adding an operation only
means declaring its result shape. Values are kept verbatim as strings;
no numeric conversion is attempted.

Example Response (speakSimple):
    <speakSimpleResponse>
        <fileUrl>https://cerevoice.s3.amazonaws.com/x.ogg</fileUrl>
        <charCount>12</charCount>
        <resultCode>1</resultCode>
        <resultDescription>successful</resultDescription>
    </speakSimpleResponse>
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from typing import Any, Dict, List, Optional, Type, TypeVar

from cerevoice.api.errors import CereVoiceError, DecodeError

R = TypeVar("R")


def _text(tag: str) -> Any:
    return field(default="", metadata={"xml": tag})


# =============================================================================
# Operation Inputs
# =============================================================================

@dataclass(frozen=True)
class SpeakSimpleInput:
    """Parameters for speakSimple."""
    voice: str
    text: str


@dataclass(frozen=True)
class SpeakExtendedInput:
    """
    Parameters for speakExtended.

    Attributes:
        voice: Voice name (e.g. "Heather").
        text: Plain text or SSML to synthesize.
        audio_format: Output encoding (see listAudioFormats), e.g. "ogg".
        sample_rate: Output sample rate as sent on the wire, e.g. "48000".
        audio_3d: Request 3D audio processing.
        metadata: Request a metadata file alongside the audio.
    """
    voice: str
    text: str
    audio_format: str = ""
    sample_rate: str = ""
    audio_3d: bool = False
    metadata: bool = False


@dataclass(frozen=True)
class UploadLexiconInput:
    """
    Parameters for uploadLexicon.

    lexicon_file is sent as a field value; the client does not read or
    upload any local file.
    """
    lexicon_file: str
    language: str = ""
    accent: str = ""


@dataclass(frozen=True)
class UploadAbbreviationsInput:
    """Parameters for uploadAbbreviations. abbreviation_file is sent as-is."""
    abbreviation_file: str
    language: str = ""


# =============================================================================
# Response Records
# =============================================================================

@dataclass(frozen=True)
class Voice:
    """One entry of listVoices."""
    sample_rate: str = _text("sampleRate")
    voice_name: str = _text("voiceName")
    language_code_iso: str = _text("languageCodeISO")
    country_code_iso: str = _text("countryCodeISO")
    accent_code: str = _text("accentCode")
    sex: str = _text("sex")
    language_code_microsoft: str = _text("languageCodeMicrosoft")
    country: str = _text("country")
    region: str = _text("region")
    accent: str = _text("accent")


@dataclass(frozen=True)
class Lexicon:
    """One custom lexicon file stored for the account."""
    url: str = _text("url")
    language: str = _text("language")
    accent: str = _text("accent")
    last_modified: str = _text("lastModified")
    size: str = _text("size")


@dataclass(frozen=True)
class Abbreviation:
    """One custom abbreviation file stored for the account."""
    url: str = _text("url")
    language: str = _text("language")
    last_modified: str = _text("lastModified")
    size: str = _text("size")


@dataclass(frozen=True)
class Credit:
    """Credit balance of the account."""
    free_credit: str = _text("freeCredit")
    paid_credit: str = _text("paidCredit")
    chars_available: str = _text("charsAvailable")


# =============================================================================
# Results
# =============================================================================

@dataclass
class APIResult:
    """
    Common base of every operation result.

    A result is always returned, even when the call failed. On failure
    `error` holds the TransportError or DecodeError and every data field
    keeps its zero value.
    """
    error: Optional[CereVoiceError] = field(default=None, compare=False, kw_only=True)

    @property
    def ok(self) -> bool:
        """True when the call completed and the response was decoded."""
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the attached error, if any."""
        if self.error is not None:
            raise self.error

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the result, including error details."""
        data: Dict[str, Any] = {"ok": self.ok}
        for f in fields(self):
            if f.name == "error":
                continue
            data[f.name] = _plain(getattr(self, f.name))
        if self.error is not None:
            data.update(self.error.to_dict())
        return data


@dataclass
class SpeakSimpleResult(APIResult):
    file_url: str = _text("fileUrl")
    char_count: str = _text("charCount")
    result_code: str = _text("resultCode")
    result_description: str = _text("resultDescription")


@dataclass
class SpeakExtendedResult(APIResult):
    file_url: str = _text("fileUrl")
    char_count: str = _text("charCount")
    result_code: str = _text("resultCode")
    result_description: str = _text("resultDescription")
    metadata_url: str = _text("metadataUrl")


@dataclass
class ListVoicesResult(APIResult):
    voices: List[Voice] = field(
        default_factory=list,
        metadata={"xml": "voicesList/voice", "item": Voice, "many": True},
    )


@dataclass
class UploadLexiconResult(APIResult):
    result_code: str = _text("resultCode")
    result_description: str = _text("resultDescription")


@dataclass
class ListLexiconsResult(APIResult):
    lexicons: List[Lexicon] = field(
        default_factory=list,
        metadata={"xml": "lexiconList/lexiconFile", "item": Lexicon, "many": True},
    )


@dataclass
class UploadAbbreviationsResult(APIResult):
    result_code: str = _text("resultCode")
    result_description: str = _text("resultDescription")


@dataclass
class ListAbbreviationsResult(APIResult):
    abbreviations: List[Abbreviation] = field(
        default_factory=list,
        metadata={"xml": "abbreviationList/abbreviationFile", "item": Abbreviation, "many": True},
    )


@dataclass
class ListAudioFormatsResult(APIResult):
    formats: List[str] = field(
        default_factory=list,
        metadata={"xml": "formatList/format", "many": True},
    )


@dataclass
class GetCreditResult(APIResult):
    credit: Credit = field(default_factory=Credit, metadata={"xml": "credit", "item": Credit})


# =============================================================================
# Decoding
# =============================================================================

def decode_response(result_cls: Type[R], body: bytes) -> R:
    """
    Decode a raw response body into `result_cls`.

    The root tag is not checked (the service answers with its own
    response wrapper names). Missing elements decode to zero values.

    Args:
        result_cls: One of the *Result dataclasses.
        body: Raw HTTP response body.

    Returns:
        Populated result instance with error=None.

    Raises:
        DecodeError: If the body is empty, is not well-formed XML, or
            holds nested elements where text is expected.
    """
    if not body or not body.strip():
        raise DecodeError("empty response body", details={"bytes": len(body or b"")})

    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise DecodeError(
            f"response is not well-formed XML: {exc}",
            details={"bytes": len(body), "position": list(exc.position)},
        ) from exc

    return _from_element(result_cls, root)


def _from_element(cls: Type[R], elem: ET.Element) -> R:
    values: Dict[str, Any] = {}
    for f in fields(cls):
        path = f.metadata.get("xml")
        if path is None:
            continue
        item_cls = f.metadata.get("item")
        query = _any_namespace(path)

        if f.metadata.get("many"):
            children = elem.findall(query)
            if item_cls is None:
                values[f.name] = [_leaf_text(child, path) for child in children]
            else:
                values[f.name] = [_from_element(item_cls, child) for child in children]
        elif item_cls is not None:
            child = elem.find(query)
            values[f.name] = _from_element(item_cls, child) if child is not None else item_cls()
        else:
            child = elem.find(query)
            values[f.name] = _leaf_text(child, path) if child is not None else ""
    return cls(**values)


def _any_namespace(path: str) -> str:
    # "{*}tag" matches tag with or without a namespace
    return "/".join("{*}" + step for step in path.split("/"))


def _leaf_text(elem: ET.Element, path: str) -> str:
    if len(elem):
        raise DecodeError(
            f"expected text in <{path}>, found nested elements",
            details={"element": path, "children": [child.tag for child in elem]},
        )
    return elem.text or ""


def _plain(value: Any) -> Any:
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
