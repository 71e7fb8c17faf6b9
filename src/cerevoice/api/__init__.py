"""
CereVoice Cloud wire layer.

    - envelope.py: request envelope and its XML serialization
    - schemas.py: operation inputs, result records, response decoding
    - errors.py: TransportError / DecodeError taxonomy
"""
from .envelope import Envelope, Operation
from .errors import CereVoiceError, DecodeError, ErrorCode, TransportError
from .schemas import (
    Abbreviation,
    APIResult,
    Credit,
    GetCreditResult,
    Lexicon,
    ListAbbreviationsResult,
    ListAudioFormatsResult,
    ListLexiconsResult,
    ListVoicesResult,
    SpeakExtendedInput,
    SpeakExtendedResult,
    SpeakSimpleInput,
    SpeakSimpleResult,
    UploadAbbreviationsInput,
    UploadAbbreviationsResult,
    UploadLexiconInput,
    UploadLexiconResult,
    Voice,
    decode_response,
)

__all__ = [
    "Envelope",
    "Operation",
    "CereVoiceError",
    "DecodeError",
    "ErrorCode",
    "TransportError",
    "APIResult",
    "Abbreviation",
    "Credit",
    "Lexicon",
    "Voice",
    "SpeakSimpleInput",
    "SpeakExtendedInput",
    "UploadLexiconInput",
    "UploadAbbreviationsInput",
    "SpeakSimpleResult",
    "SpeakExtendedResult",
    "ListVoicesResult",
    "UploadLexiconResult",
    "ListLexiconsResult",
    "UploadAbbreviationsResult",
    "ListAbbreviationsResult",
    "ListAudioFormatsResult",
    "GetCreditResult",
    "decode_response",
]
