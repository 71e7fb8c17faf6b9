"""
cerevoice-client: Python client for the CereVoice Cloud text-to-speech API.

Requests are serialized to the provider's XML format, POSTed over HTTP, and
the XML responses are decoded into typed result records.

Supported Operations:
    - speakSimple / speakExtended: synthesize text, get an audio file URL
    - listVoices / listAudioFormats: discover voices and encodings
    - uploadLexicon / listLexicons: manage custom lexicons
    - uploadAbbreviations / listAbbreviations: manage abbreviation files
    - getCredit: check the account balance

Example Usage:
    >>> from cerevoice import CereVoiceClient, ClientConfig, SpeakSimpleInput
    >>>
    >>> client = CereVoiceClient(ClientConfig(account_id="id", password="pw"))
    >>> result = client.speak_simple(SpeakSimpleInput(voice="Jess", text="Hello world!"))
    >>> if result.ok:
    ...     print(result.file_url)
    ... else:
    ...     print(result.error.to_dict())
"""

__version__ = "0.3.0"

from cerevoice.api import (  # noqa: E402
    Abbreviation,
    APIResult,
    CereVoiceError,
    Credit,
    DecodeError,
    Envelope,
    ErrorCode,
    GetCreditResult,
    Lexicon,
    ListAbbreviationsResult,
    ListAudioFormatsResult,
    ListLexiconsResult,
    ListVoicesResult,
    Operation,
    SpeakExtendedInput,
    SpeakExtendedResult,
    SpeakSimpleInput,
    SpeakSimpleResult,
    TransportError,
    UploadAbbreviationsInput,
    UploadAbbreviationsResult,
    UploadLexiconInput,
    UploadLexiconResult,
    Voice,
)
from cerevoice.client import DEFAULT_API_URL, CereVoiceClient  # noqa: E402
from cerevoice.core.config import ClientConfig, Settings, load_settings  # noqa: E402

__all__ = [
    "__version__",
    "DEFAULT_API_URL",
    "CereVoiceClient",
    "ClientConfig",
    "Settings",
    "load_settings",
    "Envelope",
    "Operation",
    "CereVoiceError",
    "TransportError",
    "DecodeError",
    "ErrorCode",
    "APIResult",
    "Voice",
    "Lexicon",
    "Abbreviation",
    "Credit",
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
]
