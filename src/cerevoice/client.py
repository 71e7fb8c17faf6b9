"""
CereVoiceClient - CereVoice Cloud REST API client.

Every operation follows the same cycle:

    Input → Envelope → XML body → HTTP POST (text/xml) → XML response → Result

The cycle lives in one place (CereVoiceClient._call); each public method
only maps its input to an Envelope and names its result type.

Error Handling:
    Operations never raise for transport or decode problems. The error is
    attached to the returned result:

        result = client.get_credit()
        if not result.ok:
            print(result.error.code, result.error.message)

    Provider-side failures (bad credentials, unknown voice) come back as
    resultCode/resultDescription in a successful result.

Example:
    >>> from cerevoice import CereVoiceClient, ClientConfig, SpeakSimpleInput
    >>>
    >>> client = CereVoiceClient(ClientConfig(account_id="id", password="pw"))
    >>> result = client.speak_simple(SpeakSimpleInput(voice="Jess", text="Hello world!"))
    >>> print(result.file_url, result.char_count)
"""
from __future__ import annotations

import logging
from typing import Optional, Type, TypeVar

import httpx

from cerevoice.api.envelope import Envelope, Operation
from cerevoice.api.errors import DecodeError, TransportError
from cerevoice.api.schemas import (
    APIResult,
    GetCreditResult,
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
    decode_response,
)
from cerevoice.core.config import ClientConfig, Defaults, Settings
from cerevoice.core.logging import debug, fail, info, verbose, warn
from cerevoice.utils.timeit import timeit

_LOG = logging.getLogger(__name__)

DEFAULT_API_URL = Defaults.API_URL
CONTENT_TYPE = "text/xml"

R = TypeVar("R", bound=APIResult)


class CereVoiceClient:
    """
    Synchronous client for the CereVoice Cloud REST API.

    Holds no state besides its configuration, so one instance may be
    shared between threads. Each call opens its own HTTP connection and
    releases it before returning.

    Args:
        config: Account credentials, endpoint URL and timeout.
        transport: Optional httpx transport (e.g. httpx.MockTransport in
            tests). Defaults to httpx's standard HTTP transport.
    """

    def __init__(self, config: ClientConfig, transport: Optional[httpx.BaseTransport] = None):
        self._config = config
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> "CereVoiceClient":
        """Build a client from loaded Settings (validated)."""
        return cls(ClientConfig.from_settings(settings), transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __repr__(self) -> str:
        return f"CereVoiceClient(api_url={self._config.api_url!r}, account_id={self._config.account_id!r})"

    # ─────────────────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────────────────

    def speak_simple(self, params: SpeakSimpleInput) -> SpeakSimpleResult:
        """Synthesise text with the selected voice."""
        envelope = self.envelope(Operation.SPEAK_SIMPLE, voice=params.voice, text=params.text)
        return self._call(envelope, SpeakSimpleResult)

    def speak_extended(self, params: SpeakExtendedInput) -> SpeakExtendedResult:
        """Synthesise text with control over format, sample rate, 3D audio and metadata."""
        envelope = self.envelope(
            Operation.SPEAK_EXTENDED,
            voice=params.voice,
            text=params.text,
            audio_format=params.audio_format,
            sample_rate=params.sample_rate,
            audio_3d=params.audio_3d,
            metadata=params.metadata,
        )
        return self._call(envelope, SpeakExtendedResult)

    def list_voices(self) -> ListVoicesResult:
        """List the voices available to the account."""
        return self._call(self.envelope(Operation.LIST_VOICES), ListVoicesResult)

    def upload_lexicon(self, params: UploadLexiconInput) -> UploadLexiconResult:
        """Store a custom lexicon file."""
        envelope = self.envelope(
            Operation.UPLOAD_LEXICON,
            lexicon_file=params.lexicon_file,
            language=params.language,
            accent=params.accent,
        )
        return self._call(envelope, UploadLexiconResult)

    def list_lexicons(self) -> ListLexiconsResult:
        """List stored custom lexicon files."""
        return self._call(self.envelope(Operation.LIST_LEXICONS), ListLexiconsResult)

    def upload_abbreviations(self, params: UploadAbbreviationsInput) -> UploadAbbreviationsResult:
        """Store a custom abbreviation file."""
        envelope = self.envelope(
            Operation.UPLOAD_ABBREVIATIONS,
            abbreviation_file=params.abbreviation_file,
            language=params.language,
        )
        return self._call(envelope, UploadAbbreviationsResult)

    def list_abbreviations(self) -> ListAbbreviationsResult:
        """List stored custom abbreviation files."""
        return self._call(self.envelope(Operation.LIST_ABBREVIATIONS), ListAbbreviationsResult)

    def list_audio_formats(self) -> ListAudioFormatsResult:
        """List the available audio encoding formats."""
        return self._call(self.envelope(Operation.LIST_AUDIO_FORMATS), ListAudioFormatsResult)

    def get_credit(self) -> GetCreditResult:
        """Retrieve the credit balance of the account."""
        return self._call(self.envelope(Operation.GET_CREDIT), GetCreditResult)

    # ─────────────────────────────────────────────────────────────────────────
    # Request/response cycle
    # ─────────────────────────────────────────────────────────────────────────

    def envelope(self, operation: str, **fields) -> Envelope:
        """Build an Envelope for `operation` carrying this client's credentials."""
        return Envelope(
            operation=operation,
            account_id=self._config.account_id,
            password=self._config.password,
            **fields,
        )

    def _call(self, envelope: Envelope, result_cls: Type[R]) -> R:
        """
        Run one request/response cycle.

        Returns:
            A decoded result, or a zero-valued result carrying a
            TransportError or DecodeError.
        """
        operation = envelope.operation
        body = envelope.to_bytes()
        debug(_LOG, "request_envelope", operation=operation, xml=envelope.to_xml(mask_password=True))

        try:
            with timeit(operation) as t:
                with httpx.Client(transport=self._transport, timeout=self._config.timeout_s) as http:
                    response = http.post(
                        self._config.api_url,
                        content=body,
                        headers={"Content-Type": CONTENT_TYPE},
                    )
                    raw = response.content
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            err = TransportError(
                f"{operation} request failed: {exc}",
                details={"operation": operation, "url": self._config.api_url, "exception": type(exc).__name__},
            )
            err.__cause__ = exc
            fail(_LOG, "call_failed", operation=operation, error=err.code, reason=str(exc), seconds=t.seconds)
            return result_cls(error=err)

        verbose(
            _LOG, "response_received",
            operation=operation, status=response.status_code,
            request_bytes=len(body), response_bytes=len(raw),
            **_text_preview(envelope),
        )
        if response.is_error:
            warn(_LOG, "http_status", operation=operation, status=response.status_code)

        try:
            result = decode_response(result_cls, raw)
        except DecodeError as exc:
            exc.details.setdefault("operation", operation)
            exc.details.setdefault("status", response.status_code)
            fail(_LOG, "call_failed", operation=operation, error=exc.code, reason=exc.message, seconds=t.seconds)
            return result_cls(error=exc)

        info(_LOG, "call_ok", operation=operation, status=response.status_code, seconds=t.seconds)
        return result


def _text_preview(envelope: Envelope) -> dict:
    if not envelope.text:
        return {}
    limit = Defaults.LOGGING_TEXT_PREVIEW_CHARS
    text = envelope.text if len(envelope.text) <= limit else envelope.text[:limit] + "..."
    return {"text": text}
