"""
Command-Line Interface for cerevoice-client.

One sub-command per CereVoice Cloud operation. Credentials come from
flags, CEREVOICE_* environment variables, or the settings file.

Usage Examples:
    # Synthesize with a voice, print the audio URL
    cerevoice speak Jess "Hello world!"

    # Extended synthesis with format and sample rate
    cerevoice speak-extended Heather "Hello" --format ogg --sample-rate 48000 --metadata

    # Show the XML that would be sent (password masked), no network I/O
    cerevoice --dry-run speak Jess "Hello world!"

    # List voices as JSON
    cerevoice --json voices

    # Account balance
    cerevoice credit

Environment Variables:
    CEREVOICE_ACCOUNT_ID, CEREVOICE_PASSWORD: Account credentials
    CEREVOICE_API_URL: Endpoint override
    CEREVOICE_SETTINGS: Settings file (default config/settings.yaml)
"""

from __future__ import annotations

import argparse
import json
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import uuid4

from cerevoice.api.envelope import Operation
from cerevoice.api.schemas import (
    APIResult,
    SpeakExtendedInput,
    SpeakSimpleInput,
    UploadAbbreviationsInput,
    UploadLexiconInput,
)
from cerevoice.client import CereVoiceClient
from cerevoice.core.config import (
    ConfigValidationError,
    Defaults,
    Settings,
    load_settings,
    settings_from_env,
)
from cerevoice.core.logging import configure_logging, get_logger, info, set_request_id

ParamsBuilder = Callable[[argparse.Namespace], Optional[Any]]

# command -> (operation, client method, params builder)
_COMMANDS: Dict[str, Tuple[str, str, ParamsBuilder]] = {
    "speak": (
        Operation.SPEAK_SIMPLE, "speak_simple",
        lambda a: SpeakSimpleInput(voice=a.voice, text=a.text),
    ),
    "speak-extended": (
        Operation.SPEAK_EXTENDED, "speak_extended",
        lambda a: SpeakExtendedInput(
            voice=a.voice,
            text=a.text,
            audio_format=a.audio_format or "",
            sample_rate=a.sample_rate or "",
            audio_3d=a.audio_3d,
            metadata=a.metadata,
        ),
    ),
    "voices": (Operation.LIST_VOICES, "list_voices", lambda a: None),
    "upload-lexicon": (
        Operation.UPLOAD_LEXICON, "upload_lexicon",
        lambda a: UploadLexiconInput(
            lexicon_file=a.lexicon_file, language=a.language or "", accent=a.accent or "",
        ),
    ),
    "lexicons": (Operation.LIST_LEXICONS, "list_lexicons", lambda a: None),
    "upload-abbreviations": (
        Operation.UPLOAD_ABBREVIATIONS, "upload_abbreviations",
        lambda a: UploadAbbreviationsInput(
            abbreviation_file=a.abbreviation_file, language=a.language or "",
        ),
    ),
    "abbreviations": (Operation.LIST_ABBREVIATIONS, "list_abbreviations", lambda a: None),
    "formats": (Operation.LIST_AUDIO_FORMATS, "list_audio_formats", lambda a: None),
    "credit": (Operation.GET_CREDIT, "get_credit", lambda a: None),
}


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="cerevoice", description="CereVoice Cloud CLI")

    # Connection overrides
    parser.add_argument("--settings", help="Settings YAML file")
    parser.add_argument("--account-id", help="CereVoice Cloud account id")
    parser.add_argument("--password", help="CereVoice Cloud password")
    parser.add_argument("--api-url", help="REST endpoint override")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")

    # Execution modes
    parser.add_argument("--dry-run", action="store_true",
                        help="Print the request XML (password masked) without sending it")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    sub = parser.add_subparsers(dest="command", required=True)

    speak = sub.add_parser("speak", help="speakSimple: synthesize text")
    speak.add_argument("voice")
    speak.add_argument("text")

    ext = sub.add_parser("speak-extended", help="speakExtended: synthesize with options")
    ext.add_argument("voice")
    ext.add_argument("text")
    ext.add_argument("--format", dest="audio_format", help="Audio format (see 'formats')")
    ext.add_argument("--sample-rate", help="Sample rate, e.g. 48000")
    ext.add_argument("--audio-3d", action="store_true", help="Enable 3D audio")
    ext.add_argument("--metadata", action="store_true", help="Request a metadata file")

    lex = sub.add_parser("upload-lexicon", help="uploadLexicon: store a lexicon file")
    lex.add_argument("lexicon_file")
    lex.add_argument("--language")
    lex.add_argument("--accent")

    abbr = sub.add_parser("upload-abbreviations", help="uploadAbbreviations: store an abbreviation file")
    abbr.add_argument("abbreviation_file")
    abbr.add_argument("--language")

    sub.add_parser("voices", help="listVoices")
    sub.add_parser("lexicons", help="listLexicons")
    sub.add_parser("abbreviations", help="listAbbreviations")
    sub.add_parser("formats", help="listAudioFormats")
    sub.add_parser("credit", help="getCredit")

    return parser.parse_args(argv)


def _resolve_settings(args: argparse.Namespace) -> Settings:
    """
    Merge settings file, environment and flags (flags win).

    An explicit --settings path must exist; the default path is optional.
    """
    path = args.settings or os.getenv("CEREVOICE_SETTINGS")
    if path:
        settings = load_settings(path)
    elif Path(Defaults.SETTINGS_PATH).exists():
        settings = load_settings(Defaults.SETTINGS_PATH)
    else:
        settings = settings_from_env()

    raw = dict(settings.raw)
    api = dict(raw.get("api", {}) or {})
    overrides = {
        "account_id": args.account_id,
        "password": args.password,
        "url": args.api_url,
        "timeout_s": args.timeout,
    }
    api.update({k: v for k, v in overrides.items() if v is not None})
    raw["api"] = api
    return Settings(raw=raw)


def _print_result(result: APIResult) -> None:
    for key, value in result.to_dict().items():
        if isinstance(value, list):
            print(f"{key}: {len(value)}")
            for item in value:
                if isinstance(item, dict):
                    print("  - " + ", ".join(f"{k}={v}" for k, v in item.items() if v))
                else:
                    print(f"  - {item}")
        elif isinstance(value, dict):
            print(f"{key}: " + ", ".join(f"{k}={v}" for k, v in value.items()))
        else:
            print(f"{key}: {value}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        0 when the call completed, 1 when the result carries an error,
        2 for configuration problems.
    """
    args = _parse_args(argv)

    configure_logging()
    log = get_logger("cerevoice.cli")
    set_request_id(str(uuid4())[:12])

    try:
        client = CereVoiceClient.from_settings(_resolve_settings(args))
    except (ConfigValidationError, FileNotFoundError) as exc:
        print(f"Configuration error: {exc}")
        return 2

    operation, method_name, build_params = _COMMANDS[args.command]
    params = build_params(args)

    if args.dry_run:
        fields = asdict(params) if params is not None else {}
        envelope = client.envelope(operation, **fields)
        info(log, "dry_run", operation=operation, fields=",".join(envelope.present_fields()))
        print(envelope.to_xml(mask_password=True))
        print("DRY_RUN_OK")
        return 0

    method = getattr(client, method_name)
    result: APIResult = method(params) if params is not None else method()

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))
    else:
        _print_result(result)
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
