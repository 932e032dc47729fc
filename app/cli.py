"""Command-line client for the Hindi email generator.

Usage:
  hindi-email serve [--host HOST] [--port PORT]
  hindi-email generate "मुझे आज छुट्टी चाहिए।" [--copy] [--export DIR]
  hindi-email listen [--copy] [--export DIR]
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional

from utility.config import load_settings
from utility.email_client import EmailClient
from utility.logger import setup_logger
from utility.speech_capture import GoogleSpeechRecognizer, SpeechCapture


def render(client: EmailClient) -> None:
    view = client.view
    print(view.status)
    if not view.english_email:
        return
    print("\n" + "=" * 60)
    print(view.english_email)
    print("=" * 60)
    print("Hindi -> English mapping:")
    for line in view.mapping_lines:
        print(f"  {line}")
    print()


def finish(client: EmailClient, copy: bool, export_dir: Optional[str]) -> None:
    if copy:
        print(client.copy_email())
    if export_dir:
        client.export_email(export_dir)
        print(client.view.status)


def cmd_serve(args) -> int:
    from app.main import run

    run(host=args.host, port=args.port)
    return 0


def cmd_generate(args) -> int:
    setup_logger("utility", "WARNING")
    client = EmailClient(args.url)
    result = asyncio.run(client.generate(args.text))
    render(client)
    if result is None:
        return 1
    finish(client, args.copy, args.export)
    return 0


def cmd_listen(args) -> int:
    setup_logger("utility", "WARNING")
    capture = SpeechCapture(GoogleSpeechRecognizer(), on_status=print)
    if not capture.available:
        return 1

    transcript = capture.listen_once()
    if not transcript:
        return 1

    print(f"\n[HINDI TRANSCRIPTION]: {transcript}")
    answer = input("Generate email from this instruction? [Y/n] ").strip().lower()
    if answer not in ("", "y", "yes"):
        return 0

    args.text = transcript
    return cmd_generate(args)


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()

    parser = argparse.ArgumentParser(prog="hindi-email", description="Hindi speech-to-email generator")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the generation relay")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(func=cmd_serve)

    for name, func, help_text in (
            ("generate", cmd_generate, "generate an email from typed Hindi text"),
            ("listen", cmd_listen, "speak a Hindi instruction, then generate"),
    ):
        command = sub.add_parser(name, help=help_text)
        if name == "generate":
            command.add_argument("text", help="Hindi instruction")
        command.add_argument("--url", default=settings.relay_url, help="relay base URL")
        command.add_argument("--copy", action="store_true", help="copy the email to the clipboard")
        command.add_argument("--export", metavar="DIR", default=None, help="write generated_email.txt into DIR")
        command.set_defaults(func=func)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
