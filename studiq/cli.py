from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
from typing import Optional

from studiq.modules.ai.client import GeminiClient
from studiq.modules.ai.gateway import AIGateway


def _load_prompt(args: argparse.Namespace) -> str:
    if args.prompt and args.prompt_file:
        raise SystemExit("Provide either --prompt or --prompt-file, not both")
    if args.prompt_file:
        return Path(args.prompt_file).read_text(encoding="utf-8")
    if args.prompt:
        return args.prompt
    raise SystemExit("--prompt or --prompt-file is required")


async def _run(cmd: str, text: str, gateway: AIGateway) -> dict:
    if cmd == "summarize":
        res = await gateway.request_summary(text)
        return {"status": res.status.value, "summary": res.value}
    if cmd == "quiz":
        res = await gateway.request_quiz(text)
        return {
            "status": res.status.value,
            "error": res.error_kind.value if res.error_kind else None,
            "questions": [q.model_dump(by_alias=True) for q in res.value],
        }
    res = await gateway.request_flashcards(text)
    return {
        "status": res.status.value,
        "error": res.error_kind.value if res.error_kind else None,
        "flashcards": [c.model_dump() for c in res.value],
    }


def main(argv: list[str] | None = None, gateway: Optional[AIGateway] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="studiq-gen", description="Generate study aids from notes"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)
    for name, help_text in (
        ("summarize", "Bulleted summary of the notes"),
        ("quiz", "Multiple-choice questions from the notes"),
        ("flashcards", "Front/back flashcards from the notes"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--prompt", "-p", help="Study notes (text)")
        p.add_argument("--prompt-file", help="Path to a file containing the notes")

    args = parser.parse_args(argv)
    text = _load_prompt(args)
    gateway = gateway or AIGateway(GeminiClient())
    result = asyncio.run(_run(args.cmd, text, gateway))
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0 if result["status"] != "error" else 1


if __name__ == "__main__":
    raise SystemExit(main())
