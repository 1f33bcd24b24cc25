import argparse
import asyncio
import json
import logging
from typing import List, Optional

from smarttranslate.models import DispatchRequest, MessageKind
from smarttranslate.services import ConfigResolver, LocalStore, RequestDispatcher, ResultCache
from smarttranslate.utils import extract_selection_context

KIND_ALIASES = {
    "translate": MessageKind.TRANSLATE.value,
    "analyze": MessageKind.ANALYZE.value,
    "tts": MessageKind.SYNTHESIZE.value,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send one request through the proxy dispatcher")
    parser.add_argument("kind", choices=sorted(KIND_ALIASES))
    parser.add_argument("text")
    parser.add_argument("--target", default=None, help="target language code (translate)")
    parser.add_argument("--voice", default=None, help="voice identifier (tts)")
    parser.add_argument("--context", default=None, help="text surrounding the selection (translate)")
    parser.add_argument("--db", default=None, help="client database path")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    dispatcher = RequestDispatcher(
        resolver=ConfigResolver(store=LocalStore(args.db)),
        cache=ResultCache(args.db),
    )
    request = DispatchRequest(
        kind=KIND_ALIASES[args.kind],
        text=args.text,
        target=args.target,
        voice=args.voice,
        context=extract_selection_context(args.context, args.text) if args.context else None,
    )
    response = asyncio.run(dispatcher.dispatch(request))
    print(json.dumps(response.to_message(), ensure_ascii=False, indent=2))
    return 1 if response.type == "failure" else 0


if __name__ == "__main__":
    raise SystemExit(main())
