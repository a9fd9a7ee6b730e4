"""
CLI package — text console over a ``GraphEditor``.

Design Patterns
───────────────
• Interpreter   – ``CommandProcessor`` parses console lines into calls on
                  the editor and its interaction controller.
• Facade        – ``main()`` wires configuration, logging and the REPL.
"""
import argparse
import logging
from typing import List, Optional

from ..config import EditorConfig
from ..editor import GraphEditor
from .command_processor import HELP_TEXT, CommandProcessor

__all__ = [
    'CommandProcessor',
    'HELP_TEXT',
    'main',
]

PROMPT = "graph> "


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graph-editor",
        description="Edit node/edge graphs from a text console.",
    )
    parser.add_argument("script", nargs="?",
                        help="File of console commands to run instead of the prompt.")
    parser.add_argument("--width", type=float, default=800, help="Viewport width.")
    parser.add_argument("--height", type=float, default=600, help="Viewport height.")
    parser.add_argument("--history-depth", type=int, default=None,
                        help="Keep at most this many history entries.")
    parser.add_argument("--renderer", action="append", default=[],
                        help="Entry-point name of a renderer plugin (repeatable).")
    parser.add_argument("--comparator", default=None,
                        help="Entry-point name of a graph comparator plugin.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug output.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = EditorConfig(
        viewport_width=args.width,
        viewport_height=args.height,
        max_history_depth=args.history_depth,
        renderer_names=args.renderer,
        comparator_name=args.comparator,
    )
    processor = CommandProcessor(GraphEditor(config))

    if args.script:
        with open(args.script, encoding="utf-8") as handle:
            failures = 0
            for line in handle:
                if not line.strip() or line.lstrip().startswith("#"):
                    continue
                result = processor.process(line)
                print(result.message)
                failures += 0 if result.success else 1
        return 1 if failures else 0

    print("Graph editor console. Type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            return 0
        if line.strip().lower() in ("quit", "exit"):
            return 0
        if not line.strip():
            continue
        print(processor.process(line).message)

