import sys
import argparse
from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text
from .engine import EncoderEngine
from .compiler.fragment import NakedStyle
from .utils.config import ConfigManager

PROMPT = "Input assembly instruction: "

err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(description="asm2hex: encode one assembly instruction to machine code")
    parser.add_argument("instruction", nargs="*", help="Instruction to encode (prompted for when omitted)")
    parser.add_argument("--tui", action="store_true", help="Open the interactive encoder")
    parser.add_argument("--bytes-only", action="store_true", help="Print only the encoded bytes")
    parser.add_argument("--raw", action="store_true", help="Print the full disassembly report")
    parser.add_argument("--show-source", action="store_true", help="Print the synthesized Rust source to stderr")
    parser.add_argument("--output", metavar="PATH", help="Keep the compiled artifact at PATH")
    parser.add_argument("--target", metavar="TRIPLE", help="rustc target triple")
    parser.add_argument("--toolchain", metavar="NAME", help="rustup toolchain, e.g. nightly")
    parser.add_argument("--syntax", choices=["intel", "att"], help="Disassembly syntax flavour (x86 only)")
    parser.add_argument("--style", choices=[s.value for s in NakedStyle], help="Naked-function source form")
    return parser


def _apply_overrides(config: ConfigManager, args: argparse.Namespace):
    for key, value in (
        ("target", args.target),
        ("toolchain", args.toolchain),
        ("syntax", args.syntax),
        ("naked_style", args.style),
    ):
        if value is not None:
            config.override(key, value)


def _read_instruction(args: argparse.Namespace) -> str:
    if args.instruction:
        return " ".join(args.instruction)
    return input(PROMPT)


def run():
    parser = _build_parser()
    args = parser.parse_args()

    config = ConfigManager()
    _apply_overrides(config, args)
    engine = EncoderEngine(config)

    if args.tui:
        from .ui.app import run_tui
        try:
            run_tui(engine)
        except KeyboardInterrupt:
            pass
        sys.exit(0)

    try:
        instruction = _read_instruction(args)
    except (EOFError, KeyboardInterrupt):
        print()
        sys.exit(1)

    state = engine.encode(instruction, output_path=args.output)

    if args.show_source:
        err_console.print(Syntax(state.source, "rust", theme="ansi_dark"))

    # Tool diagnostics are shown verbatim
    if state.error_text:
        err_console.print(Text(state.error_text.rstrip("\n"), style="red" if state.has_errors else "yellow"))

    if state.compile_failed or state.disassemble_failed:
        sys.exit(1)

    if args.raw:
        print(state.disassembly, end="")
    elif args.bytes_only:
        if state.encoding is not None and state.encoding.hex_bytes:
            print(state.encoding.hex)
    else:
        for line in state.lines:
            print(line)

    sys.exit(0)

if __name__ == "__main__":
    run()
