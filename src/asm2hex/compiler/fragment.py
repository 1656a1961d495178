"""
Source synthesis for a single instruction.

The generated crate is freestanding (no_std) and holds exactly one
unmangled, naked, non-returning function so the compiled body is the
instruction bytes and nothing else.
"""
from enum import Enum

DEFAULT_SYMBOL = "asm"


class NakedStyle(str, Enum):
    FEATURE = "feature"   # nightly `#![feature(naked_functions)]` + asm!(noreturn)
    NIGHTLY = "nightly"   # 1.84-1.87 nightly `#![feature(naked_functions)]` + naked_asm!
    STABLE = "stable"     # rustc >= 1.88 `#[unsafe(naked)]` + naked_asm!
    AUTO = "auto"


_FEATURE_TEMPLATE = """#![feature(naked_functions)]
#![no_std]

#[no_mangle]
#[naked]
pub unsafe extern "C" fn {symbol}() {{
    core::arch::asm!("{asm}", options(noreturn));
}}
"""

_NIGHTLY_TEMPLATE = """#![feature(naked_functions)]
#![no_std]

#[no_mangle]
#[naked]
pub unsafe extern "C" fn {symbol}() {{
    core::arch::naked_asm!("{asm}");
}}
"""

_STABLE_TEMPLATE = """#![no_std]

#[no_mangle]
#[unsafe(naked)]
pub extern "C" fn {symbol}() {{
    core::arch::naked_asm!("{asm}");
}}
"""

_TEMPLATES = {
    NakedStyle.FEATURE: _FEATURE_TEMPLATE,
    NakedStyle.NIGHTLY: _NIGHTLY_TEMPLATE,
    NakedStyle.STABLE: _STABLE_TEMPLATE,
}


def escape_asm(asm: str) -> str:
    """
    Escape instruction text for a Rust asm! template string literal.
    Braces are operand placeholders in asm!, so they are doubled.
    """
    return (
        asm.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("{", "{{")
        .replace("}", "}}")
    )


def synthesize_fragment(asm: str, symbol: str = DEFAULT_SYMBOL, style: NakedStyle = NakedStyle.STABLE) -> str:
    """Build the crate source for `asm`. AUTO must be resolved by the caller."""
    style = NakedStyle(style)
    if style == NakedStyle.AUTO:
        raise ValueError("NakedStyle.AUTO must be resolved against a rustc version first")

    template = _TEMPLATES[style]
    return template.format(symbol=symbol, asm=escape_asm(asm))


def section_for(symbol: str = DEFAULT_SYMBOL) -> str:
    """rustc places each function in its own `.text.<name>` section."""
    return f".text.{symbol}"
