import re

from rich.text import Text

REGISTERS = re.compile(
    r"\b("
    r"r[abcd]x|r[sd]i|r[bs]p|r(?:8|9|1[0-5])[dwb]?|rip"
    r"|e[abcd]x|e[sd]i|e[bs]p"
    r"|[abcd][hl]|[abcd]x|[sd]il?|[bs]pl?"
    r"|[xyz]mm[0-9]+|k[0-7]"
    r"|[wx](?:[12]?[0-9]|3[01])|sp|lr|fp"
    r")\b",
    re.IGNORECASE,
)

SIZE_KEYWORDS = re.compile(
    r"\b(ZMMWORD|YMMWORD|XMMWORD|TBYTE|QWORD|DWORD|WORD|BYTE|PTR)\b",
    re.IGNORECASE,
)

NUMBERS = re.compile(
    r"(?<![\w])(#?-?0x[0-9a-fA-F]+|#?-?[0-9]+)\b",
)

HEX_BYTE = re.compile(r"\b[0-9a-f]{2}\b")

# Byte column colour, mnemonic colours follow the usual asm scheme
C_BYTES = "#45d3ee"
C_MUTED = "#9FBFC5"


def highlight_asm_line(line: str, bg: str = "") -> Text:
    """
    Syntax-highlight one disassembled instruction.

    Token priority (lowest to highest): mnemonic, size keywords, numbers,
    registers. The first word is treated as the mnemonic.
    """
    segment = Text()
    token_styles: list[str | None] = [None] * len(line)

    mnemonic = re.match(r"^\s*([a-z][\w.]*)", line, re.IGNORECASE)
    if mnemonic:
        for j in range(mnemonic.start(1), mnemonic.end(1)):
            token_styles[j] = "blue"

    for m in SIZE_KEYWORDS.finditer(line):
        for j in range(m.start(), m.end()):
            token_styles[j] = "magenta"

    for m in NUMBERS.finditer(line):
        for j in range(m.start(), m.end()):
            token_styles[j] = "cyan"

    for m in REGISTERS.finditer(line):
        for j in range(m.start(), m.end()):
            token_styles[j] = "bold red"

    # Emit characters, grouping consecutive runs of the same style
    i = 0
    while i < len(line):
        cur_style = token_styles[i]
        j = i
        while j < len(line) and token_styles[j] == cur_style:
            j += 1
        full_style = f"{cur_style} {bg}" if cur_style else bg
        segment.append(line[i:j], style=full_style.strip() or None)
        i = j

    return segment


def highlight_encoding(instruction: str, hex_bytes: list[str], mnemonic: str) -> Text:
    """
    Build one history row: the typed instruction, its bytes and the
    disassembler's reading of them.
    """
    row = Text()
    row.append(f"{instruction:<32}", style=C_MUTED)
    row.append(" ".join(hex_bytes), style=f"bold {C_BYTES}")
    if mnemonic:
        row.append("    ")
        row.append_text(highlight_asm_line(mnemonic))
    return row
