import re
from dataclasses import dataclass, field
from typing import List, Optional

# --- OBJDUMP COLUMN PATTERNS ---
# GNU:  "   0:\tc3                   \tret"
# LLVM: "       0: c3                           \tret"
RE_OFFSET_ZERO = re.compile(r"^\s*0:[\t ]")

# objdump pads the byte column; one 13-wide run of it is dropped
RE_PADDING_RUN = re.compile(r"\s{13}")

# Wrapped bytes of a long instruction: "   7:\t33 22 11 "
RE_CONTINUATION = re.compile(r"^\s*[0-9a-f]+:[\t ]((?:[0-9a-f]{2} ?)+)\s*$")
RE_HEX_BYTE = re.compile(r"^[0-9a-f]{2}$")
RE_WHITESPACE = re.compile(r"\s+")


@dataclass
class EncodedInstruction:
    hex_bytes: List[str] = field(default_factory=list)
    mnemonic: str = ""

    @property
    def hex(self) -> str:
        return " ".join(self.hex_bytes)

    @property
    def raw(self) -> bytes:
        return bytes.fromhex("".join(self.hex_bytes))

    def __len__(self) -> int:
        return len(self.hex_bytes)


def extract_offset_zero(report: str) -> List[str]:
    """
    Select the offset-zero line(s) of a disassembly report and strip the
    offset column plus one run of the byte-column padding.
    Returns an empty list if no instruction sits at offset 0.
    """
    lines = []
    for line in report.splitlines():
        match = RE_OFFSET_ZERO.match(line)
        if not match:
            continue
        body = line[match.end():]
        body = RE_PADDING_RUN.sub("", body, count=1)
        lines.append(body.rstrip())
    return lines


def _split_bytes(column: str) -> List[str]:
    return [tok for tok in column.split() if RE_HEX_BYTE.match(tok)]


def parse_encoding(report: str) -> Optional[EncodedInstruction]:
    """
    Structured view of the offset-zero instruction: its bytes (including any
    continuation lines objdump wraps them onto) and its decoded mnemonic.
    """
    lines = report.splitlines()
    for idx, line in enumerate(lines):
        match = RE_OFFSET_ZERO.match(line)
        if not match:
            continue

        body = line[match.end():]
        byte_column, _, mnemonic = body.partition("\t")
        encoding = EncodedInstruction(
            hex_bytes=_split_bytes(byte_column),
            mnemonic=RE_WHITESPACE.sub(" ", mnemonic).strip(),
        )

        for follow in lines[idx + 1:]:
            cont = RE_CONTINUATION.match(follow)
            if not cont:
                break
            encoding.hex_bytes.extend(_split_bytes(cont.group(1)))

        return encoding
    return None
