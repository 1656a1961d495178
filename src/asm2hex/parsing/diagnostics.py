import re
from dataclasses import dataclass
from typing import List, Optional

RE_HEADER = re.compile(r"^(error|warning)(?:\[(E\d{4})\])?:\s+(.*)$")
RE_LOCATION = re.compile(r"^\s*-->\s+(.+):(\d+):(\d+)\s*$")

# Location rustc reports for text inside the assembled template
INLINE_ASM_FILE = "<inline asm>"


@dataclass
class Diagnostic:
    line: int
    column: int
    severity: str # 'error' or 'warning'
    message: str
    code: Optional[str] = None
    file: Optional[str] = None

    @property
    def in_inline_asm(self) -> bool:
        return self.file == INLINE_ASM_FILE


def parse_diagnostics(stderr: str) -> List[Diagnostic]:
    """
    Parses rustc error output into structured objects.
    Example:
        error: invalid instruction mnemonic 'movv'
        note: instantiated into assembly here
         --> <inline asm>:7:1

    The position is the first location in the synthesized source. Assembler
    errors may only carry an <inline asm> location; it is used as a fallback
    and then line/column count lines of the generated assembly, not the source.
    """
    diagnostics = []
    pending: Optional[Diagnostic] = None

    for raw in stderr.splitlines():
        header = RE_HEADER.match(raw)
        if header:
            message = header.group(3).strip()
            if message.startswith("aborting due to"):
                pending = None
                continue
            pending = Diagnostic(
                line=0,
                column=0,
                severity=header.group(1),
                message=message,
                code=header.group(2),
            )
            diagnostics.append(pending)
            continue

        location = RE_LOCATION.match(raw)
        if not location or pending is None:
            continue

        file = location.group(1).strip()
        if file == INLINE_ASM_FILE:
            if pending.file is None:
                pending.file = file
                pending.line = int(location.group(2))
                pending.column = int(location.group(3))
            continue

        pending.file = file
        pending.line = int(location.group(2))
        pending.column = int(location.group(3))
        pending = None

    return diagnostics
