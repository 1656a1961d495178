from .extractor import extract_offset_zero, parse_encoding, EncodedInstruction
from .diagnostics import parse_diagnostics, Diagnostic
from typing import List, Optional, Tuple


def process_disassembly(report: str) -> Tuple[List[str], Optional[EncodedInstruction]]:
    """
    Returns: (cleaned_offset_zero_lines, structured_encoding)
    """
    return extract_offset_zero(report), parse_encoding(report)
