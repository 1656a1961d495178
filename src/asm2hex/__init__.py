from .parsing import process_disassembly, extract_offset_zero, parse_encoding, EncodedInstruction
from .compiler.fragment import synthesize_fragment, NakedStyle
