from dataclasses import dataclass, field
from typing import List, Optional
from ..parsing.extractor import EncodedInstruction
from ..parsing.diagnostics import Diagnostic

@dataclass
class EncoderState:
    """
    Everything produced by one single-shot encoding run.
    """
    instruction: str = ""
    source: str = ""
    artifact_path: Optional[str] = None

    # Compiler stage
    compiler_output: str = ""
    compile_failed: bool = False
    diagnostics: List[Diagnostic] = field(default_factory=list)

    # Disassembler stage
    disassembly: str = ""
    disassembler_output: str = ""
    disassemble_failed: bool = False

    # Extraction
    lines: List[str] = field(default_factory=list)
    encoding: Optional[EncodedInstruction] = None
    last_update: float = 0.0

    @property
    def has_errors(self) -> bool:
        """True if either external tool failed."""
        return (
            self.compile_failed
            or self.disassemble_failed
            or any(d.severity == "error" for d in self.diagnostics)
        )

    @property
    def error_text(self) -> str:
        return "\n".join(t for t in (self.compiler_output, self.disassembler_output) if t)

    def update_compile(self, artifact: Optional[str], stderr: str):
        self.artifact_path = artifact
        self.compiler_output = stderr
        self.compile_failed = artifact is None

    def update_disassembly(self, report: str, stderr: str):
        self.disassembly = report
        self.disassembler_output = stderr
        self.disassemble_failed = not report
