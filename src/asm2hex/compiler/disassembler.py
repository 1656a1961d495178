import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from ..utils.arch import detect_arch, supports_syntax_selector
from ..utils.config import ConfigManager

# Fallback for macOS Homebrew users where llvm is often not linked
_HOMEBREW_OBJDUMP = [
    "/opt/homebrew/opt/llvm/bin/llvm-objdump",
    "/usr/local/opt/llvm/bin/llvm-objdump",
]


class ObjdumpDriver:
    """Runs objdump (or llvm-objdump) over a compiled artifact."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config = config_manager if config_manager else ConfigManager()
        self.disassembler: Optional[str] = self._discover_disassembler(
            self.config.get("disassembler", "objdump")
        )

    @staticmethod
    def _discover_disassembler(name: str = "objdump") -> Optional[str]:
        path = shutil.which(name)
        if path:
            return path

        path = shutil.which("llvm-objdump")
        if path:
            return path

        for p in _HOMEBREW_OBJDUMP:
            if Path(p).exists():
                return p
        return None

    def build_command(self, artifact: str, section: str) -> List[str]:
        command = [self.disassembler]

        # Portability: the syntax selector only exists for x86
        syntax = self.config.get("syntax", "intel")
        if syntax and supports_syntax_selector(detect_arch(self.config.get("target"))):
            command.extend(["-M", syntax])

        command.append(f"--section={section}")
        command.append("-D")

        insn_width = self.config.get("insn_width")
        if insn_width:
            command.append(f"--insn-width={insn_width}")

        command.append(str(artifact))
        return command

    def disassemble(self, artifact: str, section: str) -> Tuple[str, str]:
        """
        Disassemble one section of the artifact.
        Returns: (Report String, Error String)
        """
        if not self.disassembler:
            return "", "Error: objdump not found. Install binutils or llvm."

        if not Path(artifact).exists():
            return "", f"Error: artifact not found: {artifact}"

        try:
            result = subprocess.run(
                self.build_command(artifact, section),
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            return "", f"Disassembly error: {e}"

        # objdump exits non-zero on any unrecognised input but still prints
        # what it could decode; only an empty report counts as a failure
        if result.returncode != 0 and not result.stdout.strip():
            return "", result.stderr or f"Error: objdump exited with status {result.returncode}"

        return result.stdout, result.stderr
