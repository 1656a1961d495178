"""
Architecture detection: decides which disassembler syntax options apply.
Works from a rustc target triple when one is configured, else from the host.
"""
import platform
from enum import Enum
from typing import Optional


class Arch(str, Enum):
    X86 = "x86"
    AARCH64 = "aarch64"
    ARM = "arm"
    RISCV = "riscv"
    UNKNOWN = "unknown"


# Prefix of the triple / machine name -> architecture family
_PREFIX_MAP = (
    ("x86_64", Arch.X86),
    ("amd64", Arch.X86),
    ("i386", Arch.X86),
    ("i586", Arch.X86),
    ("i686", Arch.X86),
    ("x86", Arch.X86),
    ("aarch64", Arch.AARCH64),
    ("arm64", Arch.AARCH64),
    ("arm", Arch.ARM),
    ("thumb", Arch.ARM),
    ("riscv", Arch.RISCV),
)


def detect_arch(target: Optional[str] = None) -> Arch:
    """Detect the architecture family of a target triple, or of the host."""
    name = (target or platform.machine()).lower()
    for prefix, arch in _PREFIX_MAP:
        if name.startswith(prefix):
            return arch
    return Arch.UNKNOWN


def supports_syntax_selector(arch: Arch) -> bool:
    """Only x86 disassembly has an Intel/AT&T flavour to choose from."""
    return arch == Arch.X86
