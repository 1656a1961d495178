"""
Rust compilation driver.
Feeds a synthesized crate to rustc on stdin and produces a library object
holding the instruction.
"""
import re
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from .fragment import NakedStyle
from ..utils.config import ConfigManager

# rustc 1.88.0 (6b00bc388 2025-06-23)
# rustc 1.80.0-nightly (ada5e2c7b 2024-05-31)
RE_RUSTC_VERSION = re.compile(r"rustc (\d+)\.(\d+)\.(\d+)(?:-(nightly|beta|dev))?")

# First release where naked functions are stable (and the old form is rejected)
STABLE_NAKED_VERSION = (1, 88)

# First nightly where naked functions must use naked_asm! instead of asm!(noreturn)
NAKED_ASM_VERSION = (1, 84)


@dataclass(frozen=True)
class RustcVersion:
    major: int
    minor: int
    patch: int
    channel: str = "stable"

    @property
    def has_stable_naked(self) -> bool:
        return (self.major, self.minor) >= STABLE_NAKED_VERSION

    @property
    def is_nightly(self) -> bool:
        return self.channel in ("nightly", "dev")

    @property
    def requires_naked_asm(self) -> bool:
        return (self.major, self.minor) >= NAKED_ASM_VERSION


def parse_rustc_version(text: str) -> Optional[RustcVersion]:
    match = RE_RUSTC_VERSION.search(text)
    if not match:
        return None
    return RustcVersion(
        major=int(match.group(1)),
        minor=int(match.group(2)),
        patch=int(match.group(3)),
        channel=match.group(4) or "stable",
    )


class RustCompilerDriver:
    """Handles rustc discovery and single-instruction compilation."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config = config_manager if config_manager else ConfigManager()
        self.compiler: Optional[str] = self._discover_compiler(self.config.get("compiler", "rustc"))
        self._version: Optional[RustcVersion] = None

    @staticmethod
    def _discover_compiler(name: str = "rustc") -> Optional[str]:
        """Find rustc on the system."""
        path = shutil.which(name)
        if path:
            return path
        if name != "rustc":
            print(f"Warning: Rust compiler '{name}' not found.", file=sys.stderr)
            return None
        # Common rustup install locations
        home = Path.home()
        candidates = [
            home / ".cargo" / "bin" / "rustc",
            home / ".rustup" / "toolchains" / "stable-x86_64-unknown-linux-gnu" / "bin" / "rustc",
            home / ".rustup" / "toolchains" / "nightly-x86_64-unknown-linux-gnu" / "bin" / "rustc",
        ]
        for c in candidates:
            if c.exists():
                return str(c)
        return None

    def _base_command(self) -> List[str]:
        command = [self.compiler]
        # rustup proxies accept `+toolchain` as the first argument
        toolchain = self.config.get("toolchain")
        if toolchain:
            command.append(f"+{toolchain}")
        return command

    def query_version(self) -> Optional[RustcVersion]:
        """Ask rustc for its version. Cached for the lifetime of the driver."""
        if self._version is not None or not self.compiler:
            return self._version

        try:
            result = subprocess.run(
                self._base_command() + ["-V"], capture_output=True, text=True, check=False
            )
        except OSError:
            return None

        if result.returncode == 0:
            self._version = parse_rustc_version(result.stdout)
        return self._version

    def resolve_style(self, style: NakedStyle = NakedStyle.AUTO) -> NakedStyle:
        """
        Pick the naked-function source form rustc will accept.
        Unknown versions default to the stable form.
        """
        style = NakedStyle(style)
        if style != NakedStyle.AUTO:
            return style

        version = self.query_version()
        if version is None or version.has_stable_naked or not version.is_nightly:
            return NakedStyle.STABLE
        if version.requires_naked_asm:
            return NakedStyle.NIGHTLY
        return NakedStyle.FEATURE

    def compile(self, source: str, output_file: str) -> Tuple[Optional[str], str]:
        """
        Compile crate source (given on stdin) into a library object.
        Returns: (Artifact Path or None, Error String)
        """
        if not self.compiler:
            return None, "Error: rustc not found. Install via https://rustup.rs/"

        command = self._base_command()
        command.extend(["--crate-type", "lib", "--emit", "obj"])

        target = self.config.get("target")
        if target:
            command.extend(["--target", target])

        command.extend(["-o", str(output_file), "-"])

        try:
            result = subprocess.run(
                command, input=source, capture_output=True, text=True, check=False
            )
        except OSError as e:
            return None, f"Rust compilation error: {e}"

        if result.returncode != 0:
            return None, result.stderr

        if not Path(output_file).exists():
            return None, result.stderr or f"Error: rustc produced no artifact at {output_file}"

        return str(output_file), result.stderr
