import json
import sys
from pathlib import Path
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "compiler": "rustc",
    "toolchain": None,       # rustup toolchain, e.g. "nightly" -> `rustc +nightly`
    "target": None,          # rustc --target triple, None means host
    "disassembler": "objdump",
    "syntax": "intel",
    "symbol": "asm",
    "naked_style": "auto",   # auto | feature | nightly | stable
    "insn_width": None,      # objdump --insn-width, None keeps the tool default
    "log_file": "/tmp/asm2hex_engine.log",
}


class ConfigManager:
    """
    Persistent user settings stored in ~/.asm2hex/config.json.
    Values in the file are merged over DEFAULT_CONFIG.
    """

    def __init__(self):
        self.config_dir = Path.home() / ".asm2hex"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        config = DEFAULT_CONFIG.copy()

        if not self.config_file.exists():
            return config

        try:
            with open(self.config_file, "r") as f:
                user_config = json.load(f)
            if isinstance(user_config, dict):
                config.update(user_config)
        except (OSError, json.JSONDecodeError) as e:
            print(f"Warning: Ignoring unreadable config {self.config_file}: {e}", file=sys.stderr)

        return config

    def save_config(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        """Update a setting and persist it."""
        self.config[key] = value
        self.save_config()

    def override(self, key: str, value: Any):
        """Update a setting for this process only (CLI flags)."""
        self.config[key] = value
