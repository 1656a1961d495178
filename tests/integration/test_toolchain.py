"""
End-to-end tests against the real rustc + objdump.
Skipped unless both tools are installed, the host is x86-64, and rustc can
compile naked functions (stable >= 1.88, or an older nightly).
"""
import platform
import shutil
import subprocess

import pytest

from asm2hex.compiler.rust_driver import parse_rustc_version
from asm2hex.engine import EncoderEngine
from asm2hex.utils.config import DEFAULT_CONFIG


class StaticConfig:
    def __init__(self, **values):
        self.values = DEFAULT_CONFIG.copy()
        self.values.update(values)

    def get(self, key, default=None):
        return self.values.get(key, default)


def _toolchain_ready() -> bool:
    if platform.machine().lower() not in ("x86_64", "amd64"):
        return False
    rustc = shutil.which("rustc")
    if not rustc or not shutil.which("objdump"):
        return False
    result = subprocess.run([rustc, "-V"], capture_output=True, text=True, check=False)
    version = parse_rustc_version(result.stdout)
    return version is not None and (version.has_stable_naked or version.is_nightly)


pytestmark = pytest.mark.skipif(not _toolchain_ready(), reason="rustc/objdump with naked functions not available")


@pytest.fixture
def engine(tmp_path):
    return EncoderEngine(StaticConfig(log_file=str(tmp_path / "engine.log")))


def test_nop_encodes_to_90(engine):
    state = engine.encode("nop")
    assert not state.has_errors, state.error_text
    assert state.lines[0].split()[0] == "90"
    assert state.encoding.hex == "90"


def test_ret_encodes_to_c3(engine):
    state = engine.encode("ret")
    assert state.lines[0].startswith("c3")
    assert "0:" not in state.lines[0]


def test_mov_immediate(engine):
    state = engine.encode("mov eax, 1")
    assert state.encoding.hex == "b8 01 00 00 00"
    assert state.encoding.mnemonic.startswith("mov")


def test_long_instruction_bytes_complete(engine):
    state = engine.encode("movabs rax, 0x1122334455667788")
    assert state.encoding.hex == "48 b8 88 77 66 55 44 33 22 11"


def test_invalid_instruction_fails(engine):
    state = engine.encode("movv eax, 1")
    assert state.compile_failed
    assert state.compiler_output.strip()
    assert state.lines == []


def test_empty_instruction_yields_nothing(engine):
    state = engine.encode("   ")
    assert state.lines == []


def test_idempotent(engine):
    first = engine.encode("xor eax, eax").lines
    second = engine.encode("xor eax, eax").lines
    assert first == second


def test_output_path_kept(engine, tmp_path):
    out = tmp_path / "target" / "asm"
    state = engine.encode("nop", output_path=str(out))
    assert out.exists()
    assert state.encoding.hex == "90"
