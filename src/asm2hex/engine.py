from typing import Callable, Optional
from .compiler.fragment import NakedStyle, synthesize_fragment, section_for
from .compiler.rust_driver import RustCompilerDriver
from .compiler.disassembler import ObjdumpDriver
from .parsing import process_disassembly, parse_diagnostics
from .utils.config import ConfigManager
from .utils.state import EncoderState
from pathlib import Path
import tempfile
import time

class EncoderEngine:
    """
    Runs the single-shot pipeline: synthesize -> rustc -> objdump -> extract.
    The compiler and disassembler are injectable so tests can stand in for them.
    """
    def __init__(self, config_manager: Optional[ConfigManager] = None, compiler=None, disassembler=None):
        self.config = config_manager if config_manager else ConfigManager()
        self.compiler = compiler if compiler is not None else RustCompilerDriver(self.config)
        self.disassembler = disassembler if disassembler is not None else ObjdumpDriver(self.config)
        self.on_update_callback: Optional[Callable[[EncoderState], None]] = None
        self.log_file = self.config.get("log_file", "/tmp/asm2hex_engine.log")
        self.state = EncoderState()

    def _log(self, msg: str):
        if not self.log_file:
            return
        with open(self.log_file, "a") as f:
            f.write(f"[{time.time()}] {msg}\n")

    @property
    def symbol(self) -> str:
        return self.config.get("symbol", "asm")

    def synthesize(self, instruction: str) -> str:
        style = NakedStyle(self.config.get("naked_style", NakedStyle.AUTO))
        if style == NakedStyle.AUTO:
            style = self.compiler.resolve_style(style)
        return synthesize_fragment(instruction, symbol=self.symbol, style=style)

    def encode(self, instruction: str, output_path: Optional[str] = None) -> EncoderState:
        """
        Encode one instruction. The artifact goes to a per-run temporary
        directory unless output_path is given, in which case it is kept.
        """
        self.state = EncoderState(instruction=instruction)
        self._log(f"Encoding {instruction!r}")
        try:
            if output_path:
                Path(output_path).parent.mkdir(parents=True, exist_ok=True)
                self._run(instruction, str(output_path))
            else:
                with tempfile.TemporaryDirectory(prefix="asm2hex-") as workdir:
                    self._run(instruction, str(Path(workdir) / self.symbol))
        except Exception as e:
            self._log(f"Encode Error: {str(e)}")
            self.state.compiler_output = f"Internal Engine Error: {str(e)}"
            self.state.compile_failed = True

        self.state.last_update = time.time()
        if self.on_update_callback:
            self.on_update_callback(self.state)
        return self.state

    def _run(self, instruction: str, output_file: str):
        state = self.state

        # 1. Fragment
        state.source = self.synthesize(instruction)

        # 2. Compile
        artifact, stderr = self.compiler.compile(state.source, output_file)
        state.update_compile(artifact, stderr)
        state.diagnostics = parse_diagnostics(stderr)
        if artifact is None:
            self._log(f"Compile failed with {len(state.diagnostics)} diagnostics")
            return

        # 3. Disassemble
        report, stderr = self.disassembler.disassemble(artifact, section_for(self.symbol))
        state.update_disassembly(report, stderr)
        if not report:
            self._log(f"Disassembly failed: {stderr[:100]}")
            return

        # 4. Extract
        state.lines, state.encoding = process_disassembly(report)
        self._log(f"Extracted {len(state.lines)} line(s): {state.lines}")
