"""
Unit tests for the offset-zero extractor.
Fixtures mirror GNU objdump's column layout: offset, tab, byte column padded
to 21 characters, tab, mnemonic.
"""
import pytest
from asm2hex.parsing import process_disassembly
from asm2hex.parsing.extractor import (
    EncodedInstruction,
    extract_offset_zero,
    parse_encoding,
)


def _byte_column(*hex_bytes: str) -> str:
    column = "".join(f"{b} " for b in hex_bytes)
    return column + " " * (21 - len(column))


def _report(*instruction_lines: str) -> str:
    header = (
        "\n"
        "/tmp/asm2hex-abc/asm:     file format elf64-x86-64\n"
        "\n"
        "\n"
        "Disassembly of section .text.asm:\n"
        "\n"
        "0000000000000000 <asm>:\n"
    )
    return header + "\n".join(instruction_lines) + "\n"


NOP_REPORT = _report("   0:\t" + _byte_column("90") + "\tnop")
RET_REPORT = _report("   0:\t" + _byte_column("c3") + "\tret    ")
MOV_REPORT = _report("   0:\t" + _byte_column("b8", "01", "00", "00", "00") + "\tmov    eax,0x1")
MOVABS_REPORT = _report(
    "   0:\t48 b8 88 77 66 55 44 \tmovabs rax,0x1122334455667788",
    "   7:\t33 22 11 ",
)


class TestExtractOffsetZero:

    def test_single_byte_instruction(self):
        lines = extract_offset_zero(NOP_REPORT)
        assert len(lines) == 1
        assert lines[0].startswith("90")
        assert lines[0].endswith("nop")

    def test_ret_encoding(self):
        lines = extract_offset_zero(RET_REPORT)
        assert lines[0].split()[0] == "c3"

    def test_offset_column_removed(self):
        for report in (NOP_REPORT, RET_REPORT, MOV_REPORT, MOVABS_REPORT):
            for line in extract_offset_zero(report):
                assert "0:" not in line
                assert not line.startswith((" ", "\t"))

    def test_padding_run_removed(self):
        """One 13-wide run of the byte-column padding is dropped."""
        line = extract_offset_zero(NOP_REPORT)[0]
        assert line == "90" + " " * 6 + "\tnop"
        assert " " * 13 not in line

    def test_multi_byte_instruction(self):
        line = extract_offset_zero(MOV_REPORT)[0]
        assert line.startswith("b8 01 00 00 00")
        assert line.endswith("mov    eax,0x1")

    def test_only_offset_zero_selected(self):
        report = _report(
            "   0:\t" + _byte_column("90") + "\tnop",
            "   1:\t" + _byte_column("c3") + "\tret",
            "  10:\t" + _byte_column("cc") + "\tint3",
        )
        lines = extract_offset_zero(report)
        assert len(lines) == 1
        assert lines[0].startswith("90")

    def test_symbol_header_not_matched(self):
        lines = extract_offset_zero("0000000000000000 <asm>:\n")
        assert lines == []

    def test_no_offset_zero_is_silent(self):
        report = _report()
        assert extract_offset_zero(report) == []

    def test_empty_report(self):
        assert extract_offset_zero("") == []

    def test_llvm_objdump_layout(self):
        report = "0000000000000000 <asm>:\n       0: c3                           \tret\n"
        lines = extract_offset_zero(report)
        assert len(lines) == 1
        assert lines[0].startswith("c3")
        assert lines[0].endswith("ret")

    def test_idempotent(self):
        assert extract_offset_zero(MOV_REPORT) == extract_offset_zero(MOV_REPORT)


class TestParseEncoding:

    def test_nop(self):
        enc = parse_encoding(NOP_REPORT)
        assert enc.hex_bytes == ["90"]
        assert enc.mnemonic == "nop"
        assert enc.raw == b"\x90"

    def test_mnemonic_whitespace_collapsed(self):
        enc = parse_encoding(MOV_REPORT)
        assert enc.hex == "b8 01 00 00 00"
        assert enc.mnemonic == "mov eax,0x1"
        assert len(enc) == 5

    def test_trailing_mnemonic_padding_stripped(self):
        enc = parse_encoding(RET_REPORT)
        assert enc.mnemonic == "ret"

    def test_continuation_bytes_merged(self):
        enc = parse_encoding(MOVABS_REPORT)
        assert enc.hex == "48 b8 88 77 66 55 44 33 22 11"
        assert enc.mnemonic == "movabs rax,0x1122334455667788"

    def test_next_instruction_not_merged(self):
        report = _report(
            "   0:\t" + _byte_column("90") + "\tnop",
            "   1:\t" + _byte_column("c3") + "\tret",
        )
        enc = parse_encoding(report)
        assert enc.hex_bytes == ["90"]

    def test_missing_offset_zero_returns_none(self):
        assert parse_encoding(_report()) is None


class TestEncodedInstruction:

    def test_defaults(self):
        enc = EncodedInstruction()
        assert enc.hex == ""
        assert enc.raw == b""
        assert len(enc) == 0


class TestProcessDisassembly:

    def test_returns_lines_and_encoding(self):
        lines, enc = process_disassembly(NOP_REPORT)
        assert lines == ["90      \tnop"]
        assert enc.hex == "90"

    def test_empty(self):
        lines, enc = process_disassembly("")
        assert lines == []
        assert enc is None
