"""Text rendering of encoded tile bytes."""

from __future__ import annotations

BYTES_PER_LINE = 16


def format_hex_text(data: bytes, delimiter: str = "", per_line: int = BYTES_PER_LINE) -> str:
    """Render bytes as ``0xAB`` tokens, ``per_line`` tokens per line.

    ``delimiter`` follows every token, including the last one on a line,
    which keeps the output pasteable into assembler ``db`` lists or C arrays.
    """
    if per_line < 1:
        raise ValueError("per_line must be at least 1")
    lines = []
    for start in range(0, len(data), per_line):
        chunk = data[start : start + per_line]
        lines.append("".join(f"0x{value:02X}{delimiter}" for value in chunk))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
