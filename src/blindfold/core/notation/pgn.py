"""PGN export and movetext parsing helpers."""

from __future__ import annotations

import re

_PGN_HEADER_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
_PGN_RESULT_TOKENS = {"1-0", "0-1", "1/2-1/2", "*"}
_MOVE_NUMBER_PREFIX_RE = re.compile(r"^\d+\.+")

DEFAULT_LINE_WIDTH = 80


def move_number_label(ply: int) -> str:
    """``"3."`` before a white ply, ``"3..."`` before a black one."""
    number = ply // 2 + 1
    return f"{number}." if ply % 2 == 0 else f"{number}..."


def first_ply_of(fen: str) -> int:
    """Ply of the next move in *fen*, counted from ``1.`` for white.

    Missing side or fullmove fields default to white and move 1.
    """
    parts = fen.split()
    black = len(parts) > 1 and parts[1] == "b"
    fullmove = 1
    if len(parts) > 5 and parts[5].isdecimal():
        fullmove = max(1, int(parts[5]))
    return 2 * (fullmove - 1) + (1 if black else 0)


def pgn_movetext(
    sans: list[str],
    result_token: str | None = None,
    width: int = DEFAULT_LINE_WIDTH,
    first_ply: int = 0,
) -> list[str]:
    """Numbered movetext lines, wrapped close to *width* columns.

    *first_ply* is the ply of the first move (see :func:`first_ply_of`), so a
    game set up with black to move opens with ``N...``. A numbered move is
    pushed to a new line when it would overflow; a line is closed after a
    black move once it has passed the width.
    """
    lines: list[str] = []
    current = ""
    for offset, san in enumerate(sans):
        ply = first_ply + offset
        if ply % 2 == 0 or offset == 0:
            text = f"{move_number_label(ply)} {san}"
            if current and len(current) + len(text) > width:
                lines.append(current.strip())
                current = text + " "
            else:
                current += text + " "
        else:
            current += san + " "
            if len(current) > width:
                lines.append(current.strip())
                current = ""

    if result_token:
        current += result_token
    if current.strip():
        lines.append(current.strip())
    return lines


def build_pgn(
    headers: dict[str, str] | None,
    sans: list[str],
    result_token: str | None = None,
    width: int = DEFAULT_LINE_WIDTH,
    first_ply: int = 0,
) -> str:
    """Build a single-game PGN document."""
    lines: list[str] = []
    if headers:
        for key, value in headers.items():
            escaped = value.replace("\\", "\\\\").replace('"', '\\"')
            lines.append(f'[{key} "{escaped}"]')
        lines.append("")
    lines.extend(pgn_movetext(sans, result_token, width, first_ply))
    return "\n".join(lines)


def parse_pgn_headers(text: str) -> dict[str, str]:
    headers: dict[str, str] = {}
    for line in text.splitlines():
        match = _PGN_HEADER_RE.match(line.strip())
        if match:
            key, value = match.groups()
            headers[key] = value.replace('\\"', '"').replace("\\\\", "\\")
    return headers


def parse_pgn_moves(text: str) -> list[str]:
    """Mainline SAN tokens from PGN text.

    Header tags, ``{}``/``;`` comments, ``()`` variations, NAGs, move
    numbers and result tokens are skipped.
    """
    body = "\n".join(
        line for line in text.splitlines() if not _PGN_HEADER_RE.match(line.strip())
    )

    sans: list[str] = []
    depth = 0
    idx = 0
    total = len(body)
    while idx < total:
        ch = body[idx]
        if ch.isspace():
            idx += 1
            continue
        if ch == "{":
            end = body.find("}", idx + 1)
            idx = total if end < 0 else end + 1
            continue
        if ch == ";":
            end = body.find("\n", idx + 1)
            idx = total if end < 0 else end + 1
            continue
        if ch == "(":
            depth += 1
            idx += 1
            continue
        if ch == ")":
            depth = max(0, depth - 1)
            idx += 1
            continue

        end = idx
        while end < total and not body[end].isspace() and body[end] not in "{};()":
            end += 1
        token = body[idx:end]
        idx = end

        if depth or token in _PGN_RESULT_TOKENS or token.startswith("$"):
            continue
        token = _MOVE_NUMBER_PREFIX_RE.sub("", token)
        if token:
            sans.append(token)
    return sans
