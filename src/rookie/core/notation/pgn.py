"""PGN serialization helpers."""

from __future__ import annotations

from rookie.core.enums import GameResult

PGN_RESULT_TOKENS = ("1-0", "0-1", "1/2-1/2", "*")


def pgn_result_token(result: GameResult) -> str:
    """Convert :class:`GameResult` to a PGN result token."""
    if result == GameResult.WHITE_WINS:
        return "1-0"
    if result == GameResult.BLACK_WINS:
        return "0-1"
    if result == GameResult.DRAW:
        return "1/2-1/2"
    return "*"


def pgn_movetext_from_sans(
    sans: list[str],
    result_token: str,
    *,
    black_starts: bool = False,
    first_move: int = 1,
) -> str:
    """Build PGN movetext from SAN moves and a result token.

    ``black_starts`` handles games set up from a FEN with Black to move,
    which PGN writes as ``12... Nf6``.
    """
    parts: list[str] = []
    offset = 1 if black_starts else 0
    for idx, san in enumerate(sans):
        ply = idx + offset
        number = first_move + ply // 2
        if ply % 2 == 0:
            parts.append(f"{number}.")
        elif idx == 0:
            parts.append(f"{number}...")
        parts.append(san)
    parts.append(result_token)
    return " ".join(parts)


def build_pgn(
    headers: dict[str, str],
    sans: list[str],
    result_token: str,
    *,
    black_starts: bool = False,
    first_move: int = 1,
) -> str:
    """Build a single-game PGN document."""
    if result_token not in PGN_RESULT_TOKENS:
        raise ValueError(f"Invalid PGN result token: {result_token!r}")

    lines: list[str] = []
    for key, value in headers.items():
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        lines.append(f'[{key} "{escaped}"]')
    lines.append("")
    lines.append(
        pgn_movetext_from_sans(
            sans, result_token, black_starts=black_starts, first_move=first_move
        )
    )
    lines.append("")
    return "\n".join(lines)
