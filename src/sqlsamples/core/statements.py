"""Split SQL script text into executable statements.

DB-API drivers execute one statement per call, so scripts are split on
``;`` before they are sent.  The splitter is a single left-to-right scan
that understands just enough SQL to avoid the usual traps:

- ``--`` line comments and ``/* */`` block comments are dropped
- semicolons inside ``'...'`` and ``"..."`` literals do not split
- ``BEGIN ... END`` compound blocks (DB2 SQL PL, SQLite triggers) stay whole,
  including ``IF ... END IF`` and ``CASE ... END`` inside them

Examples:
    >>> split_statements("SELECT 1; SELECT ';' FROM t;")
    ['SELECT 1', "SELECT ';' FROM t"]

Tags:
    sql, parsing, scripts
"""

from __future__ import annotations

# END <word> closes one of these rather than a BEGIN block
_END_QUALIFIERS = {"IF", "LOOP", "WHILE", "FOR", "REPEAT", "CASE"}

# BEGIN <word> starts a transaction, not a block
_TRANSACTION_WORDS = {"", "TRANSACTION", "WORK", "DEFERRED", "IMMEDIATE", "EXCLUSIVE"}


def _word_at(sql: str, start: int) -> tuple[str, int, int]:
    """Next identifier-like word at or after ``start``: (word, begin, end)."""
    n = len(sql)
    i = start
    while i < n and sql[i].isspace():
        i += 1
    j = i
    while j < n and (sql[j].isalnum() or sql[j] in "_$#"):
        j += 1
    return sql[i:j], i, j


def _skip_quoted(sql: str, start: int) -> int:
    """Index just past the literal opened at ``start`` (doubled quotes escape)."""
    quote = sql[start]
    n = len(sql)
    i = start + 1
    while i < n:
        if sql[i] == quote:
            if i + 1 < n and sql[i + 1] == quote:
                i += 2
                continue
            return i + 1
        i += 1
    return n


def split_statements(sql: str) -> list[str]:
    """Split ``sql`` into statements without trailing semicolons.

    Empty statements and comment-only fragments are dropped.
    """
    statements: list[str] = []
    buf: list[str] = []
    block_depth = 0
    case_depth = 0

    def flush() -> None:
        text = "".join(buf).strip()
        if text:
            statements.append(text)
        buf.clear()

    i, n = 0, len(sql)
    while i < n:
        ch = sql[i]
        nxt = sql[i + 1] if i + 1 < n else ""

        if ch == "-" and nxt == "-":
            end = sql.find("\n", i)
            i = n if end == -1 else end
            continue

        if ch == "/" and nxt == "*":
            end = sql.find("*/", i + 2)
            i = n if end == -1 else end + 2
            buf.append(" ")
            continue

        if ch in ("'", '"'):
            end = _skip_quoted(sql, i)
            buf.append(sql[i:end])
            i = end
            continue

        if ch.isalpha() or ch == "_":
            word, _, end = _word_at(sql, i)
            upper = word.upper()
            buf.append(word)
            i = end

            if upper == "BEGIN":
                following, _, _ = _word_at(sql, i)
                if following.upper() not in _TRANSACTION_WORDS:
                    block_depth += 1
            elif upper == "CASE":
                case_depth += 1
            elif upper == "END":
                following, _, follow_end = _word_at(sql, i)
                qualifier = following.upper()
                if qualifier in _END_QUALIFIERS:
                    buf.append(sql[i:follow_end])
                    i = follow_end
                    if qualifier == "CASE" and case_depth:
                        case_depth -= 1
                    upper = qualifier
                elif case_depth:
                    case_depth -= 1
                elif block_depth:
                    block_depth -= 1
            continue

        if ch == ";" and block_depth == 0:
            flush()
            i += 1
            continue

        buf.append(ch)
        i += 1

    flush()
    return statements


__all__ = ["split_statements"]
