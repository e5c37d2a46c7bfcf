"""JSON with comments: ``//`` and ``/* */`` comments plus trailing commas.

Storylet files are meant to be edited by hand, so the loader accepts this
relaxed superset and reduces it to plain JSON before handing it to ``json``.
Comment text is replaced by spaces (newlines are kept) so that line and column
numbers in decode errors still point at the original text.
"""
from __future__ import annotations

import json
from typing import Any


def strip_comments(text: str) -> str:
    """Blank out comments outside string literals."""
    out: list[str] = []
    i = 0
    length = len(text)
    in_string = False
    while i < length:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue
        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
            continue
        if ch == "/" and i + 1 < length and text[i + 1] == "/":
            end = text.find("\n", i)
            if end == -1:
                end = length
            out.append(" " * (end - i))
            i = end
            continue
        if ch == "/" and i + 1 < length and text[i + 1] == "*":
            end = text.find("*/", i + 2)
            if end == -1:
                raise json.JSONDecodeError("Unterminated block comment", text, i)
            out.extend("\n" if c == "\n" else " " for c in text[i : end + 2])
            i = end + 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def strip_trailing_commas(text: str) -> str:
    """Drop commas that directly precede a closing bracket or brace.

    Expects comment-free text.
    """
    out: list[str] = []
    i = 0
    length = len(text)
    in_string = False
    while i < length:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue
        if ch == '"':
            in_string = True
        elif ch == ",":
            j = i + 1
            while j < length and text[j].isspace():
                j += 1
            previous = next((c for c in reversed(out) if not c.isspace()), "")
            # A comma with no value before it is left for json to reject.
            if j < length and text[j] in "]}" and previous not in ("", "[", "{", ","):
                out.append(" ")
                i += 1
                continue
        out.append(ch)
        i += 1
    return "".join(out)


def loads(text: str) -> Any:
    """Parse JSONC text. Raises json.JSONDecodeError on malformed input."""
    return json.loads(strip_trailing_commas(strip_comments(text)))


def dumps(payload: Any) -> str:
    """Serialize as indented plain JSON (a valid JSONC document)."""
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
