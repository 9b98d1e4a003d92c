"""
PHPDoc reading and printing
---------------------------
Just enough of a PHPDoc parser to find the `@return` tag of a doc comment and
its type expression, and to write a changed type back without disturbing the
rest of the comment.

Type expressions are understood in two shapes only:
    Name                 e.g. BelongsTo, \\Illuminate\\...\\HasMany
    Name<Arg, Arg>       e.g. BelongsTo<Company, self>
Anything else (unions, nullables, array shapes) is kept as raw text.
"""

import re
from typing import Optional

from eloquent_generics.models.ast_models import GenericAnnotation, ReturnTag

RETURN_TAG_RE = re.compile(r"@return(?![\w-])[ \t]*")
TYPE_RE = re.compile(r"(\\?[A-Za-z_][A-Za-z0-9_\\]*)(?:<(.*)>)?")

OPENING = "/**"
CLOSING = "*/"


def is_doc_comment(text: str) -> bool:
    return text.startswith(OPENING) and not text.startswith("/**/")


def parse_return_tag(text: str) -> Optional[ReturnTag]:
    """
    Finds the first `@return` tag in a doc comment.
    The returned tag remembers where its type sits so it can be replaced in place.
    """
    match = RETURN_TAG_RE.search(text)
    if match is None:
        return None
    start = match.end()
    end = _scan_type(text, start)
    raw = text[start:end]
    return ReturnTag(parse_type_expression(raw), raw, (start, end))


def _scan_type(text: str, pos: int) -> int:
    # A type ends at the first whitespace outside brackets, or at the comment end.
    depth = 0
    i = pos
    while i < len(text):
        ch = text[i]
        if ch in "\r\n":
            break
        if depth == 0 and (ch.isspace() or text.startswith(CLOSING, i)):
            break
        if ch in "<({[":
            depth += 1
        elif ch in ">)}]":
            depth -= 1
        i += 1
    return i


def parse_type_expression(raw: str) -> Optional[GenericAnnotation]:
    match = TYPE_RE.fullmatch(raw)
    if match is None:
        return None
    base, inner = match.group(1), match.group(2)
    if inner is None:
        return GenericAnnotation(base)
    arguments = _split_arguments(inner)
    if arguments is None:
        return None
    return GenericAnnotation(base, arguments)


def _split_arguments(inner: str) -> Optional[tuple[str, ...]]:
    """Splits `A, B<C, D>` on top-level commas; None if brackets don't balance."""
    parts = []
    depth = 0
    current = []
    for ch in inner:
        if ch in "<({[":
            depth += 1
        elif ch in ">)}]":
            depth -= 1
            if depth < 0:
                return None
        if ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    if depth != 0:
        return None
    parts.append("".join(current).strip())
    if not all(parts):
        return None
    return tuple(parts)


# --- Printing ----------------------------------------------------------------

def doc_lines(text: str) -> list[str]:
    """The content lines of a doc comment, without the `/**`, `*/` and leading `*`."""
    body = text[len(OPENING):]
    if body.endswith(CLOSING):
        body = body[:-len(CLOSING)]

    lines = []
    for line in body.splitlines():
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        lines.append(line.rstrip())

    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def render_doc_comment(lines: list[str], indent: str, newline: str = "\n") -> str:
    """Multi-line doc comment; the first line is not indented (it is written where the old one started)."""
    out = [OPENING]
    for line in lines:
        out.append(f"{indent} * {line}" if line else f"{indent} *")
    out.append(f"{indent} {CLOSING}")
    return newline.join(out)


def render_new_doc_comment(annotation: GenericAnnotation, indent: str, newline: str = "\n") -> str:
    return render_doc_comment([f"@return {annotation.render()}"], indent, newline)


def add_return_tag(text: str, annotation: GenericAnnotation, indent: str, newline: str = "\n") -> str:
    lines = doc_lines(text)
    lines.append(f"@return {annotation.render()}")
    return render_doc_comment(lines, indent, newline)


def replace_return_type(text: str, tag: ReturnTag) -> str:
    start, end = tag.span
    return text[:start] + tag.raw_type + text[end:]
