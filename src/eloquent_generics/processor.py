import logging
from dataclasses import dataclass, field
from typing import Optional

from eloquent_generics.indexer import PhpIndexer
from eloquent_generics.models.ast_models import MethodDeclaration
from eloquent_generics.phpdoc import add_return_tag, render_new_doc_comment, replace_return_type
from eloquent_generics.rules.eloquent_generic_rule import EloquentGenericRule, Outcome

logger = logging.getLogger(__name__)


@dataclass
class MethodChange:
    """One @return tag written or rewritten."""
    class_name: Optional[str]
    method: str
    annotation: str  # e.g. "BelongsTo<Company, self>"
    line: int
    col: int


@dataclass
class FileResult:
    path: Optional[str]
    original: str
    updated: str
    changes: list[MethodChange] = field(default_factory=list)
    skipped: list[MethodChange] = field(default_factory=list)  # relation methods with an unrelated @return

    @property
    def changed(self) -> bool:
        return self.updated != self.original


def detect_newline(source: str) -> str:
    return "\r\n" if "\r\n" in source else "\n"


def refactor_source(indexer: PhpIndexer, rule: EloquentGenericRule, source: str,
                    path: Optional[str] = None) -> FileResult:
    """
    Runs the rule over every method declaration of a PHP source text and
    writes the resulting doc comments back into the text.
    """
    newline = detect_newline(source)
    source_bytes = source.encode("utf-8")
    result = FileResult(path=path, original=source, updated=source)

    edits: list[tuple[int, int, str]] = []
    for method in indexer.index_source(source, path):
        outcome = rule.refactor(method).outcome
        if outcome is Outcome.UNRECOGNIZED:
            result.skipped.append(_change(method, method.return_tag.raw_type))
            continue
        if outcome is not Outcome.CHANGED:
            continue

        edits.append(_edit_for(method, newline))
        result.changes.append(_change(method, method.return_tag.raw_type))
        logger.debug("%s: %s() -> @return %s", path or "<source>", method.name, method.return_tag.raw_type)

    if edits:
        result.updated = apply_edits(source_bytes, edits).decode("utf-8")
    return result


def _change(method: MethodDeclaration, annotation: str) -> MethodChange:
    return MethodChange(method.class_name, method.name, annotation, method.line + 1, method.col + 1)


def _edit_for(method: MethodDeclaration, newline: str) -> tuple[int, int, str]:
    """(start_byte, end_byte, replacement) for a method whose return tag changed."""
    tag = method.return_tag
    doc = method.doc_comment

    if doc is None:
        text = render_new_doc_comment(tag.annotation, method.indent, newline)
        return (method.start_byte, method.start_byte, text + newline + method.indent)

    if tag.span is None:
        text = add_return_tag(doc.text, tag.annotation, method.indent, newline)
    else:
        text = replace_return_type(doc.text, tag)
    return (doc.start_byte, doc.end_byte, text)


def apply_edits(source_bytes: bytes, edits: list[tuple[int, int, str]]) -> bytes:
    """Applies non-overlapping byte-range edits, back to front so offsets stay valid."""
    out = source_bytes
    for start, end, text in sorted(edits, key=lambda e: e[0], reverse=True):
        out = out[:start] + text.encode("utf-8") + out[end:]
    return out
