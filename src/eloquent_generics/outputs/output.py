import difflib
import json

import click

from eloquent_generics.processor import FileResult, MethodChange


# --- Pretty printing, diffs & JSON export ------------------------------------

def _label(change: MethodChange) -> str:
    owner = f"{change.class_name}::" if change.class_name else ""
    return f"{owner}{change.method}()"


def unified_diff(result: FileResult) -> str:
    path = result.path or "<source>"
    return "".join(difflib.unified_diff(
        result.original.splitlines(keepends=True),
        result.updated.splitlines(keepends=True),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
    ))


def print_summary(results: list[FileResult], dry_run: bool = False):
    """
    Human-friendly printout of what was (or, on a dry run, would be) changed.
    """
    changed = [r for r in results if r.changed]
    verb = "Would update" if dry_run else "Updated"

    for result in changed:
        click.echo(f"\n[{result.path}]")
        for change in result.changes:
            click.echo(f"  - {_label(change)}  @return {change.annotation}  @ {change.line}:{change.col}")

    skipped = [(r, c) for r in results for c in r.skipped]
    if skipped:
        click.echo("\n=== LEFT AS WRITTEN ===")
        for result, change in skipped:
            click.echo(f"  - {result.path}: {_label(change)}  @return {change.annotation}")

    total = sum(len(r.changes) for r in changed)
    click.echo(f"\n{verb} {total} method(s) in {len(changed)} of {len(results)} file(s).")


def to_json(results: list[FileResult]) -> str:
    """
    Serializes the run to JSON, one entry per processed file.
    """
    out = {
        "files": [
            {
                "path": r.path,
                "changed": r.changed,
                "changes": [
                    {
                        "class": c.class_name,
                        "method": c.method,
                        "annotation": c.annotation,
                        "line": c.line,
                        "col": c.col,
                    } for c in r.changes
                ],
                "skipped": [
                    {
                        "class": c.class_name,
                        "method": c.method,
                        "annotation": c.annotation,
                        "line": c.line,
                        "col": c.col,
                    } for c in r.skipped
                ],
            }
            for r in results
        ]
    }
    return json.dumps(out, indent=2)
