#!/usr/bin/env python3
"""
Eloquent relation generics
--------------------------
Adds generic types to the @return tag of Laravel Eloquent relationship methods:

    public function company(): BelongsTo
    {
        return $this->belongsTo(Company::class);
    }

gets

    /**
     * @return BelongsTo<Company, self>
     */

USAGE EXAMPLES
--------------
# 1) Show what would change, without touching files:
eloquent-generics process app/Models --dry-run

# 2) Rewrite files in place, skipping an extra directory:
eloquent-generics process app --exclude Legacy

# 3) Print the rule description and its code sample:
eloquent-generics describe

DEPENDENCIES
------------
    pip install tree-sitter tree-sitter-php click
"""

import logging

import click

from eloquent_generics.config import DEFAULT_EXCLUDES, RunConfig
from eloquent_generics.indexer import PhpIndexer
from eloquent_generics.inputs.directory_scanning import process_paths
from eloquent_generics.outputs.output import print_summary, to_json, unified_diff
from eloquent_generics.rules.eloquent_generic_rule import EloquentGenericRule


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.version_option(version="0.1.0", prog_name="eloquent-generics")
def main():
    """eloquent-generics: add generic types to Eloquent relationship docblocks."""
    pass


@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--dry-run", is_flag=True, default=False, help="Print diffs instead of writing files.")
@click.option(
    "--exclude",
    multiple=True,
    envvar="ELOQUENT_GENERICS_EXCLUDE",
    help=f"Directory name to skip, repeatable (always skipped: {', '.join(DEFAULT_EXCLUDES)}).",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print a JSON report instead of a summary.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
def process(paths: tuple[str, ...], dry_run: bool, exclude: tuple[str, ...], as_json: bool, verbose: bool):
    """Add or repair relation generics in the PHP files under PATHS."""
    _setup_logging(verbose)
    config = RunConfig(list(paths), dry_run=dry_run).with_excludes(exclude)

    # One parser for the whole run
    indexer = PhpIndexer()
    rule = EloquentGenericRule()
    results = list(process_paths(indexer, rule, config))

    if dry_run and not as_json:
        for result in results:
            if result.changed:
                click.echo(unified_diff(result), nl=False)

    if as_json:
        click.echo(to_json(results))
    else:
        print_summary(results, dry_run=dry_run)


@main.command()
def describe():
    """Show what the rule does, with a before/after sample."""
    definition = EloquentGenericRule().definition()
    click.echo(definition.description)
    for sample in definition.samples:
        click.echo("\n--- before")
        click.echo(sample.before, nl=False)
        click.echo("\n+++ after")
        click.echo(sample.after, nl=False)


if __name__ == "__main__":
    main()
