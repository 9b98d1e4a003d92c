# --- Run configuration -------------------------------------------------------
from dataclasses import dataclass

DEFAULT_EXCLUDES = ("vendor", "node_modules", ".git", "storage")

PHP_EXTENSION = ".php"


@dataclass
class RunConfig:
    """What to process and how; built by the CLI from its options."""
    paths: list[str]
    dry_run: bool = False
    exclude: frozenset[str] = frozenset(DEFAULT_EXCLUDES)  # directory names skipped while scanning
    extension: str = PHP_EXTENSION

    def with_excludes(self, names) -> "RunConfig":
        return RunConfig(self.paths, self.dry_run, self.exclude | frozenset(names), self.extension)
