"""Tests for the command line and the directory scanner."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from eloquent_generics.config import RunConfig
from eloquent_generics.inputs.directory_scanning import iter_source_files
from eloquent_generics.main import main

USER_MODEL = """<?php

namespace App\\Models;

use Illuminate\\Database\\Eloquent\\Model;
use Illuminate\\Database\\Eloquent\\Relations\\HasMany;

class User extends Model
{
    public function posts(): HasMany
    {
        return $this->hasMany(Post::class);
    }
}
"""


@pytest.fixture
def project(tmp_path):
    models = tmp_path / "app" / "Models"
    models.mkdir(parents=True)
    (models / "User.php").write_text(USER_MODEL, encoding="utf-8")
    (models / "README.md").write_text("not php", encoding="utf-8")

    vendor = tmp_path / "vendor" / "laravel"
    vendor.mkdir(parents=True)
    (vendor / "Vendored.php").write_text(USER_MODEL, encoding="utf-8")
    return tmp_path


class TestScanning:
    def test_only_php_files_outside_excluded_dirs(self, project):
        files = list(iter_source_files(RunConfig([str(project)])))
        assert [p.replace("\\", "/").split("/")[-1] for p in files] == ["User.php"]

    def test_extra_excludes(self, project):
        config = RunConfig([str(project)]).with_excludes(["Models"])
        assert list(iter_source_files(config)) == []

    def test_file_path_is_taken_as_is(self, project):
        path = str(project / "vendor" / "laravel" / "Vendored.php")
        assert list(iter_source_files(RunConfig([path]))) == [path]


class TestCli:
    def test_process_rewrites_files(self, project):
        result = CliRunner().invoke(main, ["process", str(project)])
        assert result.exit_code == 0, result.output
        assert "Updated 1 method(s) in 1 of 1 file(s)." in result.output
        assert "User::posts()  @return HasMany<Post>  @ 10:5" in result.output

        text = (project / "app" / "Models" / "User.php").read_text(encoding="utf-8")
        assert "     * @return HasMany<Post>\n" in text
        assert (project / "vendor" / "laravel" / "Vendored.php").read_text(encoding="utf-8") == USER_MODEL

    def test_dry_run_prints_a_diff_and_writes_nothing(self, project):
        result = CliRunner().invoke(main, ["process", "--dry-run", str(project)])
        assert result.exit_code == 0, result.output
        assert "+     * @return HasMany<Post>" in result.output
        assert "Would update 1 method(s)" in result.output
        assert (project / "app" / "Models" / "User.php").read_text(encoding="utf-8") == USER_MODEL

    def test_json_report(self, project):
        result = CliRunner().invoke(main, ["process", "--dry-run", "--json", str(project)])
        assert result.exit_code == 0, result.output
        report = json.loads(result.output)
        (entry,) = report["files"]
        assert entry["changed"] is True
        assert entry["changes"] == [
            {"class": "User", "method": "posts", "annotation": "HasMany<Post>", "line": 10, "col": 5},
        ]

    def test_second_run_changes_nothing(self, project):
        runner = CliRunner()
        runner.invoke(main, ["process", str(project)])
        before = (project / "app" / "Models" / "User.php").read_text(encoding="utf-8")
        result = runner.invoke(main, ["process", str(project)])
        assert "Updated 0 method(s) in 0 of 1 file(s)." in result.output
        assert (project / "app" / "Models" / "User.php").read_text(encoding="utf-8") == before

    def test_exclude_from_environment(self, project):
        result = CliRunner().invoke(
            main, ["process", "--dry-run", str(project)],
            env={"ELOQUENT_GENERICS_EXCLUDE": "Models"},
        )
        assert result.exit_code == 0, result.output
        assert "in 0 of 0 file(s)" in result.output

    def test_describe(self):
        result = CliRunner().invoke(main, ["describe"])
        assert result.exit_code == 0
        assert "Add generic type to Laravel Eloquent relationships" in result.output
        assert "@return BelongsTo<Company, self>" in result.output
