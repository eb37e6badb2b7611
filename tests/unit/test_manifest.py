"""Tests for prismafill.toml loading and environment overrides."""

from pathlib import Path

import pytest

from prismafill.core.errors import ConfigError
from prismafill.core.manifest import (
    DATABASE_FROM_URI,
    ProjectManifest,
    apply_env_overrides,
    database_from_uri,
    load_manifest,
    resolve_database_name,
    resolve_manifest,
)


class TestLoadManifest:
    def test_full_manifest(self, tmp_path: Path) -> None:
        path = tmp_path / "prismafill.toml"
        path.write_text(
            '[schema]\npath = "db/prisma"\n\n'
            '[output]\npath = "out"\nformat = "yaml"\n\n'
            '[mongo]\nconnection = "mongodb://db:27017/shop"\ndatabase = "shop"\nbatch_size = 250\n'
        )
        manifest = load_manifest(path)
        assert manifest.schema.path == "db/prisma"
        assert manifest.output.path == "out"
        assert manifest.output.format == "yaml"
        assert manifest.mongo.connection == "mongodb://db:27017/shop"
        assert manifest.mongo.database == "shop"
        assert manifest.mongo.batch_size == 250

    def test_missing_sections_use_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "prismafill.toml"
        path.write_text('[output]\npath = "generated"\n')
        manifest = load_manifest(path)
        assert manifest.schema.path == "prisma"
        assert manifest.output.path == "generated"
        assert manifest.output.format == "json"
        assert manifest.mongo.connection == "mongodb://localhost:27017"
        assert manifest.mongo.database == DATABASE_FROM_URI
        assert manifest.mongo.batch_size is None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "prismafill.toml"
        path.write_text("[schema\npath = ")
        with pytest.raises(ConfigError):
            load_manifest(path)

    def test_unsupported_format(self, tmp_path: Path) -> None:
        path = tmp_path / "prismafill.toml"
        path.write_text('[output]\nformat = "xml"\n')
        with pytest.raises(ConfigError, match="xml"):
            load_manifest(path)

    @pytest.mark.parametrize("value", ['"10"', "0", "-5", "true", "2.5"])
    def test_invalid_batch_size(self, tmp_path: Path, value: str) -> None:
        path = tmp_path / "prismafill.toml"
        path.write_text(f"[mongo]\nbatch_size = {value}\n")
        with pytest.raises(ConfigError, match="batch_size") as exc_info:
            load_manifest(path)
        assert exc_info.value.context.path == path


class TestEnvOverrides:
    def test_env_wins_over_manifest(self) -> None:
        manifest = apply_env_overrides(
            ProjectManifest(),
            {
                "PRISMAFILL_SCHEMA": "schema",
                "PRISMAFILL_OUTPUT": "json",
                "MONGO_URL": "mongodb://remote/app",
                "MONGO_DATABASE": "app",
            },
        )
        assert manifest.schema.path == "schema"
        assert manifest.output.path == "json"
        assert manifest.mongo.connection == "mongodb://remote/app"
        assert manifest.mongo.database == "app"

    def test_empty_values_ignored(self) -> None:
        manifest = apply_env_overrides(ProjectManifest(), {"MONGO_URL": ""})
        assert manifest.mongo.connection == "mongodb://localhost:27017"

    def test_resolve_without_manifest_file(self, tmp_path: Path) -> None:
        manifest = resolve_manifest(tmp_path, environ={})
        assert manifest == ProjectManifest()

    def test_resolve_reads_manifest_file(self, tmp_path: Path) -> None:
        (tmp_path / "prismafill.toml").write_text('[schema]\npath = "models"\n')
        manifest = resolve_manifest(tmp_path, environ={"MONGO_DATABASE": "dev"})
        assert manifest.schema.path == "models"
        assert manifest.mongo.database == "dev"


class TestDatabaseName:
    @pytest.mark.parametrize(
        ("uri", "expected"),
        [
            ("mongodb://localhost:27017/shop", "shop"),
            ("mongodb://localhost:27017/shop?retryWrites=true", "shop"),
            ("mongodb+srv://user:pw@cluster.example.net/app?w=majority", "app"),
            ("mongodb://localhost:27017", None),
            ("mongodb://localhost:27017/", None),
            ("mongodb://localhost:27017/?authSource=admin", None),
        ],
    )
    def test_database_from_uri(self, uri: str, expected: str | None) -> None:
        assert database_from_uri(uri) == expected

    def test_explicit_name_wins(self) -> None:
        assert resolve_database_name("mongodb://localhost/other", "shop") == "shop"

    def test_none_reads_uri(self) -> None:
        assert resolve_database_name("mongodb://localhost/other", "none") == "other"
        assert resolve_database_name("mongodb://localhost/other", None) == "other"

    def test_unresolvable(self) -> None:
        with pytest.raises(ConfigError, match="No database name"):
            resolve_database_name("mongodb://localhost:27017", "none")
