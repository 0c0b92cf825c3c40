"""Tests for Settings: driver selection, URL assembly and validation."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from pokemon_api.config import Settings


class TestSqlalchemyUrl:

    def test_mysql_url_with_default_port(self):
        settings = Settings(
            db_driver="mysql", db_host="db", db_user="ash", db_password="pika", db_name="dex"
        )

        url = settings.sqlalchemy_url

        assert url.drivername == "mysql+aiomysql"
        assert url.port == 3306
        assert url.username == "ash"
        assert url.password == "pika"
        assert url.database == "dex"

    def test_postgresql_url_with_explicit_port(self):
        settings = Settings(db_driver="POSTGRESQL", db_port=6543)

        assert settings.db_driver == "postgresql"
        assert settings.sqlalchemy_url.drivername == "postgresql+asyncpg"
        assert settings.sqlalchemy_url.port == 6543

    def test_empty_password_omitted(self):
        assert Settings(db_driver="mysql", db_password="").sqlalchemy_url.password is None

    def test_special_characters_in_password(self):
        url = Settings(db_driver="mysql", db_password="p@ss:w/rd").sqlalchemy_url

        assert url.password == "p@ss:w/rd"

    def test_sqlite_uses_db_name_as_path(self, tmp_path):
        path = str(tmp_path / "dex.db")
        settings = Settings(db_driver="sqlite", db_name=path)

        assert settings.sqlalchemy_url.database == path
        assert settings.sqlalchemy_backend == "sqlite"
        assert settings.connect_args == {}

    def test_database_url_overrides_parts(self):
        settings = Settings(
            db_driver="memory",
            database_url="postgresql+asyncpg://u:p@remote:5432/dex",
        )

        assert settings.uses_sql_store is True
        assert settings.sqlalchemy_url == "postgresql+asyncpg://u:p@remote:5432/dex"
        assert settings.sqlalchemy_backend == "postgresql"

    def test_memory_has_no_url(self):
        settings = Settings(db_driver="memory")

        assert settings.uses_sql_store is False
        with pytest.raises(ValueError):
            settings.sqlalchemy_url


class TestConnectArgs:

    def test_mysql_connect_timeout(self):
        assert Settings(db_driver="mysql", db_connect_timeout=3).connect_args == {"connect_timeout": 3}

    def test_postgresql_timeout(self):
        assert Settings(db_driver="postgresql", db_connect_timeout=4).connect_args == {"timeout": 4}


class TestValidation:

    def test_defaults(self, monkeypatch):
        for name in ("DB_DRIVER", "LOG_LEVEL", "PORT", "CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.db_driver == "mysql"
        assert settings.db_name == "pokemondb"
        assert settings.port == 3002
        assert settings.cors_origins_list == ["*"]

    def test_environment_variables_read(self, monkeypatch):
        monkeypatch.setenv("DB_DRIVER", "postgresql")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

        settings = Settings(_env_file=None)

        assert settings.db_driver == "postgresql"
        assert settings.port == 8080
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_invalid_driver_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(db_driver="oracle")

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")
