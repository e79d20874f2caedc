"""Tests for configuration loading."""

import pytest

from teampulse.config import (
    ConfigLoader,
    ConfigurationError,
    DuplicateAliasError,
    InvalidValueError,
    WeekStart,
    safe_config_name,
)


class TestProjectConfig:
    def test_camel_case_dashboard_format(self, tmp_path):
        path = tmp_path / "acme_api_config.json"
        path.write_text(
            '{"groupedAuthors": [{"primaryName": " Alice ", "aliases": ["alice", "a.smith", ""]}],'
            ' "excludedUsers": ["dependabot[bot]", "  "]}'
        )
        config = ConfigLoader.load_project_config(path)

        assert config.grouped_authors[0].primary_name == "Alice"
        assert config.grouped_authors[0].aliases == ["alice", "a.smith"]
        assert config.excluded_users == ["dependabot[bot]"]
        assert config.alias_map() == {"alice": "Alice", "a.smith": "Alice"}

    def test_snake_case_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "grouped_authors:\n"
            "  - primary_name: Bob\n"
            "    aliases: [bob, robert]\n"
            "excluded_users: [ci]\n"
        )
        config = ConfigLoader.load_project_config(path)

        assert config.find_group("robert").primary_name == "Bob"
        assert config.excluded_users == ["ci"]

    def test_missing_file_gives_empty_config(self, tmp_path):
        config = ConfigLoader.load_project_config(tmp_path / "absent.yaml")

        assert config.grouped_authors == []
        assert config.excluded_users == []

    def test_group_without_primary_name_is_skipped(self):
        config = ConfigLoader.parse_project_config({"groupedAuthors": [{"aliases": ["x"]}]})
        assert config.grouped_authors == []

    def test_alias_in_two_groups(self):
        data = {
            "groupedAuthors": [
                {"primaryName": "Alice", "aliases": ["shared"]},
                {"primaryName": "Bob", "aliases": ["shared"]},
            ]
        }
        with pytest.raises(DuplicateAliasError) as exc_info:
            ConfigLoader.parse_project_config(data)
        assert exc_info.value.alias == "shared"

    def test_invalid_yaml_reports_position(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("groupedAuthors: [\n  - {primaryName: a\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigLoader.load_project_config(path)

    def test_lists_required(self):
        with pytest.raises(ConfigurationError):
            ConfigLoader.parse_project_config({"excludedUsers": "bot"})


class TestRepositoryLookup:
    def test_safe_config_name(self):
        assert safe_config_name("acme/web-app") == "acme_web-app"
        assert safe_config_name("team.repo v2") == "team_repo_v2"

    def test_load_for_repository(self, tmp_path):
        (tmp_path / "acme_web-app_config.yaml").write_text("excludedUsers: [bot]\n")

        config = ConfigLoader.load_for_repository(tmp_path, "acme/web-app")
        assert config.excluded_users == ["bot"]

    def test_unknown_repository(self, tmp_path):
        assert ConfigLoader.find_project_config(tmp_path, "nope") is None
        assert ConfigLoader.load_for_repository(tmp_path, "nope").excluded_users == []


class TestGlobalConfig:
    def test_default_is_sunday(self, tmp_path):
        assert ConfigLoader.load_global_config(None).first_day_of_week is WeekStart.SUNDAY
        missing = ConfigLoader.load_global_config(tmp_path / "global.yaml")
        assert missing.first_day_of_week is WeekStart.SUNDAY

    def test_monday(self, tmp_path):
        path = tmp_path / "global.yaml"
        path.write_text("firstDayOfWeek: Monday\n")

        assert ConfigLoader.load_global_config(path).first_day_of_week is WeekStart.MONDAY

    def test_invalid_day(self):
        with pytest.raises(InvalidValueError) as exc_info:
            ConfigLoader.parse_global_config({"firstDayOfWeek": "friday"})
        assert exc_info.value.field_name == "firstDayOfWeek"
