"""Tests for author identity normalization."""

from teampulse.config.schema import AuthorGroup, ProjectConfig
from teampulse.core.normalizer import AuthorNormalizer, normalize_author


class TestAuthorNormalizer:
    """Alias grouping and exclusion rules."""

    def test_unknown_identity_passes_through(self):
        normalizer = AuthorNormalizer(ProjectConfig())
        assert normalizer.normalize("carol") == "carol"

    def test_alias_maps_to_primary_name(self):
        config = ProjectConfig(
            grouped_authors=[AuthorGroup(primary_name="Alice", aliases=["alice", "asmith"])]
        )
        normalizer = AuthorNormalizer(config)

        assert normalizer.normalize("alice") == "Alice"
        assert normalizer.normalize("asmith") == "Alice"

    def test_excluded_identity_is_dropped(self):
        config = ProjectConfig(excluded_users=["dependabot[bot]"])
        assert AuthorNormalizer(config).normalize("dependabot[bot]") is None

    def test_exclusion_dominates_grouping(self):
        """An identity both excluded and aliased is always dropped."""
        config = ProjectConfig(
            grouped_authors=[AuthorGroup(primary_name="Bot", aliases=["ci-bot"])],
            excluded_users=["ci-bot"],
        )
        normalizer = AuthorNormalizer(config)

        assert normalizer.normalize("ci-bot") is None
        assert normalizer.is_excluded("ci-bot")

    def test_matching_is_case_sensitive(self):
        config = ProjectConfig(
            grouped_authors=[AuthorGroup(primary_name="Alice", aliases=["alice"])]
        )
        assert AuthorNormalizer(config).normalize("ALICE") == "ALICE"

    def test_missing_config_defaults_to_empty(self):
        assert AuthorNormalizer(None).normalize("bob") == "bob"

    def test_module_level_helper(self):
        config = ProjectConfig(
            grouped_authors=[AuthorGroup(primary_name="Bob", aliases=["bobby"])]
        )
        assert normalize_author("bobby", config) == "Bob"
