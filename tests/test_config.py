"""Tests for pkg.lintreview.config."""

from pathlib import Path

import pytest

from pkg.lintreview.config import ConfigError, ReviewConfig, load_review_config


def write_config(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "review.yml"
    p.write_text(content)
    return p


class TestReviewConfig:
    def test_defaults_when_fields_missing(self):
        cfg = ReviewConfig.from_dict({})
        assert cfg.marker == ".go"
        assert cfg.treat_empty_as_error is None
        assert cfg.message == "lint-review"
        assert cfg.summary(3) == "lint-review reported 3 problems"

    def test_none_is_defaults(self):
        assert ReviewConfig.from_dict(None) == ReviewConfig()

    def test_camel_and_snake_case_keys(self):
        camel = ReviewConfig.from_dict({"marker": ".py", "treatEmptyAsError": True})
        snake = ReviewConfig.from_dict({"extension_marker": ".py", "treat_empty_as_error": True})
        assert camel == snake
        assert camel.marker == ".py"

    def test_empty_policy_falls_back_to_publisher_default(self):
        assert ReviewConfig().empty_is_error(True) is True
        assert ReviewConfig().empty_is_error(False) is False
        assert ReviewConfig(treat_empty_as_error=False).empty_is_error(True) is False

    def test_rejects_non_mapping(self):
        with pytest.raises(ConfigError, match="must be a mapping"):
            ReviewConfig.from_dict(["marker"])

    def test_rejects_empty_marker(self):
        with pytest.raises(ConfigError, match="marker cannot be empty"):
            ReviewConfig.from_dict({"marker": "  "})

    def test_rejects_non_bool_policy(self):
        with pytest.raises(ConfigError, match="treatEmptyAsError must be a boolean"):
            ReviewConfig.from_dict({"treatEmptyAsError": "yes"})

    def test_rejects_unknown_template_field(self):
        with pytest.raises(ConfigError, match="summaryTemplate"):
            ReviewConfig.from_dict({"summaryTemplate": "{total} problems"})

    def test_with_overrides_ignores_none(self):
        cfg = ReviewConfig(marker=".py", message="lint")
        assert cfg.with_overrides(marker=None) == cfg
        assert cfg.with_overrides(marker=".rs").marker == ".rs"

    def test_with_overrides_validates(self):
        with pytest.raises(ConfigError):
            ReviewConfig().with_overrides(marker="")


class TestLoadReviewConfig:
    def test_full_config(self, tmp_path):
        path = write_config(tmp_path, """
marker: .py
treatEmptyAsError: false
message: ruff
summaryTemplate: "ruff found {count} issues"
""")
        cfg = load_review_config(path)
        assert cfg == ReviewConfig(
            marker=".py",
            treat_empty_as_error=False,
            message="ruff",
            summary_template="ruff found {count} issues",
        )
        assert cfg.summary(2) == "ruff found 2 issues"

    def test_none_path_gives_defaults(self):
        assert load_review_config(None) == ReviewConfig()

    def test_empty_file_gives_defaults(self, tmp_path):
        assert load_review_config(write_config(tmp_path, "")) == ReviewConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="missing config file"):
            load_review_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_review_config(write_config(tmp_path, "marker: [unclosed\n"))
