"""
Tests for clean and check.

Run with: pytest tests/test_maintenance.py -v
"""
import pytest

from conftest import LESSON

from mdtranslate.maintenance import check_translations, clean_translations, format_report
from mdtranslate.utils.exceptions import ConfigurationError


class TestClean:
    """Tests for clean_translations."""

    def test_removes_files_and_empty_dirs(self, docs_tree):
        (docs_tree / "km/index.md").write_text("# old\n", encoding="utf-8")
        assert clean_translations(docs_tree, ["km"]) == 2
        assert not (docs_tree / "km").exists()
        assert (docs_tree / "css/colors.md").is_file()

    def test_keeps_other_files(self, docs_tree):
        """Only Markdown is deleted; folders with other files stay."""
        (docs_tree / "km/css/image.png").write_bytes(b"png")
        clean_translations(docs_tree, ["km"])
        assert (docs_tree / "km/css/image.png").is_file()
        assert not (docs_tree / "km/css/colors.md").exists()

    def test_missing_language_folder(self, docs_tree):
        assert clean_translations(docs_tree, ["ja"]) == 0

    def test_unknown_language(self, docs_tree):
        with pytest.raises(ConfigurationError):
            clean_translations(docs_tree, ["xx"])


class TestCheck:
    """Tests for check_translations."""

    def write(self, docs_tree, rel, content):
        path = docs_tree / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def test_detects_each_issue(self, docs_tree):
        """Missing, empty, placeholder and code-block problems are reported."""
        self.write(docs_tree, "km/index.md", "\n")
        self.write(docs_tree, "km/css/basics/01-intro.md", "# Intro __MDKEEP_3__\n")
        self.write(docs_tree, "km/js/intro.md", "# JS\n\n```js\nconsole.log('changed')\n```\n")

        report = check_translations(docs_tree, ["km"])
        found = {issue.path.relative_to(docs_tree).as_posix(): issue.kind for issue in report.issues["km"]}

        assert found == {
            "km/index.md": "empty",
            "km/css/colors.md": "code_blocks",
            "km/css/basics/01-intro.md": "placeholder",
            "km/js/intro.md": "code_blocks",
        }
        assert report.checked["km"] == 4
        assert not report.ok

    def test_valid_translation_passes(self, docs_tree):
        self.write(docs_tree, "km/css/colors.md", LESSON.replace("Done.", "Fini."))
        report = check_translations(docs_tree, ["km"], section="css")
        found = {issue.path.relative_to(docs_tree).as_posix(): issue.kind for issue in report.issues["km"]}
        assert found == {"km/css/basics/01-intro.md": "missing"}

    def test_report_text(self, docs_tree):
        report = check_translations(docs_tree, ["ja"], section="css")
        text = format_report(report)
        assert "Japanese (ja): 2 file(s), 2 issue(s)" in text
        assert "[missing]" in text

    def test_empty_source_needs_no_translation(self, docs_tree, fake_translator):
        """Sources the pipeline skips as empty are not reported missing."""
        from mdtranslate.models import RunConfiguration
        from mdtranslate.pipeline import TranslationPipeline

        self.write(docs_tree, "css/empty.md", "\n")
        run_config = RunConfiguration(target_languages=("km",), root=docs_tree, section="css")
        TranslationPipeline(run_config, fake_translator).run()

        report = check_translations(docs_tree, ["km"], section="css")
        assert report.issues["km"] == []
        assert report.ok

    def test_unreadable_translation(self, docs_tree):
        """Invalid UTF-8 in one file is listed as an issue, the rest are checked."""
        (docs_tree / "km/css/basics").mkdir(parents=True)
        (docs_tree / "km/css/basics/01-intro.md").write_bytes(b"# \xff\xfe broken\n")

        report = check_translations(docs_tree, ["km"], section="css")
        found = {issue.path.relative_to(docs_tree).as_posix(): issue.kind for issue in report.issues["km"]}
        assert found == {
            "km/css/colors.md": "code_blocks",
            "km/css/basics/01-intro.md": "unreadable",
        }
        assert "[unreadable]" in format_report(report)
