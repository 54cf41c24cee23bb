"""Tests for file utility functions."""

from __future__ import annotations

from pathlib import Path

from globfrontmatter.utils.files import (
    is_content_file,
    iter_content_paths,
    iter_source_documents,
)


class TestIsContentFile:
    """Test is_content_file function."""

    def test_recognized_extensions(self) -> None:
        """Should accept md, mdx and mdoc."""
        assert is_content_file("guide.md")
        assert is_content_file("guide.mdx")
        assert is_content_file("guides/guide.mdoc")

    def test_other_names(self) -> None:
        """Should reject directories and other files."""
        assert not is_content_file("guides")
        assert not is_content_file("notes.txt")
        assert not is_content_file("frontmatter.yml")


class TestIterSourceDocuments:
    """Test iter_source_documents function."""

    def test_root_document(self, tmp_path: Path) -> None:
        """Should find a document in the root directory."""
        (tmp_path / "frontmatter.yml").write_text("README.md:\n  title: Home\n")

        documents = list(iter_source_documents(tmp_path))

        assert len(documents) == 1
        assert documents[0].directory == tmp_path
        assert documents[0].path == tmp_path / "frontmatter.yml"

    def test_name_priority(self, tmp_path: Path) -> None:
        """Should honor only the first document by name priority."""
        (tmp_path / "frontmatter.json").write_text("{}")
        (tmp_path / "frontmatter.yaml").write_text("{}")
        (tmp_path / "frontmatter.yml").write_text("{}")

        documents = list(iter_source_documents(tmp_path))

        assert [d.path.name for d in documents] == ["frontmatter.yml"]

    def test_yaml_before_json(self, tmp_path: Path) -> None:
        """Should prefer the .yaml variant over JSON."""
        (tmp_path / "frontmatter.json").write_text("{}")
        (tmp_path / "frontmatter.yaml").write_text("{}")

        documents = list(iter_source_documents(tmp_path))

        assert [d.path.name for d in documents] == ["frontmatter.yaml"]

    def test_nested_directories(self, tmp_path: Path) -> None:
        """Should descend into subdirectories."""
        guides = tmp_path / "guides"
        deep = guides / "advanced"
        deep.mkdir(parents=True)
        (guides / "frontmatter.json").write_text("{}")
        (deep / "frontmatter.yml").write_text("{}")

        documents = list(iter_source_documents(tmp_path))

        assert [d.directory for d in documents] == [guides, deep]

    def test_skips_hidden_and_vendor(self, tmp_path: Path) -> None:
        """Should not descend into hidden or dependency directories."""
        for name in (".git", "node_modules", "__pycache__"):
            directory = tmp_path / name
            directory.mkdir()
            (directory / "frontmatter.yml").write_text("{}")

        assert list(iter_source_documents(tmp_path)) == []

    def test_does_not_follow_symlinked_directories(self, tmp_path: Path) -> None:
        """Should visit a directory once even when a symlink points back up."""
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / "frontmatter.yml").write_text("a.md: {}\n")
        (sub / "loop").symlink_to(tmp_path, target_is_directory=True)

        documents = list(iter_source_documents(tmp_path))

        assert [d.path for d in documents] == [sub / "frontmatter.yml"]

    def test_nonexistent_directory(self, tmp_path: Path) -> None:
        """Should yield nothing for a missing directory."""
        assert list(iter_source_documents(tmp_path / "missing")) == []


class TestIterContentPaths:
    """Test iter_content_paths function."""

    def test_matches_pattern(self, tmp_path: Path) -> None:
        """Should yield content files matching the pattern."""
        (tmp_path / "guides").mkdir()
        (tmp_path / "index.md").write_text("# Home")
        (tmp_path / "guides" / "setup.mdx").write_text("# Setup")
        (tmp_path / "notes.txt").write_text("text")

        paths = list(iter_content_paths(tmp_path, ["**/*"]))

        assert {p.name for p in paths} == {"index.md", "setup.mdx"}

    def test_multiple_patterns_deduplicated(self, tmp_path: Path) -> None:
        """Should yield each file once across overlapping patterns."""
        (tmp_path / "index.md").write_text("# Home")

        paths = list(iter_content_paths(tmp_path, ["*.md", "**/*.md"]))

        assert paths == [tmp_path / "index.md"]

    def test_skips_hidden_directories(self, tmp_path: Path) -> None:
        """Should ignore files under hidden and vendor directories."""
        (tmp_path / ".cache").mkdir()
        (tmp_path / "node_modules").mkdir()
        (tmp_path / ".cache" / "a.md").write_text("a")
        (tmp_path / "node_modules" / "b.md").write_text("b")
        (tmp_path / "c.md").write_text("c")

        paths = list(iter_content_paths(tmp_path, ["**/*.md"]))

        assert paths == [tmp_path / "c.md"]

    def test_missing_base(self, tmp_path: Path) -> None:
        """Should yield nothing when the base does not exist."""
        assert list(iter_content_paths(tmp_path / "missing", ["**/*.md"])) == []
