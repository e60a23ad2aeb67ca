"""
End-to-end tests for the archive processing pipeline
"""

import pytest

from conftest import make_symlink_zip, make_zip
from zipprompt.services.archive import ArchiveError, ArchiveSecurityError
from zipprompt.services.content_formatter import OutcomeStatus
from zipprompt.services.processor import ArchiveProcessor
from zipprompt.services.tree_builder import FileNode, FolderNode, iter_tree


class TestArchiveProcessor:
    """Zip bytes in, tree + document + stats out"""

    def test_wrapper_folder_scenario(self, sample_zip):
        output = ArchiveProcessor().process(sample_zip)

        assert output.common_prefix == "proj/"
        assert [n.name for n in output.file_tree] == ["src"]
        assert [n.name for n in output.file_tree[0].children] == ["a.py", "b.txt"]
        assert "node_modules" not in output.formatted_content
        assert "### src/a.py\n```python\nprint(1)\n" in output.formatted_content
        assert "### src/b.txt" not in output.formatted_content

        assert output.stats.total_files == 2
        assert output.stats.total_folders == 1
        assert output.stats.lines_of_code == 1

    def test_unrelated_roots_scenario(self):
        output = ArchiveProcessor().process(make_zip({"a/x.md": "# x", "b/y.md": "# y"}))
        assert output.common_prefix == ""
        assert [n.name for n in output.file_tree] == ["a", "b"]
        assert "### a/x.md\n```markdown\n# x\n```" in output.formatted_content

    def test_lone_readme_scenario(self):
        output = ArchiveProcessor().process(make_zip({"README": "Read me first"}))
        assert output.file_tree == [FileNode(name="README", path="README", size=13, extension="")]
        assert "### README" not in output.formatted_content
        assert output.stats.total_files == 1
        assert output.outcomes[0].status == OutcomeStatus.SKIPPED

    def test_prefix_detected_on_unfiltered_entries(self):
        # The hidden root file is dropped from the tree but still prevents stripping
        data = make_zip({"proj/a.py": "a = 1", ".DS_Store": "junk"})
        output = ArchiveProcessor().process(data)
        assert output.common_prefix == ""
        assert output.file_tree[0].path == "proj"
        assert "### proj/a.py" in output.formatted_content

    def test_ignored_paths_never_appear(self):
        data = make_zip({
            "repo/.git/config": "[core]",
            "repo/dist/bundle.js": "x",
            "repo/src/.env": "SECRET=1",
            "repo/src/__pycache__/m.cpython-312.pyc": "x",
            "repo/src/main.py": "main()",
        })
        output = ArchiveProcessor().process(data)
        paths = [n.path for n in iter_tree(output.file_tree)]
        assert paths == ["src", "src/main.py"]
        assert "SECRET" not in output.formatted_content

    def test_stats_format(self, sample_zip):
        output = ArchiveProcessor().process(sample_zip, started_at=0.0)
        assert output.stats.file_size == "0.0MB"
        assert output.stats.processing_time.endswith("s")

    def test_counts_consistent_with_tree(self):
        data = make_zip({
            "p/": None,
            "p/a/": None,
            "p/a/b.py": "b",
            "p/a/c/d.ts": "d",
            "p/e.bin": b"\x00\x01",
        })
        output = ArchiveProcessor().process(data)
        nodes = list(iter_tree(output.file_tree))
        assert output.stats.total_files == sum(isinstance(n, FileNode) for n in nodes) == 3
        assert output.stats.total_folders == sum(isinstance(n, FolderNode) for n in nodes) == 2

    def test_deterministic_output(self, sample_zip):
        first = ArchiveProcessor().process(sample_zip)
        second = ArchiveProcessor().process(sample_zip)
        assert first.formatted_content == second.formatted_content
        assert first.to_dict()["fileTree"] == second.to_dict()["fileTree"]

    def test_to_dict_shape(self, sample_zip):
        data = ArchiveProcessor().process(sample_zip).to_dict()
        assert set(data) == {"fileTree", "formattedContent", "stats"}
        assert set(data["stats"]) == {"totalFiles", "totalFolders", "linesOfCode", "fileSize", "processingTime"}
        assert data["fileTree"][0]["type"] == "folder"

    def test_corrupt_archive_is_fatal(self):
        with pytest.raises(ArchiveError):
            ArchiveProcessor().process(b"PK\x03\x04 truncated")

    def test_limits_come_from_constructor(self):
        data = make_zip({f"p/{i}.py": "x" for i in range(3)})
        with pytest.raises(ArchiveSecurityError):
            ArchiveProcessor(max_files=2).process(data)

    def test_explicit_zero_limit_is_honored(self):
        with pytest.raises(ArchiveSecurityError, match="Too many files"):
            ArchiveProcessor(max_files=0).process(make_zip({"p/a.py": "a"}))

    def test_trailing_newline_does_not_add_a_line(self):
        output = ArchiveProcessor().process(make_zip({"p/a.py": "x = 1\ny = 2\n", "p/b.py": "z = 3"}))
        assert output.stats.lines_of_code == 3


class TestBundledDependencies:
    """Archives that still contain dependency folders are processed, not rejected"""

    def test_large_node_modules_over_file_limit(self):
        files = {f"proj/node_modules/pkg{i}/index.js": "x" for i in range(10001)}
        files["proj/src/a.py"] = "print(1)\n"
        output = ArchiveProcessor().process(make_zip(files))

        assert output.stats.total_files == 1
        assert output.stats.lines_of_code == 1
        assert "node_modules" not in output.formatted_content

    def test_symlink_in_ignored_folder(self):
        data = make_symlink_zip("proj/node_modules/.bin/tsc", "../typescript/bin/tsc", {
            "proj/src/a.py": "print(1)\n",
        })
        output = ArchiveProcessor().process(data)

        assert output.stats.total_files == 1
        assert output.common_prefix == "proj/"

    def test_symlink_listed_but_not_embedded(self):
        data = make_symlink_zip("proj/src/link.py", "/etc/passwd", {"proj/src/a.py": "print(1)\n"})
        output = ArchiveProcessor().process(data)

        assert output.stats.total_files == 2
        assert "### src/link.py" not in output.formatted_content
        assert "/etc/passwd" not in output.formatted_content
        outcome = next(o for o in output.outcomes if o.path == "src/link.py")
        assert outcome.status == OutcomeStatus.SKIPPED
        assert outcome.reason == "symbolic link"
