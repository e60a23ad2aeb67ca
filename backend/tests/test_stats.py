"""
Tests for statistics formatting
"""

from zipprompt.services.content_formatter import FormattedDocument
from zipprompt.services.stats import build_stats, format_duration, format_file_size


class TestStats:

    def test_file_size_in_megabytes(self):
        assert format_file_size(0) == "0.0MB"
        assert format_file_size(1024 * 1024) == "1.0MB"
        assert format_file_size(1536 * 1024) == "1.5MB"

    def test_duration_in_seconds(self):
        assert format_duration(0.04) == "0.0s"
        assert format_duration(2.26) == "2.3s"

    def test_build_stats(self):
        document = FormattedDocument(content="", lines_of_code=42, total_files=5, total_folders=2)
        stats = build_stats(document, archive_size=3 * 1024 * 1024, elapsed_seconds=1.0)
        assert stats.to_dict() == {
            "totalFiles": 5,
            "totalFolders": 2,
            "linesOfCode": 42,
            "fileSize": "3.0MB",
            "processingTime": "1.0s",
        }
