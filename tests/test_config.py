"""Tests for core/config.py."""

from core import config


class TestDefaults:
    """Tests for workflow defaults."""

    def test_document_defaults(self):
        """Document OCR should wait 180s and group 2 pages per file."""
        assert config.DEFAULT_WAIT_TIMEOUT == 180
        assert config.DEFAULT_BATCH_SIZE == 2
        assert config.DEFAULT_DOCUMENT_MIME_TYPE in config.DOCUMENT_MIME_TYPES

    def test_uri_pattern_groups(self):
        """Pattern should expose scheme, bucket and prefix."""
        match = config.STORAGE_URI_PATTERN.fullmatch("gs://bucket/a/b")
        assert match.group("scheme") == "gs"
        assert match.group("bucket") == "bucket"
        assert match.group("prefix") == "a/b"


class TestEnvironment:
    """Tests for environment-provided settings."""

    def test_api_endpoint(self, monkeypatch):
        """Should read VISION_API_ENDPOINT."""
        monkeypatch.setenv("VISION_API_ENDPOINT", "us-vision.googleapis.com")
        assert config.get_api_endpoint() == "us-vision.googleapis.com"

    def test_api_endpoint_empty(self, monkeypatch):
        """Empty values should count as unset."""
        monkeypatch.setenv("VISION_API_ENDPOINT", "")
        assert config.get_api_endpoint() is None

    def test_storage_project(self, monkeypatch):
        """Should read GOOGLE_CLOUD_PROJECT."""
        monkeypatch.delenv("GOOGLE_CLOUD_PROJECT", raising=False)
        assert config.get_storage_project() is None
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "demo-project")
        assert config.get_storage_project() == "demo-project"
