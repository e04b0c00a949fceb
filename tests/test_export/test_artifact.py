"""Unit tests for export artifacts (srs_gen.export.artifact)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from srs_gen.export.artifact import ExportArtifact, artifact_filename, extension_for, save_artifact


class TestArtifactFilename:
    @pytest.mark.unit
    def test_plain_name(self):
        assert artifact_filename("Acme") == "Acme-SRS.pdf"

    @pytest.mark.unit
    def test_empty_name(self):
        assert artifact_filename("") == "project-SRS.pdf"
        assert artifact_filename("   ") == "project-SRS.pdf"

    @pytest.mark.unit
    def test_unsafe_characters(self):
        assert artifact_filename("a/b: c?") == "a_b_ c-SRS.pdf"

    @pytest.mark.unit
    def test_extension(self):
        assert artifact_filename("Acme", ".png") == "Acme-SRS.png"


class TestExtensionFor:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "media_type, expected",
        [
            ("application/pdf", "pdf"),
            ("application/pdf; charset=binary", "pdf"),
            ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", "docx"),
            ("application/msword", "doc"),
            ("", "pdf"),
            ("application/x-unknown-srs", "pdf"),
        ],
    )
    def test_known_types(self, media_type, expected):
        assert extension_for(media_type) == expected


class TestExportArtifact:
    @pytest.mark.unit
    def test_defaults(self):
        artifact = ExportArtifact(content=b"abc", filename="x-SRS.pdf")
        assert artifact.media_type == "application/pdf"
        assert artifact.page_count is None
        assert artifact.size == 3

    @pytest.mark.unit
    def test_zero_pages_rejected(self):
        with pytest.raises(ValidationError):
            ExportArtifact(content=b"", filename="x.pdf", page_count=0)


class TestSaveArtifact:
    @pytest.mark.unit
    def test_writes_bytes(self, tmp_path):
        artifact = ExportArtifact(content=b"%PDF-1.4", filename="Acme-SRS.pdf")
        path = save_artifact(artifact, tmp_path / "out")
        assert path.name == "Acme-SRS.pdf"
        assert path.read_bytes() == b"%PDF-1.4"

    @pytest.mark.unit
    def test_overwrites(self, tmp_path):
        save_artifact(ExportArtifact(content=b"old", filename="a.pdf"), tmp_path)
        path = save_artifact(ExportArtifact(content=b"new", filename="a.pdf"), tmp_path)
        assert path.read_bytes() == b"new"
