"""Unit tests for Config and related Pydantic models (srs_gen.config).

Tests cover:
- BackendConfig / ExportConfig defaults and validation
- Config defaults, save/load, from_env
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from srs_gen.config import BackendConfig, Config, ExportConfig


# ---------------------------------------------------------------------------
# BackendConfig
# ---------------------------------------------------------------------------


class TestBackendConfig:
    @pytest.mark.unit
    def test_defaults(self):
        backend = BackendConfig()
        assert backend.url == "http://localhost:5000"
        assert backend.timeout == 60

    @pytest.mark.unit
    def test_zero_timeout_rejected(self):
        with pytest.raises(ValidationError):
            BackendConfig(timeout=0)


# ---------------------------------------------------------------------------
# ExportConfig
# ---------------------------------------------------------------------------


class TestExportConfig:
    @pytest.mark.unit
    def test_defaults(self):
        export = ExportConfig()
        assert export.scale == 2.0
        assert export.page_format == "a4"
        assert export.margin_pt == 0.0
        assert export.pagination == "sliced"
        assert export.node_binary == "node"

    @pytest.mark.unit
    def test_scale_below_one_rejected(self):
        with pytest.raises(ValidationError):
            ExportConfig(scale=0.5)

    @pytest.mark.unit
    def test_unknown_page_format_rejected(self):
        with pytest.raises(ValidationError):
            ExportConfig(page_format="a3")

    @pytest.mark.unit
    def test_unknown_pagination_rejected(self):
        with pytest.raises(ValidationError):
            ExportConfig(pagination="scroll")

    @pytest.mark.unit
    def test_negative_margin_rejected(self):
        with pytest.raises(ValidationError):
            ExportConfig(margin_pt=-1)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfig:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.output_dir == Path("./output")
        assert isinstance(config.backend, BackendConfig)
        assert isinstance(config.export, ExportConfig)

    @pytest.mark.unit
    def test_save_default_location(self, tmp_path):
        config = Config(output_dir=tmp_path / "out")
        path = config.save()
        assert path == tmp_path / "out" / "srs-gen.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["backend"]["url"] == "http://localhost:5000"

    @pytest.mark.unit
    def test_save_load_roundtrip(self, tmp_path):
        config = Config(
            output_dir=tmp_path,
            backend=BackendConfig(url="http://render:8080", timeout=5),
            export=ExportConfig(page_format="letter", pagination="single_page"),
        )
        loaded = Config.load(config.save(tmp_path / "cfg.json"))
        assert loaded == config


# ---------------------------------------------------------------------------
# Config.from_env
# ---------------------------------------------------------------------------


class TestFromEnv:
    @pytest.mark.unit
    def test_empty_env_gives_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        assert config == Config()

    @pytest.mark.unit
    def test_backend_from_env(self):
        env = {"SRS_API_URL": "http://render:9000", "SRS_API_TIMEOUT": "15"}
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.backend.url == "http://render:9000"
        assert config.backend.timeout == 15

    @pytest.mark.unit
    def test_export_from_env(self):
        env = {
            "SRS_EXPORT_SCALE": "3",
            "SRS_PAGE_FORMAT": "LETTER",
            "SRS_PAGINATION": "single_page",
            "SRS_NODE_BINARY": "/usr/bin/node",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.export.scale == 3.0
        assert config.export.page_format == "letter"
        assert config.export.pagination == "single_page"
        assert config.export.node_binary == "/usr/bin/node"

    @pytest.mark.unit
    def test_output_dir_from_env(self, tmp_path):
        with patch.dict(os.environ, {"SRS_OUTPUT_DIR": str(tmp_path)}, clear=True):
            config = Config.from_env()
        assert config.output_dir == tmp_path

    @pytest.mark.unit
    def test_invalid_value_rejected(self):
        with patch.dict(os.environ, {"SRS_PAGE_FORMAT": "tabloid"}, clear=True):
            with pytest.raises(ValidationError):
                Config.from_env()
