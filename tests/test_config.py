# =============================================================================
# test_config.py - Configuration Tests
# =============================================================================

import logging

from mxasm.config import AssemblerConfig


class TestDefaults:
    """Test default configuration."""

    def test_defaults(self):
        """Fixed-width layout and .mx/.o suffixes by default."""
        config = AssemblerConfig()
        assert config.fixed_width is True
        assert config.source_suffix == ".mx"
        assert config.object_suffix == ".o"


class TestFromEnv:
    """Test AssemblerConfig.from_env()."""

    def test_no_variables(self, monkeypatch):
        """Without variables from_env() returns the defaults."""
        for name in ("MXASM_FIXED_WIDTH", "MXASM_SOURCE_SUFFIX", "MXASM_OBJECT_SUFFIX"):
            monkeypatch.delenv(name, raising=False)
        assert AssemblerConfig.from_env() == AssemblerConfig()

    def test_packed_layout(self, monkeypatch):
        """MXASM_FIXED_WIDTH=0 selects the packed layout."""
        monkeypatch.setenv("MXASM_FIXED_WIDTH", "0")
        assert AssemblerConfig.from_env().fixed_width is False

    def test_boolean_words(self, monkeypatch):
        """Boolean words are accepted in any case."""
        monkeypatch.setenv("MXASM_FIXED_WIDTH", "False")
        assert AssemblerConfig.from_env().fixed_width is False
        monkeypatch.setenv("MXASM_FIXED_WIDTH", "YES")
        assert AssemblerConfig.from_env().fixed_width is True

    def test_suffixes(self, monkeypatch):
        """Suffixes come from the environment."""
        monkeypatch.setenv("MXASM_SOURCE_SUFFIX", ".asm")
        monkeypatch.setenv("MXASM_OBJECT_SUFFIX", ".hex")
        config = AssemblerConfig.from_env()
        assert config.source_suffix == ".asm"
        assert config.object_suffix == ".hex"

    def test_invalid_values_are_ignored(self, monkeypatch, caplog):
        """Invalid values keep the default and log a warning."""
        monkeypatch.setenv("MXASM_FIXED_WIDTH", "maybe")
        monkeypatch.setenv("MXASM_OBJECT_SUFFIX", "hex")
        with caplog.at_level(logging.WARNING, logger="mxasm.config"):
            config = AssemblerConfig.from_env()
        assert config.fixed_width is True
        assert config.object_suffix == ".o"
        assert "MXASM_FIXED_WIDTH" in caplog.text
        assert "MXASM_OBJECT_SUFFIX" in caplog.text
