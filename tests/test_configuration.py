"""Tests for configuration module."""
import pytest

from src.infrastructure.configuration import UpscaleConfiguration


class TestUpscaleConfiguration:
    """Tests for UpscaleConfiguration class."""

    def test_defaults(self):
        """Test that optional fields take their documented defaults."""
        config = UpscaleConfiguration(input="in.png", model="model.json")
        assert config.output == "dst.png"
        assert config.workers is None
        assert config.scale == 2
        assert config.jpeg_quality == 75
        assert config.progress is True

    @pytest.mark.parametrize(
        "field,value",
        [("workers", 0), ("scale", 0), ("jpeg_quality", 0), ("jpeg_quality", 100)],
    )
    def test_rejects_invalid_values(self, field, value):
        """Test that __post_init__ rejects values the engine cannot use."""
        with pytest.raises(ValueError, match=field):
            UpscaleConfiguration(input="in.png", model="model.json", **{field: value})

    def test_load_from_toml(self, tmp_path):
        """Test loading configuration from TOML file."""
        config_file = tmp_path / "upscale.toml"
        config_file.write_text("""
[upscale]
input = "images/small.png"
model = "models/scale2.0x_model.json"
output = "images/big.jpg"
workers = 4
jpeg_quality = 90
progress = false
""")

        config = UpscaleConfiguration.load(str(config_file))
        assert config.input == "images/small.png"
        assert config.model == "models/scale2.0x_model.json"
        assert config.output == "images/big.jpg"
        assert config.workers == 4
        assert config.jpeg_quality == 90
        assert config.progress is False

    def test_overrides_take_precedence(self, tmp_path):
        """Test that explicit overrides replace file values and None is ignored."""
        config_file = tmp_path / "upscale.toml"
        config_file.write_text("""
[upscale]
input = "a.png"
model = "m.json"
workers = 2
""")

        config = UpscaleConfiguration.load(str(config_file), workers=8, output=None)
        assert config.workers == 8
        assert config.output == "dst.png"

    def test_unknown_key(self, tmp_path):
        """Test that misspelled keys are reported."""
        config_file = tmp_path / "upscale.toml"
        config_file.write_text("""
[upscale]
input = "a.png"
model = "m.json"
wrokers = 2
""")
        with pytest.raises(ValueError, match="wrokers"):
            UpscaleConfiguration.load(str(config_file))

    def test_missing_required_field(self, tmp_path):
        """Test that a file without input/model cannot build a configuration."""
        config_file = tmp_path / "upscale.toml"
        config_file.write_text("[upscale]\noutput = \"x.png\"\n")
        with pytest.raises(TypeError):
            UpscaleConfiguration.load(str(config_file))

    def test_load_missing_file(self):
        """Test that loading from missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            UpscaleConfiguration.load("/nonexistent/path/upscale.toml")
