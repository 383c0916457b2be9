"""True end-to-end tests that run main.py as a subprocess."""
import subprocess
import sys
from pathlib import Path

import numpy as np
from fixtures.networks import write_model
from PIL import Image

PROJECT_ROOT = Path(__file__).parent.parent
MAIN_SCRIPT = PROJECT_ROOT / "main.py"


def run_main(*args):
    """Run main.py with `args` and return the completed process."""
    return subprocess.run(
        [sys.executable, str(MAIN_SCRIPT), *args],
        cwd=str(PROJECT_ROOT),
        capture_output=True,
        text=True,
        timeout=300,
    )


def test_main_upscales_image(tmp_path, two_layer_network):
    """
    End-to-end test: reconstruct a small PNG with a two-layer model.

    This test verifies that the complete pipeline runs without errors
    when launched from command line.
    """
    source = tmp_path / "small.png"
    rng = np.random.default_rng(1)
    Image.fromarray(rng.integers(0, 256, size=(6, 5, 3), dtype=np.uint8)).save(source)
    model = write_model(tmp_path / "model.json", two_layer_network)
    output = tmp_path / "big.png"

    result = run_main("-i", str(source), "-m", model, "-o", str(output), "-c", "2")

    if result.returncode != 0:
        print("STDOUT:", result.stdout)
        print("STDERR:", result.stderr)

    assert result.returncode == 0, (
        f"main.py exited with code {result.returncode}\n"
        f"STDERR: {result.stderr}"
    )
    with Image.open(output) as img:
        assert img.size == (10, 12)


def test_main_with_configuration_file(tmp_path, two_layer_network):
    source = tmp_path / "small.png"
    Image.new("RGB", (4, 4), (200, 100, 50)).save(source)
    model = write_model(tmp_path / "model.json", two_layer_network)
    output = tmp_path / "big.jpg"
    config = tmp_path / "upscale.toml"
    config.write_text(
        "[upscale]\n"
        f"input = {str(source)!r}\n"
        f"model = {str(model)!r}\n"
        f"output = {str(output)!r}\n"
        "progress = false\n"
    )

    result = run_main("--config", str(config))

    assert result.returncode == 0, result.stderr
    with Image.open(output) as img:
        assert img.format == "JPEG"
        assert img.size == (8, 8)


def test_main_reports_missing_model(tmp_path):
    source = tmp_path / "small.png"
    Image.new("RGB", (2, 2)).save(source)

    result = run_main("-i", str(source), "-m", str(tmp_path / "missing.json"), "-q")

    assert result.returncode == 1
    assert "Model file not found" in result.stdout


def test_main_reports_malformed_model_field(tmp_path):
    source = tmp_path / "small.png"
    Image.new("RGB", (2, 2)).save(source)
    model = tmp_path / "bad.json"
    model.write_text(
        '[{"weight": [[[[0, 0, 0], [0, 1, 0], [0, 0, 0]]]], "bias": [0],'
        ' "nInputPlane": "x", "nOutputPlane": 1, "kW": 3, "kH": 3}]'
    )

    result = run_main("-i", str(source), "-m", str(model), "-o", str(tmp_path / "out.png"), "-q")

    assert result.returncode == 1
    assert "Traceback" not in result.stderr
    assert "'nInputPlane' must be an integer" in result.stdout


def test_main_rejects_unknown_log_level(tmp_path):
    result = run_main("-i", "in.png", "-m", "model.json", "--log-level", "FOO")

    assert result.returncode != 0
    assert "Traceback" not in result.stderr
    assert "--log-level" in result.stderr
