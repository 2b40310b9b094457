"""Unit tests for audiowaveform.cli module."""

import json
import struct
from pathlib import Path

import pytest

from audiowaveform import WaveformData, load_binary, load_json, save_binary, save_json
from audiowaveform.cli.commands import app, rescale


@pytest.fixture
def dat_file(tmp_path: Path) -> Path:
    path = tmp_path / "waveform.dat"
    waveform = WaveformData(16000, 64, 16).append(-13606, 16602).append(2166, 4512)
    save_binary(waveform, path)
    return path


class TestCliInfo:
    """Test the info command."""

    def test_info_binary(self, dat_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert app(["info", str(dat_file)]) == 0

        out = capsys.readouterr().out
        assert "Sample rate: 16000 Hz" in out
        assert "Samples per pixel: 64" in out
        assert "Resolution: 16-bit" in out
        assert "Pairs: 2" in out
        assert "-13606" in out

    def test_info_json_with_start_time(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "waveform.json"
        save_json(WaveformData(44100, 512, 8, start_time=8.5), path)

        assert app(["info", str(path)]) == 0

        out = capsys.readouterr().out
        assert "Start time: 8.5s" in out
        assert "Pairs: 0" in out

    def test_info_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert app(["info", str(tmp_path / "missing.dat")]) == 1
        assert "does not exist" in " ".join(capsys.readouterr().out.split())

    def test_info_unsupported_version(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "version2.dat"
        path.write_bytes(struct.pack("<iIiiI", 2, 0, 16000, 64, 0))

        assert app(["info", str(path)]) == 1
        assert "Cannot load data file version: 2" in capsys.readouterr().out

    def test_info_invalid_utf8_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.json"
        path.write_bytes(b'{"sample_rate": "\xff"}')

        assert app(["info", str(path)]) == 1
        assert "Invalid json" in capsys.readouterr().out


class TestCliValidate:
    """Test the validate command."""

    def test_validate_pass(self, dat_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert app(["validate", str(dat_file)]) == 0
        assert "[PASS]" in capsys.readouterr().out

    def test_validate_fail(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "invalid_header.dat"
        path.write_bytes(b"\x01\x00\x00\x00")

        assert app(["validate", str(path)]) == 1
        assert "[FAIL]" in capsys.readouterr().out

    def test_validate_json_output(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "short.dat"
        path.write_bytes(struct.pack("<iIiiI", 1, 1, 16000, 64, 1800))

        assert app(["validate", str(path), "--json"]) == 0

        results = json.loads(capsys.readouterr().out)
        assert results["valid"] is True
        assert results["errors"] == []
        assert len(results["warnings"]) == 1

    def test_validate_strict(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "short.dat"
        path.write_bytes(struct.pack("<iIiiI", 1, 1, 16000, 64, 1800))

        assert app(["validate", str(path), "--strict", "--json"]) == 1

        results = json.loads(capsys.readouterr().out)
        assert results["valid"] is False
        assert results["errors"][0].startswith("Strict mode:")

    def test_validate_missing_file(self, tmp_path: Path) -> None:
        assert app(["validate", str(tmp_path / "missing.dat")]) == 1

    def test_validate_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert app(["validate", str(tmp_path)]) == 1
        assert "Cannot open file" in " ".join(capsys.readouterr().out.split())

    def test_validate_directory_json(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert app(["validate", str(tmp_path), "--json"]) == 1

        results = json.loads(capsys.readouterr().out)
        assert results["valid"] is False
        assert results["errors"][0].startswith("Cannot open file")


class TestCliConvert:
    """Test the convert command."""

    def test_binary_to_json(self, dat_file: Path, tmp_path: Path) -> None:
        output = tmp_path / "waveform.json"

        assert app(["convert", str(dat_file), str(output)]) == 0

        obj = json.loads(output.read_text())
        assert obj["data"] == [-13606, 16602, 2166, 4512]
        assert "start_time" not in obj

    def test_json_to_binary(self, tmp_path: Path) -> None:
        source = tmp_path / "source.json"
        output = tmp_path / "out.dat"
        save_json(WaveformData(44100, 512, 8).append(-99, 101), source)

        assert app(["convert", str(source), str(output)]) == 0

        assert output.stat().st_size == 22
        assert load_binary(output) == WaveformData(44100, 512, 8).append(-99, 101)

    def test_rescale_to_8bit(self, dat_file: Path, tmp_path: Path) -> None:
        output = tmp_path / "waveform8.dat"

        assert app(["convert", str(dat_file), str(output), "--bits", "8"]) == 0

        waveform = load_binary(output)
        assert waveform.bits == 8
        assert list(waveform.pairs()) == [(-54, 64), (8, 17)]

    def test_set_start_time(self, dat_file: Path, tmp_path: Path) -> None:
        output = tmp_path / "waveform.json"

        assert app(["convert", str(dat_file), str(output), "--start-time", "2.5"]) == 0

        assert load_json(output).start_time == 2.5

    def test_negative_start_time(self, dat_file: Path, tmp_path: Path) -> None:
        output = tmp_path / "waveform.json"

        with pytest.raises(SystemExit) as e:
            app(["convert", str(dat_file), str(output), "--start-time=-1"])

        assert e.value.code == 1
        assert not output.exists()

    def test_missing_source(self, tmp_path: Path) -> None:
        assert app(["convert", str(tmp_path / "missing.dat"), str(tmp_path / "out.json")]) == 1


class TestRescale:
    """Test bit width rescaling."""

    def test_upscale(self) -> None:
        waveform = rescale(WaveformData(44100, 512, 8).append(-128, 127), 16)
        assert waveform.bits == 16
        assert list(waveform.pairs()) == [(-32768, 32512)]

    def test_downscale_floors(self) -> None:
        waveform = rescale(WaveformData(44100, 512, 16).append(-32768, 32767), 8)
        assert list(waveform.pairs()) == [(-128, 127)]

    def test_keeps_configuration(self) -> None:
        waveform = rescale(WaveformData(22050, 128, 16, start_time=1.0), 8)
        assert (waveform.sample_rate, waveform.samples_per_pixel, waveform.start_time) == (
            22050,
            128,
            1.0,
        )
