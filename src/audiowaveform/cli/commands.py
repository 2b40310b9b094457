import json
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console
from rich.table import Table

from audiowaveform.cli.validators import validate_non_negative_float, validate_positive_integer
from audiowaveform.format import (
    SampleWidth,
    WaveformDataError,
    inspect_binary,
    load_binary,
    load_json,
    save_binary,
    save_json,
)
from audiowaveform.model import WaveformData
from audiowaveform.types import BitDepth

app = App(name="audiowaveform", help="A utility for inspecting and converting waveform data files")
console = Console()

JSON_SUFFIX = ".json"


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(message, style="bold red")


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(message, style="bold green")


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(message, style="bold yellow")


def load_waveform(path: Path) -> WaveformData:
    """Load a waveform from a .json file or, for any other suffix, a binary file."""
    if path.suffix.lower() == JSON_SUFFIX:
        return load_json(path)
    return load_binary(path)


def rescale(waveform: WaveformData, bits: int) -> WaveformData:
    """Return a copy of the waveform with values scaled to a new bit width."""
    shift = bits - waveform.bits
    if shift >= 0:
        pairs = ((lo << shift, hi << shift) for lo, hi in waveform.pairs())
    else:
        pairs = ((lo >> -shift, hi >> -shift) for lo, hi in waveform.pairs())

    return WaveformData.from_pairs(
        pairs,
        sample_rate=waveform.sample_rate,
        samples_per_pixel=waveform.samples_per_pixel,
        bits=bits,
        start_time=waveform.start_time,
    )


@app.command
def info(
    file: Path,
    samples: Annotated[int, Parameter(validator=validate_positive_integer)] = 10,
) -> int:
    """
    Display information about a waveform data file.

    Parameters
    ----------
    file: Path
        The path to the .dat or .json waveform data file
    samples: int
        The number of leading min/max pairs to show
    """
    if not file.exists():
        print_error(f"Error: File {file} does not exist")
        return 1

    try:
        waveform = load_waveform(file)
    except WaveformDataError as e:
        print_error(f"Error: {e}")
        return 1

    console.print(f"Waveform: {file}")
    console.print(f"  Sample rate: {waveform.sample_rate} Hz")
    console.print(f"  Samples per pixel: {waveform.samples_per_pixel}")
    console.print(f"  Resolution: {SampleWidth(waveform.bits).display_name}")
    if waveform.start_time is not None:
        console.print(f"  Start time: {waveform.start_time}s")
    console.print(f"  Pairs: {waveform.pair_count()}")
    console.print(f"  Duration: {waveform.duration:.3f}s")

    if waveform.pair_count() == 0:
        return 0

    table = Table(show_header=True, header_style="bold")
    table.add_column("Index", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")

    for i in range(min(samples, waveform.pair_count())):
        table.add_row(str(i), str(waveform.min_at(i)), str(waveform.max_at(i)))

    console.print(table)
    return 0


@app.command
def validate(
    file: Path,
    strict: bool = False,
    output_json: Annotated[bool, Parameter(name=["--json"])] = False,
) -> int:
    """
    Validate a binary (.dat) waveform data file.

    Checks the header size, format version, sample rate, scale and
    the amount of sample data against the declared pair count.

    Parameters
    ----------
    file: Path
        The path to the .dat file to validate
    strict: bool
        Treat warnings as errors (default: False)
    output_json: bool
        Output results as JSON (default: False)
    """
    results: dict[str, object] = {
        "file": str(file),
        "valid": True,
        "errors": [],
        "warnings": [],
    }

    if not file.exists():
        results["valid"] = False
        results["errors"] = [f"File not found: {file}"]
        if output_json:
            console.print(json.dumps(results, indent=2), soft_wrap=True)
        else:
            print_error(f"[FAIL] File not found: {file}")
        return 1

    try:
        data = file.read_bytes()
    except OSError as e:
        results["valid"] = False
        results["errors"] = [f"Cannot open file: {e.strerror}"]
        if output_json:
            console.print(json.dumps(results, indent=2), soft_wrap=True)
        else:
            print_error(f"[FAIL] Cannot open file: {file}")
        return 1

    result = inspect_binary(data)
    results["valid"] = result.valid
    results["errors"] = list(result.errors)
    results["warnings"] = list(result.warnings)

    # In strict mode, warnings become errors
    if strict and result.warnings:
        results["valid"] = False
        results["errors"] = result.errors + [f"Strict mode: {w}" for w in result.warnings]

    if output_json:
        console.print(json.dumps(results, indent=2), soft_wrap=True)
        return 0 if results["valid"] else 1

    if results["valid"]:
        print_success(f"[PASS] {file}")
        for warning in result.warnings:
            print_warning(f"  [WARN] {warning}")
    else:
        print_error(f"[FAIL] {file}")
        err_list = results.get("errors", [])
        if isinstance(err_list, list):
            for error in err_list:
                console.print(f"  {error}")

    return 0 if results["valid"] else 1


@app.command
def convert(
    source: Path,
    output: Path,
    bits: BitDepth | None = None,
    start_time: Annotated[float | None, Parameter(validator=validate_non_negative_float)] = None,
) -> int:
    """
    Convert a waveform data file between the binary and JSON formats.

    The output format is chosen by the output suffix: .json writes JSON,
    anything else writes binary.

    Parameters
    ----------
    source: Path
        The .dat or .json file to convert
    output: Path
        The destination file
    bits: BitDepth | None
        Rescale the values to 8 or 16 bits
    start_time: float | None
        Set the start time, in seconds
    """
    if not source.exists():
        print_error(f"Error: Source file not found: {source}")
        return 1

    try:
        waveform = load_waveform(source)
        if bits is not None and bits != waveform.bits:
            waveform = rescale(waveform, bits)
        if start_time is not None:
            waveform.start_time = start_time

        if output.suffix.lower() == JSON_SUFFIX:
            save_json(waveform, output)
        else:
            save_binary(waveform, output)
    except WaveformDataError as e:
        print_error(f"Error: {e}")
        return 1

    print_success(f"Converted {source} -> {output}")
    console.print(f"  Pairs: {waveform.pair_count()}")
    console.print(f"  Resolution: {SampleWidth(waveform.bits).display_name}")
    return 0


if __name__ == "__main__":
    sys.exit(app())
