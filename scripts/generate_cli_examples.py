from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_ARGS = ["--mode", "image", "--x-res", "160", "--y-res", "120", "--backend", "tensorflow"]


@dataclass
class Expected:
    path: Path
    is_dir: bool = False


@dataclass
class Example:
    name: str
    args: list[str]
    expected: list[Expected]
    clean: list[Path] | None = None

    def full_args(self) -> list[str]:
        return ["python", "explore.py", *self.args]


def _single(name: str, filename: str, *args: str) -> Example:
    """An example that writes one image with ``BASE_ARGS`` plus ``args``."""

    target = EXAMPLES_ROOT / name / filename
    return Example(
        name=name,
        args=[*BASE_ARGS, *args, "--output", str(target)],
        expected=[Expected(target)],
        clean=[EXAMPLES_ROOT / name],
    )


EXAMPLES: list[Example] = [
    _single("fractal", "burning-ship.png", "--fractal", "burning-ship"),
    _single("julia-constant", "julia-i.png", "--fractal", "julia", "--julia-constant", "2"),
    _single("degree", "newton-5.png", "--fractal", "newton", "--degree", "5"),
    _single("depth-levy", "levy-12.png", "--fractal", "levy", "--depth", "12"),
    _single("depth-triangle", "triangle-5.png", "--fractal", "sierpinski-triangle", "--depth", "5"),
    _single("depth-carpet", "carpet-4.png", "--fractal", "sierpinski-carpet", "--depth", "4"),
    _single("max-iterations", "high-iterations.png", "--max-iterations", "400"),
    _single("x-res", "wide-resolution.png", "--x-res", "240"),
    _single("y-res", "short-resolution.png", "--y-res", "96"),
    _single("view", "seahorse-valley.png", "--view", "-0.8", "-0.7", "0.05"),
    _single("zoom", "zoomed.png", "--zoom", "60", "70", "0.25", "--zoom", "80", "60", "0.5"),
    _single("unzoom", "unzoomed.png", "--zoom", "60", "70", "0.25", "--zoom", "80", "60", "0.5", "--unzoom", "1"),
    _single("auto-zoom", "auto.png", "--auto-zoom", "4"),
    _single("zoom-fraction", "wide-steps.png", "--auto-zoom", "2", "--zoom-fraction", "0.6"),
    _single("scalar-backend", "scalar.png", "--backend", "scalar", "--max-iterations", "30"),
    _single("colormap", "inferno.png", "--colormap", "inferno"),
    _single("show-zoom-box", "boxed.png", "--zoom", "60", "70", "0.25", "--show-zoom-box"),
    _single("caption", "captioned.png", "--fractal", "julia", "--julia-constant", "1", "--caption"),
    _single("format", "custom.webp", "--format", "webp"),
    _single("verbose", "diagnostic.png", "--verbose"),
    Example(
        name="gif",
        args=[
            "--mode",
            "gif",
            "--x-res",
            "160",
            "--y-res",
            "120",
            "--auto-zoom",
            "5",
            "--show-zoom-box",
            "--output",
            str(EXAMPLES_ROOT / "gif" / "auto-zoom.gif"),
        ],
        expected=[Expected(EXAMPLES_ROOT / "gif" / "auto-zoom.gif")],
        clean=[EXAMPLES_ROOT / "gif"],
    ),
    Example(
        name="gif-frame-duration",
        args=[
            "--fractal",
            "sierpinski-carpet",
            "--depth",
            "4",
            "--mode",
            "gif",
            "--gif-frame-duration",
            "1.0",
            "--x-res",
            "160",
            "--y-res",
            "160",
            "--output",
            str(EXAMPLES_ROOT / "gif-frame-duration" / "carpet.gif"),
        ],
        expected=[Expected(EXAMPLES_ROOT / "gif-frame-duration" / "carpet.gif")],
        clean=[EXAMPLES_ROOT / "gif-frame-duration"],
    ),
    Example(
        name="frame-dir",
        args=[
            "--fractal",
            "levy",
            "--depth",
            "8",
            "--mode",
            "frames",
            "--frame-dir",
            str(EXAMPLES_ROOT / "frame-dir" / "frames"),
            "--x-res",
            "160",
            "--y-res",
            "120",
        ],
        expected=[Expected(EXAMPLES_ROOT / "frame-dir" / "frames", is_dir=True)],
        clean=[EXAMPLES_ROOT / "frame-dir"],
    ),
    Example(
        name="mode",
        args=[
            "--mode",
            "image",
            "--mode",
            "gif",
            "--mode",
            "frames",
            "--auto-zoom",
            "2",
            "--frame-dir",
            str(EXAMPLES_ROOT / "mode" / "frames"),
            "--x-res",
            "160",
            "--y-res",
            "120",
            "--output",
            str(EXAMPLES_ROOT / "mode"),
        ],
        expected=[
            Expected(EXAMPLES_ROOT / "mode" / "fractal.png"),
            Expected(EXAMPLES_ROOT / "mode" / "fractal.gif"),
            Expected(EXAMPLES_ROOT / "mode" / "frames", is_dir=True),
        ],
        clean=[EXAMPLES_ROOT / "mode"],
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _prepare(example: Example) -> None:
    clean = example.clean or []
    _ensure_clean(clean)
    for expected in example.expected:
        expected.path.parent.mkdir(parents=True, exist_ok=True)


def _verify(example: Example) -> None:
    for expected in example.expected:
        if expected.is_dir:
            if not expected.path.is_dir():
                raise RuntimeError(f"Expected directory {expected.path} was not created")
            if not any(expected.path.iterdir()):
                raise RuntimeError(f"Directory {expected.path} is empty")
        else:
            if not expected.path.is_file():
                raise RuntimeError(f"Expected file {expected.path} was not created")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        subprocess.run(example.full_args(), check=True)
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
