from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/reference")


@dataclass
class Example:
    name: str
    args: list[str]
    expected: Path

    def full_args(self) -> list[str]:
        return ["python", "fractal.py", *self.args, "--output", str(self.expected)]


EXAMPLES: list[Example] = [
    Example(
        name="mandelbrot",
        args=["--set", "mandelbrot"],
        expected=EXAMPLES_ROOT / "mandelbrot" / "mandelbrot.png",
    ),
    Example(
        name="julia",
        args=["--set", "julia"],
        expected=EXAMPLES_ROOT / "julia" / "julia.png",
    ),
    Example(
        name="mandelbrot-batched",
        args=["--set", "mandelbrot", "--batched"],
        expected=EXAMPLES_ROOT / "mandelbrot-batched" / "mandelbrot.png",
    ),
    Example(
        name="julia-small",
        args=["--set", "julia", "--width", "200", "--height", "150"],
        expected=EXAMPLES_ROOT / "julia-small" / "julia.png",
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            shutil.rmtree(path)


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[reference] {example.name}")
        _ensure_clean([example.expected.parent])
        example.expected.parent.mkdir(parents=True, exist_ok=True)
        subprocess.run(example.full_args(), check=True)
        if not example.expected.is_file():
            raise RuntimeError(f"Expected file {example.expected} was not created")
    print("\nAll reference images generated successfully.")


if __name__ == "__main__":
    main()
