"""Bouncing atoms: circles that move in a window and collide elastically.

The atoms are either generated at random or read from a text file whose
first number is the atom count, followed by one line per atom holding its
colour, radius, centre x, centre y, and velocity components vx, vy.
"""

from __future__ import annotations

import math
import random
import re
import sys
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from itertools import combinations

from .drawing import NO_COLOR, WHITE, Drawing

WIDTH = 640
HEIGHT = 480
DELAY = 0.040  # seconds between frames
FRAMES = 200
DEFAULT_COUNT = 10

R_MIN = 10.0
R_MAX = 30.0
V_MIN = 1.0
V_MAX = 5.0
PLACEMENT_ATTEMPTS = 3

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_INT = re.compile(r"\s*([+-]?\d+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class SimulationError(Exception):
    """Raised when the atoms cannot be set up."""


@dataclass
class Atom:
    """A circle with a colour, a radius, a centre and a velocity."""

    color: int
    r: float
    x: float
    y: float
    vx: float
    vy: float

    def format(self) -> str:
        """The atom as one line of the input file format."""
        return (
            f"{self.color} {self.r:g} {self.x:g} {self.y:g} "
            f"{self.vx:g} {self.vy:g}"
        )


class _Scanner:
    """Reads whitespace-separated numbers; once a read fails, all later ones do."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self.failed = False

    def _take(self, pattern: re.Pattern[str]) -> str | None:
        if self.failed:
            return None
        match = pattern.match(self._text, self._pos)
        if match is None:
            self.failed = True
            return None
        self._pos = match.end()
        return match.group(1)

    def read_int(self) -> int | None:
        token = self._take(_INT)
        if token is None:
            return None
        value = int(token)
        if not _INT_MIN <= value <= _INT_MAX:
            self.failed = True
            return None
        return value

    def read_float(self) -> float | None:
        token = self._take(_FLOAT)
        if token is None:
            return None
        value = float(token)
        if math.isinf(value):
            self.failed = True
            return None
        return value


def _read_text(path) -> str:
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return handle.read()
    except OSError as exc:
        raise SimulationError(f"Cannot open file {path}") from exc


def read_count(path) -> int:
    """Read the number of atoms, the first number in the file."""
    count = _Scanner(_read_text(path)).read_int()
    if count is None or count <= 0:
        raise SimulationError("Invalid number of atoms in file")
    return count


def load_atoms(path, n: int) -> list[Atom]:
    """Read n atoms from the file, skipping the leading count."""
    scanner = _Scanner(_read_text(path))
    scanner.read_int()
    atoms = []
    for index in range(n):
        color = scanner.read_int()
        values = [scanner.read_float() for _ in range(5)]
        if scanner.failed:
            raise SimulationError(f"File format incorrect for atom {index}")
        atoms.append(Atom(color, *values))
    return atoms


def random_atoms(n: int, rng: random.Random) -> list[Atom]:
    """Create n non-overlapping atoms inside the window at random."""
    atoms: list[Atom] = []
    for index in range(n):
        for _ in range(PLACEMENT_ATTEMPTS):
            r = rng.uniform(R_MIN, R_MAX)
            x = rng.uniform(r, WIDTH - r)
            y = rng.uniform(r, HEIGHT - r)
            if any(math.hypot(other.x - x, other.y - y) < other.r + r for other in atoms):
                continue
            speed = rng.uniform(V_MIN, V_MAX)
            angle = rng.uniform(0.0, 2 * math.pi)
            color = rng.randint(0, 0xFFFFFF)
            atoms.append(
                Atom(color, r, x, y, speed * math.cos(angle), speed * math.sin(angle))
            )
            break
        else:
            raise SimulationError(
                f"Could not place atom {index} without intersection "
                f"after {PLACEMENT_ATTEMPTS} attempts."
            )
    return atoms


def _bounce_off_walls(atom: Atom) -> None:
    if atom.x - atom.r <= 0:
        atom.x = atom.r
        atom.vx = -atom.vx
    if atom.x + atom.r >= WIDTH:
        atom.x = WIDTH - atom.r
        atom.vx = -atom.vx
    if atom.y - atom.r <= 0:
        atom.y = atom.r
        atom.vy = -atom.vy
    if atom.y + atom.r >= HEIGHT:
        atom.y = HEIGHT - atom.r
        atom.vy = -atom.vy


def _into_frame(vx: float, vy: float, angle: float) -> tuple[float, float]:
    speed = math.sqrt(vx * vx + vy * vy)
    rotated = math.atan2(vy, vx) - angle
    return speed * math.cos(rotated), speed * math.sin(rotated)


def _out_of_frame(horiz: float, vert: float, angle: float) -> tuple[float, float]:
    speed = math.sqrt(horiz * horiz + vert * vert)
    final = math.atan2(vert, horiz) + angle
    return speed * math.cos(final), speed * math.sin(final)


def _collide(a: Atom, b: Atom) -> None:
    dx = b.x - a.x
    dy = b.y - a.y
    dist = math.sqrt(dx * dx + dy * dy)
    sum_r = a.r + b.r
    if dist >= sum_r:
        return

    overlap = sum_r - dist
    norm = dist if dist != 0 else 1.0
    b.x += dx / norm * overlap
    b.y += dy / norm * overlap

    tangent = math.atan2(dx, -dy)
    a_horiz, a_vert = _into_frame(a.vx, a.vy, tangent)
    b_horiz, b_vert = _into_frame(b.vx, b.vy, tangent)

    m1 = a.r * a.r
    m2 = b.r * b.r
    center = (m1 * a_vert + m2 * b_vert) / (m1 + m2)

    a.vx, a.vy = _out_of_frame(a_horiz, 2 * center - a_vert, tangent)
    b.vx, b.vy = _out_of_frame(b_horiz, 2 * center - b_vert, tangent)


def update(atoms: Sequence[Atom]) -> None:
    """Advance the atoms one step, bouncing off walls and off each other."""
    for atom in atoms:
        atom.x += atom.vx
        atom.y += atom.vy
        _bounce_off_walls(atom)
    for a, b in combinations(atoms, 2):
        _collide(a, b)


def draw(atoms: Iterable[Atom], drawing: Drawing) -> None:
    """Clear the window and draw every atom as a filled circle."""
    drawing.fill_rectangle(0, 0, WIDTH, HEIGHT, WHITE, NO_COLOR)
    for atom in atoms:
        diameter = int(2 * atom.r)
        drawing.fill_ellipse(
            int(atom.x - atom.r), int(atom.y - atom.r), diameter, diameter,
            atom.color, NO_COLOR,
        )
    drawing.flush()


def _initial_atoms(args: Sequence[str]) -> list[Atom]:
    if not args:
        print(DEFAULT_COUNT)
        return random_atoms(DEFAULT_COUNT, random.Random())
    if len(args) == 1:
        count = read_count(args[0])
        print(count)
        return load_atoms(args[0], count)
    print(0)
    return []


def _run(
    args: Sequence[str],
    drawing: Drawing,
    pause: Callable[[], object],
    sleep: Callable[[float], object],
) -> int:
    try:
        with drawing:
            drawing.begin(WIDTH, HEIGHT, "Atoms", WHITE, False)
            atoms = _initial_atoms(args)
            for atom in atoms:
                print(atom.format())
            draw(atoms, drawing)

            print("Press <ENTER> to continue...", flush=True)
            try:
                pause()
            except EOFError:
                pass

            for _ in range(FRAMES):
                update(atoms)
                draw(atoms, drawing)
                sleep(DELAY)

            print("Close window to exit...", flush=True)
            drawing.end()
    except SimulationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv=None) -> int:
    """Run the animation; the optional single argument names an atom file."""
    args = sys.argv[1:] if argv is None else list(argv)
    return _run(args, Drawing(), input, time.sleep)


if __name__ == "__main__":
    sys.exit(main())