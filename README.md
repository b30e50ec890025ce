# atomsim

An animation of atoms bouncing around a 640×480 window. Each atom is drawn as a filled
circle. Atoms bounce off the walls and collide with each other elastically. Their masses are
proportional to the square of their radii.

## Installation

```
pip install .
```

Images are drawn with Pillow. The window uses tkinter, which must be available in your Python
installation.

## Running

```
atomsim
```

With no arguments, ten atoms are placed at random. Each atom lies fully inside the window, and
no atom overlaps one already placed. An atom gets a random radius (10–30), speed (1–5),
direction and colour. If an atom still overlaps after three tries, the program stops with an
error.

```
atomsim atoms.txt
```

With one argument, the atoms are read from that file. The first number in the file is the
count of atoms and must be positive. After the count come six numbers for each atom:

```
color radius x y vx vy
```

`color` is an integer RGB value, for example `16711680` for red. `x` and `y` give the centre
of the atom, and `vx` and `vy` give its velocity per step.

The program works in this order:

1. It prints the count of atoms, then each atom's values on one line in the same format.
2. It draws the first frame and waits for Enter. End of input also continues.
3. It runs 200 update steps, 40 ms apart.
4. It prints `Close window to exit...` and waits until you close the window.

Some problems end the program with an `Error: ...` message on standard error and exit
status 1:

- the file cannot be opened
- the count is invalid
- an atom line is malformed
- random placement fails

With more than one argument, the program prints `0` and runs with no atoms.

## Library use

### `atomsim.drawing`

`Drawing` is an RGB image with drawing primitives, and all of them clip to the image.

- Start with `begin(width, height, title, color=WHITE, flush=True)` and finish with `end()`.
  `end()` shows the image and waits for the display to close. You can also use the object
  as a context manager: leaving the `with` block normally calls `end()`.
- The primitives are:
  - `draw_point`
  - `draw_line`
  - `draw_rectangle`
  - `fill_rectangle`
  - `draw_ellipse`
  - `fill_ellipse`
  - `draw_polygon`
  - `fill_polygon`
  - `draw_text`

  The fill methods take an outline colour. The default `NO_COLOR` draws no outline.
- `width()`, `height()` and `pixel(x, y)` read the image back. `pixel` raises `IndexError`
  outside the image.
- `flush()` shows pending output. With `flush=True`, every primitive is shown as soon as it
  is drawn.
- Using the surface before `begin()` raises `DrawingError`, and so does calling `begin()`
  twice.

Colours are 24-bit integers, and `rgb(color)` splits one into a `(r, g, b)` tuple.

By default a `Drawing` opens a `TkDisplay` window. You can pass your own `display_factory`:
a callable that takes a title and returns an object with `show(image)` and `wait_closed()`.
This lets you draw without a window, for example in tests.

### `atomsim.simulation`

- `Atom` is a dataclass with the fields `color`, `r`, `x`, `y`, `vx` and `vy`.
  `Atom.format()` returns the atom as one line of the file format.
- `read_count(path)` reads the atom count from a file.
- `load_atoms(path, n)` reads `n` atoms from a file.
- `random_atoms(n, rng)` creates atoms at random using a `random.Random`.
- `update(atoms)` advances the atoms one step.
- `draw(atoms, drawing)` renders the atoms onto a `Drawing`.
- `main(argv=None)` runs the animation and returns the exit status.

`read_count`, `load_atoms` and `random_atoms` raise `SimulationError` on failure.

## Limits

The package only shows the animation in a window. It does not save frames or animations to
files. The window size, frame count and frame delay are fixed, and the command has no options
to change them.