# einsteinpuzzle

An engine for the "Einstein" logic puzzle. A solution is a 6×6 grid whose
six rows each hold the things 1 to 6 in some order. The puzzle gives a set
of hints that is just enough to deduce the whole grid. The hints are
"near", "left of", "same column", "between" and "open cell".

## Installation

```
pip install .
```

No third-party libraries are needed.

## Command line

Generate a puzzle, then print its solution (one line per row, things shown
as `A1`, `B4`, …) and its hints (one per line):

```
einsteinpuzzle
einsteinpuzzle --seed 12345
```

If you give `--seed`, the output is the same on every run. Without it, the
seed comes from the current time.

## Library use

```python
from einsteinpuzzle.mtrandom import Random
from einsteinpuzzle.generator import gen_puzzle, get_hints_qty, open_initial
from einsteinpuzzle.possibilities import Possibilities

rng = Random(12345)
puzzle, rules = gen_puzzle(rng)      # puzzle[row][col], list of Rule
for rule in rules:
    print(rule.as_text())
print(get_hints_qty(rules))          # (vertical, horizontal)

board = Possibilities()
open_initial(board, rules)           # apply the "open cell" hints
print(board.format())
```

## Modules

### `einsteinpuzzle.mtrandom`

`Random(seed=None)` is an MT19937 generator. `Random.from_key(keys)` seeds it
from a sequence of integers. It provides these methods:

- `gen_int32()`, which returns an integer in `[0, 0xffffffff]`;
- `gen_real2()`, which returns a float in `[0, 1)`;
- `gen_int(n)`, which returns an integer in `[0, n)`.

### `einsteinpuzzle.possibilities`

`Possibilities` holds the grid of candidates that are still open for each
cell. Columns and rows are numbered from 0; things are numbered from 1.
Its methods are:

- `set`, `exclude` and `check_singles`, which change the grid and pass on
  the effect of cells left with one candidate and of things left with one
  cell;
- `is_possible`, `is_defined`, `get_defined`, `is_solved` and
  `is_valid(puzzle)`, which query it;
- `format()`, which renders it as text;
- `save(stream)` and `Possibilities.load(stream)`, which read and write it
  in binary form.

The module also provides `write_int`, `read_int`, `write_string` and
`read_string`. They handle 32-bit little-endian integers and
length-prefixed UTF-8 strings on binary streams.

### `einsteinpuzzle.rules`

This module holds the hint classes `NearRule`, `DirectionRule`, `OpenRule`,
`UnderRule` and `BetweenRule`. All of them derive from `Rule`, which has
these methods:

- `as_text()`;
- `apply(pos)`, which returns `True` if the hint changed the grid;
- `apply_on_start()`;
- `show_opts()`, which returns a `ShowOptions` value;
- `save(stream)`.

Each hint class has a `generate(puzzle, rng)` and a `load(stream)`
classmethod. `gen_rule(puzzle, rng)` picks a random hint.
`save_rules(rules, stream)` and `load_rules(stream)` write and read a list
of hints. `load_rules` raises `ValueError` on an unknown hint type.

### `einsteinpuzzle.generator`

- `gen_puzzle(rng)` builds a random solution. It adds hints until they
  solve the solution, then removes every hint that is not needed.
- `can_solve(puzzle, rules)` reports whether the hints alone fix every
  cell. It raises `RuntimeError` if a hint contradicts the solution.
- `open_initial`, `get_hints_qty`, `save_puzzle`, `load_puzzle` and
  `get_rule` are also here. `get_rule` raises `IndexError` when there is no
  such hint.
- `main(argv=None)` is the command above.

### `einsteinpuzzle.puzzle`

`Puzzle(solved, possibilities, scale=1.0)` holds the rules of interaction
for the board. It does no drawing.

- `get_cell_no(x, y)` maps a point to a `CellPosition`, which has the fields
  `found`, `col`, `row` and `sub_no`.
- `on_mouse_button_down(button, x, y)` acts on a click. Button 1 places a
  candidate and button 3 excludes it.
- `on_mouse_move(x, y)` tracks the highlighted cell.
- `set_commands(win, fail)` registers callables that run on victory or on a
  wrong move.
- The optional attributes `on_redraw(col, row)` and `on_sound(name)` are
  notified when a cell needs redrawing or a sound (`"laser.wav"`,
  `"whizz.wav"`) should play.

### `einsteinpuzzle.msgwriter`

`MsgWriter` compiles printf-style messages into a binary catalogue:

- `add(key, msg)` stores a message. It supports `%d`, `%i`, `%s`, `%f`,
  `%e`, numbered `%1$s` and `%%`. It warns when it replaces a key that
  already exists.
- `save(buffer)` writes the catalogue. `buffer` is any object that
  provides `put_byte`, `put_integer`, `put_utf8` and `put_data`, each
  returning the number of bytes it wrote.

Malformed messages raise `MessageFormatError`.

### `einsteinpuzzle.resourcefile` and `einsteinpuzzle.resources`

`ResourceFile(path)` opens a `CRF` resource archive (version 2). It provides
these methods:

- `get_directory()`, which returns a list of `DirectoryEntry`;
- `load(...)`, which returns the resource's bytes and inflates them with
  zlib when they are compressed;
- `close()`.

`ResourceStream` reads a resource sequentially. Errors raise
`ResourceError`.

`ResourcesCollection(directories, locale_score=None)` gathers every `.res`
file in the given directories and orders the files by priority. Resource
names have the form `name[_language][_COUNTRY].ext`; `split_file_name`
splits them into their parts. For each resource the collection keeps the
variants in order of locale score, best first.

- `locale_score(language, country)` scores each variant. Without it, only
  variants that have neither a language nor a country are kept.
- `get_resource`, `get_data`, `create_stream` and `for_each_in_group`
  access the resources.

### `einsteinpuzzle.streams`

`UtfStreamReader(binary_stream)` reads UTF-8 one character at a time. It
provides `get_next_char()`, `unget_char(ch)` and `is_eof()`, and it can be
iterated over.

## What this package does not do

There is no graphical game here. The package does not draw anything, play
sounds, show menus or an options window, or keep a high-score table. It
does not manage saved-game slots or store user settings. `Puzzle` and the
serialisation helpers are the pieces a front end would build on.

## Tests

```
pip install .[test]
pytest
```