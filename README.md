# philosim

A command-line simulation of the dining philosophers problem. Each
philosopher runs in its own thread and shares one fork with each neighbour.
Each philosopher thinks, takes both forks, eats, puts the forks down and
sleeps, and repeats that cycle. An observer thread checks the table every
millisecond.

## Installation

```
pip install .
```

## Usage

```
philosim NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MEALS]
```

The same command can also be started with `python -m philosim.cli`.

- `NUMBER_OF_PHILOSOPHERS`: from 1 to 200.
- `TIME_TO_DIE`: the number of milliseconds a philosopher may go without
  eating before dying. The count starts at the beginning of the previous
  meal, or at the start of the simulation before the first meal.
- `TIME_TO_EAT`: the number of milliseconds a meal takes.
- `TIME_TO_SLEEP`: the number of milliseconds a philosopher sleeps after
  eating.
- `MEALS` (optional): each philosopher stops after eating this many meals.
  If it is left out or is 0, the philosophers go on until one of them dies.

Every argument must be a non-negative decimal integer. Leading whitespace and
a leading `+` are accepted. Anything after the digits is rejected. If the
arguments are rejected, the program prints the reason (when there is a
specific one) and then `Wrong Arguments Syntax`, and it exits with status 1.
Otherwise it exits with status 0.

Example:

```
philosim 5 800 200 200 7
```

The program prints one line for each event. The time is in milliseconds
since the start:

```
0 ms Philospher 1 is thinking
0 ms Philospher 2 is thinking
0 ms Philospher 2 has taken left fork
0 ms Philospher 2 has taken right fork
0 ms Philospher 2 is eating
...
```

A death is reported as `<time> ms philosopher <id> died`. No further states
are printed after it, and every philosopher stops.

The observer stops watching as soon as one philosopher dies. It also stops as
soon as any single philosopher has eaten `MEALS` meals. After that point it
reports no more deaths, and the remaining philosophers go on until each has
eaten their own `MEALS` meals. A lone philosopher has only one fork and
cannot eat. It waits until it is declared dead.

## Library use

```python
import sys

from philosim.args import parse_args
from philosim.table import Table

settings = parse_args(["4", "410", "200", "200", "3"])
died = Table(settings, sys.stdout).run()
```

- `philosim.args.parse_args` takes the arguments without the program name. It
  returns a `Settings` dataclass, or raises `philosim.args.ArgumentError`.
  The error's `message` attribute holds the reason and may be empty.
- `philosim.args.parse_int` parses one integer argument. It raises
  `ValueError` on malformed text.
- `philosim.table.Table.run` runs the simulation and writes the event lines to
  the given stream. It returns `True` if a philosopher died.
- `philosim.timing.timestamp_ms` and `philosim.timing.smart_sleep` are the
  millisecond clock and sleep that the simulation uses.

## Running the tests

```
pip install .[test]
pytest
```