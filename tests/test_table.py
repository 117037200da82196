import io
import re
import time

from philosim.args import Settings
from philosim.table import Table

STATE_LINE = re.compile(r"^\d+ ms Philospher (\d+) (.+)$")
DIED_LINE = re.compile(r"^\d+ ms philosopher (\d+) died$")


def _lines(out):
    return out.getvalue().splitlines()


def test_forks_are_shared_around_the_table():
    table = Table(Settings(4, 1000, 10, 10), io.StringIO())
    assert len(table.forks) == 4
    assert [p.id for p in table.philosophers] == [1, 2, 3, 4]
    for seat, philosopher in enumerate(table.philosophers):
        assert philosopher.left_fork is table.forks[seat]
        assert philosopher.right_fork is table.forks[(seat + 1) % 4]
    assert table.philosophers[-1].right_fork is table.forks[0]


def test_print_state_format():
    out = io.StringIO()
    table = Table(Settings(2, 1000, 10, 10), out)
    table.print_state(table.philosophers[0], "is thinking")
    lines = _lines(out)
    assert len(lines) == 1
    match = STATE_LINE.match(lines[0])
    assert match is not None
    assert match.group(1) == "1"
    assert match.group(2) == "is thinking"


def test_check_dead_fresh_table_is_alive():
    out = io.StringIO()
    table = Table(Settings(2, 10_000, 10, 10), out)
    assert table.check_dead(table.philosophers[0]) is False
    assert table.is_dead() is False
    assert out.getvalue() == ""


def test_check_dead_starvation_announced_once():
    out = io.StringIO()
    table = Table(Settings(2, 0, 10, 10), out)
    time.sleep(0.01)
    assert table.check_dead(table.philosophers[1]) is True
    assert table.is_dead() is True
    table.check_dead(table.philosophers[1])
    table.check_dead(table.philosophers[0])
    died = [line for line in _lines(out) if DIED_LINE.match(line)]
    assert len(died) == 1
    assert DIED_LINE.match(died[0]).group(1) == "2"


def test_print_state_silent_after_death():
    out = io.StringIO()
    table = Table(Settings(2, 0, 10, 10), out)
    time.sleep(0.01)
    table.check_dead(table.philosophers[0])
    before = out.getvalue()
    table.print_state(table.philosophers[1], "is eating")
    assert out.getvalue() == before


def test_check_dead_meal_goal_reached():
    table = Table(Settings(2, 10_000, 10, 10, 3), io.StringIO())
    philosopher = table.philosophers[0]
    philosopher.meals_eaten = 3
    assert table.check_dead(philosopher) is True
    assert table.is_dead() is False
    assert table.check_dead(table.philosophers[1]) is False


def test_eat_records_meal():
    out = io.StringIO()
    table = Table(Settings(2, 10_000, 0, 0), out)
    philosopher = table.philosophers[0]
    philosopher.last_meal_time = -500
    philosopher.eat()
    assert philosopher.meals_eaten == 1
    assert philosopher.last_meal_time >= 0
    assert STATE_LINE.match(_lines(out)[0]).group(2) == "is eating"


def test_eat_skipped_after_death():
    table = Table(Settings(2, 0, 0, 0), io.StringIO())
    time.sleep(0.01)
    table.check_dead(table.philosophers[0])
    table.philosophers[1].eat()
    assert table.philosophers[1].meals_eaten == 0


def test_take_forks_even_starts_left():
    out = io.StringIO()
    table = Table(Settings(3, 10_000, 10, 10), out)
    philosopher = table.philosophers[1]
    philosopher.take_forks()
    try:
        assert philosopher.left_fork.locked()
        assert philosopher.right_fork.locked()
        states = [STATE_LINE.match(line).group(2) for line in _lines(out)]
        assert states == ["has taken left fork", "has taken right fork"]
    finally:
        philosopher.left_fork.release()
        philosopher.right_fork.release()


def test_take_forks_odd_starts_right():
    out = io.StringIO()
    table = Table(Settings(3, 10_000, 10, 10), out)
    philosopher = table.philosophers[0]
    philosopher.take_forks()
    try:
        states = [STATE_LINE.match(line).group(2) for line in _lines(out)]
        assert states == ["has taken right fork", "has taken left fork"]
    finally:
        philosopher.left_fork.release()
        philosopher.right_fork.release()


def test_dine_once_releases_forks():
    out = io.StringIO()
    table = Table(Settings(2, 10_000, 0, 0), out)
    philosopher = table.philosophers[0]
    philosopher.dine_once()
    assert not philosopher.left_fork.locked()
    assert not philosopher.right_fork.locked()
    assert philosopher.meals_eaten == 1
    states = [STATE_LINE.match(line).group(2) for line in _lines(out)]
    assert states[0] == "is thinking"
    assert states[-1] == "is sleeping"


def test_lone_philosopher_dies():
    out = io.StringIO()
    table = Table(Settings(1, 50, 10, 10), out)
    assert table.run() is True
    lines = _lines(out)
    assert STATE_LINE.match(lines[0]).group(2) == "is thinking"
    assert STATE_LINE.match(lines[1]).group(2) == "has taken left fork"
    assert DIED_LINE.match(lines[-1]).group(1) == "1"
    assert table.philosophers[0].meals_eaten == 0
    assert not table.forks[0].locked()


def test_meal_goal_ends_simulation_without_death():
    out = io.StringIO()
    table = Table(Settings(3, 2000, 20, 20, 2), out)
    assert table.run() is False
    assert all(p.meals_eaten >= 2 for p in table.philosophers)
    eating = [
        STATE_LINE.match(line).group(1)
        for line in _lines(out)
        if STATE_LINE.match(line) and STATE_LINE.match(line).group(2) == "is eating"
    ]
    for philosopher in table.philosophers:
        assert eating.count(str(philosopher.id)) == philosopher.meals_eaten
    assert not any(DIED_LINE.match(line) for line in _lines(out))


def test_starvation_stops_everyone():
    out = io.StringIO()
    table = Table(Settings(4, 30, 100, 100), out)
    assert table.run() is True
    died = [line for line in _lines(out) if DIED_LINE.match(line)]
    assert len(died) == 1
    assert all(not fork.locked() for fork in table.forks)