"""The dining table: philosophers, forks, and the observer that watches them."""

from __future__ import annotations

import sys
import threading
import time
from typing import TextIO

from .args import Settings
from .timing import smart_sleep, timestamp_ms

__all__ = ["Philosopher", "Table"]

_OBSERVER_INTERVAL_S = 0.001
_ODD_START_DELAY_S = 0.0015
_LONE_WAIT_S = 0.0001


class Philosopher:
    """One diner seated between two forks."""

    def __init__(
        self,
        table: Table,
        pid: int,
        left_fork: threading.Lock,
        right_fork: threading.Lock,
    ) -> None:
        self.table = table
        self.id = pid
        self.left_fork = left_fork
        self.right_fork = right_fork
        self.meal_lock = threading.Lock()
        self.meals_eaten = 0
        self.last_meal_time = table.elapsed_ms()

    def __repr__(self) -> str:
        return f"Philosopher(id={self.id}, meals_eaten={self.meals_eaten})"

    def _take(self, fork: threading.Lock, side: str) -> None:
        fork.acquire()
        self.table.print_state(self, f"has taken {side} fork")

    def take_forks(self) -> None:
        """Acquire both forks: even ids start left, odd ids pause then start right."""
        if self.id % 2 == 0:
            self._take(self.left_fork, "left")
            self._take(self.right_fork, "right")
        else:
            time.sleep(_ODD_START_DELAY_S)
            self._take(self.right_fork, "right")
            self._take(self.left_fork, "left")

    def eat(self) -> None:
        """Record a meal and spend ``time_to_eat`` eating, unless someone died."""
        if self.table.is_dead():
            return
        with self.meal_lock:
            self.last_meal_time = self.table.elapsed_ms()
            self.meals_eaten += 1
        self.table.print_state(self, "is eating")
        smart_sleep(self.table.settings.time_to_eat)

    def think(self) -> None:
        """Announce thinking, unless someone died."""
        if self.table.is_dead():
            return
        self.table.print_state(self, "is thinking")

    def sleep(self) -> None:
        """Spend ``time_to_sleep`` sleeping, unless someone died."""
        if self.table.is_dead():
            return
        self.table.print_state(self, "is sleeping")
        smart_sleep(self.table.settings.time_to_sleep)

    def dine_once(self) -> None:
        """Think, take the forks, eat, put the forks down and sleep."""
        self.think()
        if self.table.settings.count == 1:
            with self.left_fork:
                self.table.print_state(self, "has taken left fork")
                while not self.table.is_dead():
                    time.sleep(_LONE_WAIT_S)
            return
        self.take_forks()
        try:
            self.eat()
        finally:
            self.left_fork.release()
            self.right_fork.release()
        self.sleep()

    def _goal_reached(self) -> bool:
        goal = self.table.settings.meals_goal
        with self.meal_lock:
            return goal > 0 and self.meals_eaten >= goal

    def run(self) -> None:
        """Dine until someone dies or this philosopher has eaten enough."""
        while not self.table.is_dead():
            self.dine_once()
            if self._goal_reached():
                break


class Table:
    """Shared state of one simulation: forks, philosophers and the death flag."""

    def __init__(self, settings: Settings, output: TextIO | None = None) -> None:
        self.settings = settings
        self.output = output if output is not None else sys.stdout
        self._died = False
        self._died_lock = threading.Lock()
        self._print_lock = threading.Lock()
        self.start_time = timestamp_ms()
        count = settings.count
        self.forks = [threading.Lock() for _ in range(count)]
        self.philosophers = [
            Philosopher(self, seat + 1, self.forks[seat], self.forks[(seat + 1) % count])
            for seat in range(count)
        ]

    def elapsed_ms(self) -> int:
        """Milliseconds since the table was laid."""
        return timestamp_ms() - self.start_time

    def is_dead(self) -> bool:
        """Whether a philosopher has died."""
        with self._died_lock:
            return self._died

    def _write(self, line: str) -> None:
        with self._print_lock:
            self.output.write(line + "\n")
            self.output.flush()

    def print_state(self, philosopher: Philosopher, state: str) -> None:
        """Log a state change, unless the simulation has already ended in death."""
        if self.is_dead():
            return
        self._write(f"{self.elapsed_ms()} ms Philospher {philosopher.id} {state}")

    def check_dead(self, philosopher: Philosopher) -> bool:
        """Return True when this philosopher ends the watch: by starving or by being full.

        A starving philosopher is declared dead and announced exactly once.
        """
        with philosopher.meal_lock:
            since_meal = self.elapsed_ms() - philosopher.last_meal_time
        if since_meal > self.settings.time_to_die:
            with self._died_lock:
                if not self._died:
                    now = self.elapsed_ms()
                    self._died = True
                    self._write(f"{now} ms philosopher {philosopher.id} died")
                    return True
        goal = self.settings.meals_goal
        with philosopher.meal_lock:
            return goal > 0 and philosopher.meals_eaten >= goal

    def observe(self) -> None:
        """Poll every philosopher each millisecond until one ends the watch."""
        while True:
            time.sleep(_OBSERVER_INTERVAL_S)
            if any(self.check_dead(p) for p in self.philosophers):
                break

    def run(self) -> bool:
        """Run the whole simulation; return True if a philosopher died."""
        diners = [
            threading.Thread(target=p.run, name=f"philosopher-{p.id}")
            for p in self.philosophers
        ]
        for thread in diners:
            thread.start()
        observer = threading.Thread(target=self.observe, name="observer")
        observer.start()
        for thread in diners:
            thread.join()
        observer.join()
        return self.is_dead()