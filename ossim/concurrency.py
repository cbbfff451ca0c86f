"""Classic synchronisation problems run on threads, returning an event log."""

from __future__ import annotations

import argparse
import random
import sys
import threading
import time
from typing import Callable, Iterable, Sequence

Event = tuple[str, int]


def _recorder() -> tuple[list[Event], Callable[[str, int], None]]:
    events: list[Event] = []
    lock = threading.Lock()

    def record(action: str, ident: int) -> None:
        with lock:
            events.append((action, ident))

    return events, record


def _run_all(threads: list[threading.Thread]) -> None:
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def dining_philosophers(count: int = 5, rounds: int = 1) -> list[Event]:
    """Each philosopher thinks and eats ``rounds`` times.

    Chopsticks are picked up lower-numbered first, so the table cannot deadlock.
    Events are ("thinking" | "eating" | "done", philosopher).
    """
    if count < 2:
        raise ValueError("at least two philosophers are required")
    if rounds < 0:
        raise ValueError("rounds must not be negative")
    chopsticks = [threading.Semaphore(1) for _ in range(count)]
    events, record = _recorder()

    def philosopher(ident: int) -> None:
        first, second = sorted((ident, (ident + 1) % count))
        for _ in range(rounds):
            record("thinking", ident)
            time.sleep(0)
            with chopsticks[first], chopsticks[second]:
                record("eating", ident)
                time.sleep(0)
                record("done", ident)

    _run_all([threading.Thread(target=philosopher, args=(i,)) for i in range(count)])
    return events


def producer_consumer(items: Iterable[int], buffer_size: int = 5) -> list[Event]:
    """Pass ``items`` through a bounded circular buffer.

    Events are ("produced" | "consumed", item), logged while the buffer is locked.
    """
    if buffer_size < 1:
        raise ValueError("buffer size must be positive")
    values = list(items)
    buffer: list[int] = [0] * buffer_size
    empty = threading.Semaphore(buffer_size)
    full = threading.Semaphore(0)
    mutex = threading.Lock()
    events: list[Event] = []

    def producer() -> None:
        position = 0
        for item in values:
            empty.acquire()
            with mutex:
                buffer[position] = item
                events.append(("produced", item))
                position = (position + 1) % buffer_size
            full.release()

    def consumer() -> None:
        position = 0
        for _ in values:
            full.acquire()
            with mutex:
                events.append(("consumed", buffer[position]))
                position = (position + 1) % buffer_size
            empty.release()

    _run_all([threading.Thread(target=producer), threading.Thread(target=consumer)])
    return events


def readers_writers(readers: int = 5, writers: int = 2) -> list[Event]:
    """Readers share access; a writer excludes everyone. Ids start at 1.

    Events are ("reading" | "read done" | "writing" | "write done", id).
    """
    if readers < 0 or writers < 0:
        raise ValueError("reader and writer counts must not be negative")
    mutex = threading.Lock()
    write_lock = threading.Semaphore(1)
    read_count = 0
    events, record = _recorder()

    def reader(ident: int) -> None:
        nonlocal read_count
        with mutex:
            read_count += 1
            if read_count == 1:
                write_lock.acquire()
        record("reading", ident)
        time.sleep(0)
        record("read done", ident)
        with mutex:
            read_count -= 1
            if read_count == 0:
                write_lock.release()

    def writer(ident: int) -> None:
        with write_lock:
            record("writing", ident)
            time.sleep(0)
            record("write done", ident)

    threads = [threading.Thread(target=reader, args=(i,)) for i in range(1, readers + 1)]
    threads += [threading.Thread(target=writer, args=(i,)) for i in range(1, writers + 1)]
    _run_all(threads)
    return events


_MESSAGES = {
    "thinking": "Philosopher {} is thinking...",
    "eating": "Philosopher {} is eating...",
    "produced": "Producer produced: {}",
    "consumed": "Consumer consumed: {}",
    "reading": "Reader {} is reading...",
    "writing": "Writer {} is writing...",
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run one of the synchronisation problems and print what happened."""
    parser = argparse.ArgumentParser(
        prog="ossim-sync", description="Run a classic synchronisation problem."
    )
    parser.add_argument(
        "problem", choices=["philosophers", "producer-consumer", "readers-writers"]
    )
    parser.add_argument("--count", type=int, default=5, help="philosophers")
    parser.add_argument("--rounds", type=int, default=3, help="meals per philosopher")
    parser.add_argument("--items", type=int, default=10, help="items to produce")
    parser.add_argument("--buffer-size", type=int, default=5)
    parser.add_argument("--readers", type=int, default=5)
    parser.add_argument("--writers", type=int, default=2)
    args = parser.parse_args(argv)

    try:
        if args.problem == "philosophers":
            events = dining_philosophers(args.count, args.rounds)
        elif args.problem == "producer-consumer":
            items = [random.randrange(100) for _ in range(args.items)]
            events = producer_consumer(items, args.buffer_size)
        else:
            events = readers_writers(args.readers, args.writers)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for action, value in events:
        message = _MESSAGES.get(action)
        if message is not None:
            print(message.format(value))
    return 0


if __name__ == "__main__":
    sys.exit(main())