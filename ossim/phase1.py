"""A tiny card-driven machine: load a job, run it, print to a line printer."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Iterator, Sequence

_WORDS = 100
_OPCODES = "GPLSCBH"
_DIGITS = "0123456789"


def _operand(ir: list[str]) -> int:
    if ir[2] not in _DIGITS or ir[3] not in _DIGITS:
        raise ValueError(f"operand error in instruction {''.join(ir)!r}")
    return int(ir[2] + ir[3])


class Machine:
    """A machine of 100 four-byte words, one register and a toggle."""

    step_limit = 100_000

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.memory: list[list[str]] = [["\0"] * 4 for _ in range(_WORDS)]
        self.ir: list[str] = ["\0"] * 4
        self.register: list[str] = ["\0"] * 4
        self.toggle = False
        self.ic = 0

    def _load_card(self, card: str, rp: int) -> int:
        i = 0
        pos = 0
        while pos < len(card) and card[pos] in _OPCODES:
            if rp + i >= _WORDS:
                raise RuntimeError("program does not fit in memory")
            word = self.memory[rp + i]
            if card[pos] == "H":
                word[0] = "H"
                pos += 1
            else:
                for k in range(4):
                    word[k] = card[pos + k] if pos + k < len(card) else "\0"
                pos += 4
            if i >= 10:
                break
            i += 1
        return rp + i

    def execute(self, program: Iterable[str], data: Iterable[str]) -> str:
        """Load the program cards, run them and return what was printed."""
        self._reset()
        rp = 0
        for card in program:
            rp = self._load_card(card.rstrip("\n"), rp)

        cards: Iterator[str] = iter(data)
        printed: list[str] = []
        for _ in range(self.step_limit):
            if not 0 <= self.ic < _WORDS:
                raise RuntimeError(f"instruction counter out of range: {self.ic}")
            self.ir = list(self.memory[self.ic])
            self.ic += 1
            op = self.ir[0]
            if op == "L":
                self.register = list(self.memory[_operand(self.ir)])
            elif op == "S":
                self.memory[_operand(self.ir)] = list(self.register)
            elif op == "C":
                self.toggle = self.memory[_operand(self.ir)] == self.register
            elif op == "B":
                if self.toggle:
                    self.ic = _operand(self.ir) - 1
                    self.toggle = False
            elif op == "H":
                printed.append("\n\n")
                return "".join(printed)
            elif op == "G":
                self._read(next(cards, None))
            elif op == "P":
                printed.append(self._write())
        raise RuntimeError("step limit exceeded")

    def _read(self, card: str | None) -> None:
        if card is None:
            raise RuntimeError("out of data")
        base = _operand(self.ir)
        for c, ch in enumerate(card.rstrip("\n")[:40]):
            if base + c // 4 < _WORDS:
                self.memory[base + c // 4][c % 4] = ch

    def _write(self) -> str:
        base = _operand(self.ir)
        words = self.memory[base : base + 10]
        return "".join(" " if ch == "\0" else ch for word in words for ch in word) + "\n"


def parse_jobs(lines: Iterable[str]) -> list[tuple[list[str], list[str]]]:
    """Split a card deck into (program cards, data cards) per job."""
    jobs: list[tuple[list[str], list[str]]] = []
    program: list[str] | None = None
    data: list[str] | None = None
    for raw in lines:
        line = raw.rstrip("\n")
        if line.startswith("$A"):
            program, data = [], []
            jobs.append((program, data))
        elif data is not None and program is not None and jobs[-1][1] is data and _started(jobs):
            data.append(line)
        elif line.startswith("$D") and program is not None:
            _mark_started(jobs)
        elif line.startswith("$"):
            continue
        elif program is not None:
            program.append(line)
    return [(p, d) for p, d in jobs if _was_started(p, d, jobs)]


_started_ids: set[int] = set()


def _mark_started(jobs: list[tuple[list[str], list[str]]]) -> None:
    _started_ids.add(id(jobs[-1][1]))


def _started(jobs: list[tuple[list[str], list[str]]]) -> bool:
    return id(jobs[-1][1]) in _started_ids


def _was_started(p: list[str], d: list[str], jobs: object) -> bool:
    started = id(d) in _started_ids
    _started_ids.discard(id(d))
    return started


def run(lines: Iterable[str]) -> str:
    """Run every job in a card deck and return the line printer output."""
    machine = Machine()
    return "".join(machine.execute(program, data) for program, data in parse_jobs(lines))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the jobs of an input deck and write the line printer file."""
    parser = argparse.ArgumentParser(prog="ossim-phase1", description="Run a card deck.")
    parser.add_argument("input", nargs="?", default="input.txt")
    parser.add_argument("output", nargs="?", default="output.txt")
    args = parser.parse_args(argv)
    try:
        with open(args.input, encoding="utf-8") as deck:
            text = run(deck)
        with open(args.output, "w", encoding="utf-8") as printer:
            printer.write(text)
    except OSError:
        print("ERROR OPENING input and output files, program exsiting")
        return 1
    except (RuntimeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())