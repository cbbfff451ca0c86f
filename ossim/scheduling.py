"""CPU scheduling algorithms: FCFS, SJF, SRTF, priority and round robin."""

from __future__ import annotations

import argparse
import sys
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence

_NONE = -1
_IDLE = -2


@dataclass(frozen=True)
class Process:
    """A process to schedule. Lower priority values mean higher priority."""

    pid: int
    arrival: int
    burst: int
    priority: int = 0


@dataclass(frozen=True)
class ScheduledProcess:
    """A process together with the time it completed."""

    process: Process
    completion: int

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def turnaround(self) -> int:
        return self.completion - self.process.arrival

    @property
    def waiting(self) -> int:
        return self.turnaround - self.process.burst


@dataclass(frozen=True)
class GanttSlot:
    """A stretch of CPU time; ``pid`` is None while the CPU is idle."""

    pid: int | None
    start: int
    end: int

    @property
    def idle(self) -> bool:
        return self.pid is None


@dataclass
class Schedule:
    """The outcome of a scheduling run: per-process results and a Gantt chart."""

    processes: list[ScheduledProcess]
    gantt: list[GanttSlot] = field(default_factory=list)

    def average_turnaround(self) -> float:
        return sum(p.turnaround for p in self.processes) / len(self.processes)

    def average_waiting(self) -> float:
        return sum(p.waiting for p in self.processes) / len(self.processes)


def _validated(processes: Iterable[Process], positive_burst: bool = False) -> list[Process]:
    procs = list(processes)
    if not procs:
        raise ValueError("at least one process is required")
    for p in procs:
        if p.arrival < 0:
            raise ValueError(f"process P{p.pid} has a negative arrival time")
        if p.burst < 0 or (positive_burst and p.burst == 0):
            raise ValueError(f"process P{p.pid} has an invalid burst time {p.burst}")
    return procs


def fcfs(processes: Iterable[Process]) -> Schedule:
    """First come, first served, in order of arrival (ties keep input order)."""
    order = sorted(_validated(processes), key=lambda p: p.arrival)
    time = 0
    done: list[ScheduledProcess] = []
    slots: list[GanttSlot] = []
    for p in order:
        start = max(time, p.arrival)
        time = start + p.burst
        slots.append(GanttSlot(p.pid, start, time))
        done.append(ScheduledProcess(p, time))
    return Schedule(done, slots)


def _nonpreemptive(
    procs: list[Process], key: Callable[[Process], int], record_idle: bool
) -> Schedule:
    remaining = list(range(len(procs)))
    completion: dict[int, int] = {}
    slots: list[GanttSlot] = []
    time = 0
    while remaining:
        ready = [i for i in remaining if procs[i].arrival <= time]
        if not ready:
            if record_idle:
                slots.append(GanttSlot(None, time, time + 1))
            time += 1
            continue
        chosen = min(ready, key=lambda i: (key(procs[i]), procs[i].arrival))
        remaining.remove(chosen)
        start = time
        time += procs[chosen].burst
        completion[chosen] = time
        slots.append(GanttSlot(procs[chosen].pid, start, time))
    done = [ScheduledProcess(p, completion[i]) for i, p in enumerate(procs)]
    return Schedule(done, slots)


def _preemptive(procs: list[Process], key: Callable[[int, list[int]], int]) -> Schedule:
    remaining = [p.burst for p in procs]
    completion: dict[int, int] = {}
    marks: list[tuple[int | None, int]] = []
    time = 0
    prev = _NONE
    while len(completion) < len(procs):
        ready = [
            i for i, p in enumerate(procs) if p.arrival <= time and remaining[i] > 0
        ]
        if not ready:
            if prev != _IDLE:
                marks.append((None, time))
                prev = _IDLE
            time += 1
            continue
        chosen = min(ready, key=lambda i: key(i, remaining))
        if prev != chosen:
            marks.append((procs[chosen].pid, time))
            prev = chosen
        remaining[chosen] -= 1
        time += 1
        if remaining[chosen] == 0:
            completion[chosen] = time
    ends = [start for _, start in marks[1:]] + [time]
    slots = [GanttSlot(pid, start, end) for (pid, start), end in zip(marks, ends)]
    done = [ScheduledProcess(p, completion[i]) for i, p in enumerate(procs)]
    return Schedule(done, slots)


def sjf_nonpreemptive(processes: Iterable[Process]) -> Schedule:
    """Shortest job first; ties go to the earlier arrival. Idle time is not charted."""
    return _nonpreemptive(_validated(processes), lambda p: p.burst, record_idle=False)


def sjf_preemptive(processes: Iterable[Process]) -> Schedule:
    """Shortest remaining time first, one time unit at a time."""
    procs = _validated(processes, positive_burst=True)
    return _preemptive(procs, lambda i, remaining: remaining[i])


def priority_nonpreemptive(processes: Iterable[Process]) -> Schedule:
    """Non-preemptive priority; each idle time unit is charted separately."""
    return _nonpreemptive(
        _validated(processes), lambda p: p.priority, record_idle=True
    )


def priority_preemptive(processes: Iterable[Process]) -> Schedule:
    """Preemptive priority, one time unit at a time."""
    procs = _validated(processes, positive_burst=True)
    return _preemptive(procs, lambda i, remaining: procs[i].priority)


def round_robin(processes: Iterable[Process], quantum: int) -> Schedule:
    """Round robin with the given time quantum."""
    if quantum <= 0:
        raise ValueError("time quantum must be positive")
    procs = _validated(processes)
    remaining = [p.burst for p in procs]
    queue: deque[int] = deque(i for i, p in enumerate(procs) if p.arrival == 0)
    visited = set(queue)
    completion: dict[int, int] = {}
    slots: list[GanttSlot] = []
    time = 0

    def admit(predicate: Callable[[Process], bool]) -> None:
        for i, p in enumerate(procs):
            if i not in visited and predicate(p):
                queue.append(i)
                visited.add(i)

    while len(completion) < len(procs):
        if not queue:
            slots.append(GanttSlot(None, time, time + 1))
            time += 1
            admit(lambda p: p.arrival == time)
            continue
        current = queue.popleft()
        start = time
        run = min(remaining[current], quantum)
        time += run
        remaining[current] -= run
        slots.append(GanttSlot(procs[current].pid, start, time))
        admit(lambda p: start < p.arrival <= time)
        if remaining[current] > 0:
            queue.append(current)
        else:
            completion[current] = time
    done = [ScheduledProcess(p, completion[i]) for i, p in enumerate(procs)]
    return Schedule(done, slots)


def format_gantt(schedule: Schedule) -> str:
    """Render the Gantt chart as two lines of labels and times."""
    labels = "".join(" IDLE " if s.idle else f" P{s.pid}  " for s in schedule.gantt)
    times = [s.start for s in schedule.gantt]
    if schedule.gantt:
        times.append(schedule.gantt[-1].end)
    return "Gantt Chart:\n " + labels + "\n" + "".join(f"{t:<5d}" for t in times)


def format_table(schedule: Schedule, with_priority: bool = False) -> str:
    """Render the per-process table followed by the averages."""
    header = ["PID", "AT", "BT"] + (["PR"] if with_priority else []) + ["CT", "TAT", "WT"]
    lines = ["\t".join(header)]
    for sp in schedule.processes:
        p = sp.process
        row = [f"P{p.pid}", str(p.arrival), str(p.burst)]
        if with_priority:
            row.append(str(p.priority))
        row += [str(sp.completion), str(sp.turnaround), str(sp.waiting)]
        lines.append("\t".join(row))
    lines.append("")
    lines.append(f"Average Turnaround Time: {schedule.average_turnaround():.2f}")
    lines.append(f"Average Waiting Time   : {schedule.average_waiting():.2f}")
    return "\n".join(lines)


_ALGORITHMS: dict[str, Callable[[Sequence[Process]], Schedule]] = {
    "fcfs": fcfs,
    "sjf": sjf_nonpreemptive,
    "srtf": sjf_preemptive,
    "priority": priority_nonpreemptive,
    "priority-preemptive": priority_preemptive,
}
_WITH_PRIORITY = {"priority", "priority-preemptive"}


def main(argv: Sequence[str] | None = None) -> int:
    """Read processes from standard input and print the schedule."""
    parser = argparse.ArgumentParser(
        prog="ossim-schedule",
        description="Simulate CPU scheduling. Input: count, then AT BT [PRIORITY] "
        "for each process; for rr the quantum follows unless --quantum is given.",
    )
    parser.add_argument("algorithm", choices=[*_ALGORITHMS, "rr"])
    parser.add_argument("--quantum", type=int, default=None)
    args = parser.parse_args(argv)

    tokens = iter(sys.stdin.read().split())
    with_priority = args.algorithm in _WITH_PRIORITY
    try:
        count = int(next(tokens))
        processes = []
        for pid in range(1, count + 1):
            arrival, burst = int(next(tokens)), int(next(tokens))
            priority = int(next(tokens)) if with_priority else 0
            processes.append(Process(pid, arrival, burst, priority))
        if args.algorithm == "rr":
            quantum = args.quantum if args.quantum is not None else int(next(tokens))
            schedule = round_robin(processes, quantum)
        else:
            schedule = _ALGORITHMS[args.algorithm](processes)
    except StopIteration:
        print("error: not enough input", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(format_gantt(schedule))
    print()
    print(format_table(schedule, with_priority))
    return 0


if __name__ == "__main__":
    sys.exit(main())