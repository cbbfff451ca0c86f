# ossim

Small simulators for the algorithms of an operating-systems course. Each
module is a plain Python library and also has a command that reads its
input from standard input (or from card-deck files) and prints a report.

## Modules

| Module | What it does |
| --- | --- |
| `ossim.scheduling` | CPU scheduling: `fcfs`, `sjf_nonpreemptive`, `sjf_preemptive`, `priority_nonpreemptive`, `priority_preemptive`, `round_robin(processes, quantum)` |
| `ossim.disk` | Disk-head scheduling: `fcfs_seek`, `sstf_seek`, `scan_seek`, `cscan_seek` |
| `ossim.replacement` | Page replacement: `fifo_replacement`, `lru_replacement`, `optimal_replacement`, plus `page_numbers` for address translation |
| `ossim.placement` | Contiguous placement: `first_fit`, `next_fit`, `best_fit`, `worst_fit`, or `place(strategy, blocks, processes)` |
| `ossim.buddy` | `BuddyAllocator` with splitting, merging of free buddies and a text tree (`render`) |
| `ossim.banker` | `need_matrix` and `safe_sequence`; an unsafe state raises `UnsafeStateError` |
| `ossim.concurrency` | `dining_philosophers`, `producer_consumer`, `readers_writers`, run on threads and returning an event log |
| `ossim.phase1` | A 100-word card-driven `Machine`; `run` executes every job in a deck |
| `ossim.phase2` | A paged 300-word `PagedMachine` with time and line limits and per-job error reports |

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using it from Python

```python
from ossim.scheduling import Process, fcfs, format_gantt, format_table

schedule = fcfs([Process(1, arrival=0, burst=5), Process(2, arrival=1, burst=3)])
schedule.average_turnaround()   # 6.0
schedule.average_waiting()      # 2.0
print(format_gantt(schedule))
print(format_table(schedule))
```

```python
from ossim.disk import fcfs_seek

fcfs_seek([98, 183], head=53, disk_size=200).total_distance()   # 130
```

```python
from ossim.buddy import BuddyAllocator, BuddyError

memory = BuddyAllocator(64)
memory.allocate("P1", 20)      # rounded up to 32 bytes; returns the address
memory.deallocate("P1")        # returns the address; raises BuddyError if unknown
print(memory.render())
```

Results are dataclasses: a `Schedule` holds `ScheduledProcess` entries
(completion, turnaround, waiting) and `GanttSlot`s; a `SeekResult` holds
`SeekStep`s; a `ReplacementResult` holds `FrameStep`s and gives
`faults()`, `hits()`, `fault_rate()` and `hit_rate()`; a `PlacementResult`
holds `PlacementStep`s and the `external_fragmentation` left over; a
`SafetyResult` holds the safe sequence and a trace of every check. Invalid
input (negative times, out-of-range tracks, a zero quantum and the like)
raises `ValueError`.

## Commands

All commands read whitespace-separated numbers from standard input unless
noted.

- `ossim-schedule {fcfs,sjf,srtf,priority,priority-preemptive,rr} [--quantum N]`
  — the process count, then `AT BT` per process (`AT BT PRIORITY` for the
  priority algorithms); for `rr` the quantum follows unless `--quantum` is
  given. Prints the Gantt chart and the process table with averages.
- `ossim-disk {fcfs,sstf,scan,cscan}` — disk size, request count, the
  requests, head position and latency per track; `sstf` instead takes the
  seek time per track and the rotational latency per access; `scan` then
  takes the direction (`1` right, `0` left).
- `ossim-pages {fifo,lru,optimal}` — address count, the logical addresses,
  page size and frame count.
- `ossim-placement` — block count, block sizes, process count, process
  sizes; runs first, best, next and worst fit in turn.
- `ossim-buddy` — an interactive menu: total memory size, then choices to
  allocate, deallocate, show the tree or exit.
- `ossim-banker` — process count, resource count, allocation matrix,
  maximum matrix and available resources; exits with status 1 when the
  state is unsafe.
- `ossim-sync {philosophers,producer-consumer,readers-writers}` with
  `--count`, `--rounds`, `--items`, `--buffer-size`, `--readers` and
  `--writers`.
- `ossim-phase1 [input] [output]` — runs the deck in `input.txt` and
  writes the line-printer output to `output.txt` by default.
- `ossim-phase2 [input] [output] [--seed N]` — runs the deck in
  `input2.txt` and appends the job reports to `output2.txt` by default;
  `--seed` makes the random frame allocation repeatable.

## Card decks

A phase 1 deck starts each job with a `$A` card, follows it with program
cards, a `$D` card and data cards; other `$` cards are skipped. The
instructions are `GD`, `PD`, `LR`, `SR`, `CR`, `BT` and `H`.

A phase 2 deck uses `$AMJ` cards carrying a four-character job id and
four-digit time and line limits, then program cards, `$DTA`, data cards and
`$END`. Each job ends with a report naming its `ErrorCode` (no error, out of
data, line limit exceeded, time limit exceeded, operation code error,
operand error or invalid page fault) and the machine's counters.

## Limits

The synchronisation problems run a fixed number of rounds or items and then
return; they do not run forever. Philosophers pick up the lower-numbered
chopstick first, so the table cannot deadlock. The phase 1 machine stops
with an error after 100,000 steps.