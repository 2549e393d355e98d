# nexus_prover

Building blocks for a prover node client.

## Modules

### Tasks: `nexus_prover.task`

- `Task` is a unit of proving work. It holds:
  - `task_id` and `program_id`;
  - `public_inputs`;
  - `public_inputs_list`, which defaults to a list holding `public_inputs`;
  - `task_type`, a `TaskType` value.
- `Task.all_inputs()` returns every public input as a tuple of bytes.
- `str(task)` summarises the task.
- `Task.combine_proof_hashes(hashes)` joins the hash strings and returns their Keccak-256 digest as lower-case hex. It returns an empty string when there are no hashes.

### Task cache: `nexus_prover.task_cache`

- `TaskCache(capacity, expiration)` is a thread-safe cache of recent task IDs. `expiration` is in seconds.
- Entries older than `expiration` are dropped.
- When the cache is full, `insert` evicts the oldest entry.
- `contains`, `in` and `len()` all ignore entries that have expired.

### Version requirements: `nexus_prover.version_requirements`

- `VersionRequirements.from_json(text)` parses a list of `VersionConstraint` entries. Each entry has:
  - `version`;
  - `type`: `blocking`, `warning` or `notice`;
  - `message`;
  - an optional `start_date`, a Unix timestamp.
- `VersionRequirements.fetch()` is a coroutine that tries three sources in turn: the primary config URL, then the cache URL, then the fallback URL. `fetch_from_url(client, url)` fetches from one URL with an `httpx.AsyncClient`.
- `check_version_constraints(current_version, latest_version, release_url)` returns the most severe violated constraint that is active, or `None` if there is none.
  - Blocking outranks warning, and warning outranks notice.
  - The result is a `VersionCheckResult`.
  - Its message has `{current}`, `{version}`, `{latest}` and `{release_url}` filled in.
- Errors are raised as `VersionRequirementsError`.

### Version checking: `nexus_prover.version_info` and `nexus_prover.version_checker`

- `parse_version` parses a semantic version. A leading `v` is allowed.
- `VersionInfo.is_newer_version(latest)` compares versions. It returns `False` if either version fails to parse.
- `VersionInfo.update_from_release(release)` records a `GitHubRelease`.
- `VersionChecker(current_version)` queries the release API.
  - It implements `VersionCheckable`.
  - You can provide your own `VersionCheckable` for other sources or for tests.
- `version_checker_task_with_interval(checker, events, shutdown, check_interval, fetch_requirements=None)` runs the check at once. After that it wakes every 60 seconds and checks again once `check_interval` seconds have passed.
  - It puts `VersionEvent` objects on an `asyncio.Queue`.
  - It sends an event when the constraint status changes, and also whenever the release check fails.
  - It stops when the `asyncio.Event` passed as `shutdown` is set.
- `version_checker_task` runs the same loop with a daily interval.
- `start_version_checker_task(current_version, events, shutdown)` runs that daily loop against the real release API.

### Fetch backoff: `nexus_prover.fetch_state`

`TaskFetchState(backoff, fetch_delay, low_water_mark)` decides when the next task may be fetched. All times are in seconds.

- `should_fetch(tasks_in_queue)` is true when the queue is below the low-water mark and the backoff has passed.
- `set_backoff_from_server(retry_after_seconds)` sets the backoff to the server's retry time plus `fetch_delay`.
- `increase_backoff_for_error()` doubles the backoff, up to twice the base backoff.

### System information: `nexus_prover.system`

- `num_cores()` and `cpu_stats()` report the core count and CPU frequency.
- `total_memory_gb()` and `process_memory_gb()` report memory in GiB.
- `get_memory_info()` and `bytes_to_mb()` report memory in thousandths of a MiB.
- `estimate_peak_gflops(num_provers)` estimates peak GFLOP/s from the clock speed.
- `measure_gflops()` times a floating-point loop and returns GFLOP/s. It is slow, so the result is cached for the rest of the process.

### Display text: `nexus_prover.dashboard` and `nexus_prover.splash`

`nexus_prover.dashboard` provides:

- `format_compact_timestamp`;
- `clean_http_error_message`;
- `format_uptime`;
- `title_text` and `footer_text`.

`nexus_prover.splash.splash_lines(version)` returns the logo lines, a spacer and a version line.

### Fibonacci program: `nexus_prover.fib`

- `fibonacci(n, init_a, init_b)` advances the pair `n` steps with 32-bit wrapping.
- `parse_inputs(lines)` reads the inputs from lines of text.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Check a version against a set of constraints:

```python
from nexus_prover.version_requirements import VersionRequirements

reqs = VersionRequirements.from_json("""
{"version_constraints": [
  {"version": "0.9.0", "type": "warning", "message": "Upgrade: {current} < {version}"},
  {"version": "0.8.0", "type": "blocking", "message": "Blocked: {current} < {version}"}
]}
""")
result = reqs.check_version_constraints("0.7.9", None, None)
print(result.constraint_type, result.message)  # ConstraintType.BLOCKING Blocked: 0.7.9 < 0.8.0
```

Combine proof hashes:

```python
from nexus_prover.task import Task

print(Task.combine_proof_hashes(["a1b2c3d4e5f6", "7890abcdef12"]))
```

## Command

`nexus-fib` reads lines from standard input:

1. the number of steps, which is required;
2. the first starting value, which is optional and defaults to 1;
3. the second starting value, which is optional and defaults to 1.

A starting value that cannot be parsed also becomes 1. The command prints the 32-bit wrapping result.

If the first line is missing or invalid, it prints an error to standard error and exits with status 1.

```
printf '10\n1\n1\n' | nexus-fib
```

## What this package does not do

This package holds the pieces of a prover client, not the client itself. It does not:

- talk to a task orchestrator;
- generate or submit proofs;
- register users or nodes;
- store a configuration file;
- draw an interactive terminal screen.

The dashboard and splash modules only produce text for such a screen.