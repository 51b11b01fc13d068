# privfacility

Tools for studying facility location under differential privacy.

Each location in the plane is both a potential facility (with an opening
cost `f`) and a demand point (with `b` clients). The package provides:

- **Instance generation** (`privfacility.generate`) with a homogeneous
  Poisson point process (`poisson_point_process`,
  `generate_instance_uniform`) or a Matérn cluster process
  (`matern_point_process`, `generate_instance`). Facility costs are drawn
  uniformly from `[f_min, f_max]`; client counts are drawn from a normal
  distribution, rounded and clipped to `[0, b_max]`.
- **The Laplace mechanism** (`laplacian`, `apply_laplacian` in
  `privfacility.locations`) that sets `b_noisy = b + Laplace(1/eps)`.
- **Assignment algorithms**:
  - `privfacility.opt.compute_assignments`: each location connects to the
    facility that minimises cost plus distance, and capacities follow the
    true demand.
  - `privfacility.privacy.private_assignment`: the same connections, but
    capacities come from the noisy counts plus a margin of
    `2/eps * sqrt(k) * log(2n/alpha)` for a facility serving `k` locations.
  - `privfacility.privacy.private_reconnection_assignment`: open facilities
    within `2 * delta` of each other are merged through a greedy maximal
    independent set (cheapest facilities first, ties by id); locations
    within `delta` of a chosen facility join it, the rest connect to the
    cheapest chosen facility. Capacities are then set as above. The
    building blocks `reconnect`, `compute_mis_with_reassignment` and
    `compute_mis` are public too.
- **Evaluation** through `compute_costs` (facility cost and connection cost)
  and `validate_solution` (every facility can serve its clients).
- **Benchmarks** that sweep instance size, cluster density `gamma`, average
  client count, `delta` and `eps`, plus a `delta` sweep on real-world
  coordinates.

## Installation

```
pip install .
```

Install with the test extra to run the test suite:

```
pip install ".[test]"
pytest
```

## Library use

```python
from privfacility.locations import Location, compute_costs, validate_solution
from privfacility.opt import compute_assignments
from privfacility.privacy import private_assignment, private_reconnection_assignment

points = [
    Location(id=0, x=2.0, y=5.0, f=1.0, b=2.0, b_noisy=2.0),
    Location(id=1, x=4.0, y=5.0, f=1.5, b=2.0, b_noisy=2.0),
    Location(id=2, x=6.0, y=5.0, f=1.0, b=2.0, b_noisy=2.0),
    Location(id=3, x=3.0, y=5.0, f=4.0, b=2.0, b_noisy=2.0),
]

opt = compute_assignments(points)
private = private_assignment(points, 1.0, 0.1)
reconnected = private_reconnection_assignment(points, 1.0, 0.1, 1.0)

facility_cost, connection_cost = compute_costs(reconnected)
print(validate_solution(reconnected), facility_cost + connection_cost)
```

Location ids must equal their position in the list; assignments refer to
facilities by id. The algorithms return new lists and leave their input
unchanged.

The generators and `laplacian` / `apply_laplacian` take an optional
`numpy.random.Generator` as `rng`, so results can be made reproducible:

```python
import numpy as np
from privfacility.generate import generate_instance_uniform
from privfacility.locations import apply_laplacian

rng = np.random.default_rng(7)
instance = generate_instance_uniform(1.0, 1.0, 50, 1.0, 2.0, 2.5, 1.5, 8, rng)
noisy = apply_laplacian(instance, 1.0, rng)
```

The benchmark functions and commands draw fresh random numbers on every run.

## File formats

Instance files (`.in`), read by `load_points_from_file` and written by
`save_points_to_file`, have one location per line:

```
id,x,y,f,b,b_noisy
```

Assignment files (`.out`), written by `save_results_to_file`, have:

```
id,x,y,capacity,connected_to,delta
```

Numbers are written with four decimal places. `generate_timestamped_filename`
builds names that carry a timestamp and a random four-digit hex code, e.g.
`out/reconn_2024-01-31_12-00-00_0a3f.out`, creating the folder if needed.

## Commands

All commands write into folders relative to the current directory
(`input/`, `out/` and a per-benchmark `.../out/` folder), creating them when
needed. They print a usage line and exit with status 1 on wrong arguments.

Run all three algorithms on an existing instance file:

```
privfacility-pipeline <input_filename> <eps> <alpha> <delta>
```

Benchmark over instance size `n`, averaging costs over the instances for
each `n` (add `-s` to also save every assignment):

```
privfacility-size-benchmark <instance_amount> <n_step> <n_min> <n_max> <width> <height> <eps> <alpha> <delta> <gamma> <f_min> <f_max> [-s]
```

Benchmark over cluster density `gamma`:

```
privfacility-gamma-benchmark <instance_amount> <n> <width> <height> <eps> <alpha> <delta> <gamma_min> <gamma_max> <gamma_step> <f_min> <f_max>
```

Benchmark over the average number of clients per location (from 1 up to
`b_avg_max`):

```
privfacility-clients-benchmark <instance_amount> <n> <width> <height> <delta> <eps> <alpha> <gamma> <f_min> <f_max> <b_avg_max> <b_avg_step>
```

Sweep the reconnection radius `delta` on generated instances, from 0 up to
`max(width, height)` (`use_uniform` is `0` for clustered, `1` for uniform
instances; `delta` is the cluster radius), or on one instance file up to
`delta_max`, saving the cheapest valid assignment:

```
privfacility-delta-benchmark <instance_amount> <n> <width> <height> <delta> <delta_step> <eps> <alpha> <gamma> <f_min> <f_max> <use_uniform>
privfacility-delta-pipeline <filename> <eps> <alpha> <delta_step> <delta_max>
```

Sweep the privacy budget `eps` on generated instances, or on one instance
file; the client counts are re-noised for each `eps`:

```
privfacility-eps-benchmark <instance_amount> <n> <width> <height> <eps_step> <eps_min> <eps_max> <alpha> <delta> <gamma> <f_min> <f_max> <use_uniform>
privfacility-eps-pipeline <filename> <eps_step> <eps_min> <eps_max> <alpha> <delta>
```

Real-world data comes as a CSV with a header row and the columns
`id,x,y,b`, with ids starting at 1. Ids become zero-based, ids above 101
are shifted down by one (the data has no id 101), and coordinates are
scaled into the unit square. Prepare a noisy instance file from it, or run
the `delta` sweep (0 to 1 in steps of 0.01) on it directly:

```
privfacility-prep-data <filename> <out_filename> <f_min> <f_max> <eps>
privfacility-real-world <filename> <instance_amount> <eps> <alpha> <f_min> <f_max>
```

Benchmark results are written as CSV files. The normalised cost reported by
the `delta` and client benchmarks is `(reconn - opt) / (no_reconn - opt)`,
so 0 matches the non-private optimum and 1 matches private assignment
without reconnection. In the `delta` and `eps` sweeps a reconnection cost of
-1 marks a solution that failed `validate_solution`.

## What it does not do

The package writes raw CSV results only; it has no plotting or report
generation, and no command to aggregate results across benchmark runs.