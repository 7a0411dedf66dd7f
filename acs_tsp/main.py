# ----------------- main.py -----------------
import argparse
from pathlib import Path

from acs_tsp.aco.engine import AntColonySystem, cfg
from acs_tsp.datasets.tsplib import download_instance, load_instance, scan_instances


def relative_error(found, best_known):
    if not best_known:
        return None
    return (found - best_known) / best_known


def run_benchmark(directory, num_files=None, plot_dir=None, **solver_kwargs):
    """
    Solve every instance in `directory` (the first `num_files` when given) and print
    the best tour found and its relative error against the best known value.
    """
    paths = scan_instances(directory)
    if num_files is not None:
        paths = paths[:num_files]

    results = []
    errors = []
    for path in paths:
        instance = load_instance(path)
        print(f"Instance: {instance.name}")

        aco = AntColonySystem(instance.coordinates, instance.dimension, **solver_kwargs)
        result = aco.run()
        err = relative_error(result.best_length, instance.best_known)
        print(f"Best found: {result.best_length}")
        if err is not None:
            print(f"Error: {err:.10f}")
            errors.append(err)
        else:
            print("Error: n/a (no best known value)")

        if plot_dir:
            save_plots(aco, result, instance.name, plot_dir)
        results.append((instance, result.best_length, err))

    if errors:
        print(f"Average error: {sum(errors) / len(errors):f}")
    return results


def save_plots(aco, result, name, plot_dir):
    from acs_tsp.aco.pheromone_heatmap import best_length_curve, pheromone_composite
    from acs_tsp.aco.visualizer import draw_tour

    out = Path(plot_dir)
    out.mkdir(parents=True, exist_ok=True)
    draw_tour(aco.coordinates, result.best_tour,
              title=f"{name} - Length: {result.best_length}",
              save_path=out / f"{name}_tour.png")
    best_length_curve(aco.best_length_history, save_path=out / f"{name}_convergence.png")
    if aco.pheromone_history:
        pheromone_composite(aco.pheromone_history, save_path=out / f"{name}_pheromones.png")


def build_argparser():
    p = argparse.ArgumentParser(
        prog="acs-tsp",
        description="Ant Colony System with 2-opt for Euclidean TSP instances.",
    )
    p.add_argument("--dir", default=cfg.get("instances_dir"), help="Directory containing .tsp instances")
    p.add_argument("--num-files", type=int, default=cfg.get("num_files"), help="Solve only the first N instances")
    p.add_argument("--time-limit", type=float, default=None, help="Seconds per instance")
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    p.add_argument("--ants", type=int, default=None, help="Number of ants")
    p.add_argument("--verbose", action="store_true", help="Print the best length after every iteration")
    p.add_argument("--plot-dir", default=None, help="Save tour, convergence and pheromone plots here")
    p.add_argument("--download", action="append", default=[], metavar="NAME",
                   help="Fetch this TSPLIB instance into --dir before solving; repeatable")
    return p


def main(argv=None):
    args = build_argparser().parse_args(argv)
    for name in args.download:
        download_instance(name, output_dir=args.dir)
    run_benchmark(
        args.dir,
        num_files=args.num_files,
        plot_dir=args.plot_dir,
        seed=args.seed,
        num_ants=args.ants,
        time_limit=args.time_limit,
        verbose=args.verbose or None,
        record_pheromones=bool(args.plot_dir),
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
