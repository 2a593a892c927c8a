"""Main entry point for the DeliverySim simulator."""

import argparse
import sys
from pathlib import Path

import yaml
from tqdm import tqdm

from deliverysim.core.simulator import Simulator
from deliverysim.utils.logger import setup_logger
from deliverysim.utils.io import export_timeline_csv, save_json
from deliverysim.utils.visualization import plot_results
from configs import load_config, load_default_config, merge_configs


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="DeliverySim: discrete event simulation of box delivery"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a configuration file layered over configs/default.yaml",
    )
    parser.add_argument(
        "--boxes",
        type=int,
        default=None,
        help="Override simulation.starting_boxes",
    )
    parser.add_argument(
        "--travellers",
        type=int,
        default=None,
        help="Override simulation.starting_travellers",
    )
    parser.add_argument(
        "--time-scale",
        type=float,
        default=None,
        help="Simulated seconds per real second",
    )
    parser.add_argument(
        "--tick",
        type=float,
        default=1.0 / 60.0,
        help="Real seconds per driver tick",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="results",
        help="Directory to save results",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Generate Gantt chart and activity plots",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Export traveller timelines as CSV",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args()


def build_config(args) -> dict:
    """Layer the user config and command line overrides over the defaults."""
    config = load_default_config()
    if args.config:
        config = merge_configs(config, load_config(args.config) or {})

    overrides = {}
    if args.boxes is not None:
        overrides['starting_boxes'] = args.boxes
    if args.travellers is not None:
        overrides['starting_travellers'] = args.travellers
    if args.time_scale is not None:
        overrides['time_scale'] = args.time_scale

    if overrides:
        config = merge_configs(config, {'simulation': overrides})
    return config


def main():
    """Main function."""
    args = parse_args()

    # Setup logging
    log_level = "DEBUG" if args.verbose else "INFO"
    logger = setup_logger("DeliverySim", level=log_level)

    logger.info("=== DeliverySim: Box Delivery Simulation ===")

    try:
        config = build_config(args)
        sim_cfg = config['simulation']
        logger.info(f"Boxes: {sim_cfg['starting_boxes']}, travellers: {sim_cfg['starting_travellers']}")
        logger.info(f"Leg duration: {sim_cfg['leg_duration']}s, dwell: {sim_cfg['dwell_delay']}s")

        simulator = Simulator(config)

        with tqdm(total=simulator.total_boxes, desc="Delivered", unit="box",
                  disable=args.verbose) as progress:
            def update_progress(sim: Simulator) -> None:
                progress.update(sim.delivered_count - progress.n)

            results = simulator.run_until_complete(tick_seconds=args.tick, on_tick=update_progress)

        travellers = simulator.get_traveller_timelines()

        # Print results
        logger.info("=== Simulation Results ===")
        logger.info(f"Delivered: {results['delivered_boxes']}/{results['total_boxes']}")
        logger.info(f"Makespan: {results['makespan']:.2f}s")
        if 'throughput' in results:
            logger.info(f"Throughput: {results['throughput']:.3f} boxes/s")
        if 'mean_utilization' in results:
            logger.info(f"Mean Utilization: {results['mean_utilization']:.1%}")
        for issue in simulator.issues:
            logger.warning(f"Issue at t={issue.time:.2f}: {issue.kind} - {issue.message}")

        # Save results
        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        results_file = output_dir / "results.yaml"
        with open(results_file, 'w') as f:
            yaml.dump(results, f, default_flow_style=False)
        logger.info(f"Results saved to {results_file}")

        timelines_file = output_dir / "timelines.json"
        save_json(travellers, timelines_file)
        logger.info(f"Timelines saved to {timelines_file}")

        if args.csv:
            csv_path = export_timeline_csv(travellers, output_dir / "timelines.csv")
            logger.info(f"Timelines exported to {csv_path}")

        # Generate visualizations
        if args.visualize:
            logger.info("Generating visualization plots...")
            plot_results(results, travellers, output_dir)
            logger.info(f"Plots saved to {output_dir}")

        logger.info("Simulation completed successfully!")
        return 0 if results['is_complete'] else 1

    except Exception as e:
        logger.error(f"Simulation failed: {str(e)}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
