"""Basic simulation example."""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from deliverysim.core.simulator import Simulator
from deliverysim.utils.logger import setup_logger
from configs import load_default_config, merge_configs


def main():
    """Run a two-traveller delivery simulation and print each timeline."""
    logger = setup_logger("BasicSimulation")

    logger.info("=== Basic Delivery Simulation ===")

    config = merge_configs(load_default_config(), {
        'simulation': {
            'starting_boxes': 6,
            'starting_travellers': 2,
        },
    })

    simulator = Simulator(config)

    # Let the first traveller get going, then speed things up
    for _ in range(60):
        simulator.tick(1.0 / 60.0)
    simulator.max_speed()

    results = simulator.run_until_complete()

    logger.info(f"Delivered {results['delivered_boxes']}/{results['total_boxes']} boxes "
                f"in {results['makespan']:.1f}s")

    for info in simulator.get_traveller_timelines():
        logger.info(f"{info['name']} (#{info['id']}):")
        for segment in info['timeline']:
            logger.info(f"  {segment['start_time']:6.2f} - {segment['end_time']:6.2f}  {segment['activity']}")


if __name__ == "__main__":
    main()
