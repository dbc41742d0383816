# main.py
"""
Main entry point for Tearfall.

This script orchestrates the entire application lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the display and loads every image asset.
4. Runs the main frame loop.
5. Handles clean shutdown.
"""
import logging
import sys
import cProfile
import pstats
import io

from utils import setup_logging, load_config


def main(config_path: str = 'config.json') -> int:
    """
    The main function to run the application.

    Returns:
        int: Process exit status.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except (OSError, ValueError) as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return 1

    setup_logging(config)

    logging.info("--- Tearfall Starting ---")

    run_params = config.get('run_control', {})

    from assets import AssetStore, AssetLoadError
    from controls import InputHandler
    from simulation import Simulation
    from visualization import Visualizer

    # --- Component Initialization ---
    # 1. The display must exist before images can be converted to its format.
    visualizer = Visualizer(config.get('display', {}))

    # 2. Assets are loaded exactly once, then state is sized to the actual
    #    display. Missing assets and invalid settings are both fatal.
    try:
        assets = AssetStore.load(config.get('assets', {}))
        simulation = Simulation(config, assets, visualizer.size)
    except (AssetLoadError, ValueError) as e:
        logging.critical(f"Startup aborted: {e}")
        visualizer.close()
        return 1

    # 3. Input wiring.
    controls = InputHandler(simulation)

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    log_throttle = run_params.get('log_throttle_frames', 600)
    max_frames = run_params.get('max_frames', 0)

    running = True
    frame_num = 0

    if profiler:
        profiler.enable()
    while running:
        if not visualizer.draw(simulation, controls):
            running = False
        frame_num += 1

        # Hot loops must throttle logs
        if frame_num % log_throttle == 0:
            logging.info(
                f"Frame {frame_num} | {len(simulation.tears)} tears, "
                f"{len(simulation.collage.items)} collage images, {visualizer.fps:.1f} fps"
            )
            logging.debug(
                f"Emission rate every {simulation.emission.emission_rate} frames, "
                f"emitting={simulation.emission.is_emitting}"
            )

        if max_frames and frame_num >= max_frames:
            logging.info(f"Reached max_frames ({max_frames}). Stopping.")
            running = False
    if profiler:
        profiler.disable()

    simulation.shutdown()
    visualizer.close()
    logging.info("Frame loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Tearfall Shutting Down ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
