# main.py
"""
Main entry point for the animated background.

This script orchestrates the whole lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the host window and mounts the animation on it.
4. Runs the refresh loop until the window closes.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config
import numpy as np
import cProfile
import pstats
import io


def main():
    """
    The main function to run the background.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Neural Background Starting ---")

    window_params = config['window']
    run_params = config['run_control']

    from host import PygameHost
    from animation import AnimationDriver

    seed = run_params.get('seed')
    rng = np.random.default_rng(seed)
    if seed is not None:
        logging.info(f"RNG initialized with seed: {seed}")

    # --- Component Initialization ---
    host = PygameHost(
        width=window_params['width'],
        height=window_params['height'],
        fullscreen=window_params.get('fullscreen', False)
    )
    driver = AnimationDriver(host, rng=rng, log_throttle=run_params.get('log_throttle_frames', 300))
    host.set_unmount_handler(driver.unmount)
    driver.mount()

    max_frames = run_params.get('max_frames')
    profiler = cProfile.Profile() if run_params.get('profile') else None

    if profiler is not None:
        profiler.enable()
    frames = host.run(max_frames=max_frames)
    if profiler is not None:
        profiler.disable()

    host.close()
    logging.info(f"Refresh loop finished after {frames} ticks.")

    if profiler is not None:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Neural Background Shutting Down ---")


if __name__ == "__main__":
    main()
