"""Console entry point for SocialNet."""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from loguru import logger

from config.schemas import load_config
from data import ActivityLogger, StateManager
from engine import SocialGraph
from models import CorruptFile
from ui.console import ConsoleShell
from ui.state import SessionState


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="SocialNet interactive console",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        help="Directory holding users.txt and posts.txt",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    args = parser.parse_args(argv)

    overrides = {}
    if args.data_dir:
        overrides["storage"] = {"data_dir": args.data_dir}
    config = load_config(args.config, overrides)

    # Configure logging
    log_level = "DEBUG" if args.verbose else config.log_level
    logger.remove()
    logger.add(sys.stderr, level=log_level)

    activity_log = None
    if config.activity_log.enabled:
        activity_log = ActivityLogger.from_config(config.activity_log)
        logger.info(f"Activity log: {activity_log.log_path}")

    store = StateManager(config.storage)
    try:
        graph = SocialGraph.load(store, activity_log=activity_log, verify=config.check_integrity)
    except CorruptFile as e:
        logger.error(f"Failed to load state: {e}")
        print(f"Cannot start: stored data is corrupt ({e})", file=sys.stderr)
        if e.hint:
            print(f"Hint: {e.hint}", file=sys.stderr)
        if activity_log is not None:
            activity_log.close()
        return 1

    shell = ConsoleShell(SessionState(graph, store), save_on_exit=config.save_on_exit)
    try:
        return shell.run()
    finally:
        if activity_log is not None:
            activity_log.close()


if __name__ == "__main__":
    sys.exit(main())
