# File: src/parking_capacity/main.py
"""
Main application entry point for the Parking Capacity Service

Loads settings, configures logging, builds the seeded store and serves
the HTTP API with uvicorn.
"""

from typing import List, Optional
import argparse
import logging

import uvicorn

from .infrastructure.config import ConfigurationError, ParkingSettings, load_settings, setup_logging
from .presentation.api import create_app


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="parking-capacity",
        description="Run the parking capacity REST service"
    )
    parser.add_argument("--config", help="Path to a YAML settings file (default: $PARKING_CONFIG)")
    parser.add_argument("--host", help="Bind address, overrides the settings file")
    parser.add_argument("--port", type=int, help="Bind port, overrides the settings file")
    parser.add_argument("--seed", type=int, help="Random seed for the startup occupancy pattern")
    return parser.parse_args(argv)


def apply_overrides(settings: ParkingSettings, args: argparse.Namespace) -> ParkingSettings:
    """
    Return settings with the command-line overrides applied and re-validated

    Raises:
        ConfigurationError: if an override is out of range
    """
    data = settings.model_dump()
    if args.host is not None:
        data["server"]["host"] = args.host
    if args.port is not None:
        data["server"]["port"] = args.port
    if args.seed is not None:
        data["seeding"]["random_seed"] = args.seed
    return ParkingSettings.from_dict(data)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application"""
    args = parse_args(argv)

    try:
        settings = apply_overrides(load_settings(args.config), args)
    except ConfigurationError as e:
        logging.basicConfig(level=logging.ERROR)
        logging.error(f"Fatal error in main: {e}")
        return 1

    logger = setup_logging(settings.logging)
    logger.info("Starting Parking Capacity Service...")

    app = create_app(settings=settings)
    try:
        uvicorn.run(app, host=settings.server.host, port=settings.server.port, log_config=None)
    finally:
        logger.info("Application shutting down...")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
