"""
Entrypoint for running the gym registration gRPC server as a module.
"""

import argparse
import logging
import sys

from gym_registration.core.config import settings
from gym_registration.main import run

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Run the gym registration gRPC service.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Defaults from environment / .env
  python -m gym_registration

  # Override listen address
  python -m gym_registration --host 0.0.0.0 --port 50052
        """,
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help=f"Host to bind to (default: {settings.GRPC_HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help=f"Port to bind to (default: {settings.GRPC_PORT})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        help=f"Logging level (default: {settings.LOG_LEVEL})",
    )
    args = parser.parse_args()

    overrides = {}
    if args.host is not None:
        overrides["GRPC_HOST"] = args.host
    if args.port is not None:
        overrides["GRPC_PORT"] = args.port
    if args.log_level is not None:
        overrides["LOG_LEVEL"] = args.log_level

    try:
        run(settings.model_copy(update=overrides))
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0
    except Exception as e:
        logger.error(f"Failed to start server: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
