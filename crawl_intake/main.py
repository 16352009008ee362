"""Main entry point for the Crawl Intake service."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
import time
from pathlib import Path
from typing import Optional, Tuple

import uvicorn

from crawl_intake.api import create_app
from crawl_intake.config.environment import EnvironmentConfig
from crawl_intake.config.exceptions import ConfigurationError
from crawl_intake.config.loader import load_config, validate_config_file
from crawl_intake.config.models import AppConfig
from crawl_intake.dispatch import DispatchFanout, DispatchWorkerPool
from crawl_intake.ingestion import JobIngestor
from crawl_intake.logging import get_logger
from crawl_intake.logging.config import configure_logging
from crawl_intake.persistence import JobStore, close_database, init_database
from crawl_intake.queue import RedisQueuePublisher, build_publisher

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file > INFO.

    Args:
        config_path: Path to configuration file, None to search the defaults
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with env_config.log_level resolved

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override.upper()
    elif env_config.log_level:
        pass
    elif app_config.logging and app_config.logging.level:
        env_config.log_level = app_config.logging.level
    else:
        env_config.log_level = "INFO"

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crawl Intake - accepts URL batches and queues them for crawling"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument("--host", default=None, help="Interface to bind (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (overrides config)")
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Validate the configuration file and exit",
    )
    return parser


def main(argv=None) -> int:
    """
    Main entry point for the Crawl Intake service.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)
    publisher = None

    if args.check_config:
        config_path = args.config or Path("config.yaml")
        if not config_path.exists():
            print(f"✗ Configuration file not found: {config_path}", file=sys.stderr)
            return 1
        return 0 if validate_config_file(config_path) else 1

    try:
        # Step 1: Load configuration (before logging for format detection)
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        # Step 2: Configure logging
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        host = args.host or app_config.server.host
        port = args.port or app_config.server.port

        logger.info(
            "Crawl Intake starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "queue_backend": app_config.queue.backend,
                "worker_count": app_config.dispatch.worker_count,
            },
        )

        # Step 3: Initialize the job store
        init_database(env_config.database_url)
        job_store = JobStore()

        # Step 4: Connect the work queue
        publisher = build_publisher(app_config.queue, env_config)
        if isinstance(publisher, RedisQueuePublisher) and not publisher.ping():
            raise ConfigurationError(
                "Cannot reach Redis at REDIS_URL",
                suggestions=[
                    "Check that Redis is running and REDIS_URL is correct",
                    "Set queue.backend to 'memory' for local runs without Redis",
                ],
            )

        # Step 5: Wire dispatch and ingestion
        fanout = DispatchFanout(job_store, publisher)
        dispatcher = DispatchWorkerPool(fanout, worker_count=app_config.dispatch.worker_count)
        ingestor = JobIngestor(job_store, dispatcher)

        app = create_app(
            ingestor,
            dispatcher=dispatcher,
            shutdown_timeout=app_config.dispatch.shutdown_timeout_seconds,
        )

        logger.info(
            f"Serving on {host}:{port}",
            extra={
                "event": "service.serving",
                "host": host,
                "port": port,
                "queue": publisher.queue_name,
            },
        )

        # Step 6: Serve until interrupted; uvicorn handles SIGINT/SIGTERM
        uvicorn.run(app, host=host, port=port, log_config=None)

        logger.info(
            "Crawl Intake stopped",
            extra={
                "event": "service.stopping",
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during startup",
            extra={
                "event": "service.startup.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1
    finally:
        if publisher is not None:
            publisher.close()
        close_database()


if __name__ == "__main__":
    sys.exit(main())
