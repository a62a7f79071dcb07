"""Facebook Ads Report API - server entry point.

Usage:
    adsreport-serve
    adsreport-serve --host 127.0.0.1 --port 8080 --log-level DEBUG

Environment Variables:
    API_HOST: Bind address (default 0.0.0.0)
    API_PORT: Bind port (default 8000)
    API_ACCESS_LOG: Set to 'false' to silence per-request access logs
    LOG_LEVEL / LOG_FILE: Logging settings
"""

import argparse
import sys
from typing import List, Optional

import uvicorn
from loguru import logger

from adsreport.api.app import create_app
from adsreport.core.config import ConfigurationManager
from adsreport.core.constants import LOG_FORMAT
from adsreport.core.exceptions import ConfigurationError
from shared.utils.env import get_env, get_env_bool, get_env_int
from shared.utils.logging import intercept_std_logging, setup_logging

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the Facebook Ads Report API")
    parser.add_argument("--host", default=get_env("API_HOST", DEFAULT_HOST))
    parser.add_argument("--port", type=int, default=get_env_int("API_PORT", DEFAULT_PORT))
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--log-level", help="Override LOG_LEVEL")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = ConfigurationManager(args.config).load_config({"log_level": args.log_level})
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    setup_logging(level=config.log_level, format=LOG_FORMAT, log_file=config.log_file)
    intercept_std_logging()

    logger.info(f"Starting API on {args.host}:{args.port}")
    uvicorn.run(
        create_app(config),
        host=args.host,
        port=args.port,
        log_config=None,
        access_log=get_env_bool("API_ACCESS_LOG", True),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
