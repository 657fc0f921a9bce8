"""
Local development server for the CEP weather API.
Run this from the root directory: python -m cep_weather.local_dev
"""

import logging
import os
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from cep_weather.config import LambdaConfig, Settings
from cep_weather.errors import ConfigurationError

root_dir = Path(__file__).parent.parent

logger = logging.getLogger(__name__)


def main() -> None:
    """Load .env and serve the application with uvicorn."""
    env_file = root_dir / ".env"
    env_loaded = env_file.exists() and load_dotenv(env_file)

    # Read after .env so its LOG_LEVEL applies
    log_level = os.getenv("LOG_LEVEL", LambdaConfig.LOG_LEVEL).upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if env_loaded:
        logger.info("Loaded environment variables from %s", env_file)
    else:
        logger.info("No .env file found. Using variables from the shell.")

    # Check the key here so a missing one stops the server before it binds
    try:
        Settings.from_env()
    except ConfigurationError as e:
        logger.critical("%s", e)
        sys.exit(1)

    port = int(os.getenv("PORT", LambdaConfig.DEFAULT_PORT))
    logger.info("Server starting on port %s", port)

    uvicorn.run(
        "cep_weather.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=port,
        log_level=log_level.lower(),
    )


if __name__ == "__main__":
    main()
