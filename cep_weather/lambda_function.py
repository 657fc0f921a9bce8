"""
AWS Lambda entry point for the CEP weather API.
"""

import logging

from mangum import Mangum

from cep_weather.app import create_app
from cep_weather.config import LambdaConfig, Settings

# Configure logging
logging.basicConfig(
    level=LambdaConfig.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Fails the cold start when WEATHER_API_KEY is missing
settings = Settings.from_env()
app = create_app(settings)

logger.info("CEP weather API initialized for environment: %s", LambdaConfig.ENV)

# AWS Lambda handler using Mangum
lambda_handler = Mangum(app, lifespan="off")
