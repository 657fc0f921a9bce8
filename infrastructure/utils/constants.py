"""
Constants and configuration values for infrastructure
"""

from typing import Dict, Any


class EnvironmentConfig:
    """Environment-specific configuration"""

    DEV = {
        "lambda_memory": 256,
        "lambda_timeout": 30,
        "log_level": "DEBUG",
        "log_retention_days": 7,
    }

    STAGING = {
        "lambda_memory": 512,
        "lambda_timeout": 30,
        "log_level": "INFO",
        "log_retention_days": 14,
    }

    PROD = {
        "lambda_memory": 1024,
        "lambda_timeout": 30,
        "log_level": "INFO",
        "log_retention_days": 30,
    }

    @classmethod
    def get_config(cls, env: str) -> Dict[str, Any]:
        """Get configuration for environment"""
        configs = {"dev": cls.DEV, "staging": cls.STAGING, "prod": cls.PROD}
        return configs.get(env, cls.DEV)


class APIEndpoints:
    """API endpoint paths"""

    WEATHER_BY_CEP = "/weather/{cep}"


class CORSConfig:
    """CORS configuration for API Gateway"""

    DEV_ORIGINS = [
        "*",
    ]

    STAGING_ORIGINS = [
        "*",
    ]

    PROD_ORIGINS = [
        "*",
    ]

    @classmethod
    def get_allowed_origins(cls, env: str) -> list:
        """Return allowed CORS origins for the environment"""
        origins_map = {
            "dev": cls.DEV_ORIGINS,
            "staging": cls.STAGING_ORIGINS,
            "prod": cls.PROD_ORIGINS,
        }
        return origins_map.get(env, cls.DEV_ORIGINS)


class LambdaRuntimeConfig:
    """Lambda packaging and runtime settings"""

    HANDLER = "cep_weather.lambda_function.lambda_handler"
    PACKAGE_DIR = "cep_weather"
    REQUIREMENTS = ["fastapi", "mangum", "aiohttp", "pydantic"]
    WEATHER_API_KEY_ENV_VAR = "WEATHER_API_KEY"
