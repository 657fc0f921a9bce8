# -*- coding: utf-8 -*-
"""
CEP Weather API Gateway CDK Stack

This stack creates the following components:
- REST API Gateway with environment-specific CORS settings
- GET /weather/{cep} resource
- Lambda function integration (add_lambda_integration method provided)
"""

import aws_cdk as cdk
from aws_cdk import (
    Stack,
    aws_apigateway as apigateway,
    aws_lambda as lambda_,
    aws_logs as logs,
)
from constructs import Construct

from utils.constants import EnvironmentConfig, CORSConfig
from utils.prefixes import ResourcePrefixes, Tags


class APIGatewayStack(Stack):
    """API Gateway stack for CEP Weather API service"""

    def __init__(
        self, scope: Construct, construct_id: str, env_name: str, **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.env_name = env_name
        self.config = EnvironmentConfig.get_config(env_name)

        self.api_name = ResourcePrefixes.get_resource_name(
            env_name, ResourcePrefixes.CEP_WEATHER_API, ResourcePrefixes.API_GW
        )

        self.common_tags = Tags.get_common_tags(
            env_name, ResourcePrefixes.CEP_WEATHER_API
        )

        self.api = self._create_api_gateway()
        self._create_api_resources()

        self._apply_tags()

    def _create_api_gateway(self) -> apigateway.RestApi:
        """Create REST API Gateway with basic configuration"""

        cors_options = apigateway.CorsOptions(
            allow_origins=CORSConfig.get_allowed_origins(self.env_name),
            allow_methods=["GET", "OPTIONS"],
            allow_headers=["Content-Type", "X-Amz-Date", "X-Amz-Security-Token"],
            allow_credentials=False,
        )

        log_group = logs.LogGroup(
            self,
            "CepWeatherAPIAccessLogs",
            log_group_name=f"/aws/apigateway/{self.api_name}",
            retention=(
                logs.RetentionDays.ONE_WEEK
                if self.env_name == "dev"
                else (
                    logs.RetentionDays.TWO_WEEKS
                    if self.env_name == "staging"
                    else logs.RetentionDays.ONE_MONTH
                )
            ),
            removal_policy=cdk.RemovalPolicy.DESTROY,
        )

        return apigateway.RestApi(
            self,
            "CepWeatherAPI",
            rest_api_name=self.api_name,
            description=f"CEP Weather API Gateway for {self.env_name} environment",
            deploy_options=apigateway.StageOptions(
                stage_name=self.env_name,
                access_log_destination=apigateway.LogGroupLogDestination(
                    log_group=log_group
                ),
                access_log_format=apigateway.AccessLogFormat.json_with_standard_fields(
                    caller=True,
                    http_method=True,
                    ip=True,
                    protocol=True,
                    request_time=True,
                    resource_path=True,
                    response_length=True,
                    status=True,
                    user=True,
                ),
            ),
            default_cors_preflight_options=cors_options,
            cloud_watch_role=True,
        )

    def _create_api_resources(self) -> None:
        """Create API resource structure (Lambda connection in separate method)"""

        self.weather_resource = self.api.root.add_resource("weather")

        # GET /weather/{cep}
        self.cep_resource = self.weather_resource.add_resource("{cep}")

    def add_lambda_integration(self, lambda_function: lambda_.Function) -> None:
        """
        Connect Lambda function to the weather endpoint.
        Called after both stacks are created.
        """

        lambda_integration = apigateway.LambdaIntegration(
            lambda_function,
            proxy=True,
            allow_test_invoke=True,
        )

        self.cep_resource.add_method("GET", lambda_integration)

        # Any other path still reaches the app so it can answer with its usage hint
        self.proxy_resource = self.api.root.add_proxy(any_method=False)
        self.proxy_resource.add_method("GET", lambda_integration)

    def _apply_tags(self) -> None:
        """Apply common tags to the stack"""
        for key, value in self.common_tags.items():
            cdk.Tags.of(self).add(key, value)

    @property
    def api_url(self) -> str:
        """Return API Gateway URL"""
        return self.api.url
