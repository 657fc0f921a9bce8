# -*- coding: utf-8 -*-
"""
CEP Weather API Lambda CDK Stack

This stack creates the following components:
- Lambda function serving GET /weather/{cep} through Mangum
- IAM execution role with basic execution and X-Ray permissions
- CloudWatch log group for Lambda function
"""

from typing import Optional

import aws_cdk as cdk
from aws_cdk import (
    Stack,
    aws_lambda as lambda_,
    aws_iam as iam,
    aws_logs as logs,
)
from constructs import Construct

from utils.constants import EnvironmentConfig, LambdaRuntimeConfig
from utils.prefixes import ResourcePrefixes, Tags

RETENTION_BY_DAYS = {
    7: logs.RetentionDays.ONE_WEEK,
    14: logs.RetentionDays.TWO_WEEKS,
    30: logs.RetentionDays.ONE_MONTH,
}


class LambdaStack(Stack):
    """Lambda stack for CEP Weather API service"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        env_name: str,
        lambda_code_path: str = None,
        weather_api_key: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Load environment configuration
        self.env_name = env_name
        self.config = EnvironmentConfig.get_config(env_name)
        self.lambda_code_path = lambda_code_path
        self.weather_api_key = weather_api_key or ""

        # Generate resource names
        self.lambda_name = ResourcePrefixes.get_resource_name(
            env_name, ResourcePrefixes.CEP_WEATHER_API, ResourcePrefixes.LAMBDA
        )

        # Apply common tags
        self.common_tags = Tags.get_common_tags(
            env_name, ResourcePrefixes.CEP_WEATHER_API
        )

        self.lambda_role = self._create_lambda_role()
        self.log_group = self._create_log_group()
        self.lambda_function = self._create_lambda_function()

        self._apply_tags()

    def _create_lambda_role(self) -> iam.Role:
        """Create IAM execution role for Lambda function"""

        role = iam.Role(
            self,
            "CepWeatherLambdaRole",
            role_name=f"{self.lambda_name}-role",
            assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
            description=f"Execution role for CEP Weather API Lambda function ({self.env_name})",
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    "service-role/AWSLambdaBasicExecutionRole"
                )
            ],
        )

        # Add X-Ray tracing permissions
        role.add_to_policy(
            iam.PolicyStatement(
                effect=iam.Effect.ALLOW,
                actions=["xray:PutTraceSegments", "xray:PutTelemetryRecords"],
                resources=["*"],
            )
        )

        return role

    def _create_log_group(self) -> logs.LogGroup:
        """Create CloudWatch log group for Lambda function"""

        return logs.LogGroup(
            self,
            "CepWeatherLambdaLogGroup",
            log_group_name=f"/aws/lambda/{self.lambda_name}",
            retention=RETENTION_BY_DAYS.get(
                self.config["log_retention_days"], logs.RetentionDays.ONE_WEEK
            ),
            removal_policy=cdk.RemovalPolicy.DESTROY,
        )

    def _create_lambda_function(self) -> lambda_.Function:
        """Create Lambda function"""

        requirements = " ".join(LambdaRuntimeConfig.REQUIREMENTS)
        code = lambda_.Code.from_asset(
            self.lambda_code_path,
            exclude=["cdk.out", "infrastructure", "tests", ".venv", ".git", ".env*"],
            bundling=cdk.BundlingOptions(
                image=lambda_.Runtime.PYTHON_3_11.bundling_image,
                command=[
                    "bash",
                    "-c",
                    f"pip install {requirements} -t /asset-output "
                    f"&& cp -au {LambdaRuntimeConfig.PACKAGE_DIR} /asset-output",
                ],
            ),
        )

        return lambda_.Function(
            self,
            "CepWeatherLambdaFunction",
            function_name=self.lambda_name,
            runtime=lambda_.Runtime.PYTHON_3_11,
            handler=LambdaRuntimeConfig.HANDLER,
            code=code,
            role=self.lambda_role,
            # Environment-specific configuration
            memory_size=self.config["lambda_memory"],
            timeout=cdk.Duration.seconds(self.config["lambda_timeout"]),
            environment={
                "ENV": self.env_name,
                "LOG_LEVEL": self.config["log_level"],
                LambdaRuntimeConfig.WEATHER_API_KEY_ENV_VAR: self.weather_api_key,
            },
            tracing=lambda_.Tracing.ACTIVE,
            log_group=self.log_group,
            description=f"CEP Weather API Lambda function for {self.env_name} environment",
        )

    def _apply_tags(self) -> None:
        """Apply common tags to the stack"""
        for key, value in self.common_tags.items():
            cdk.Tags.of(self).add(key, value)

    @property
    def function_name(self) -> str:
        """Return Lambda function name"""
        return self.lambda_function.function_name

    @property
    def function_arn(self) -> str:
        """Return Lambda function ARN"""
        return self.lambda_function.function_arn
