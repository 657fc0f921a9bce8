#!/usr/bin/env python3
import os
import argparse
import boto3
from botocore.exceptions import NoCredentialsError, ProfileNotFound
import aws_cdk as cdk
from stacks.apigateway_stack import APIGatewayStack
from stacks.lambda_stack import LambdaStack
from utils.constants import APIEndpoints, LambdaRuntimeConfig


def get_aws_account_and_region():
    """Detect account and region from the AWS config"""
    try:
        session = boto3.Session()

        sts_client = session.client("sts")
        account = sts_client.get_caller_identity()["Account"]

        region = session.region_name

        return account, region
    except (NoCredentialsError, ProfileNotFound) as e:
        print(f"AWS credentials not found: {e}")
        return None, None
    except Exception as e:
        print(f"Error getting AWS config: {e}")
        return None, None


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description="Deploy CEP Weather API CDK Stack")
    parser.add_argument(
        "--env",
        choices=["dev", "staging", "prod"],
        help="Deployment environment (dev, staging, prod)",
    )
    parser.add_argument("--account", help="AWS Account ID (overrides auto-detection)")
    parser.add_argument("--region", help="AWS Region (overrides auto-detection)")

    return parser.parse_args()


def main():
    args = parse_arguments()

    app = cdk.App()

    # Environment priority: CLI argument > CDK context > default
    env = args.env or app.node.try_get_context("env") or "dev"

    account, region = get_aws_account_and_region()

    if args.account:
        account = args.account
    if args.region:
        region = args.region

    # Fall back to the standard AWS variables, then the CDK ones
    if not account:
        account = os.getenv("CDK_DEFAULT_ACCOUNT")
    if not region:
        region = os.getenv("AWS_DEFAULT_REGION") or os.getenv("CDK_DEFAULT_REGION")

    weather_api_key = os.getenv(LambdaRuntimeConfig.WEATHER_API_KEY_ENV_VAR)
    if not weather_api_key:
        print(
            f"Warning: {LambdaRuntimeConfig.WEATHER_API_KEY_ENV_VAR} is not set; "
            "the deployed function will fail to start"
        )

    print(f"Deploying to environment: {env}")
    print(f"AWS Account: {account}")
    print(f"AWS Region: {region}")

    cdk_env = cdk.Environment(account=account, region=region)

    api_stack_name = f"CepWeatherStackAPI-{env}"
    api_gateway_stack = APIGatewayStack(
        app,
        api_stack_name,
        env_name=env,
        env=cdk_env,
        description=f"CEP Weather API Gateway Stack for {env} environment",
    )

    lambda_stack_name = f"CepWeatherStackLambda-{env}"
    lambda_stack = LambdaStack(
        app,
        lambda_stack_name,
        env_name=env,
        lambda_code_path="..",
        weather_api_key=weather_api_key,
        env=cdk_env,
        description=f"CEP Weather API Lambda Stack for {env} environment",
    )

    api_gateway_stack.add_lambda_integration(
        lambda_function=lambda_stack.lambda_function
    )

    cdk.CfnOutput(
        api_gateway_stack,
        "CepWeatherAPIURL",
        value=api_gateway_stack.api_url,
        description=f"CEP Weather API Gateway URL for {env} environment",
    )

    cdk.CfnOutput(
        api_gateway_stack,
        "CepWeatherAPIEndpoint",
        value=f"{api_gateway_stack.api_url}{APIEndpoints.WEATHER_BY_CEP.lstrip('/')}",
        description="Weather by CEP endpoint",
    )

    print(f"Created Lambda stack: {lambda_stack_name}")
    print(f"Created API Gateway stack: {api_stack_name}")

    app.synth()


if __name__ == "__main__":
    main()
