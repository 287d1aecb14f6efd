#!/usr/bin/env python3
"""
CDK Application Entry Point

Todo Platform - Lambda + API Gateway + DynamoDB のサーバレス構成をデプロイ。
"""
import os
import aws_cdk as cdk

from infra.stacks.todo_platform_stack import TodoPlatformStack

app = cdk.App()

# 環境設定
env = cdk.Environment(
    account=os.environ.get('CDK_DEFAULT_ACCOUNT'),
    region=os.environ.get('CDK_DEFAULT_REGION', 'us-east-1'),
)

TodoPlatformStack(
    app,
    'TodoPlatformStack',
    env=env,
    authorizer_arn=app.node.try_get_context('authorizerArn'),
    description='Todo Platform - Serverless to-do list API',
)

app.synth()
