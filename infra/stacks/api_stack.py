"""
API Stack

API Gateway (REST) for the Todos Lambda function.
"""
from typing import Optional

from aws_cdk import (
    NestedStack,
    aws_apigateway as apigw,
    aws_lambda as lambda_,
)
from constructs import Construct


class ApiStack(NestedStack):
    """API Gateway スタック。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        todos_fn: lambda_.IFunction,
        authorizer_fn: Optional[lambda_.IFunction] = None,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # REST API
        # =================================================================

        self.api = apigw.RestApi(
            self, 'TodoApi',
            rest_api_name='todo-platform-api',
            description='Todo Platform REST API (Serverless)',
            deploy_options=apigw.StageOptions(
                stage_name='dev',
                logging_level=apigw.MethodLoggingLevel.INFO,
                metrics_enabled=True,
                throttling_rate_limit=100,
                throttling_burst_limit=50,
            ),
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=apigw.Cors.ALL_ORIGINS,
                allow_methods=apigw.Cors.ALL_METHODS,
                allow_headers=['Content-Type', 'Authorization'],
            ),
        )

        # Bearer トークンの検証は外部のオーソライザ関数に任せる
        method_options = {}
        if authorizer_fn is not None:
            method_options['authorizer'] = apigw.TokenAuthorizer(
                self, 'TodoAuthorizer',
                handler=authorizer_fn,
            )

        integration = apigw.LambdaIntegration(todos_fn)

        # =================================================================
        # Todos Endpoints
        # =================================================================

        todos = self.api.root.add_resource('todos')

        # GET /todos - List (or search with ?keyword=)
        todos.add_method('GET', integration, **method_options)

        # POST /todos - Create
        todos.add_method('POST', integration, **method_options)

        # GET / PATCH / DELETE /todos/{todoId}
        todo = todos.add_resource('{todoId}')
        todo.add_method('GET', integration, **method_options)
        todo.add_method('PATCH', integration, **method_options)
        todo.add_method('DELETE', integration, **method_options)

        # POST /todos/{todoId}/attachment - Upload URL
        attachment = todo.add_resource('attachment')
        attachment.add_method('POST', integration, **method_options)

        # =================================================================
        # Health Check
        # =================================================================

        health = self.api.root.add_resource('health')
        health.add_method('GET', integration)

        # =================================================================
        # Outputs
        # =================================================================

        self.api_url = self.api.url
