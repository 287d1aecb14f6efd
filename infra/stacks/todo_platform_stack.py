"""
Todo Platform Main Stack (Serverless)

Lambda + API Gateway + DynamoDB + S3 のサーバレスメインスタック。
"""
from aws_cdk import (
    Stack,
    CfnOutput,
    aws_lambda as lambda_,
)
from constructs import Construct

from infra.stacks.data_stack import DataStack
from infra.stacks.compute_stack import ComputeStack
from infra.stacks.api_stack import ApiStack


class TodoPlatformStack(Stack):
    """Todo Platform のメインスタック (Serverless)。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        authorizer_arn: str | None = None,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Data Stack (DynamoDB, S3)
        data_stack = DataStack(self, 'Data')

        # Compute Stack (Lambda Functions)
        compute_stack = ComputeStack(
            self, 'Compute',
            todos_table=data_stack.todos_table,
            todos_index_name=data_stack.todos_index_name,
            attachment_bucket=data_stack.attachment_bucket,
        )

        authorizer_fn = None
        if authorizer_arn:
            authorizer_fn = lambda_.Function.from_function_arn(
                self, 'AuthorizerFn', authorizer_arn
            )

        # API Stack (API Gateway)
        api_stack = ApiStack(
            self, 'Api',
            todos_fn=compute_stack.todos_fn,
            authorizer_fn=authorizer_fn,
        )

        # Outputs
        CfnOutput(self, 'ApiEndpoint', value=api_stack.api_url)
        CfnOutput(self, 'TodosTableName', value=data_stack.todos_table.table_name)
        CfnOutput(self, 'AttachmentBucketName', value=data_stack.attachment_bucket.bucket_name)
