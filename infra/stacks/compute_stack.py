"""
Lambda Stack (Serverless Compute)

Lambda Functions:
- Todos API Handler (FastAPI + Mangum)
"""
from aws_cdk import (
    NestedStack,
    Duration,
    aws_lambda as lambda_,
    aws_dynamodb as dynamodb,
    aws_s3 as s3,
    aws_logs as logs,
)
from constructs import Construct


class ComputeStack(NestedStack):
    """Lambda ベースのサーバレスコンピュートスタック。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        todos_table: dynamodb.Table,
        todos_index_name: str,
        attachment_bucket: s3.Bucket,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # Todos API Lambda
        # =================================================================
        # 依存パッケージはビルド時に同じディレクトリへインストールしておく

        self.todos_fn = lambda_.Function(
            self, 'TodosFn',
            function_name='todo-platform-api',
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler='src.handlers.todos.handler.lambda_handler',
            code=lambda_.Code.from_asset('.', exclude=['infra', 'tests', 'cdk.out', '.venv']),
            memory_size=256,
            timeout=Duration.seconds(29),
            environment={
                'TODO_ENVIRONMENT': 'production',
                'TODO_PERSISTENCE_BACKEND': 'dynamodb',
                'TODO_TODOS_TABLE': todos_table.table_name,
                'TODO_TODOS_INDEX': todos_index_name,
                'TODO_ATTACHMENT_BUCKET': attachment_bucket.bucket_name,
                'TODO_SIGNED_URL_EXPIRATION': '300',
            },
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        todos_table.grant_read_write_data(self.todos_fn)
        attachment_bucket.grant_put(self.todos_fn)
