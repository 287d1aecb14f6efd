"""
Data Stack (Serverless)

DynamoDB (On-Demand), S3
- Todos Table (userId + todoId)
- Attachment Bucket (添付ファイル)
"""
from aws_cdk import (
    NestedStack,
    RemovalPolicy,
    aws_dynamodb as dynamodb,
    aws_s3 as s3,
)
from constructs import Construct

TODOS_INDEX_NAME = 'todos-user-index'


class DataStack(NestedStack):
    """サーバレスデータ層のリソースを管理するスタック。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # DynamoDB Tables
        # =================================================================

        self.todos_table = dynamodb.Table(
            self, 'Todos',
            partition_key=dynamodb.Attribute(
                name='userId',
                type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(
                name='todoId',
                type=dynamodb.AttributeType.STRING
            ),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            point_in_time_recovery=True,
            encryption=dynamodb.TableEncryption.AWS_MANAGED,
            removal_policy=RemovalPolicy.RETAIN,
        )

        # GSI for user-based queries
        self.todos_table.add_global_secondary_index(
            index_name=TODOS_INDEX_NAME,
            partition_key=dynamodb.Attribute(
                name='userId',
                type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(
                name='createdAt',
                type=dynamodb.AttributeType.STRING
            ),
        )
        self.todos_index_name = TODOS_INDEX_NAME

        # =================================================================
        # S3 Bucket
        # =================================================================

        # ブラウザから署名付き URL で直接 PUT するため CORS を許可
        self.attachment_bucket = s3.Bucket(
            self, 'AttachmentBucket',
            encryption=s3.BucketEncryption.S3_MANAGED,
            enforce_ssl=True,
            cors=[
                s3.CorsRule(
                    allowed_methods=[
                        s3.HttpMethods.GET,
                        s3.HttpMethods.PUT,
                        s3.HttpMethods.POST,
                        s3.HttpMethods.DELETE,
                        s3.HttpMethods.HEAD,
                    ],
                    allowed_origins=['*'],
                    allowed_headers=['*'],
                    max_age=3000,
                )
            ],
            removal_policy=RemovalPolicy.RETAIN,
        )
