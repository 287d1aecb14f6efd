"""
Todos Lambda Handler

API Gateway (REST, Lambda プロキシ統合) のイベントを
Mangum 経由で FastAPI アプリケーションへ委譲する。

依存オブジェクト（DynamoDB / S3 クライアント）は
コールドスタート時に一度だけ組み立て、ウォームスタート間で再利用する。
"""
from mangum import Mangum

from src.presentation.main import create_app

app = create_app()

lambda_handler = Mangum(app, lifespan="off")
