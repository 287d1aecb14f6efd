"""
Lambda Handlers for Todo Platform

サーバレス構成のエントリポイント:
- Todos API (API Gateway → FastAPI via Mangum)
"""
