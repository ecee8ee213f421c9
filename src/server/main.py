#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
API Server主文件
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import uvicorn
import os
import sys
from loguru import logger

# 添加项目根目录到Python路径
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.common.exceptions import ExtractorException, PipelineException, ValidationException
from src.server.config import config
from src.server.endpoints import html_parser, kline, stock_data
from utils.setup_logger import setup_logger


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def pipeline_exception_handler(request: Request, exc: PipelineException) -> JSONResponse:
    """输入类错误返回 400，其余（数据库、数据源等）返回 500"""
    if isinstance(exc, (ValidationException, ExtractorException)):
        logger.warning(f"{request.method} {request.url.path} 请求无效：{exc}")
        return _error_response(400, str(exc))
    logger.error(f"{request.method} {request.url.path} 处理失败：{exc}")
    return _error_response(500, str(exc))


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} 请求格式错误：{exc.errors()}")
    return _error_response(400, "请求格式错误")


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return _error_response(429, f"请求过于频繁：{exc.detail}")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} 未处理的异常：{exc}")
    return _error_response(500, str(exc))


def create_app() -> FastAPI:
    """
    创建FastAPI应用
    """
    app = FastAPI(
        title="Stock Data Dashboard API",
        description="股票数据导入、查询、K线和HTML表格解析接口",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # 添加CORS中间件
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 添加限流器
    app.state.limiter = Limiter(key_func=get_remote_address, default_limits=[config.RATE_LIMIT])
    app.add_middleware(SlowAPIMiddleware)

    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(PipelineException, pipeline_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # 注册路由
    app.include_router(stock_data.router, prefix="/api", tags=["stock_data"])
    app.include_router(kline.router, prefix="/api", tags=["kline"])
    app.include_router(html_parser.router, prefix="/api", tags=["html"])

    @app.get("/")
    async def root():
        """
        根路径
        """
        return {
            "message": "Stock Data Dashboard API",
            "version": "1.0.0",
            "docs": "/docs",
            "redoc": "/redoc"
        }

    @app.get("/health")
    async def health_check():
        """
        健康检查
        """
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    setup_logger(level_console=config.LOG_LEVEL, file_pattern="api_server_{time:YYYY-MM-DD}.log")
    logger.info(f"启动API Server，监听地址：{config.HOST}:{config.PORT}")
    uvicorn.run(
        "src.server.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.DEBUG,
        log_level=config.LOG_LEVEL.lower()
    )
