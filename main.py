"""
servicebox Demo 應用程式主入口

示範以 Locator 管理同步服務 (ApiService) 與延遲初始化的非同步服務 (DatabaseService)，
並透過 FastAPI 依賴注入提供給路由使用
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from servicebox import Locator
from servicebox.api import debug_router, provide
from servicebox.core.config import settings

# 配置日誌
logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


class ApiService:
    """外部 API 客戶端設定"""

    def __init__(self, base_url: str):
        self.base_url = base_url


class DatabaseService:
    """需要非同步初始化的資料庫服務（以延遲模擬連線）"""

    def __init__(self):
        self.initialized = False

    async def initialize(self, delay_sec: float) -> None:
        await asyncio.sleep(delay_sec)
        self.initialized = True


def build_locator(db_init_delay_sec: Optional[float] = None) -> Locator:
    """建立 demo 使用的 Locator"""
    if db_init_delay_sec is None:
        db_init_delay_sec = settings.DEMO_DB_INIT_DELAY_SEC

    async def create_database() -> DatabaseService:
        db = DatabaseService()
        await db.initialize(db_init_delay_sec)
        return db

    locator = Locator()
    locator.register(ApiService("https://api.example.com"))
    locator.register_async(DatabaseService, create_database)
    return locator


def create_app(locator: Locator) -> FastAPI:
    """建立 FastAPI 應用並綁定 Locator"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 servicebox demo 正在啟動...")
        logger.info(f"📦 Locator: {locator.get_stats()}")
        yield
        logger.info("🔄 servicebox demo 正在關閉...")
        locator.clear()

    app = FastAPI(
        title="servicebox demo",
        description="Service locator 示範：同步與非同步服務",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.locator = locator
    app.include_router(debug_router)

    @app.get("/")
    async def root():
        """根路由 - API 狀態檢查"""
        return {"message": "servicebox demo is running", "version": "0.1.0", "status": "healthy"}

    @app.get("/api/base-url")
    async def base_url(api: ApiService = Depends(provide(ApiService))):
        return {"base_url": api.base_url}

    @app.get("/api/database")
    async def database(db: DatabaseService = Depends(provide(DatabaseService))):
        return {"initialized": db.initialized}

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """全域例外處理"""
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc), "path": str(request.url)},
        )

    return app


app = create_app(build_locator())


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=False)
