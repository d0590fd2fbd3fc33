from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
import os

# 根據執行環境決定要讀取的 .env 檔案。
# 如果偵測到 TESTING 環境變數為真 (由 pytest/conftest 設定)，
# 則讀取 `.env.local`；預設情況則讀取 `.env`。

_ENV_FILE: str = ".env.local" if os.getenv("TESTING", "").lower() in {"1", "true", "yes"} else ".env"

class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"

    # Locator 行為
    LOCATOR_DEDUPE_INFLIGHT: bool = Field(
        True,
        description="同一個 key 的並發非同步解析是否共用同一次 factory 呼叫"
    )

    # 監控
    ENABLE_METRICS: bool = Field(True, description="啟用 Prometheus 指標")

    # Demo 伺服器
    HOST: str = Field("0.0.0.0", description="uvicorn 綁定位址")
    PORT: int = Field(8000, description="uvicorn 埠號", ge=1, le=65535)
    DEMO_DB_INIT_DELAY_SEC: float = Field(
        2.0,
        description="Demo DatabaseService 模擬初始化延遲（秒）",
        ge=0.0
    )

    model_config = SettingsConfigDict(env_file=_ENV_FILE, env_file_encoding="utf-8", extra="ignore")

settings = Settings()

def get_settings() -> Settings:
    """獲取應用程式設定實例"""
    return settings
