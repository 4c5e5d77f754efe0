# situation_game/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import computed_field

class Settings(BaseSettings):
    db_url: str = "sqlite:///./situation_game.db"
    allowed_origins: str = "http://localhost:5173,http://localhost:8080"

    # --- Google Cloud / Gemini ---
    gcp_project_id: str | None = None
    gcp_location: str = "us-central1"
    gemini_api_key: str | None = None   # 있으면 Vertex 대신 Gemini API 직접 사용
    gemini_model: str = "gemini-2.5-flash"
    genai_timeout_seconds: int = 20     # 응답 없는 호출 차단용 타임아웃

    # 문해력 레벨 저장소 (빈 문자열이면 메모리에만 보관)
    settings_store_path: str = "./settings_store.json"
    literacy_quiz_cache_tag: str = "literacy_quiz_v1"
    scenario_load_limit: int = 20

    # 세션 캐시/복습 상태는 마지막 쓰기 후 이 시간이 지나면 사라진다
    session_ttl_seconds: int = 3600
    session_cache_maxsize: int = 10000

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    @computed_field(return_type=list[str])
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

settings = Settings()
