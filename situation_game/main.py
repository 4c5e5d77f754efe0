# situation_game/main.py
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .db import init_db
from .errors import GameError
from .routers import literacy, games, wrong_answers, quiz_sets, custom_themes, scenarios
from .services.session_service import SESSION_HEADER

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
log = logging.getLogger("app")

# DB 모델 자동생성
init_db()

app = FastAPI(title="상황 판단 게임 API")

# CORS: 프론트 로컬 개발 주소 허용
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[SESSION_HEADER],
)

app.include_router(literacy.router)
app.include_router(games.router)
app.include_router(wrong_answers.router)
app.include_router(quiz_sets.router)
app.include_router(custom_themes.router)
app.include_router(scenarios.router)


# 실패해도 항상 메시지와 돌아갈 경로를 준다
@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    log.warning("[APP] %s %s -> %s: %s", request.method, request.url.path, exc.code, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    log.exception("[APP] %s %s 처리 중 예외", request.method, request.url.path)
    return JSONResponse(status_code=500, content=GameError().to_dict())


@app.get("/health")
def health():
    return {"status": "ok", "service": "situation-game"}
