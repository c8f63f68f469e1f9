from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from healthcore.engine.router import router as engine_router
from healthcore.exceptions import AppException
from healthcore.logger import get_logger

logger = get_logger("healthcore.main")

app = FastAPI(title="HealthCore", version="0.1.0")
app.include_router(engine_router)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    logger.warning("Application error: %s [%s %s]", exc.message, request.method, request.url.path)
    body: dict = {"error": {"message": exc.message, "status_code": exc.status_code}}
    if exc.details:
        body["error"]["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=body)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "engine": {
            "guidance": "/engine/guidance/{day}",
            "energy": "/engine/energy",
            "vitality": "/engine/vitality",
            "exercise": "/engine/exercise",
            "life_stage": "/engine/life-stage",
            "holistic_score": "/engine/holistic-score",
            "achievements": "/engine/achievements",
            "met": "/engine/met",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
