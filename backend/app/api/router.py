from fastapi import APIRouter

from app.api.v1 import health, news, stats
from app.api.websocket import news as ws_news

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(news.router, prefix="/news", tags=["news"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(ws_news.router, tags=["websocket"])
