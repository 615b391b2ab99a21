from fastapi import Request, WebSocket

from app.news.service import NewsSearchService


def get_news_service(request: Request) -> NewsSearchService:
    return request.app.state.news_service


def get_ws_news_service(websocket: WebSocket) -> NewsSearchService:
    return websocket.app.state.news_service
