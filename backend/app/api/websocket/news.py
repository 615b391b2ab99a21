"""WebSocket endpoint for live news lookups."""

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.api.deps import get_ws_news_service
from app.api.websocket.manager import manager
from app.errors import InvalidQuery, PipelineError
from app.news.service import NewsSearchService
from app.schemas.news import search_result_to_dict

router = APIRouter()


@router.websocket("/ws/news")
async def news_channel(
    websocket: WebSocket,
    service: NewsSearchService = Depends(get_ws_news_service),
) -> None:
    """Each text message is a search term; the reply is the result or an error."""
    await manager.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            term = message.get("text")
            try:
                if term is None:
                    raise InvalidQuery("Search terms must be sent as text frames")
                result = await service.resolve(term)
            except PipelineError as exc:
                payload = {"type": "error", "kind": exc.kind, "detail": str(exc)}
            else:
                payload = {"type": "news", **search_result_to_dict(result)}
            if not await manager.send(websocket, payload):
                break
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)
