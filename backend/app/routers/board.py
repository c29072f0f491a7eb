"""
Message board router.
"""
from fastapi import APIRouter, Depends, Query, status

from app.database.connections import get_mongo_client
from app.database.databases import board_db
from app.dependencies.auth import CurrentUser
from app.schemas.board import BoardMessageCreate, BoardMessageResponse
from app.services.board_service import BOARD_WINDOW, BoardService

router = APIRouter(prefix="/board", tags=["Board"])


async def get_board_service() -> BoardService:
    """Dependency to get BoardService instance."""
    client = await get_mongo_client()
    return BoardService(client[board_db.DB_NAME])


@router.get(
    "/messages",
    response_model=list[BoardMessageResponse],
    summary="Recent board messages",
)
async def list_messages(
    current_user: CurrentUser,
    limit: int = Query(BOARD_WINDOW, ge=1, le=BOARD_WINDOW),
    board_service: BoardService = Depends(get_board_service),
):
    """
    Most recent messages, oldest first.

    New messages arrive on `/ws/live` under the `board` topic.
    """
    return await board_service.recent_messages(limit)


@router.post(
    "/messages",
    response_model=BoardMessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post a message",
)
async def post_message(
    body: BoardMessageCreate,
    current_user: CurrentUser,
    board_service: BoardService = Depends(get_board_service),
):
    """Post a message signed with the current user's email."""
    return await board_service.post_message(current_user, body)
