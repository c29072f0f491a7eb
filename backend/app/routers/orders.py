"""
Orders router for order numbers, saved orders and PDF export.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.database.connections import get_mongo_client
from app.database.databases import sales_db
from app.dependencies.auth import CurrentUser
from app.schemas.order import (
    DeleteAllOrdersResponse,
    OrderCreate,
    OrderNumberResponse,
    OrderResponse,
)
from app.services.order_service import OrderService
from app.services.pdf_service import pdf_filename, render_order_pdf

router = APIRouter(prefix="/orders", tags=["Orders"])


async def get_order_service() -> OrderService:
    """Dependency to get OrderService instance."""
    client = await get_mongo_client()
    return OrderService(client[sales_db.DB_NAME])


def _pdf_response(order: OrderCreate | OrderResponse) -> Response:
    return Response(
        content=render_order_pdf(order),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{pdf_filename(order.order_number)}"'
        },
    )


def _order_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Order not found",
    )


@router.post(
    "/next-number",
    response_model=OrderNumberResponse,
    summary="Allocate the next order number",
)
async def next_order_number(
    current_user: CurrentUser,
    order_service: OrderService = Depends(get_order_service),
):
    """
    Allocate the next sequential order number (1387 onwards).

    Each call consumes a number. Returns 503 if the counter cannot be updated.
    """
    return OrderNumberResponse(order_number=await order_service.next_order_number())


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save an order",
)
async def create_order(
    body: OrderCreate,
    current_user: CurrentUser,
    order_service: OrderService = Depends(get_order_service),
):
    """
    Save an order for the current user.

    A blank `order_number` gets the next sequential number.
    """
    try:
        return await order_service.create_order(current_user, body)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.get(
    "",
    response_model=list[OrderResponse],
    summary="List my orders",
)
async def list_orders(
    current_user: CurrentUser,
    order_service: OrderService = Depends(get_order_service),
):
    """Orders of the current user, newest first."""
    return await order_service.list_orders(current_user.id)


@router.delete(
    "",
    response_model=DeleteAllOrdersResponse,
    summary="Delete all my orders and restart numbering",
)
async def delete_all_orders(
    current_user: CurrentUser,
    order_service: OrderService = Depends(get_order_service),
):
    """
    Delete every order of the current user and reset the counter so the
    next order number is 1387. This cannot be undone.
    """
    return await order_service.delete_all_and_reset_counter(current_user.id)


@router.post(
    "/preview-pdf",
    summary="Render an unsaved order as PDF",
    response_class=Response,
)
async def preview_pdf(
    body: OrderCreate,
    current_user: CurrentUser,
):
    """Render the PDF of a form without saving it."""
    return _pdf_response(body)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get an order",
)
async def get_order(
    order_id: str,
    current_user: CurrentUser,
    order_service: OrderService = Depends(get_order_service),
):
    """One of the current user's orders."""
    order = await order_service.get_order(order_id, current_user.id)
    if not order:
        raise _order_not_found()
    return order


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an order",
)
async def delete_order(
    order_id: str,
    current_user: CurrentUser,
    order_service: OrderService = Depends(get_order_service),
):
    """Delete one of the current user's orders."""
    if not await order_service.delete_order(order_id, current_user.id):
        raise _order_not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{order_id}/pdf",
    summary="Download an order as PDF",
    response_class=Response,
)
async def get_order_pdf(
    order_id: str,
    current_user: CurrentUser,
    order_service: OrderService = Depends(get_order_service),
):
    """A4 PDF of a saved order, named `Pedido-{number}.pdf`."""
    order = await order_service.get_order(order_id, current_user.id)
    if not order:
        raise _order_not_found()
    return _pdf_response(order)
