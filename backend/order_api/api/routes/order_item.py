"""OrderItem Routes — the twelve /device/api/v1/orderitem endpoints.

Invariants:
    - Every route requires caller identity (get_current_user) and resolves it first
    - Every route returns the controller's envelope unchanged
    - Bodies are optional JSON objects; the controller decides what is missing

Design Decisions:
    - Fixed paths (/create, /list, /softDeleteMany, ...) declared before GET /{id}
    - Raw dict bodies over typed models: request-shape errors must come back as the
      controller's envelopes, not FastAPI's 422
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from order_api.api.dependencies import get_current_user, get_order_item_controller
from order_api.api.responses import render
from order_api.core.domain_types import CallerIdentity
from order_api.services.order_item_controller import OrderItemController

router = APIRouter(prefix="/device/api/v1/orderitem", tags=["orderitem"])

JsonBody = dict[str, Any] | None


@router.post("/create")
async def add_order_item(
    user: CallerIdentity = Depends(get_current_user),
    body: JsonBody = Body(None),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.add_order_item(body, user))


@router.post("/list")
async def find_all_order_item(
    user: CallerIdentity = Depends(get_current_user),
    body: JsonBody = Body(None),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.find_all_order_item(body or {}, user))


@router.post("/count")
async def get_order_item_count(
    user: CallerIdentity = Depends(get_current_user),
    body: JsonBody = Body(None),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.get_order_item_count(body or {}, user))


@router.put("/softDeleteMany")
async def soft_delete_many_order_item(
    user: CallerIdentity = Depends(get_current_user),
    body: JsonBody = Body(None),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.soft_delete_many_order_item(body, user))


@router.post("/addBulk")
async def bulk_insert_order_item(
    user: CallerIdentity = Depends(get_current_user),
    body: JsonBody = Body(None),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.bulk_insert_order_item(body, user))


@router.put("/updateBulk")
async def bulk_update_order_item(
    user: CallerIdentity = Depends(get_current_user),
    body: JsonBody = Body(None),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.bulk_update_order_item(body, user))


@router.post("/deleteMany")
async def delete_many_order_item(
    user: CallerIdentity = Depends(get_current_user),
    body: JsonBody = Body(None),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.delete_many_order_item(body, user))


@router.put("/softDelete/{id}")
async def soft_delete_order_item(
    id: str,
    user: CallerIdentity = Depends(get_current_user),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.soft_delete_order_item(id, user))


@router.put("/partial-update/{id}")
async def partial_update_order_item(
    id: str,
    user: CallerIdentity = Depends(get_current_user),
    body: JsonBody = Body(None),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.partial_update_order_item(id, body, user))


@router.put("/update/{id}")
async def update_order_item(
    id: str,
    user: CallerIdentity = Depends(get_current_user),
    body: JsonBody = Body(None),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.update_order_item(id, body, user))


@router.get("/{id}")
async def get_order_item(
    id: str,
    user: CallerIdentity = Depends(get_current_user),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.get_order_item(id, user))


@router.delete("/delete/{id}")
async def delete_order_item(
    id: str,
    user: CallerIdentity = Depends(get_current_user),
    controller: OrderItemController = Depends(get_order_item_controller),
):
    return render(await controller.delete_order_item(id, user))
