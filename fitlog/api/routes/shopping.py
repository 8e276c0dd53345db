import logging
from fastapi import APIRouter, Depends, HTTPException, Response

from fitlog.api.deps import get_clock, get_plan_repository, get_shopping_service, get_user_id
from fitlog.infra.Plan_Repository import PlanRepository
from fitlog.infra.pdf_utils import generate_shopping_list_pdf
from fitlog.logic.shopping.shopping_list import ShoppingListService
from fitlog.utilities.constants import PLAN_NUTRITION
from fitlog.utilities.dates import Clock, today_index
from fitlog.utilities.validators import ShoppingItemInput

router = APIRouter(prefix="/api/shopping-list", tags=["shopping"])
logger = logging.getLogger(__name__)


def _list_payload(entries):
    items = [e.to_dict() for e in entries]
    return {"items": items, "count": len(items)}


@router.get("")
def shopping_list(user_id: str = Depends(get_user_id),
                  service: ShoppingListService = Depends(get_shopping_service)):
    return _list_payload(service.list_items(user_id))


@router.post("")
def add_shopping_item(payload: ShoppingItemInput, user_id: str = Depends(get_user_id),
                      service: ShoppingListService = Depends(get_shopping_service)):
    return service.add_item(user_id, payload.name).to_dict()


@router.post("/generate")
def generate_shopping_list(user_id: str = Depends(get_user_id),
                           service: ShoppingListService = Depends(get_shopping_service),
                           plans: PlanRepository = Depends(get_plan_repository),
                           clock: Clock = Depends(get_clock)):
    """Rebuild the list from the active nutrition plan, today through Sunday."""
    plan = plans.find_active_plan(user_id, PLAN_NUTRITION)
    if plan is None:
        return {**_list_payload([]), "notice": "No active nutrition plan"}
    entries = service.generate_from_plan(user_id, plan, today_index(clock))
    if not entries:
        return {**_list_payload([]), "notice": "Nothing left to buy this week"}
    logger.info("ShoppingList GENERATE user=%s items=%s", user_id, len(entries))
    return _list_payload(entries)


@router.get("/pdf")
def shopping_list_pdf(user_id: str = Depends(get_user_id),
                      service: ShoppingListService = Depends(get_shopping_service)):
    pdf = generate_shopping_list_pdf(service.list_items(user_id))
    return Response(content=pdf, media_type="application/pdf",
                    headers={"Content-Disposition": 'attachment; filename="shopping-list.pdf"'})


@router.post("/{item_id}/toggle")
def toggle_shopping_item(item_id: str, user_id: str = Depends(get_user_id),
                         service: ShoppingListService = Depends(get_shopping_service)):
    entry = service.toggle_item(user_id, item_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Shopping item not found")
    return entry.to_dict()


@router.delete("/{item_id}")
def delete_shopping_item(item_id: str, user_id: str = Depends(get_user_id),
                         service: ShoppingListService = Depends(get_shopping_service)):
    if not service.delete_item(user_id, item_id):
        raise HTTPException(status_code=404, detail="Shopping item not found")
    return {"status": "deleted", "id": item_id}


@router.delete("")
def clear_shopping_list(user_id: str = Depends(get_user_id),
                        service: ShoppingListService = Depends(get_shopping_service)):
    return {"status": "cleared", "removed": service.clear(user_id)}
