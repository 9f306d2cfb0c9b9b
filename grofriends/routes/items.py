from fastapi import APIRouter, Depends
from typing import List

from ..schemas.items import ItemIn, ItemOut
from ..schemas.users import ActionOkOut
from ..crud import list_items, create_item, toggle_item, delete_item
from ..auth import get_current_user
from ..errors import InvalidOperation

router = APIRouter()

@router.get('', response_model=List[ItemOut])
async def items(current_user: dict = Depends(get_current_user)):
    return await list_items(current_user['id'])

@router.post('', response_model=ItemOut, status_code=201)
async def create(payload: ItemIn, current_user: dict = Depends(get_current_user)):
    title = payload.title.strip()
    if not title:
        raise InvalidOperation('Missing title')
    return await create_item(current_user['id'], title, payload.qty, payload.note.strip())

@router.post('/{item_id}/toggle', response_model=ActionOkOut)
async def toggle(item_id: int, current_user: dict = Depends(get_current_user)):
    await toggle_item(current_user['id'], item_id)
    return {'ok': True}

@router.delete('/{item_id}', response_model=ActionOkOut)
async def remove(item_id: int, current_user: dict = Depends(get_current_user)):
    await delete_item(current_user['id'], item_id)
    return {'ok': True}
