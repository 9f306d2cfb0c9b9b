from fastapi import APIRouter
from .users import router as users_router
from .profile import router as profile_router
from .items import router as items_router
from .friends import router as friends_router
from .goals import router as goals_router
from .posts import router as feed_router
from .messages import router as messages_router
from .events import router as events_router

router = APIRouter()
router.include_router(users_router, prefix='/auth', tags=['auth'])
router.include_router(profile_router, prefix='/profile', tags=['profile'])
router.include_router(items_router, prefix='/items', tags=['items'])
router.include_router(friends_router, prefix='/friends', tags=['friends'])
router.include_router(goals_router, prefix='/goals', tags=['goals'])
router.include_router(feed_router, prefix='/feed', tags=['feed'])
router.include_router(messages_router, prefix='/dm', tags=['dm'])
router.include_router(events_router, prefix='/events', tags=['events'])
