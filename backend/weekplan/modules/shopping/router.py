from fastapi import APIRouter

from weekplan.modules.shopping.routes.items import router as items_router

router = APIRouter(prefix="/api/shop", tags=["shopping"])

router.include_router(items_router, tags=["shopping-items"])
