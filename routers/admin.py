from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from bank import reload_bank
from deps.auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/reload")
def reload_formulas():
    n = reload_bank()
    logger.info("formula bank reloaded by admin: %d formulas", n)
    return {"ok": True, "count": n}
