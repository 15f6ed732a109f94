from fastapi import APIRouter

from . import report, scenarios, simulate

router = APIRouter()
router.include_router(simulate.router)
router.include_router(scenarios.router)
router.include_router(report.router)
