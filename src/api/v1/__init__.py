"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.invitations import invitations_router, team_invitations_router
from api.v1.routes.tasks import router as tasks_router
from api.v1.routes.teams import router as teams_router

router = APIRouter()
router.include_router(teams_router)
router.include_router(team_invitations_router)
router.include_router(invitations_router)
router.include_router(tasks_router)
