from fastapi import APIRouter, Depends

from shortlyx.api.v1.dependencies import (
    get_analytics_service,
    get_current_user_ctx,
    get_revenue_service,
)
from shortlyx.core.context import UserCtx
from shortlyx.features.analytics.schemas import AnalyticsOut, RevenueOut
from shortlyx.features.analytics.services import AnalyticsService, RevenueService

router = APIRouter(
    tags=["analytics"],
    responses={404: {"description": "Not Found"}},
)

@router.get(
    "/analytics",
    summary="Statistiques des vidéos de l'utilisateur courant",
    response_model=AnalyticsOut,
)
def analytics(
    user: UserCtx = Depends(get_current_user_ctx),
    svc: AnalyticsService = Depends(get_analytics_service),
):
    return svc.summary(user.user_id)

@router.get(
    "/revenue",
    summary="Revenus simulés (INR) de l'utilisateur courant",
    response_model=RevenueOut,
)
def revenue(
    user: UserCtx = Depends(get_current_user_ctx),
    svc: RevenueService = Depends(get_revenue_service),
):
    return svc.summary(user.user_id)
