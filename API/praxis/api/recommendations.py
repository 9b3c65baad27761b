from fastapi import APIRouter, Depends

from praxis.api.deps import get_recommender
from praxis.recommendation.engine import RecommendationEngine
from praxis.schemas.dashboard import Recommendation

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.get("/{user_id}", response_model=Recommendation, response_model_by_alias=True)
async def get_recommendations(user_id: str, recommender: RecommendationEngine = Depends(get_recommender)):
    # DataSourceError is not caught here; the app maps it to 503.
    return await recommender.get_smart_recommendations(user_id)
