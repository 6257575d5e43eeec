from fastapi import APIRouter

from app.schemas.ai import SuggestionRequest, SuggestionResponse

router = APIRouter(prefix="/api/ai", tags=["AI"])


@router.post("/suggestions", response_model=SuggestionResponse)
def suggestions(request: SuggestionRequest):
    # Canned tips until a real recommender exists
    location = request.location or "your area"
    return SuggestionResponse(suggestions=[
        f"Popular route from {location} to FCCU campus",
        f"Best departure times for {location} area",
        "Eco-friendly carpooling saves 40% on fuel costs",
        "Join 500+ students already using UniPool",
    ])
