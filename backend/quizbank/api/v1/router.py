"""API v1 router - includes all v1 endpoints."""

from fastapi import APIRouter

from quizbank.api.v1.endpoints import (
    answers,
    auth,
    categories,
    favorites,
    health,
    questions,
    tests,
    topics,
    users,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(tests.router, prefix="/tests", tags=["Tests"])
api_router.include_router(favorites.router, prefix="/favorites", tags=["Favorites"])
api_router.include_router(topics.router, prefix="/topics", tags=["Topics"])
api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router.include_router(questions.router, prefix="/questions", tags=["Questions"])
api_router.include_router(answers.router, prefix="/answers", tags=["Answers"])
