from fastapi import APIRouter

router = APIRouter()


@router.get("/health", summary="Health Check", description="Liveness check for the rejection analyzer service.")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}
