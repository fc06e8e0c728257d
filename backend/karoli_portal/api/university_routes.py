from fastapi import APIRouter
from karoli_portal.core.config import settings
from karoli_portal.integrations.university.rest_client import UniversityRestClient

router = APIRouter(prefix="/university", tags=["university"])

@router.get("/smoke")
async def smoke():
    """
    Wiring check:
    - Confirm env variables are loaded
    - Confirm the REST client can be built from them
    """
    async with UniversityRestClient(token="") as client:
        rest_ping = await client.ping()

    return {
        "api_url": settings.university_api_url,
        "rest": rest_ping,
        "identity": {
            "jwt_key_set": bool(settings.identity_jwt_key),
            "algorithms": settings.identity_jwt_algorithms,
            "session_cookie": settings.identity_session_cookie,
        },
    }
