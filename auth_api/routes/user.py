from fastapi import APIRouter, Depends

from auth_api.core.auth_guard import require_auth
from auth_api.core.dependencies import get_auth_service
from auth_api.core.errors import AuthError
from auth_api.core.responses import success, failure, internal_failure
from auth_api.schemas.auth import UserDataEnvelope
from auth_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/user", tags=["user"])

@router.get("/data", response_model=UserDataEnvelope, response_model_exclude_none=True)
async def get_user_data(
    user_id: str = Depends(require_auth),
    service: AuthService = Depends(get_auth_service)
):
    try:
        user_data = await service.get_user_data(user_id)
    except AuthError as e:
        return failure(e)
    except Exception as e:
        return internal_failure(e, service)

    return success("", userData=user_data)
