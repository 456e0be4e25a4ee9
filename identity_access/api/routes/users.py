"""Users — registration endpoint.

Invariants:
    - 201 with empty body on Success
    - Failure status and body come from Failure.http_status / to_response() only
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from identity_access.api.dependencies import get_register_user_handler
from identity_access.schemas.user import SignUpRequest
from identity_access.services.outcome import Failure
from identity_access.services.register_user import RegisterUserHandler, SignUp

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def sign_up(
    body: SignUpRequest,
    handler: RegisterUserHandler = Depends(get_register_user_handler),
):
    """Register a new user."""
    outcome = await handler.execute(
        SignUp(email=body.email, password=body.password),
    )
    if isinstance(outcome, Failure):
        return JSONResponse(
            status_code=outcome.http_status, content=outcome.to_response(),
        )
    return Response(status_code=status.HTTP_201_CREATED)
