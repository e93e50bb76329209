"""
Connection Routes
Connection requests, the connection list and relationship status
"""

from uuid import UUID

from fastapi import APIRouter, status

from linkedin_api.services.connection_service import ConnectionService
from linkedin_api.utils.dependencies import CurrentUser, DatabaseDep

router = APIRouter()


@router.post("/request/{user_id}", status_code=status.HTTP_201_CREATED)
async def send_connection_request(user_id: UUID, current_user: CurrentUser, db: DatabaseDep):
    """Ask another user to connect"""
    request = await ConnectionService.send_request(db, current_user["id"], user_id)
    return {"message": "Connection request sent successfully", "request": request}


@router.put("/accept/{request_id}")
async def accept_connection_request(request_id: UUID, current_user: CurrentUser, db: DatabaseDep):
    """Accept a pending request addressed to the current user"""
    request = await ConnectionService.accept_request(db, request_id, current_user["id"])
    return {"message": "Connection accepted successfully", "request": request}


@router.put("/reject/{request_id}")
async def reject_connection_request(request_id: UUID, current_user: CurrentUser, db: DatabaseDep):
    """Reject a pending request addressed to the current user"""
    request = await ConnectionService.reject_request(db, request_id, current_user["id"])
    return {"message": "Connection request rejected", "request": request}


@router.get("/requests")
async def get_connection_requests(current_user: CurrentUser, db: DatabaseDep):
    return await ConnectionService.get_pending_requests(db, current_user["id"])


@router.get("")
@router.get("/", include_in_schema=False)
async def get_user_connections(current_user: CurrentUser, db: DatabaseDep):
    return await ConnectionService.get_connections(db, current_user["id"])


@router.delete("/{user_id}")
async def remove_connection(user_id: UUID, current_user: CurrentUser, db: DatabaseDep):
    """Remove a connection in both directions"""
    await ConnectionService.remove_connection(db, current_user["id"], user_id)
    return {"message": "Connection removed successfully"}


@router.get("/status/{user_id}")
async def get_connection_status(user_id: UUID, current_user: CurrentUser, db: DatabaseDep):
    """connected, pending, received or not_connected"""
    return await ConnectionService.get_status(db, current_user["id"], user_id)
