"""Directory of relay APIs."""

from fastapi import APIRouter

from relay.catalog import AVAILABLE_APIS

router = APIRouter(tags=["meta"])


@router.get("/available-apis")
async def available_apis() -> dict:
    """List the relay endpoints clients can call."""
    return {"success": True, "apis": AVAILABLE_APIS}
