"""Target catalogue endpoints.

Exposes the static registry of simulated hosts so a lab UI can show what
is on the practice network.
"""

from fastapi import APIRouter

from api.models import TargetListResponse, TargetModel
from models.network import NetworkSimulator

router = APIRouter(
    prefix="/targets",
    tags=["targets"],
)


@router.get("", response_model=TargetListResponse)
async def list_targets():
    """List every simulated host with its ports, vulnerabilities and endpoints.

    Returns:
        TargetListResponse: Hosts in registry order.
    """
    targets = [TargetModel(**target) for target in NetworkSimulator().list_targets()]
    return TargetListResponse(targets=targets, count=len(targets))
