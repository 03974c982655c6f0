from fastapi import APIRouter, Depends

from elite_bgs.dependencies import get_user_repository
from elite_bgs.repositories import UserRepository
from elite_bgs.schemas import CreditEntry, DonorEntry, PatronEntry
from elite_bgs.services import users as user_service

router = APIRouter(prefix="/api", tags=["community"])


@router.get("/donors", response_model=list[DonorEntry])
async def list_donors(users: UserRepository = Depends(get_user_repository)):
    """Every donation with its donor, newest first."""
    return await user_service.donors(users)


@router.get("/patrons", response_model=list[PatronEntry])
async def list_patrons(users: UserRepository = Depends(get_user_repository)):
    """Current patrons, most recent first."""
    return await user_service.patrons(users)


@router.get("/credits", response_model=list[CreditEntry])
async def list_credits(users: UserRepository = Depends(get_user_repository)):
    """Contributors and higher-tier patrons."""
    return await user_service.credits(users)
