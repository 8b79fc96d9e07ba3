from fastapi import APIRouter

router = APIRouter(prefix="/utils", tags=["utils"])


@router.get("/liveness/")
async def liveness() -> bool:
    """
    Liveness probe: is the process alive and responsive?

    No DB I/O. Broken idle connections are handled by the pool error policy,
    not here.
    """
    return True
