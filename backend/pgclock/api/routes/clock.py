from fastapi import APIRouter
from fastapi.responses import JSONResponse

from pgclock.api.deps import ProviderDep
from pgclock.schemas import Message, ServerTime

router = APIRouter(tags=["clock"])


@router.get(
    "/now",
    response_model=ServerTime,
    responses={503: {"model": Message}},
)
async def read_now(provider: ProviderDep) -> ServerTime | JSONResponse:
    """
    Current time according to the database server.

    503 when the query produced no row (query failed or pool exhausted).
    """
    row = await provider.get_server_time()
    if row is None:
        return JSONResponse(
            status_code=503, content={"detail": "Server time unavailable"}
        )
    return ServerTime(now=row["now"])
