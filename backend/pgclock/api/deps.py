from typing import Annotated

from fastapi import Depends, Request

from pgclock.core.pool import ConnectionProvider


def get_provider(request: Request) -> ConnectionProvider:
    return request.app.state.provider


ProviderDep = Annotated[ConnectionProvider, Depends(get_provider)]
