"""Request dependencies."""

from typing import Annotated

from fastapi import Depends, Path, Request

from ..database.session import SessionManager

# Upper bound of a PostgreSQL INTEGER primary key
MAX_ID = 2_147_483_647


def get_store(request: Request) -> SessionManager:
    # One store handle per application, built at startup
    return request.app.state.session_manager


Store = Annotated[SessionManager, Depends(get_store)]
PetId = Annotated[int, Path(gt=0, le=MAX_ID, description="Pet identifier")]
RecordId = Annotated[int, Path(gt=0, le=MAX_ID, description="Medical record identifier")]
