"""
Health endpoint for API v1.

Lets load balancers and uptime checks verify that the service is up
and that its database can be opened.  The response uses the same
envelope as the action endpoint.
"""

import sqlite3

from fastapi import APIRouter, Depends

from connect_api.app.core.db import get_db
from connect_api.app.schemas.envelope import Envelope, success

router = APIRouter()


@router.get("", response_model=Envelope, summary="Health check")
async def health(conn: sqlite3.Connection = Depends(get_db)) -> dict:
    conn.execute("SELECT 1").fetchone()
    return success("Healthy").render()
