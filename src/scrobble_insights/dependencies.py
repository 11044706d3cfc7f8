"""Shared FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scrobble_insights.db import DatabaseManager

db_manager = DatabaseManager.from_env()

DBSession = Annotated[AsyncSession, Depends(db_manager.dependency)]
