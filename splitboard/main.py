from contextlib import asynccontextmanager

from fastapi import FastAPI

from splitboard.core.config import settings
from splitboard.core.db_check import create_tables, wait_for_db
from splitboard.core.logging_config import configure_logging
from splitboard.api.v1.routes.system import router as system_router
from splitboard.api.v1.routes.user import router as user_router
from splitboard.api.v1.routes.group import router as group_router
from splitboard.api.v1.routes.transaction import router as transaction_router
from splitboard.api.v1.routes.settlement import router as settlement_router

configure_logging(settings.LOG_LEVEL, settings.DB_CHANGE_LOG_PATH)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await wait_for_db(retries=settings.DB_CONNECT_RETRIES)
    await create_tables()
    yield


app = FastAPI(title="Splitboard", lifespan=lifespan)

@app.get("/")
async def root():
    return {"message": "Splitboard is live"}

app.include_router(system_router, prefix="/api/v1/system")
app.include_router(user_router, prefix="/api/v1/users")
app.include_router(group_router, prefix="/api/v1/groups")
app.include_router(transaction_router, prefix="/api/v1/groups")
app.include_router(settlement_router, prefix="/api/v1/groups")
