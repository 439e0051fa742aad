import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grampredict.core.config import settings
from grampredict.core.errors import register_error_handlers
from grampredict.db.session import engine, Base
from grampredict.models import user
from grampredict.models import district
from grampredict.models import asset
from grampredict.models import demand
from grampredict.models import forecast

from grampredict.routes import auth_router
from grampredict.routes import user_router
from grampredict.routes import district_router
from grampredict.routes import asset_router
from grampredict.routes import demand_router
from grampredict.routes import forecast_router


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging()
Base.metadata.create_all(bind=engine)

app = FastAPI(title="GramPredict API")

origins = [origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router.router)
app.include_router(user_router.router)
app.include_router(district_router.router)
app.include_router(asset_router.router)
app.include_router(demand_router.router)
app.include_router(forecast_router.router)


@app.get("/")
async def root():
    return {"message": "Welcome to the GramPredict API!"}
