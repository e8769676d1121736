from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.core.logger import setup_logger
from app.db.init_db import init_db
from app.db.session import SessionLocal, engine, test_connection
from app.middleware.auth_middleware import AuthMiddleware
from app.middleware.csrf_middleware import CSRFMiddleware
from app.routers.auth_router import router as auth_router
from app.routers.user_router import router as user_router
from app.routers.store_router import router as store_router

logger = setup_logger("main")

app = FastAPI(title="Restaurant Management API")


@app.on_event("startup")
def startup_event():
    logger.info("Starting server...")
    if not test_connection():
        return
    with SessionLocal() as db:
        init_db(engine, db)


register_exception_handlers(app)

# last added runs first: CORS, then CSRF, then auth
app.add_middleware(AuthMiddleware)
app.add_middleware(CSRFMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(user_router)
app.include_router(store_router)


@app.get("/ping")
def ping():
    return {"ping": "pong"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
