import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import conversations, farms, requests, users
from app.auth.session import router as auth_router
from app.core.config import APP_NAME, CORS_ORIGINS, LOG_LEVEL
from app.db.init import init_store

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("localmeat")

app = FastAPI(
    title=APP_NAME,
    description="Backend API for the LocalMeat bulk meat marketplace",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize marketplace state
@app.on_event("startup")
async def startup_event():
    if getattr(app.state, "store", None) is None:
        app.state.store = init_store()
    logger.info("%s API started", APP_NAME)

# Include routers
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(farms.router, prefix="/farms", tags=["farms"])
app.include_router(requests.router, prefix="/requests", tags=["requests"])
app.include_router(conversations.router, prefix="/conversations", tags=["conversations"])

@app.get("/")
def read_root():
    return {"message": f"Welcome to {APP_NAME} API"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
