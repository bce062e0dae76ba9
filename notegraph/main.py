# notegraph/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notegraph import state
from notegraph.exceptions import ModelLoadError
from notegraph.routers import api, ui


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the notes directory on startup."""
    if state.model is None:
        state.init_model()
    yield


app = FastAPI(title="Notegraph", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(ModelLoadError)
async def model_load_error_handler(request: Request, exc: ModelLoadError):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


app.include_router(api.router)
app.include_router(ui.router)
