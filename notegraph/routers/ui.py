# notegraph/routers/ui.py
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from notegraph import state
from notegraph.model import Model

router = APIRouter(tags=["ui"])

templates_dir = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, model: Model = Depends(state.get_model)):
    return templates.TemplateResponse(request, "index.html", {"nodes": model.get_nodes()})
