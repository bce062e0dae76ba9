# notegraph/routers/api.py
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from notegraph import config, state
from notegraph.exceptions import ModelLoadError
from notegraph.graph import links_for
from notegraph.model import Model
from notegraph.schemas import Node, NodeLinks, ReloadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


async def compute_edges(model: Model):
    return await run_in_threadpool(model.get_edges, config.get_graph_workers())


@router.get("/nodes", response_model=list[Node])
async def list_nodes(model: Model = Depends(state.get_model)):
    """List all notes in directory order."""
    return model.get_nodes()


@router.get("/edges", response_model=list[tuple[str, str]])
async def list_edges(model: Model = Depends(state.get_model)):
    """All references between notes as [source, target] pairs."""
    return await compute_edges(model)


@router.get("/nodes/{node_id}", response_model=Node)
async def get_node(node_id: str, model: Model = Depends(state.get_model)):
    node = model.get_node(node_id)
    if node is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return node


@router.get("/nodes/{node_id}/links", response_model=NodeLinks)
async def get_node_links(node_id: str, model: Model = Depends(state.get_model)):
    """Get forward and back links for a note."""
    if model.get_node(node_id) is None:
        raise HTTPException(status_code=404, detail="Note not found")
    forward, back = links_for(await compute_edges(model), node_id)
    return NodeLinks(forward=forward, back=back)


@router.post("/reload", response_model=ReloadResponse)
async def reload():
    """Re-read the whole notes directory and replace the served model."""
    try:
        model = await run_in_threadpool(state.init_model)
    except ModelLoadError as e:
        logger.error(f"Reload failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    edges = await compute_edges(model)
    return ReloadResponse(status="ok", nodes=len(model), edges=len(edges))
