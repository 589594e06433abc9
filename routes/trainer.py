from fastapi import APIRouter, Depends, Form, Request, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from pathlib import Path
from utils.session import Trainer

router = APIRouter()
base_dir = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(base_dir / "templates"))

def get_trainer(request: Request) -> Trainer:
    """Dependency returning the session built at startup."""
    trainer = getattr(request.app.state, "trainer", None)
    if trainer is None:
        raise HTTPException(status_code=503, detail="Trainer is not ready")
    return trainer

def render_panel(request: Request, trainer: Trainer):
    return templates.TemplateResponse(
        request,
        "partials/trainer.html",
        {"state": trainer.snapshot()},
    )

@router.get("/panel", response_class=HTMLResponse)
async def panel(request: Request, trainer: Trainer = Depends(get_trainer)):
    return render_panel(request, trainer)

@router.get("/state")
async def state(trainer: Trainer = Depends(get_trainer)):
    """Session snapshot as JSON."""
    return JSONResponse(trainer.snapshot())

@router.post("/next", response_class=HTMLResponse)
async def next_card(request: Request, trainer: Trainer = Depends(get_trainer)):
    trainer.next_card()
    return render_panel(request, trainer)

@router.post("/toggle", response_class=HTMLResponse)
async def toggle_reveal(request: Request, trainer: Trainer = Depends(get_trainer)):
    trainer.toggle_reveal()
    return render_panel(request, trainer)

@router.post("/again", response_class=HTMLResponse)
async def grade_again(request: Request, trainer: Trainer = Depends(get_trainer)):
    """Grade the current card 'again' and move on."""
    trainer.grade_again()
    return render_panel(request, trainer)

@router.post("/good", response_class=HTMLResponse)
async def grade_good(request: Request, trainer: Trainer = Depends(get_trainer)):
    """Grade the current card 'good', count it toward today's goal and move on."""
    trainer.grade_good()
    return render_panel(request, trainer)

@router.post("/chronological", response_class=HTMLResponse)
async def chronological(request: Request, trainer: Trainer = Depends(get_trainer)):
    trainer.show_chronological()
    return render_panel(request, trainer)

@router.post("/due", response_class=HTMLResponse)
async def due_review(request: Request, trainer: Trainer = Depends(get_trainer)):
    trainer.show_due()
    return render_panel(request, trainer)

@router.post("/block/{block_index}", response_class=HTMLResponse)
async def block(block_index: int, request: Request, trainer: Trainer = Depends(get_trainer)):
    trainer.show_block(block_index)
    return render_panel(request, trainer)

@router.post("/scene/{scene:path}", response_class=HTMLResponse)
async def scene(scene: str, request: Request, trainer: Trainer = Depends(get_trainer)):
    trainer.show_scene(scene)
    return render_panel(request, trainer)

@router.post("/goal", response_class=HTMLResponse)
async def set_goal(request: Request, goal: int = Form(...), trainer: Trainer = Depends(get_trainer)):
    if goal <= 0:
        raise HTTPException(status_code=400, detail="Goal must be a positive number")
    trainer.set_goal(goal)
    return render_panel(request, trainer)
