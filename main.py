import argparse
import logging
import uvicorn
from fastapi import FastAPI, Request, Depends
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from fastapi.responses import HTMLResponse
from contextlib import asynccontextmanager

import sys
from pathlib import Path

# Add project root to path for package imports
base_dir = Path(__file__).parent
sys.path.insert(0, str(base_dir))

from db.database import init_db
from db.store import SqliteStore
from config import load_config, CONFIG_DIR
from routes import trainer
from routes.trainer import get_trainer
from utils.scheduling import SchedulingStore
from utils.session import Trainer, build_trainer

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

templates = Jinja2Templates(directory=str(base_dir / "templates"))
app = FastAPI(title="PhraseCoach", description="Spaced-repetition phrase drills in the browser")

app.mount("/static", StaticFiles(directory=str(base_dir / "static")), name="static")

app.include_router(trainer.router, prefix="/trainer", tags=["trainer"])

# Home page - full trainer
@app.get("/", response_class=HTMLResponse)
async def home(request: Request, session: Trainer = Depends(get_trainer)):
    return templates.TemplateResponse(request, "index.html", {"state": session.snapshot()})

# First-run init and session construction
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: init DB and config, load cards, restore review state
    config = load_config()
    init_db()
    scheduling = SchedulingStore(SqliteStore(), default_goal=config["daily"]["goal"])
    app.state.trainer = build_trainer(Path(config["cards"]["csv_path"]), scheduling)
    yield
    app.state.trainer = None

app.router.lifespan_context = lifespan

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="PhraseCoach App")
    parser.add_argument("--init", action="store_true", help="Initialize DB and config")
    parser.add_argument("--dev", action="store_true", help="Run in dev mode with reload")
    args = parser.parse_args()
    if args.init:
        load_config()  # Ensures config is copied if missing
        init_db()
        print(f"DB initialized and config copied to {CONFIG_DIR}/")
        exit(0)
    server = load_config()["server"]
    uvicorn.run("main:app", host=server["host"], port=server["port"], reload=args.dev, log_level="info")
