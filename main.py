"""JobIcon — custom job icons: upload, resized variants, serving."""
import logging
import os

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

import db
from config import get_icon_config
from routes.upload import router as upload_router
from routes.icons import router as icons_router
from routes.jobs import router as jobs_router
from routes.views import router as views_router
from routes.extensions import router as extensions_router
from services.icon_store import build_icon_store, migrate_legacy_dir
from services.serving import JobIconActions

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="JobIcon", version="0.1.0")


@app.on_event("startup")
def startup():
    db.init_db()
    cfg = get_icon_config()
    store = build_icon_store(cfg)
    # Icons from before the size directories sit flat in the store root
    renames = migrate_legacy_dir(store, store.root)
    if renames:
        changed = db.rename_job_icons(renames)
        logger.info("Migrated %d legacy icons, updated %d jobs", len(renames), changed)
    app.state.icon_actions = JobIconActions(store, cache_entries=cfg.cache_entries)
    _mount_user_content(str(cfg.user_content))


def _mount_user_content(directory: str):
    # Mounted at startup so the directory follows the current config
    app.router.routes = [r for r in app.router.routes if getattr(r, "name", None) != "userContent"]
    app.mount("/userContent", StaticFiles(directory=directory, check_dir=False), name="userContent")


app.include_router(upload_router)
app.include_router(icons_router)
app.include_router(jobs_router)
app.include_router(views_router)
app.include_router(extensions_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8900)
