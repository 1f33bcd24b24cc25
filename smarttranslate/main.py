"""
/**
 * @file smarttranslate/main.py
 * @description FastAPI 应用入口（MVC：仅装配路由与中间件）。
 */
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from smarttranslate.config import load_settings, reload_settings, CONFIG_PATH, CONFIG_LOCAL_PATH

from smarttranslate.controllers import health_router, proxy_router

app = FastAPI()
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("smarttranslate.main")


class ConfigEventHandler(FileSystemEventHandler):
    """Handler for config file changes"""
    def on_modified(self, event):
        if event.is_directory:
            return

        if event.src_path == CONFIG_PATH or event.src_path == CONFIG_LOCAL_PATH:
            # reload_settings logs and keeps the previous config on failure
            reload_settings()


_observer = None


@app.on_event("startup")
async def startup_event():
    global _observer
    try:
        event_handler = ConfigEventHandler()
        _observer = Observer()
        config_dir = os.path.dirname(CONFIG_PATH)
        _observer.schedule(event_handler, config_dir, recursive=False)
        _observer.start()
        logger.info("Config watcher started on %s", config_dir)
    except Exception as e:
        logger.error("Failed to start config watcher: %s", e)
    # Initial load
    load_settings()


@app.on_event("shutdown")
async def shutdown_event():
    global _observer

    if _observer:
        _observer.stop()
        _observer.join()
        _observer = None


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(proxy_router)
