import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from app.dependencies import get_timing
from app.schemas import MarksRequest, MeasureRequest, UnknownMarkResponse
from timing.errors import UnknownMarkError
from timing.registry import REQUEST_START, Timing
from timing.report import format_server_timing
from timing.schemas import MEASURE, Entry, TimingReport
from utils.config import Settings, load_settings
from utils.logging import log_event, setup_logger

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the timing service. Every request gets its own Timing registry,
    started at the moment the request reached the middleware.
    """
    if settings is None:
        settings = load_settings()

    server_logger = setup_logger(name="server", log_dir=settings.log_dir, level=settings.level)
    timing_logger = setup_logger(name="timing", log_dir=settings.log_dir, level=settings.level)
    # setup_logger keeps the level of an already configured logger
    server_logger.setLevel(settings.level)
    timing_logger.setLevel(settings.level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_event(server_logger, logging.INFO, "Server Setup Initiated", log_level=settings.log_level)
        yield
        log_event(server_logger, logging.INFO, "Server Shutdown Initiated")

    app = FastAPI(
        title="Request Timing",
        version="1.0.0",
        description="Per-request marks and measures with Server-Timing output",
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.middleware("http")
    async def timing_middleware(request: Request, call_next):
        start = time.time()
        timing = Timing(request_time_float=start, request_time=int(start))
        request.state.timing = timing

        try:
            response = await call_next(request)
        except Exception as e:
            log_event(
                server_logger,
                logging.ERROR,
                "Request Failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise

        # handlers may clear requestStart through get_timing
        total = timing.measure("total") if REQUEST_START in timing else None

        if settings.server_timing_header:
            entries = timing.get_entries() if settings.server_timing_include_marks else timing.get_entries_by_type(MEASURE)
            response.headers["Server-Timing"] = format_server_timing(
                entries, include_type=settings.server_timing_include_marks
            )

        log_event(
            server_logger,
            logging.INFO,
            "Request Timed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration=total.duration if total is not None else None,
        )
        return response

    @app.exception_handler(UnknownMarkError)
    async def unknown_mark_handler(request: Request, exc: UnknownMarkError):
        body = UnknownMarkResponse(detail=str(exc), mark=exc.mark_name)
        return JSONResponse(status_code=404, content=body.model_dump())

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/timing", response_model=TimingReport)
    def timing_report(timing: Timing = Depends(get_timing)):
        timing.mark("handlerStart")
        timing.measure("handler", "handlerStart")
        return timing.report()

    @app.post("/timing/marks", response_model=TimingReport)
    def record_marks(req: MarksRequest, timing: Timing = Depends(get_timing)):
        for name in req.names:
            timing.mark(name)
        return timing.report()

    @app.post("/timing/measure", response_model=Entry, responses={404: {"model": UnknownMarkResponse}})
    def record_measure(req: MeasureRequest, timing: Timing = Depends(get_timing)):
        return timing.measure(req.name, req.start_mark, req.end_mark)

    return app

app = create_app()
