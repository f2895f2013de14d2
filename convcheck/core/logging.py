import json
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional

scenario_id_ctx: ContextVar[str | None] = ContextVar("scenario_id", default=None)


class ScenarioIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        sid = scenario_id_ctx.get()
        record.scenario_id = sid or "-"
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        base: Dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "scenario_id": getattr(record, "scenario_id", "-"),
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def init_logging(debug: bool = False) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    level = logging.DEBUG if debug else logging.INFO
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(ScenarioIdFilter())
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)


@contextmanager
def scenario_context(name: Optional[str] = None) -> Iterator[str]:
    """Tag every log record emitted inside the block with one scenario id."""
    sid = f"{name}-{uuid.uuid4().hex[:8]}" if name else str(uuid.uuid4())
    token = scenario_id_ctx.set(sid)
    logger = logging.getLogger("convcheck.scenario")
    logger.debug("scenario start")
    try:
        yield sid
    finally:
        logger.debug("scenario end")
        scenario_id_ctx.reset(token)


async def request_context_middleware(request, call_next):  # type: ignore
    token = scenario_id_ctx.set(str(uuid.uuid4()))
    logger = logging.getLogger("convcheck.request")
    logger.debug("request start %s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
        return response
    finally:
        logger.debug("request end")
        scenario_id_ctx.reset(token)
