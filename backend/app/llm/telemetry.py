# app/llm/telemetry.py

import logging
import time
from dataclasses import asdict, dataclass

logger = logging.getLogger("llm")


@dataclass
class LLMCallLog:
    trace_id: str
    provider: str
    model: str
    purpose: str
    prompt: str            # "<name>@<version>"
    prompt_chars: int      # rendered prompt size, the main cost driver
    latency_ms: int
    retries: int
    ok: bool
    error_type: str | None = None


def now_ms() -> int:
    return int(time.time() * 1000)


def log_llm_call(item: LLMCallLog) -> None:
    # fields go through `extra` so the JSON formatter emits them as keys
    logger.log(logging.INFO if item.ok else logging.WARNING, "llm.call", extra=asdict(item))
