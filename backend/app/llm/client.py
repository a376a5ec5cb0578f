# app/llm/client.py
"""
Provider-agnostic entry points for model calls.

- llm_generate: render a registered prompt, call the provider, retry transient failures
- llm_generate_structured: same, parsed into a pydantic schema with one repair attempt

Every call (success or failure) emits exactly one telemetry line.
"""


import uuid
import time
import json
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.config import settings
from app.llm.errors import LLMNonRetryableError, LLMRetryableError
from app.llm.prompts.registry import get_prompt
from app.llm.telemetry import LLMCallLog, log_llm_call, now_ms
from app.llm.types import LLMRequest, LLMResponse
from app.llm.providers.gemini import GeminiProvider

T = TypeVar("T", bound=BaseModel)

REPAIR_SLOT = "__REPAIR_INSTRUCTIONS__"
REPAIR_INSTRUCTIONS = (
    "You MUST return valid JSON only. "
    "Escape all quotes and newlines inside strings. "
    "No markdown. No trailing commas. "
    "Return EXACTLY the schema with correct types."
)
MAX_BACKOFF_SECONDS = 2.0


def _render_template(template: str, variables: dict) -> str:
    out = template
    for k, v in variables.items():
        out = out.replace("{{" + k + "}}", str(v))
    return out


def _backoff_seconds(attempt: int) -> float:
    return min(MAX_BACKOFF_SECONDS, 0.25 * (2 ** attempt))


def _build_request(
    purpose: str,
    prompt_name: str,
    prompt_version: str,
    variables: dict,
    response_mime_type: str | None,
) -> LLMRequest:
    return LLMRequest(
        trace_id=str(uuid.uuid4()),
        purpose=purpose,
        prompt_name=prompt_name,
        prompt_version=prompt_version,
        variables=variables,
        provider=settings.LLM_PROVIDER,
        model=settings.GEMINI_MODEL,
        temperature=settings.LLM_TEMPERATURE,
        max_output_tokens=settings.LLM_MAX_OUTPUT_TOKENS,
        timeout_seconds=settings.LLM_TIMEOUT_SECONDS,
        response_mime_type=response_mime_type,
    )


def llm_generate(
    *,
    purpose: str,
    prompt_name: str,
    prompt_version: str,
    variables: dict,
    response_mime_type: str | None = None,
) -> LLMResponse:
    if settings.LLM_PROVIDER != "gemini":
        raise LLMNonRetryableError(f"Unsupported provider: {settings.LLM_PROVIDER}")

    safe_vars = {REPAIR_SLOT: "", **variables}
    req = _build_request(purpose, prompt_name, prompt_version, safe_vars, response_mime_type)
    rendered = _render_template(get_prompt(prompt_name, prompt_version).template, safe_vars)
    provider = GeminiProvider()

    start_ms = now_ms()
    retries = 0

    def _log(ok: bool, error: Exception | None = None) -> None:
        log_llm_call(
            LLMCallLog(
                trace_id=req.trace_id,
                provider=req.provider,
                model=req.model,
                purpose=purpose,
                prompt=f"{prompt_name}@{prompt_version}",
                prompt_chars=len(rendered),
                latency_ms=(now_ms() - start_ms),
                retries=retries,
                ok=ok,
                error_type=type(error).__name__ if error else None,
            )
        )

    last_err: LLMRetryableError | None = None
    for attempt in range(settings.LLM_MAX_RETRIES + 1):
        if attempt:
            time.sleep(_backoff_seconds(attempt - 1))
        try:
            resp = provider.generate(req, rendered)
        except LLMRetryableError as e:
            last_err = e
            retries = attempt + 1
            continue
        except LLMNonRetryableError as e:
            _log(ok=False, error=e)
            raise

        _log(ok=True)
        return LLMResponse(
            trace_id=resp.trace_id,
            provider=resp.provider,
            model=resp.model,
            output_text=resp.output_text,
            latency_ms=resp.latency_ms,
            retries=retries,
            raw=resp.raw,
            input_tokens=resp.input_tokens,
            output_tokens=resp.output_tokens,
        )

    err = last_err or LLMRetryableError("LLM failed after retries")
    _log(ok=False, error=err)
    raise err


def _parse(schema: Type[T], text: str) -> T:
    return schema.model_validate(json.loads(text))


def llm_generate_structured(
    *,
    purpose: str,
    prompt_name: str,
    prompt_version: str,
    variables: dict,
    schema: Type[T],
) -> T:
    call = dict(
        prompt_name=prompt_name,
        prompt_version=prompt_version,
        response_mime_type="application/json",
    )

    resp = llm_generate(purpose=purpose, variables=variables, **call)
    try:
        return _parse(schema, resp.output_text)
    except (json.JSONDecodeError, ValidationError):
        pass

    repaired = llm_generate(purpose=purpose + "_repair", variables={**variables, REPAIR_SLOT: REPAIR_INSTRUCTIONS}, **call)
    try:
        return _parse(schema, repaired.output_text)
    except (json.JSONDecodeError, ValidationError) as e:
        raise LLMNonRetryableError(f"{purpose}: response does not match {schema.__name__}") from e
