from __future__ import annotations

import os
import typing as t
from dataclasses import dataclass, field

import httpx
from google import genai
from google.genai import errors, types
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential

from gallery.errors import ProviderError
from gallery.llm.schema_adapter import to_gemini
from gallery.prompt import build_prompt
from gallery.utils import get_logger, load_schema, redact_secrets

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-3-pro-preview"
DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"
DEFAULT_THINKING_BUDGET = 32000


@dataclass(frozen=True)
class ProviderConfig:
    """Credentials and request knobs handed to :func:`extract_raw`."""

    api_key: str = field(repr=False)
    model: str = DEFAULT_MODEL
    thinking_budget: int = DEFAULT_THINKING_BUDGET
    timeout: int = 600
    retries: int = 0
    api_key_env: str = DEFAULT_API_KEY_ENV

    @classmethod
    def from_config(cls, cfg: t.Optional[dict], env: t.Optional[t.Mapping[str, str]] = None) -> "ProviderConfig":
        cfg = cfg or {}
        env = os.environ if env is None else env
        key_env = cfg.get("api_key_env", DEFAULT_API_KEY_ENV)
        api_key = env.get(key_env, "")
        if not api_key:
            raise ProviderError(f"missing API key: set {key_env}")
        return cls(
            api_key=api_key,
            model=cfg.get("model", DEFAULT_MODEL),
            thinking_budget=int(cfg.get("thinking_budget", DEFAULT_THINKING_BUDGET)),
            timeout=int(cfg.get("timeout", 600)),
            retries=int(cfg.get("retries", 0)),
            api_key_env=key_env,
        )


@dataclass
class RawExtraction:
    text: str
    grounding_chunks: t.List[dict] = field(default_factory=list)


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, errors.APIError):
        return exc.code == 429 or (exc.code or 0) >= 500
    if isinstance(exc, httpx.TransportError):
        return True
    return False


def _chunk_to_dict(chunk: t.Any) -> dict:
    if isinstance(chunk, t.Mapping):
        return dict(chunk)
    if hasattr(chunk, "model_dump"):
        return chunk.model_dump(exclude_none=True)
    web = getattr(chunk, "web", None)
    if web is None:
        return {}
    return {"web": {"title": getattr(web, "title", None), "uri": getattr(web, "uri", None)}}


def grounding_chunks(response: t.Any) -> t.List[dict]:
    """Pull ``candidates[0].grounding_metadata.grounding_chunks`` as plain dicts."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    meta = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(meta, "grounding_chunks", None) or []
    return [_chunk_to_dict(c) for c in chunks]


def _build_request_config(cfg: ProviderConfig) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        tools=[types.Tool(google_search=types.GoogleSearch())],
        thinking_config=types.ThinkingConfig(thinking_budget=cfg.thinking_budget),
        response_mime_type="application/json",
        response_schema=to_gemini(load_schema("listing.schema.json")),
    )


def make_client(cfg: ProviderConfig) -> genai.Client:
    return genai.Client(
        api_key=cfg.api_key,
        http_options=types.HttpOptions(timeout=cfg.timeout * 1000),
    )


def extract_raw(listing: str, cfg: ProviderConfig, client: t.Any = None) -> RawExtraction:
    """Run the grounded extraction for one listing and return its raw text and sources."""
    client = client or make_client(cfg)
    prompt = build_prompt(listing)
    request_config = _build_request_config(cfg)

    try:
        for attempt in Retrying(
            stop=stop_after_attempt(cfg.retries + 1),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception(_is_transient),
            reraise=True,
        ):
            with attempt:
                response = client.models.generate_content(
                    model=cfg.model,
                    contents=prompt,
                    config=request_config,
                )
    except (errors.APIError, httpx.HTTPError) as e:
        msg = redact_secrets(str(e), [cfg.api_key_env])
        logger.error("gemini call failed model=%s: %s", cfg.model, msg)
        raise ProviderError(f"extraction provider failed: {msg}") from e

    text = getattr(response, "text", None) or ""
    chunks = grounding_chunks(response)
    logger.info("gemini response chars=%d grounding_chunks=%d", len(text), len(chunks))
    return RawExtraction(text=text, grounding_chunks=chunks)
