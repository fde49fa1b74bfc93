import time
import uuid
from typing import Any, Dict, Mapping, Optional

from gallery.assembler import assemble_payload
from gallery.downloader import download_images
from gallery.llm.gemini import ProviderConfig, extract_raw
from gallery.models import ExtractionResult
from gallery.presentation import open_all
from gallery.rendering.markdown import render_html, render_md
from gallery.stages.resolution import DEFAULT_POLICY
from gallery.stages.validity import DEFAULT_HOST_MARKERS
from gallery.utils import get_logger, load_config, write_output

logger = get_logger(__name__)


def _apply_overrides(cfg: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> None:
    if not overrides:
        return

    if overrides.get("model") is not None or overrides.get("retries") is not None:
        pv = cfg.setdefault("provider", {})
        if overrides.get("model") is not None:
            pv["model"] = overrides["model"]
        if overrides.get("retries") is not None:
            pv["retries"] = int(overrides["retries"])  # type: ignore[arg-type]

    if overrides.get("out_dir") is not None or overrides.get("formats") is not None:
        out = cfg.setdefault("output", {})
        if overrides.get("out_dir") is not None:
            out["dir"] = overrides["out_dir"]
        if overrides.get("formats") is not None:
            out["formats"] = list(overrides["formats"])

    if overrides.get("download") is not None:
        cfg.setdefault("download", {})["enabled"] = bool(overrides["download"])


def _execute_pipeline(
    listing: str,
    cfg: Dict[str, Any],
    *,
    client: Any = None,
    env: Optional[Mapping[str, str]] = None,
    open_browser: bool = False,
) -> ExtractionResult:
    provider_cfg = ProviderConfig.from_config(cfg.get("provider"), env)
    policy = DEFAULT_POLICY.extended((cfg.get("resolution") or {}).get("families") or {})
    host_markers = tuple(DEFAULT_HOST_MARKERS) + tuple((cfg.get("validity") or {}).get("host_markers") or ())
    logger.info("extracting listing=%s model=%s families=%s", listing, provider_cfg.model, sorted(policy.families))

    t0 = time.monotonic()
    raw = extract_raw(listing, provider_cfg, client=client)
    logger.info("provider returned took_ms=%d", int((time.monotonic() - t0) * 1000))

    result = assemble_payload(raw.text, raw.grounding_chunks, policy=policy, host_markers=host_markers)

    out_cfg = cfg.get("output")
    if out_cfg:
        files = write_output(result.model_dump(mode="json"), render_md(result), render_html(result), out_cfg)
        logger.info("output written files=%d dir=%s", len(files), out_cfg.get("dir", "out"))

    if result.is_empty:
        logger.info("empty gallery -> skip download & browser")
        return result

    dl_cfg = cfg.get("download") or {}
    if dl_cfg.get("enabled"):
        download_images(result, dl_cfg.get("dir", "photos"), timeout=float(dl_cfg.get("timeout", 20)))

    if open_browser:
        open_all(result)

    return result


def run_once(
    listing: str,
    config_path: Optional[str] = None,
    *,
    overrides: Optional[Dict[str, Any]] = None,
    open_browser: bool = False,
    client: Any = None,
    env: Optional[Mapping[str, str]] = None,
) -> ExtractionResult:
    """Extract and normalize the gallery for one listing URL or address."""
    if not listing or not listing.strip():
        raise ValueError("listing URL or address required")

    run_id = uuid.uuid4().hex[:8]
    logger.info("=== run start id=%s ===", run_id)

    try:
        cfg = load_config(config_path)
        _apply_overrides(cfg, overrides)
        return _execute_pipeline(listing.strip(), cfg, client=client, env=env, open_browser=open_browser)
    except Exception as e:
        logger.error("Pipeline execution failed: %s", e)
        raise
    finally:
        logger.info("=== run end id=%s ===", run_id)
