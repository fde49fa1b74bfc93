import os
import re
import json
import datetime as dt
import logging
from logging.handlers import TimedRotatingFileHandler
from typing import Any, Dict, List, Optional

import yaml
from jsonschema import validate, Draft202012Validator
from jsonschema.exceptions import ValidationError

# ---------- Config ----------

def load_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()

def load_schema(name: str) -> dict:
    here = os.path.dirname(os.path.abspath(__file__))
    return json.loads(load_file(os.path.join(here, "schemas", name)))

def validate_config(cfg: dict):
    schema = load_schema("config.schema.json")
    try:
        validate(instance=cfg, schema=schema, cls=Draft202012Validator)
    except ValidationError as e:
        raise ValueError(f"Config validation error: {e.message} at {list(e.path)}") from e

def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Read and validate a YAML config; ``None`` yields an empty (all-defaults) config."""
    if not path:
        cfg: Dict[str, Any] = {}
    else:
        cfg = yaml.safe_load(load_file(path)) or {}
    validate_config(cfg)
    return cfg

# ---------- Output writer ----------

def write_output(json_obj: dict, human_md: str, html: str, out_cfg: dict) -> List[str]:
    out_dir = out_cfg.get("dir", "out")
    formats = out_cfg.get("formats", ["md", "json"])
    os.makedirs(out_dir, exist_ok=True)
    now_local = dt.datetime.now().astimezone()
    ts = now_local.strftime("%Y%m%dT%H%M%S%z")
    base = os.path.join(out_dir, f"gallery_{ts}")

    generated_files = []

    if "md" in formats:
        md_path = base + ".md"
        with open(md_path, "w", encoding="utf-8") as f:
            f.write(human_md)
        generated_files.append(md_path)

    if "json" in formats:
        json_path = base + ".json"
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(json_obj, f, ensure_ascii=False, indent=2)
        generated_files.append(json_path)

    if "html" in formats:
        html_path = base + ".html"
        with open(html_path, "w", encoding="utf-8") as f:
            f.write(html)
        generated_files.append(html_path)

    return generated_files

# ---------- Logging ----------

_LOGGER_INITIALIZED = False

class JsonFormatter(logging.Formatter):
    def format(self, record):
        ts = dt.datetime.fromtimestamp(record.created, tz=dt.timezone.utc)
        payload = {
            "ts": ts.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def _build_logger():
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_dir = os.getenv("LOG_DIR", "logs")
    json_mode = os.getenv("LOG_JSON", "false").lower() == "true"

    os.makedirs(log_dir, exist_ok=True)
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level, logging.INFO))

    ch = logging.StreamHandler()
    ch.setLevel(logger.level)

    fh = TimedRotatingFileHandler(os.path.join(log_dir, "listing-gallery.log"), when="D", backupCount=7, encoding="utf-8")
    fh.setLevel(logger.level)

    if json_mode:
        fmt = JsonFormatter()
    else:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

    ch.setFormatter(fmt)
    fh.setFormatter(fmt)
    logger.addHandler(ch)
    logger.addHandler(fh)

    _LOGGER_INITIALIZED = True

def get_logger(name: str = None) -> logging.Logger:
    _build_logger()
    return logging.getLogger(name if name else __name__)

# ---------- Secret redaction ----------

def redact_secrets(s: str, env_keys: Optional[List[str]] = None) -> str:
    """Redact API keys from strings before they reach the logs."""
    if not s:
        return s

    keys = list(env_keys or []) + ["GEMINI_API_KEY", "GOOGLE_API_KEY"]

    redacted = s
    for k in keys:
        v = os.getenv(k)
        if v and len(v) > 3:
            redacted = redacted.replace(v, "***")

    flags = re.IGNORECASE
    redacted = re.sub(r"AIza[0-9A-Za-z_-]{20,}", "AIza***", redacted)
    redacted = re.sub(r"(key=)([^\s&]+)", r"\1***", redacted, flags=flags)
    redacted = re.sub(r"(x-goog-api-key:\s*)(\S+)", r"\1***", redacted, flags=flags)
    redacted = re.sub(r"(bearer\s+)[A-Za-z0-9._-]+", r"\1***", redacted, flags=flags)

    return redacted
