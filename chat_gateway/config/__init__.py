"""Unified configuration layer for provider adapters.

Goals
-----
* Centralize defaults (models, base URLs, attribution headers).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by GATEWAY_CONFIG_FILE
    3. Environment variables (e.g. OPENAI_MODEL, OPENAI_API_KEY)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``, and
  ``build_provider_config`` to turn the merged mapping into a validated
  :class:`~chat_gateway.base.models.ProviderConfig`.

Environment Variable Conventions
--------------------------------
<PROVIDER>_MODEL, <PROVIDER>_API_KEY, <PROVIDER>_BASE_URL, <PROVIDER>_HOST,
<PROVIDER>_TEMPERATURE, <PROVIDER>_MAX_TOKENS
e.g. OPENAI_MODEL, OLLAMA_HOST. API keys also honor the aliases in
:mod:`chat_gateway.config.env` (GOOGLE_API_KEY, GROK_API_KEY).

External Config File (Optional)
-------------------------------
If GATEWAY_CONFIG_FILE points at a file, JSON is tried first and YAML second.
Structure example:

```
openrouter:
  model: anthropic/claude-3.5-sonnet
  headers:
    X-Title: My Panel
ollama:
  host: http://gpu-box:11434
  timeout_seconds: 120
```

Public API
----------
* canonical_provider_name(provider: str) -> str
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* build_provider_config(provider, config=None, **overrides) -> ProviderConfig
* get_model(provider: str) -> str | None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ..base.models import ProviderConfig
from .defaults import (
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_MODEL,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
    PERPLEXITY_DEFAULT_BASE_URL,
    PERPLEXITY_DEFAULT_MODEL,
    PROVIDER_ALIASES,
    XAI_DEFAULT_BASE_URL,
    XAI_DEFAULT_MODEL,
)
from .env import is_placeholder, resolve_provider_key

CONFIG_FILE_ENV = "GATEWAY_CONFIG_FILE"

# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "basic": {},
    "gemini": {"model": GEMINI_DEFAULT_MODEL, "base_url": GEMINI_DEFAULT_BASE_URL},
    "xai": {"model": XAI_DEFAULT_MODEL, "base_url": XAI_DEFAULT_BASE_URL},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "base_url": OLLAMA_DEFAULT_HOST},
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "openrouter": {"model": OPENROUTER_DEFAULT_MODEL, "base_url": OPENROUTER_DEFAULT_BASE_URL},
    "perplexity": {"model": PERPLEXITY_DEFAULT_MODEL, "base_url": PERPLEXITY_DEFAULT_BASE_URL},
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "host": "HOST",
    "temperature": "TEMPERATURE",
    "max_tokens": "MAX_TOKENS",
}

_CONFIG_FIELDS = frozenset(ProviderConfig.model_fields)

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None
_DOTENV_LOADED = False


def canonical_provider_name(provider: Optional[str]) -> str:
    """Lower-case ``provider`` and resolve legacy aliases (``grok`` → ``xai``)."""
    name = (provider or "").lower().strip()
    return PROVIDER_ALIASES.get(name, name)


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Existing environment variables win unless they look like
    placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the optional JSON/YAML config file."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    _FILE_CACHE_PATH = path
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None and val != "":
            out[field] = val
    key, _ = resolve_provider_key(provider)
    if key and not out.get("api_key"):
        out["api_key"] = key
    if is_placeholder(out.get("api_key")):
        out.pop("api_key")
    return out


def _host_as_base_url(layer: Mapping[str, Any]) -> Dict[str, Any]:
    """Treat ``host`` (Ollama's conventional name) as ``base_url`` within one source."""
    out = dict(layer)
    host = out.pop("host", None)
    if host and not out.get("base_url"):
        out["base_url"] = host
    return out


def get_provider_config(provider: str, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration mapping for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored.
    """
    _load_dotenv_once()
    name = canonical_provider_name(provider)
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= _host_as_base_url(file_cfg)

    cfg |= _host_as_base_url(_env_overrides(name))

    if overrides:
        cfg |= _host_as_base_url({k: v for k, v in overrides.items() if v is not None})

    return cfg


def _coerce_number(value: Any, kind: type) -> Any:
    """Parse env/file strings into numbers; ``None`` when unparseable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return kind(value)
    except (TypeError, ValueError):
        return None


def _to_provider_config(data: Mapping[str, Any]) -> ProviderConfig:
    fields: Dict[str, Any] = {}
    extra: Dict[str, Any] = dict(data.get("extra") or {})
    for key, value in data.items():
        if key == "extra":
            continue
        if key in _CONFIG_FIELDS:
            fields[key] = value
        else:
            extra[key] = value
    for key, kind in (("temperature", float), ("max_tokens", int), ("timeout_seconds", float)):
        if key in fields:
            parsed = _coerce_number(fields[key], kind)
            if parsed is None or (key != "temperature" and parsed <= 0):
                fields.pop(key)
            else:
                fields[key] = parsed
    for key in ("api_key", "base_url", "model"):
        value = fields.get(key)
        if isinstance(value, (int, float)):
            # unquoted YAML scalars such as `model: 3`
            fields[key] = str(value)
    headers = fields.get("headers")
    if isinstance(headers, Mapping):
        fields["headers"] = {str(k): str(v) for k, v in headers.items() if v is not None}
    elif headers is not None:
        fields.pop("headers")
    if isinstance(fields.get("verify_tls"), str):
        fields["verify_tls"] = fields["verify_tls"].strip().lower() in {"1", "true", "yes", "on"}
    fields["extra"] = extra
    return ProviderConfig(**fields)


def build_provider_config(
    provider: str,
    config: Union[ProviderConfig, Mapping[str, Any], None] = None,
    **overrides: Any,
) -> ProviderConfig:
    """Return a validated ``ProviderConfig`` for ``provider``.

    Parameters
    ----------
    provider:
        Provider identifier; aliases are accepted.
    config:
        An explicit ``ProviderConfig`` is used as-is (no defaults or env are
        consulted) with ``overrides`` applied on top. A mapping, or ``None``,
        is merged through :func:`get_provider_config`.
    **overrides:
        Field overrides such as ``model=`` or ``api_key=``; ``None`` values are
        ignored.
    """
    updates = {k: v for k, v in overrides.items() if v is not None}
    if isinstance(config, ProviderConfig):
        if not updates:
            return config
        merged = config.model_dump() | updates
        return _to_provider_config(merged)
    merged_overrides: Dict[str, Any] = dict(config or {})
    merged_overrides |= updates
    return _to_provider_config(get_provider_config(provider, merged_overrides))


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "CONFIG_FILE_ENV",
    "DEFAULTS",
    "canonical_provider_name",
    "get_provider_config",
    "build_provider_config",
    "get_model",
]
