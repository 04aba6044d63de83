from __future__ import annotations

import os
import re


def parse_id_set(raw: str | None) -> set[int]:
    if not raw:
        return set()
    out: set[int] = set()
    for tok in re.split(r"[\s,;]+", raw.strip()):
        if not tok:
            continue
        if re.fullmatch(r"\d{8,22}", tok):
            out.add(int(tok))
    return out


def parse_str_set(raw: str | None) -> set[str]:
    if not raw:
        return set()
    return {tok.strip().lower() for tok in re.split(r"[\s,;]+", raw) if tok.strip()}


def env_int(name: str, default: int, *, minimum: int | None = None, maximum: int | None = None) -> int:
    raw = os.getenv(name)
    try:
        value = int(str(raw).strip()) if raw is not None and str(raw).strip() else int(default)
    except ValueError:
        print(f"[CFG] invalid {name}={raw!r}; falling back to {default!r}")
        value = int(default)
    if minimum is not None:
        value = max(minimum, value)
    if maximum is not None:
        value = min(maximum, value)
    return value
