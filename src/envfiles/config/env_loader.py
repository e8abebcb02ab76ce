"""Layered key/value source for envfiles settings.

Layers, lowest precedence first:
1) a .env file (explicit path, else ./.env when present)
2) OS environment variables
3) explicit overrides

When a prefix is given only ``{prefix}_*`` keys are kept, so unrelated
process variables never reach the settings parser.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values


class EnvLoader:
    """Merge .env, OS environment and override layers into one dict."""

    def __init__(self, env_file: Optional[Path | str] = None, prefix: Optional[str] = None) -> None:
        self.env_file = Path(env_file) if env_file else None
        self.prefix = f"{prefix}_" if prefix else None

    @property
    def source(self) -> Optional[Path]:
        """The .env file that will be read, or None."""
        candidate = self.env_file or Path.cwd() / ".env"
        return candidate if candidate.is_file() else None

    def _accept(self, key: str) -> bool:
        return self.prefix is None or key.startswith(self.prefix)

    def load(self, overrides: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        data: Dict[str, str] = {}
        source = self.source
        layers = [
            dotenv_values(source) if source else {},
            os.environ,
            overrides or {},
        ]
        for layer in layers:
            # dotenv yields None for bare keys without "="
            data.update({k: str(v) for k, v in layer.items() if v is not None and self._accept(k)})
        return data


__all__ = ["EnvLoader"]
