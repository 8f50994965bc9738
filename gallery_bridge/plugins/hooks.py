"""
Plugin Hook Constants

Hook names the host fires and the bridge subscribes to. Names follow the
host's own event names.
"""

from __future__ import annotations

# ── Schema lifecycle ──────────────────────────────────────────────────────────
HOOK_SOURCE_INIT = "source.init"

# ── Admin UI ──────────────────────────────────────────────────────────────────
HOOK_ADMIN_NOTICES = "admin_notices"

# ── Master list ───────────────────────────────────────────────────────────────
ALL_HOOKS: list[str] = [
    HOOK_SOURCE_INIT,
    HOOK_ADMIN_NOTICES,
]
