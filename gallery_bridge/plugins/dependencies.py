"""
Host dependency checks and the admin notice listing what is missing.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from gallery_bridge.config import Settings, get_settings

if TYPE_CHECKING:
    from gallery_bridge.host.environment import HostEnvironment


def check_dependencies(host: HostEnvironment, settings: Settings | None = None) -> list[str]:
    """Return one message per missing host capability; empty when the bridge can run."""
    settings = settings or get_settings()
    errors: list[str] = []

    if host.field_groups is None:
        errors.append("Advanced Custom Fields must be installed and active.")
    if settings.gallery_field_type not in host.field_types:
        errors.append("ACF Galerie 4 plugin must be installed and active.")
    if host.value_store is None:
        errors.append("A field value store must be available.")
    if host.image_predicate is None:
        errors.append("A media library must be available to validate attachments.")

    return errors


def render_admin_notice(errors: list[str], settings: Settings | None = None) -> str:
    """Render the admin error notice for missing dependencies, or "" if there are none."""
    if not errors:
        return ""
    settings = settings or get_settings()
    items = "".join(f"<li>{html.escape(error)}</li>" for error in errors)
    return (
        '<div class="notice notice-error"><p><strong>'
        f"{html.escape(settings.app_name)}"
        f":</strong></p><ul>{items}</ul></div>"
    )
