"""Desktop entry rendering (freedesktop.org ``.desktop`` files)."""

from __future__ import annotations

from .metadata import PackageMetadata

__all__ = ["render_desktop_entry"]


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n")


def render_desktop_entry(metadata: PackageMetadata, *, exec_path: str, icon: str) -> str:
    lines = [
        "[Desktop Entry]",
        "Type=Application",
        f"Name={_escape(metadata.app_name)}",
        f"Comment={_escape(metadata.comment)}",
        f"Exec={exec_path}",
        f"Icon={icon}",
        f"Terminal={'true' if metadata.is_terminal else 'false'}",
    ]
    if metadata.categories is not None:
        lines.append(f"Categories={metadata.categories.desktop_value()}")
    else:
        # appimagetool rejects entries without a category.
        lines.append("Categories=Utility;")
    if metadata.keywords:
        lines.append("Keywords=" + "".join(f"{k};" for k in metadata.keywords))
    if metadata.startup_wm_class:
        lines.append(f"StartupWMClass={metadata.startup_wm_class}")
    return "\n".join(lines) + "\n"
