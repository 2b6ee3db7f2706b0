"""Display module - terminal and JSON output."""

from lintemit.display.render import find_project_root, render, render_summary, to_json

__all__ = ["find_project_root", "render", "render_summary", "to_json"]
