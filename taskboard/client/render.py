"""
Rendering of client state into page elements.

Render functions receive the ``Element`` handles they write into instead
of looking them up globally.  Markup comes from Jinja templates with
autoescaping on, so task titles, descriptions and server messages are
always HTML-escaped.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import escape

from ..models import TaskStatus

_env = Environment(
    loader=PackageLoader("taskboard.client", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


class Element:
    """
    Handle to one region of the page.

    Attributes:
        element_id: Identifier of the region, e.g. ``"tasksList"``.
        html: Current markup of the region.
    """

    def __init__(self, element_id: str = "", html: str = ""):
        self.element_id = element_id
        self.html = html

    def set_html(self, html: str) -> None:
        self.html = html

    def set_text(self, text: Any) -> None:
        self.html = str(escape(str(text)))

    def __repr__(self) -> str:
        return f"<Element {self.element_id!r}>"


def count_done(tasks: Sequence[dict[str, Any]]) -> int:
    return sum(1 for task in tasks if task.get("status") == TaskStatus.DONE.value)


def render_task_list(tasks: Sequence[dict[str, Any]]) -> str:
    """Return the markup for *tasks*, or the empty state when there are none."""
    return _env.get_template("task_list.html").render(tasks=tasks).strip()


def render_tasks(
    tasks: Sequence[dict[str, Any]],
    *,
    list_element: Element,
    total_element: Element,
    completed_element: Element,
) -> None:
    """Render the task list and the total / completed counters."""
    list_element.set_html(render_task_list(tasks))
    total_element.set_text(len(tasks))
    completed_element.set_text(count_done(tasks))


def render_alert(element: Element, message: str, kind: str = "danger") -> None:
    """Show *message* in *element* as a Bootstrap-style alert."""
    element.set_html(_env.get_template("alert.html").render(message=message, kind=kind).strip())


def clear_alert(element: Element) -> None:
    element.set_html("")
