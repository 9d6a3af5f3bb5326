# app/rendering/note_renderer.py
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.rendering.note_document import NoteDocument

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
NOTE_TEMPLATE = "progress_note.html.jinja"

_ENV = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(enabled_extensions=("html", "jinja"), default=True),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_note_html(document: NoteDocument) -> str:
    """Standalone printable HTML page for a note. All note text is escaped."""
    return _ENV.get_template(NOTE_TEMPLATE).render(doc=document)
