from html import escape
from urllib.parse import quote

from ..storage.provider import StorageProvider


IMG_STYLE = "padding: 0.2rem;max-width: calc(100vw - 16px - 0.2rem);max-height: 135px;"


def render_entry(name: str, has_preview: bool) -> str:
    href = escape(f"/static/{quote(name)}")
    if has_preview:
        src = escape(f"/static/preview/{quote(name)}")
        inner = f'<img style="{IMG_STYLE}" src="{src}"/>'
    else:
        # no thumbnail on disk; link the original by name
        inner = f'<span style="padding: 0.2rem;">{escape(name)}</span>'
    return f'<a href="{href}" target="_blank">{inner}</a>'


def render_gallery(storage: StorageProvider) -> str:
    """HTML fragment with one linked preview per stored original."""
    return "".join(render_entry(name, storage.preview_exists(name)) for name in storage.list_names())
