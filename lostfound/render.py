from __future__ import annotations

import html
from datetime import datetime, timezone, tzinfo
from typing import Sequence
from zoneinfo import ZoneInfo

from .config import settings
from .filter_script import FILTER_SCRIPT
from .models import APPROVED, RESOLVED, Item, category_label, status_label

DESCRIPTION_MAX_LENGTH = 120
ELLIPSIS = "..."

WEEKDAYS_FI = (
    "maanantai",
    "tiistai",
    "keskiviikko",
    "torstai",
    "perjantai",
    "lauantai",
    "sunnuntai",
)
MONTHS_FI = (
    "tammikuuta",
    "helmikuuta",
    "maaliskuuta",
    "huhtikuuta",
    "toukokuuta",
    "kesäkuuta",
    "heinäkuuta",
    "elokuuta",
    "syyskuuta",
    "lokakuuta",
    "marraskuuta",
    "joulukuuta",
)


def escape_html(text: str | None) -> str:
    """Escape & < > " ' for use in element text and attribute values."""
    if not text:
        return ""
    return html.escape(text, quote=True)


def truncate_text(text: str | None, max_length: int = DESCRIPTION_MAX_LENGTH) -> str:
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + ELLIPSIS


def _zone(tz: tzinfo | str | None) -> tzinfo:
    if tz is None:
        tz = settings.timezone
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def format_date(iso_string: str | None, tz: tzinfo | str | None = None) -> str:
    """DD.MM.YYYY in the display time zone."""
    if not iso_string:
        return "Ei päivämäärää"
    try:
        dt = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        # year 9999 can overflow when shifted east of UTC
        return dt.astimezone(_zone(tz)).strftime("%d.%m.%Y")
    except (ValueError, OverflowError):
        return "Virheellinen päivämäärä"


def format_short_date(dt: datetime) -> str:
    return f"{dt.day}.{dt.month}.{dt.year}"


def format_build_time(dt: datetime) -> str:
    # e.g. "lauantai 18. lokakuuta 2026 klo 14.30"
    return (
        f"{WEEKDAYS_FI[dt.weekday()]} {dt.day}. {MONTHS_FI[dt.month - 1]} {dt.year} "
        f"klo {dt.hour:02d}.{dt.minute:02d}"
    )


STYLES = """
    * { box-sizing: border-box; margin: 0; padding: 0; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, sans-serif;
      line-height: 1.6;
      color: #333;
      background: #f8f9fa;
      max-width: 1200px;
      margin: 0 auto;
      padding: 20px;
    }
    header {
      background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
      color: white;
      padding: 2rem;
      border-radius: 12px;
      margin-bottom: 2rem;
      box-shadow: 0 4px 6px rgba(0,0,0,0.1);
    }
    h1 { font-size: 2.5rem; margin-bottom: 0.5rem; }
    .subtitle { font-size: 1.1rem; opacity: 0.9; margin-bottom: 1rem; }
    .build-info {
      font-size: 0.9rem;
      opacity: 0.8;
      background: rgba(255,255,255,0.1);
      padding: 8px 12px;
      border-radius: 6px;
      display: inline-block;
    }
    .stats-grid {
      display: grid;
      grid-template-columns: repeat(auto-fit, minmax(180px, 1fr));
      gap: 1rem;
      margin-bottom: 2rem;
    }
    .stat-card {
      background: white;
      padding: 1.5rem;
      border-radius: 10px;
      box-shadow: 0 2px 4px rgba(0,0,0,0.05);
      text-align: center;
    }
    .stat-number { font-size: 2rem; font-weight: bold; display: block; color: #667eea; }
    .stat-label { font-size: 0.9rem; color: #666; }
    .area-filters {
      background: white;
      padding: 1rem 1.5rem;
      border-radius: 10px;
      box-shadow: 0 2px 4px rgba(0,0,0,0.05);
      margin-bottom: 2rem;
    }
    .area-filters h2 { font-size: 1rem; margin-bottom: 0.75rem; color: #1f2937; }
    .area-list { display: flex; flex-wrap: wrap; gap: 0.5rem; list-style: none; }
    .area-filter {
      border: 1px solid #c7d2fe;
      background: #eef2ff;
      color: #4338ca;
      padding: 4px 12px;
      border-radius: 20px;
      font-size: 0.85rem;
      cursor: pointer;
    }
    .area-filter.active { background: #667eea; border-color: #667eea; color: white; }
    .visible-count { margin-top: 0.75rem; font-size: 0.85rem; color: #6b7280; }
    .items-grid {
      display: grid;
      grid-template-columns: repeat(auto-fill, minmax(300px, 1fr));
      gap: 1.5rem;
      margin-bottom: 3rem;
    }
    .item-card {
      background: white;
      border-radius: 12px;
      overflow: hidden;
      box-shadow: 0 2px 8px rgba(0,0,0,0.08);
      transition: transform 0.2s, box-shadow 0.2s;
    }
    .item-card[hidden] { display: none; }
    .item-card:hover { transform: translateY(-4px); box-shadow: 0 8px 16px rgba(0,0,0,0.12); }
    .item-image-container { position: relative; height: 200px; background: #f0f0f0; }
    .item-image { width: 100%; height: 100%; object-fit: cover; }
    .item-image-placeholder {
      display: flex;
      align-items: center;
      justify-content: center;
      height: 100%;
      color: #999;
      font-size: 0.9rem;
    }
    .item-image-placeholder[hidden] { display: none; }
    .item-status {
      position: absolute;
      top: 12px;
      right: 12px;
      padding: 4px 12px;
      border-radius: 20px;
      font-size: 0.75rem;
      font-weight: 600;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      color: white;
    }
    .status-approved { background: #10b981; }
    .status-resolved { background: #3b82f6; }
    .item-content { padding: 1.5rem; }
    .item-title { font-size: 1.25rem; margin-bottom: 0.75rem; color: #1f2937; }
    .item-meta {
      display: flex;
      flex-wrap: wrap;
      gap: 1rem;
      margin-bottom: 1rem;
      font-size: 0.9rem;
      color: #6b7280;
    }
    .meta-item { display: flex; align-items: center; gap: 4px; }
    .icon { width: 16px; height: 16px; fill: currentColor; }
    .item-description { color: #4b5563; margin-bottom: 1rem; font-size: 0.95rem; line-height: 1.5; }
    .item-actions {
      display: flex;
      justify-content: space-between;
      align-items: center;
      margin-top: 1rem;
      padding-top: 1rem;
      border-top: 1px solid #e5e7eb;
    }
    .btn-details {
      background: #667eea;
      color: white;
      padding: 8px 16px;
      border-radius: 6px;
      text-decoration: none;
      font-size: 0.9rem;
      font-weight: 500;
      transition: background 0.2s;
    }
    .btn-details:hover { background: #5a67d8; }
    .item-id { font-size: 0.8rem; color: #9ca3af; font-family: monospace; }
    .empty-state { grid-column: 1 / -1; text-align: center; padding: 3rem; color: #6b7280; }
    .empty-state p:first-child { font-size: 1.2rem; }
    footer {
      text-align: center;
      padding: 2rem 0;
      color: #6b7280;
      font-size: 0.9rem;
      border-top: 1px solid #e5e7eb;
      margin-top: 3rem;
    }
    footer a { color: #667eea; text-decoration: none; }
    footer a:hover { text-decoration: underline; }
    @media (max-width: 768px) {
      body { padding: 15px; }
      h1 { font-size: 2rem; }
      .items-grid { grid-template-columns: 1fr; }
      .stats-grid { grid-template-columns: 1fr 1fr; }
    }
    @media (max-width: 480px) {
      header { padding: 1.5rem; }
      .item-meta { flex-direction: column; gap: 0.5rem; }
    }
"""

ICONS = """
  <svg style="display: none;">
    <defs>
      <symbol id="icon-location" viewBox="0 0 24 24">
        <path d="M12 2C8.13 2 5 5.13 5 9c0 5.25 7 13 7 13s7-7.75 7-13c0-3.87-3.13-7-7-7zm0 9.5c-1.38 0-2.5-1.12-2.5-2.5s1.12-2.5 2.5-2.5 2.5 1.12 2.5 2.5-1.12 2.5-2.5 2.5z"/>
      </symbol>
      <symbol id="icon-category" viewBox="0 0 24 24">
        <path d="M10 4H4c-1.1 0-1.99.9-1.99 2L2 18c0 1.1.9 2 2 2h16c1.1 0 2-.9 2-2V8c0-1.1-.9-2-2-2h-8l-2-2z"/>
      </symbol>
      <symbol id="icon-date" viewBox="0 0 24 24">
        <path d="M19 3h-1V1h-2v2H8V1H6v2H5c-1.11 0-1.99.9-1.99 2L3 19c0 1.1.89 2 2 2h14c1.1 0 2-.9 2-2V5c0-1.1-.9-2-2-2zm0 16H5V8h14v11zM7 10h5v5H7z"/>
      </symbol>
    </defs>
  </svg>
"""

EMPTY_STATE = """
      <div class="empty-state">
        <p>Ei löytyneitä tavaroita tällä hetkellä.</p>
        <p>Tarkista myöhemmin uudelleen!</p>
      </div>
"""


def compute_stats(items: Sequence[Item]) -> dict[str, int]:
    return {
        "total": len(items),
        "approved": sum(1 for it in items if it.status == APPROVED),
        "resolved": sum(1 for it in items if it.status == RESOLVED),
        "areas": len({it.area for it in items if it.area}),
        "with_facebook": sum(1 for it in items if it.facebook_link),
    }


def _render_image(item: Item) -> str:
    if not item.image_url:
        return """
          <div class="item-image-placeholder">
            <span>Ei kuvaa</span>
          </div>"""
    # Placeholder stays hidden unless the image fails to load
    return f"""
          <img src="{escape_html(item.image_url)}"
               alt="{escape_html(item.title)}"
               class="item-image"
               loading="lazy"
               onerror="this.hidden=true;this.nextElementSibling.hidden=false">
          <div class="item-image-placeholder" hidden>
            <span>Kuva ei saatavilla</span>
          </div>"""


def _render_actions(item: Item) -> str:
    link = ""
    if item.facebook_link:
        link = (
            f'<a class="btn-details" href="{escape_html(item.facebook_link)}" '
            f'target="_blank" rel="noopener noreferrer">Näytä Facebookissa</a>'
        )
    return f"""
          <div class="item-actions">
            {link}
            <span class="item-id">#{escape_html(item.id)}</span>
          </div>"""


def render_card(item: Item, tz: tzinfo | str | None = None) -> str:
    status_class = escape_html(item.status.lower())
    return f"""
      <article class="item-card" data-id="{escape_html(item.id)}" data-category="{escape_html(item.category)}" data-area="{escape_html(item.area)}">
        <div class="item-image-container">{_render_image(item)}
          <div class="item-status status-{status_class}">
            {escape_html(status_label(item.status))}
          </div>
        </div>

        <div class="item-content">
          <h3 class="item-title">{escape_html(item.title)}</h3>

          <div class="item-meta">
            <span class="meta-item">
              <svg class="icon"><use href="#icon-location"></use></svg>
              {escape_html(item.area)}
            </span>
            <span class="meta-item">
              <svg class="icon"><use href="#icon-category"></use></svg>
              {escape_html(category_label(item.category))}
            </span>
            <span class="meta-item">
              <svg class="icon"><use href="#icon-date"></use></svg>
              {format_date(item.timestamp, tz)}
            </span>
          </div>

          <p class="item-description">{escape_html(truncate_text(item.description))}</p>
          {_render_actions(item)}
        </div>
      </article>"""


def render_area_filter(areas: Sequence[str], total: int) -> str:
    buttons = "".join(
        f'<li><button type="button" class="area-filter" data-area="{escape_html(a)}" '
        f'aria-pressed="false">{escape_html(a)}</button></li>'
        for a in areas
    )
    return f"""
    <section class="area-filters" aria-label="Alueet">
      <h2>Suodata alueen mukaan</h2>
      <ul class="area-list">
        <li><button type="button" class="area-filter active" data-area="" aria-pressed="true">Kaikki alueet</button></li>
        {buttons}
      </ul>
      <p class="visible-count">Näytetään <span id="visibleCount">{total}</span> / {total} ilmoitusta</p>
    </section>
"""


def render_index(
    items: Sequence[Item],
    areas: Sequence[str],
    *,
    build_id: str | None = None,
    github_username: str | None = None,
    generated_at: datetime | None = None,
    tz: tzinfo | str | None = None,
    site_url: str | None = None,
) -> str:
    zone = _zone(tz)
    site_url = site_url or settings.site_url
    build_id = build_id or settings.build_id
    github_username = github_username or settings.github_username
    now = (generated_at or datetime.now(timezone.utc)).astimezone(zone)

    stats = compute_stats(items)

    if items:
        items_html = "".join(render_card(it, zone) for it in items)
        filter_html = render_area_filter(areas, stats['total'])
        script_html = f"<script>{FILTER_SCRIPT}</script>"
    else:
        items_html = EMPTY_STATE
        filter_html = ""
        script_html = ""

    source_url = f"https://github.com/{github_username}/lostfound-snapshot"

    return f"""<!DOCTYPE html>
<html lang="fi">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Löytyneet tavarat - {format_short_date(now)}</title>
  <meta name="description" content="Automaattisesti päivittyvä lista löydetyistä tavaroista. {stats['total']} ilmoitusta saatavilla.">
  <style>{STYLES}</style>
</head>
<body>
  <header>
    <h1>📦 Löytyneet tavarat</h1>
    <p class="subtitle">Automaattisesti päivittyvä lista löydetyistä tavaroista</p>
    <span class="build-info">Viimeisin päivitys: {format_build_time(now)}</span>
  </header>

  <main>
    <div class="stats-grid">
      <div class="stat-card">
        <span class="stat-number">{stats['total']}</span>
        <span class="stat-label">Ilmoitusta yhteensä</span>
      </div>
      <div class="stat-card">
        <span class="stat-number">{stats['approved']}</span>
        <span class="stat-label">Avoinna</span>
      </div>
      <div class="stat-card">
        <span class="stat-number">{stats['resolved']}</span>
        <span class="stat-label">Ratkaistu</span>
      </div>
      <div class="stat-card">
        <span class="stat-number">{stats['areas']}</span>
        <span class="stat-label">Eri aluetta</span>
      </div>
      <div class="stat-card">
        <span class="stat-number">{stats['with_facebook']}</span>
        <span class="stat-label">Facebook-julkaisua</span>
      </div>
    </div>
{filter_html}
    <div class="items-grid" id="itemsContainer">
      {items_html}
    </div>
  </main>

  <footer>
    <p>
      Tämä sivu on staattinen snapshot <a href="{escape_html(site_url)}">Lost&amp;Found</a>-sovelluksesta.
      Data päivittyy automaattisesti tunnin välein.
    </p>
    <p>
      <a href="data.json" target="_blank">JSON-data</a> |
      <a href="{escape_html(source_url)}" target="_blank">Lähdekoodi</a> |
      Build ID: {escape_html(build_id)}
    </p>
  </footer>
{ICONS}
  {script_html}
</body>
</html>
"""
