"""Server-rendered HTML page for submitting and browsing sightings."""

from datetime import datetime
from html import escape

from bugwatch.api.models import DistributionSummary, SightingView
from bugwatch.services.sessions import SightingSession


def render_page(
    session: SightingSession,
    now: datetime,
    error: str | None = None,
    description: str = "",
) -> str:
    """Render the full page for a session."""
    sightings = session.collection.snapshot()
    summary = DistributionSummary.from_entries(session.distribution(), len(sightings))
    feed = [SightingView.from_sighting(sighting, now) for sighting in sightings]
    error_html = f'<p class="error">{escape(error)}</p>' if error else ""
    return _PAGE_HTML.format(
        total=len(sightings),
        description=escape(description),
        error=error_html,
        distribution=_render_distribution(summary),
        feed=_render_feed(feed),
    )


def _render_distribution(summary: DistributionSummary) -> str:
    if not summary.entries:
        return '<p class="helper-text">No sightings yet.</p>'
    cards = []
    for entry in summary.entries:
        location = escape(entry.location)
        cards.append(
            '<div class="distribution-card">'
            f"<strong>@{location}</strong> "
            f'<span class="muted">{entry.count} reports</span>'
            f'<div class="progress" aria-label="{location} sightings">'
            f'<div class="progress-bar" style="width: {entry.bar_width}%"></div>'
            "</div></div>"
        )
    return "\n".join(cards)


def _render_feed(feed: list[SightingView]) -> str:
    articles = []
    for item in feed:
        location = escape(item.location)
        articles.append(
            '<article class="sighting-card">'
            f'<img src="{escape(item.image_url)}" alt="{location}" />'
            '<div class="sighting-details">'
            f'<span class="location-pill">@{location}</span> '
            f'<span class="timestamp">{escape(item.age)}</span>'
            f"<p>{escape(item.description)}</p>"
            "</div></article>"
        )
    return "\n".join(articles)


_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>where are the bed bugs</title>
    <style>
      body {{ font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }}
      .card {{ border: 1px solid #e5e7eb; padding: 1rem; margin-bottom: 1rem; }}
      .helper-text, .muted, .timestamp {{ color: #6b7280; }}
      .error {{ color: #b91c1c; }}
      .progress {{ background: #f3f4f6; height: 0.5rem; }}
      .progress-bar {{ background: #16a34a; height: 100%; }}
      .sighting-card img {{ max-width: 160px; }}
    </style>
  </head>
  <body>
    <h1>Campus bug sightings, organized by location.</h1>
    <p class="helper-text">
      Upload a photo, include a quick note, and tag the spot with
      <strong>@&lt;location&gt;</strong>.
    </p>
    <section class="card">
      <h2>Upload details <span class="badge">{total} sightings</span></h2>
      <form method="post" action="/" enctype="multipart/form-data">
        <label>Description<br />
          <textarea name="description" rows="4"
            placeholder="Example: Line of ants by the trash bins @&lt;East Quad&gt;"
          >{description}</textarea>
        </label>
        <p class="helper-text">
          Use one @&lt;location&gt; tag so the sighting is bucketed automatically.
        </p>
        <label>Bug photo <input type="file" name="image" accept="image/*" /></label>
        <button type="submit">Submit sighting</button>
        {error}
      </form>
    </section>
    <section class="card">
      <h2>Distribution by location</h2>
      <p class="helper-text">Sorted by most sightings</p>
      {distribution}
    </section>
    <section class="card">
      <h2>Latest uploads</h2>
      <p class="helper-text">Freshest first</p>
      {feed}
    </section>
  </body>
</html>
"""
