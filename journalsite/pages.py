import html
import json

from journalsite.sparkline import render_sparkline
from journalsite.textstats import hapax_legomena, rank_hottest, rank_spiky, top_words


# -----------------------
# HTML helpers
# -----------------------

def build_extra_head(cfg: dict) -> str:
    extra_head_items = cfg.get("extra_head") or []
    if not extra_head_items:
        return ""
    return "\n  " + "\n  ".join(extra_head_items)


def base_layout(title: str, content: str, cfg: dict, *, extra_scripts: str = "", prefix: str = "") -> str:
    """
    Wrap page content with <head>, the top nav and the footer.
    prefix is "" on root pages and "../" on entry pages.
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{html.escape(title)}</title>
  <link rel="stylesheet" href="{prefix}style.css">{build_extra_head(cfg)}
</head>
<body>
<header class="site-header">
  <nav>
    <a href="{prefix}index.html">Home</a>
    <a href="{prefix}compare.html">Compare</a>
    <a href="{prefix}stats.html">Stats</a>
  </nav>
</header>
<main class="container">
  {content}
</main>
<footer class="site-footer"></footer>{extra_scripts}
</body>
</html>
"""


def table_rows(rows, colspan: int, empty: str) -> str:
    if not rows:
        return f'<tr><td colspan="{colspan}">{empty}</td></tr>'
    return "\n".join(rows)


# -----------------------
# Entry pages
# -----------------------

ENTRY_NAV_SCRIPT = """
<script>
  const ENTRY_PATHS = %s;
  (function(){
    const randBtn = document.getElementById('random-entry');
    function goRandom(){
      if (!ENTRY_PATHS.length) return;
      const idx = Math.floor(Math.random() * ENTRY_PATHS.length);
      window.location.href = ENTRY_PATHS[idx];
    }
    if (randBtn) {
      randBtn.disabled = ENTRY_PATHS.length === 0;
      randBtn.addEventListener('click', goRandom);
    }
    const prevLink = document.querySelector('.nav-left');
    const nextLink = document.querySelector('.nav-right');
    document.addEventListener('keydown', function(e){
      if (e.target && (e.target.tagName === 'INPUT' || e.target.tagName === 'TEXTAREA' || e.target.isContentEditable)) return;
      if (e.altKey || e.ctrlKey || e.metaKey) return;
      if (e.key === 'ArrowLeft' && prevLink && prevLink.getAttribute('href')) {
        e.preventDefault();
        window.location.href = prevLink.getAttribute('href');
      } else if (e.key === 'ArrowRight' && nextLink && nextLink.getAttribute('href')) {
        e.preventDefault();
        window.location.href = nextLink.getAttribute('href');
      } else if (e.key === ' ' || e.code === 'Space') {
        e.preventDefault();
        goRandom();
      }
    });
  })();
</script>"""


def nav_link(css_class: str, label: str, aria_label: str, href) -> str:
    target = f'href="{href}"' if href else 'aria-disabled="true"'
    return f'<a class="btn {css_class}" {target} aria-label="{aria_label}">{label}</a>'


def render_entry_page(entry: dict, prev_entry, next_entry, entry_paths: list, cfg: dict) -> str:
    """Render one entry with prev / random / next navigation."""
    slug = html.escape(entry["slug"])
    prev_href = f"../entries/{prev_entry['slug']}.html" if prev_entry else None
    next_href = f"../entries/{next_entry['slug']}.html" if next_entry else None

    content = f"""<article class="entry">
  <h1>{slug}</h1>
  {entry["html"]}
  <div class="entry-nav">
    {nav_link("nav-left", "←", "Previous", prev_href)}
    <button class="btn nav-random" id="random-entry" aria-label="Random">Random</button>
    {nav_link("nav-right", "→", "Next", next_href)}
  </div>
  <div class="entry-meta">Date: <time datetime="{slug}">{slug}</time></div>
</article>"""

    scripts = ENTRY_NAV_SCRIPT % json.dumps(entry_paths)
    return base_layout(entry["slug"], content, cfg, extra_scripts=scripts, prefix="../")


# -----------------------
# Home / compare
# -----------------------

def render_home_page(entries: list, cfg: dict) -> str:
    """The home page jumps straight to a random entry."""
    site_title = cfg["site_title"]
    if not entries:
        content = f"""<section>
  <h1>{html.escape(site_title)}</h1>
  <p>No entries yet. Add files to <code>{html.escape(str(cfg["entries_dir"]))}/</code> named <code>YYYY-MM-DD.md</code>.</p>
</section>"""
        return base_layout(site_title, content, cfg)

    paths = json.dumps([f"entries/{e['slug']}.html" for e in entries])
    scripts = f"""
<script>
  (function(){{
    const ENTRY_PATHS = {paths};
    function pick(){{ return ENTRY_PATHS[Math.floor(Math.random() * ENTRY_PATHS.length)]; }}
    const link = document.getElementById('fallback-link');
    if (link) link.addEventListener('click', function(e){{ e.preventDefault(); window.location.href = pick(); }});
    function go(){{ window.location.replace(pick()); }}
    if (document.readyState === 'complete' || document.readyState === 'interactive') go();
    else document.addEventListener('DOMContentLoaded', go);
  }})();
</script>"""
    content = f"""<section>
  <h1>{html.escape(site_title)}</h1>
  <p>Loading a random entry...</p>
  <p><a href="#" id="fallback-link">Open Random Now</a></p>
</section>"""
    return base_layout(site_title, content, cfg, extra_scripts=scripts)


def group_by_month_day(entries: list) -> list:
    """[(MM-DD, [entries sorted by year])] sorted by MM-DD."""
    groups = {}
    for e in entries:
        groups.setdefault(e["month_day"], []).append(e)
    return [
        (md, sorted(groups[md], key=lambda x: x["year"]))
        for md in sorted(groups)
    ]


def render_compare_page(entries: list, cfg: dict) -> str:
    sections = []
    for md, group in group_by_month_day(entries):
        columns = "\n".join(
            f"""      <div class="compare-entry">
        <div class="compare-entry-header">
          <h3>{e["year"]}</h3>
          <a class="open-link" href="entries/{e["slug"]}.html">Open</a>
        </div>
        <div class="compare-entry-content">{e["html"]}</div>
      </div>"""
            for e in group
        )
        sections.append(f"""  <details data-month-day="{md}">
    <summary><h2>{md}</h2></summary>
    <div class="compare-grid">
{columns}
    </div>
  </details>""")

    content = f"""<section>
  <h1>Compare Same Date Across Years</h1>
{chr(10).join(sections) or "  <p>No comparable dates yet.</p>"}
</section>"""
    return base_layout("Compare", content, cfg)


# -----------------------
# Stats
# -----------------------

def render_stats_page(entries: list, stats, cfg: dict) -> str:
    """
    Render stats.html from an aggregate() result.

    Monthly and daily charts skip their first point; the first month is
    usually partial.
    """
    min_count = cfg.get("trend_min_count", 10)
    top_min = cfg.get("top_words_min_count", 10)

    hottest = rank_hottest(
        stats.word_months, len(stats.months), min_count=min_count, limit=cfg.get("hottest_limit", 50)
    )
    hottest_rows = [
        f'<tr><td>{html.escape(h["word"])}</td><td>{h["prev"]}</td><td>{h["recent"]}</td>'
        f'<td>+{h["delta"]}</td><td>{render_sparkline(h["series"], width=300, height=50, stroke="#34d399")}</td></tr>'
        for h in hottest
    ]

    trend_rows = [
        f'<tr><td>{html.escape(t["word"])}</td><td>{t["total"]}</td>'
        f'<td>{render_sparkline(t["series"], width=400, height=60, stroke="#9ae6b4")}</td></tr>'
        for t in rank_spiky(stats.word_months, min_count=min_count)
    ]

    top_rows = [
        f"<tr><td>{html.escape(w)}</td><td>{c}</td></tr>"
        for w, c in top_words(stats.overall, min_count=top_min)
    ]

    year_rows = [f"<tr><td>{year}</td><td>{total}</td></tr>" for year, total in stats.by_year]

    hapax_rows = [f"<tr><td>{html.escape(w)}</td></tr>" for w in hapax_legomena(stats.overall)]

    month_labels = [key for key, _ in stats.by_month][1:]
    month_values = [total for _, total in stats.by_month][1:]
    month_svg = render_sparkline(month_values, width=1000, height=160, stroke="#fff")
    labels_html = "".join(f"<span>{label}</span>" for label in month_labels[-12:])

    daily_values = [count for _, count in stats.entry_counts][1:]
    daily_svg = render_sparkline(daily_values, width=1000, height=120, stroke="#34d399")

    content = f"""<section>
  <h1>Stats</h1>
  <div class="stats-cards">
    <div class="stat-card"><div class="stat-label">Entries</div><div class="stat-value">{len(entries)}</div></div>
    <div class="stat-card"><div class="stat-label">Total Words</div><div class="stat-value">{stats.total_words}</div></div>
    <div class="stat-card"><div class="stat-label">Unique Words</div><div class="stat-value">{stats.unique_words}</div></div>
  </div>
  <h2>Hottest Words (recent ↑)</h2>
  <div class="scroll-invisible scroll-rows-10">
    <table class="table">
      <thead><tr><th>Word</th><th>Prev</th><th>Recent</th><th>Δ</th><th>Trend</th></tr></thead>
      <tbody>
        {table_rows(hottest_rows, 5, "No recent increases detected.")}
      </tbody>
    </table>
  </div>
  <h2>Word Trends by Month (spiky first, count ≥ {min_count})</h2>
  <div class="scroll-invisible scroll-rows-5">
    <table class="table">
      <thead><tr><th>Word</th><th>Total</th><th>Trend (per month)</th></tr></thead>
      <tbody>
        {table_rows(trend_rows, 3, "No data.")}
      </tbody>
    </table>
  </div>
  <h2>Top Words (count ≥ {top_min})</h2>
  <div class="scroll-invisible scroll-rows-5">
    <table class="table">
      <thead><tr><th>Word</th><th>Count</th></tr></thead>
      <tbody>
        {table_rows(top_rows, 2, f"No words ≥ {top_min}.")}
      </tbody>
    </table>
  </div>
  <h2>Words per Year</h2>
  <table class="table">
    <thead><tr><th>Year</th><th>Words</th></tr></thead>
    <tbody>
      {table_rows(year_rows, 2, "No data.")}
    </tbody>
  </table>
  <h2>Word Count Trends (per month)</h2>
  <div class="chart">
    <div class="chart-labels">{labels_html}</div>
    {month_svg}
  </div>
  <h2>Daily Word Count</h2>
  <div class="chart">
    {daily_svg}
  </div>
  <h2>Hapax Legomena (used once)</h2>
  <div class="scroll-invisible scroll-rows-5">
    <table class="table">
      <thead><tr><th>Word</th></tr></thead>
      <tbody>
        {table_rows(hapax_rows, 1, "None.")}
      </tbody>
    </table>
  </div>
</section>"""
    return base_layout("Stats", content, cfg)
