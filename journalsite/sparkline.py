"""Inline SVG sparklines for the stats page."""

SPARKLINE_PAD = 6


def sparkline_points(values, width: int, height: int, pad: int = SPARKLINE_PAD) -> list:
    """
    Map values onto (x, y) pixel positions.

    x is spread evenly between the paddings; y maps [min, max] onto
    [height - pad, pad] so larger values sit higher.
    """
    n = len(values)
    if n == 0:
        return []
    lo = min(values)
    hi = max(values)
    span = 1 if hi == lo else hi - lo

    points = []
    for i, v in enumerate(values):
        x = pad + (i * (width - 2 * pad)) / max(1, n - 1)
        y = height - pad - ((v - lo) * (height - 2 * pad)) / span
        points.append((x, y))
    return points


def sparkline_path(values, width: int, height: int, pad: int = SPARKLINE_PAD) -> str:
    """SVG path data like "M6.00,54.00 L274.00,6.00"; "" for no values."""
    return " ".join(
        f"{'M' if i == 0 else 'L'}{x:.2f},{y:.2f}"
        for i, (x, y) in enumerate(sparkline_points(values, width, height, pad))
    )


def render_sparkline(values, width: int = 280, height: int = 60, stroke: str = "#fff") -> str:
    d = sparkline_path(values, width, height)
    if not d:
        return ""
    return f"""<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg" class="sparkline">
    <path d="{d}" fill="none" stroke="{stroke}" stroke-width="2" />
  </svg>"""
