"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: dict (a serialized timeline, as stored under derived/)
  - Output: str (HTML fragment, not a full page)
  - No side effects, no I/O, no Prefect decorators

Used by flows/build.py which orchestrates the rendering pipeline.

Public API:
  - timeline: build_current_html, build_timeline_html
  - weather_utils: f_to_c, mph_to_kph, hpa_to_inhg, format_* helpers
  - date_utils: time_label, date_label

Adding a renderer
-----------------
1. Create ``renderers/{name}.py`` with a build function that shapes the
   data into rows and calls ``render_template("{name}.html.j2", ...)``.
2. Create the Jinja2 template in ``templates/{name}.html.j2``.
   Templates produce HTML fragments; page chrome and CSS live in
   ``templates/base.html.j2``. Score cells use the ``condition_class``
   filter for their colour.
3. Call it from ``build_html()`` in ``flows/build.py`` and add the
   placeholder to ``base.html.j2``.
4. Add tests asserting the returned HTML contains the expected content.
"""

from __future__ import annotations

from typing import Any

import jinja2

from fishing_forecast.renderers.weather_utils import condition_class

_jinja_env = jinja2.Environment(
    loader=jinja2.PackageLoader("fishing_forecast", "templates"),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)
_jinja_env.filters["condition_class"] = condition_class


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
