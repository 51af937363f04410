"""HTML backend: four flexbox panes of inline SVG plus a small event script."""

from __future__ import annotations

import json
from html import escape

from ganttline.scene import Line, Path, Primitive, Rect, Region, RegionName, SceneGraph, Text
from ganttline.tooltip import compose_tooltip
from ganttline.unified_config import TooltipConfig

HTML_SHELL = r"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<title>__TITLE__</title>
<style>
__CSS_BLOCK__
</style>
</head>
<body>
__BODY_MARKUP__
<script id="gl-tooltips" type="application/json">
__DATA_JSON__
</script>
<script>
__JS_BLOCK__
</script>
</body>
</html>
"""

CSS_BLOCK = r""".gl-chart { display: flex; flex-direction: column; font-family: sans-serif; }
.gl-header-row { display: flex; width: 100%; flex-shrink: 0; }
.gl-body-row { display: flex; flex: 1; overflow: hidden; }
.gl-fixed-header { flex-shrink: 0; overflow: hidden; }
.gl-scroll-header, .gl-fixed-column { overflow: hidden; position: relative; flex-shrink: 0; }
.gl-scroll-header { flex: 1; }
.gl-plot { flex: 1; overflow: auto; position: relative; }
.gl-hide-scrollbars { scrollbar-width: none; -ms-overflow-style: none; }
.gl-hide-scrollbars::-webkit-scrollbar { display: none; }
.gl-hit { fill: transparent; cursor: default; }
.gl-tooltip {
  position: absolute; visibility: hidden; pointer-events: none;
  background: rgba(0, 0, 0, 0.75); color: #fff; padding: 6px 10px;
  border-radius: 4px; font-size: 12px; font-family: sans-serif;
}
.gl-tooltip .gl-tooltip-title { font-weight: bold; }
"""

# Scroll propagation is one-directional: only the plot listens, followers are
# written to and never read back.
JS_BLOCK = r"""(function () {
  var plot = document.querySelector('.gl-plot');
  if (!plot) { return; }
  var column = document.querySelector('.gl-fixed-column');
  var header = document.querySelector('.gl-scroll-header');
  function propagate() {
    column.scrollTop = plot.scrollTop;
    header.scrollLeft = plot.scrollLeft;
  }
  plot.addEventListener('scroll', propagate);
  plot.scrollLeft = Number(plot.dataset.scrollLeft || 0);
  plot.scrollTop = Number(plot.dataset.scrollTop || 0);
  propagate();

  var tooltips = JSON.parse(document.getElementById('gl-tooltips').textContent);
  var tip = document.querySelector('.gl-tooltip');
  var offsetX = Number(tip.dataset.offsetX || 0);
  var offsetY = Number(tip.dataset.offsetY || 0);
  document.querySelectorAll('.gl-hit').forEach(function (el) {
    el.addEventListener('mouseenter', function () {
      var lines = tooltips[el.dataset.task] || [];
      tip.replaceChildren();
      lines.forEach(function (line, i) {
        var row = document.createElement('div');
        if (i === 0) { row.className = 'gl-tooltip-title'; }
        row.textContent = line;
        tip.appendChild(row);
      });
      tip.style.visibility = 'visible';
    });
    el.addEventListener('mousemove', function (event) {
      tip.style.top = (event.pageY + offsetY) + 'px';
      tip.style.left = (event.pageX + offsetX) + 'px';
    });
    el.addEventListener('mouseleave', function () {
      tip.style.visibility = 'hidden';
    });
  });
})();
"""

PANE_CLASSES = {
    RegionName.FIXED_HEADER: "gl-fixed-header",
    RegionName.SCROLL_HEADER: "gl-scroll-header",
    RegionName.FIXED_COLUMN: "gl-fixed-column",
    RegionName.PLOT: "gl-plot",
}


def _num(value: float) -> str:
    """Format a coordinate compactly (no trailing zeros)."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text if text not in ("", "-0") else "0"


def _attrs(attributes: dict[str, str | float]) -> str:
    parts: list[str] = []
    for key, value in attributes.items():
        rendered = _num(value) if isinstance(value, int | float) else str(value)
        parts.append(f'{key}="{escape(rendered, quote=True)}"')
    return " ".join(parts)


def render_primitive(primitive: Primitive) -> str:
    """Render one scene primitive as an SVG element."""
    if isinstance(primitive, Rect):
        box = primitive.box
        geometry: dict[str, str | float] = {
            "x": box.x,
            "y": box.y,
            "width": box.width,
            "height": box.height,
        }
        return f'<rect class="{primitive.css_class}" {_attrs({**geometry, **primitive.style})}/>'
    if isinstance(primitive, Line):
        geometry = {"x1": primitive.x1, "y1": primitive.y1, "x2": primitive.x2, "y2": primitive.y2}
        return f'<line class="{primitive.css_class}" {_attrs({**geometry, **primitive.style})}/>'
    if isinstance(primitive, Text):
        attributes = _attrs({"x": primitive.x, "y": primitive.y, **primitive.style})
        return f'<text class="{primitive.css_class}" {attributes}>{escape(primitive.text)}</text>'
    if isinstance(primitive, Path):
        attributes = _attrs({"d": primitive.d, **primitive.style})
        return f'<path class="{primitive.css_class}" {attributes}/>'
    raise TypeError(f"Unknown scene primitive: {type(primitive).__name__}")


class HtmlBackend:
    """Backend producing a self-contained HTML page for a scene."""

    def __init__(self, tooltip_config: TooltipConfig | None = None, title: str = "Timeline"):
        """Initialize HTML backend.

        Args:
            tooltip_config: Pointer offset written into the page's tooltip script
            title: Document title
        """
        self.tooltip_config = tooltip_config or TooltipConfig()
        self.title = title

    def render(self, scene: SceneGraph) -> str:
        """Render ``scene`` to a complete HTML document."""
        viewport = scene.viewport
        chart_style = f"width:{_num(viewport.width)}px;height:{_num(viewport.height)}px"

        if scene.is_empty:
            body = f'<div class="gl-chart gl-empty" style="{chart_style}"></div>'
            tooltips: dict[str, list[str]] = {}
        else:
            body = "\n".join(
                [
                    f'<div class="gl-chart" style="{chart_style}">',
                    self._header_row(scene),
                    self._body_row(scene),
                    "</div>",
                ]
            )
            tooltips = {str(hit.task_index): compose_tooltip(hit.task) for hit in scene.hit_regions}

        tooltip_div = (
            f'<div class="gl-tooltip" data-offset-x="{_num(self.tooltip_config.offset_x)}" '
            f'data-offset-y="{_num(self.tooltip_config.offset_y)}"></div>'
        )
        # Keep "</script>" inside task labels from closing the data block
        data_json = json.dumps(tooltips, ensure_ascii=False).replace("</", "<\\/")

        return (
            HTML_SHELL.replace("__TITLE__", escape(self.title))
            .replace("__CSS_BLOCK__", CSS_BLOCK)
            .replace("__BODY_MARKUP__", body + "\n" + tooltip_div)
            .replace("__DATA_JSON__", data_json)
            .replace("__JS_BLOCK__", JS_BLOCK)
        )

    def _header_row(self, scene: SceneGraph) -> str:
        fixed = scene.region(RegionName.FIXED_HEADER)
        return "\n".join(
            [
                f'<div class="gl-header-row" style="height:{_num(fixed.frame.height)}px">',
                self._pane(fixed),
                self._pane(scene.region(RegionName.SCROLL_HEADER)),
                "</div>",
            ]
        )

    def _body_row(self, scene: SceneGraph) -> str:
        return "\n".join(
            [
                '<div class="gl-body-row">',
                self._pane(scene.region(RegionName.FIXED_COLUMN)),
                self._pane(scene.region(RegionName.PLOT), scene=scene),
                "</div>",
            ]
        )

    def _pane(self, region: Region, scene: SceneGraph | None = None) -> str:
        classes = [PANE_CLASSES[region.name]]
        if region.hide_scrollbars:
            classes.append("gl-hide-scrollbars")

        style = f"width:{_num(region.frame.width)}px"
        if region.name is RegionName.FIXED_COLUMN:
            style += f";height:{_num(region.frame.height)}px"

        data = f'data-region="{region.name.value}"'
        if region.name is RegionName.PLOT:
            data += (
                f' data-scroll-left="{_num(region.scroll_left)}"'
                f' data-scroll-top="{_num(region.scroll_top)}"'
            )

        svg_lines = [
            f'<svg width="{_num(region.content_width)}" height="{_num(region.content_height)}">',
            *(render_primitive(primitive) for primitive in region.primitives),
        ]
        # Hit regions sit on top of everything in the plot
        if scene is not None:
            for hit in scene.hit_regions:
                box = hit.box
                svg_lines.append(
                    f'<rect class="gl-hit" data-task="{hit.task_index}" '
                    f'x="{_num(box.x)}" y="{_num(box.y)}" '
                    f'width="{_num(box.width)}" height="{_num(box.height)}"/>'
                )
        svg_lines.append("</svg>")

        return "\n".join(
            [f'<div class="{" ".join(classes)}" style="{style}" {data}>', *svg_lines, "</div>"]
        )
