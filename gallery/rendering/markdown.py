from __future__ import annotations

import html
import typing as t

from gallery.models import ExtractionResult


def _facts(prop) -> t.List[str]:
    facts = []
    if prop.price:
        facts.append(f"**{prop.price}**")
    for value, label in ((prop.beds, "Beds"), (prop.baths, "Baths"), (prop.sqft, "Sq Ft")):
        if value:
            facts.append(f"{value} {label}")
    return facts


def render_md(result: ExtractionResult) -> str:
    prop = result.property
    lines = [f"# {prop.address}", ""]
    facts = _facts(prop)
    if facts:
        lines += [" · ".join(facts), ""]
    lines += [f"_Extracted {len(prop.images)} images_", ""]

    if prop.images:
        lines.append("## Gallery")
        lines.append("")
        for i, img in enumerate(prop.images, 1):
            lines.append(f"{i}. [{img.description}]({img.url})")
        lines.append("")

    if result.sources:
        lines.append("## Sources")
        lines.append("")
        for src in result.sources:
            lines.append(f"- [{src.title}]({src.uri})")
        lines.append("")
    return "\n".join(lines)


def render_html(result: ExtractionResult) -> str:
    prop = result.property
    esc = html.escape
    facts = "".join(f"<span>{esc(f.strip('*'))}</span> " for f in _facts(prop))
    figures = "\n".join(
        f'<figure><a href="{esc(img.url)}" target="_blank" rel="noopener noreferrer">'
        f'<img src="{esc(img.url)}" alt="{esc(img.description)}" loading="lazy"></a>'
        f"<figcaption>{i}. {esc(img.description)}</figcaption></figure>"
        for i, img in enumerate(prop.images, 1)
    )
    sources = "\n".join(
        f'<li><a href="{esc(s.uri)}" target="_blank" rel="noopener noreferrer">{esc(s.title)}</a></li>'
        for s in result.sources
    )
    return f"""<!DOCTYPE html>
<html><head><meta charset="utf-8"><title>{esc(prop.address)}</title></head>
<body>
<h1>{esc(prop.address)}</h1>
<p>{facts}<em>Extracted {len(prop.images)} images</em></p>
<section>
{figures}
</section>
<ul>
{sources}
</ul>
</body></html>"""
