# utils/svg_poster.py
from xml.sax.saxutils import escape

WIDTH = 1280
HEIGHT = 720

SVG_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 {width} {height}">
  <defs>
    <linearGradient id="g1" x1="0" y1="0" x2="1" y2="1">
      <stop offset="0%" stop-color="#bfe6ff"/>
      <stop offset="50%" stop-color="#ffe9c2"/>
      <stop offset="100%" stop-color="#ffd1c2"/>
    </linearGradient>
  </defs>
  <rect fill="url(#g1)" width="{width}" height="{height}"/>
  <g fill="#0b1220">
    <text x="{cx}" y="{title_y}" text-anchor="middle" font-family="Inter, Arial" font-weight="700" font-size="56">{city}</text>
    <text x="{cx}" y="{caption_y}" text-anchor="middle" font-family="Inter, Arial" font-size="28" opacity="0.72">{conditions}</text>
  </g>
</svg>
"""


def render_placeholder_svg(city: str, conditions: str) -> str:
    """이미지 생성 실패 시 쓰는 포스터 (그라데이션 배경 + 도시명 + 날씨 설명)"""
    return SVG_TEMPLATE.format(
        width=WIDTH,
        height=HEIGHT,
        cx=WIDTH // 2,
        title_y=HEIGHT // 2,
        caption_y=HEIGHT // 2 + 60,
        city=escape(city),
        conditions=escape(conditions),
    )
