from typing import Optional


def assemble_image_prompt(city: str, narrative: str, local_time: Optional[str] = None) -> str:
    """
    도시 이름 + 날씨 설명 (+ 현지 시각) → 이미지 생성 프롬프트
    """
    base = (
        f"Create a high-quality, photorealistic image of {city} "
        f"where the weather is clearly visible: {narrative}. "
        f"Realistic lighting, natural colors, no text or overlays."
    )

    if local_time:
        base += f" Time of day: {local_time} (local)."

    return base.strip()
